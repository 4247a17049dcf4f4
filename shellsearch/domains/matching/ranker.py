"""
Result Ranker - Orders candidate ids by match score.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import TypeVar

from shellsearch.config.errors import ErrorCode

from .contracts import ScoreMatchable

logger = logging.getLogger(__name__)

__all__ = ["find_matching_items"]

K = TypeVar("K")


def _checked_score(key: object, score: object) -> float | None:
    """Return ``score`` as a finite float, or None for unusable scores."""
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        logger.warning(
            "%s: item %r returned non-numeric score %r, treating as no match",
            ErrorCode.INTERNAL_INCONSISTENCY.value,
            key,
            score,
        )
        return None
    value = float(score)
    if not math.isfinite(value):
        logger.warning(
            "%s: item %r returned non-finite score %r, treating as no match",
            ErrorCode.INTERNAL_INCONSISTENCY.value,
            key,
            score,
        )
        return None
    return value


def find_matching_items(
    items: Iterable[tuple[K, ScoreMatchable]],
    terms: Sequence[str],
) -> list[K]:
    """
    Find all items which match ``terms``.

    Args:
        items: Pairs of (id, item) in candidate order
        terms: Search terms

    Returns:
        Ids of items with a positive score, best first. Items with equal
        scores keep their candidate order.
    """
    matches: list[tuple[float, K]] = []
    for key, item in items:
        try:
            raw_score = item.match_score(terms)
        except Exception:
            logger.warning(
                "%s: scoring item %r failed, treating as no match",
                ErrorCode.INTERNAL_INCONSISTENCY.value,
                key,
                exc_info=True,
            )
            continue
        score = _checked_score(key, raw_score)
        logger.debug("Item %r (id %r) scored %s for terms %r", item, key, score, terms)
        if score is not None and score > 0.0:
            matches.append((score, key))

    # Keys are finite floats, so this is a total order; sorted() is stable.
    matches = sorted(matches, key=lambda match: match[0], reverse=True)
    return [key for _, key in matches]
