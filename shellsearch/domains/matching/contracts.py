"""
Matching Contracts - Interfaces for matching domain.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class ScoreMatchable(Protocol):
    """Contract for anything that can be matched against search terms."""

    def match_score(self, terms: Sequence[str]) -> float:
        """
        Score how well self matches ``terms``.

        A score of 0 or less means no match; higher is better, and 100
        is a perfect match.
        """
        ...
