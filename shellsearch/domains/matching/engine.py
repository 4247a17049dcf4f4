"""
Match Engine - Graded substring matching of terms against item fields.

Every term is matched case-insensitively against every field and graded
by the strongest kind of occurrence:

- exact: the term is the whole field
- prefix: the field starts with the term
- word: the term starts at a word boundary inside the field
- substring: the term occurs anywhere else

Matching is conjunctive: a single term without any occurrence zeroes the
score, so "foo bar" never matches an item that only contains "foo".
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from enum import Enum

__all__ = ["MatchGrade", "PERFECT_SCORE", "match_score", "score_term"]

PERFECT_SCORE = 100.0


class MatchGrade(float, Enum):
    """Weight of one term occurrence, strongest first."""

    EXACT = 1.0
    PREFIX = 0.75
    WORD = 0.5
    SUBSTRING = 0.25
    NONE = 0.0


def _grade_in_field(term: str, field: str) -> MatchGrade:
    if term == field:
        return MatchGrade.EXACT
    if field.startswith(term):
        return MatchGrade.PREFIX

    grade = MatchGrade.NONE
    start = field.find(term)
    while start != -1:
        if not field[start - 1].isalnum():
            return MatchGrade.WORD
        grade = MatchGrade.SUBSTRING
        start = field.find(term, start + 1)
    return grade


def score_term(term: str, fields: Iterable[str]) -> MatchGrade:
    """Return the strongest grade of ``term`` across ``fields``."""
    term = term.strip().casefold()
    if not term:
        return MatchGrade.NONE

    best = MatchGrade.NONE
    for field in fields:
        folded = field.casefold()
        if not folded:
            continue
        grade = _grade_in_field(term, folded)
        if grade.value > best.value:
            best = grade
            if best is MatchGrade.EXACT:
                break
    return best


def match_score(fields: Sequence[str], terms: Sequence[str]) -> float:
    """
    Score ``fields`` against all ``terms``.

    Args:
        fields: Searchable fields of one item, e.g. name and path
        terms: Search terms as typed by the user

    Returns:
        0.0 if any term does not occur in any field, otherwise the mean
        term grade scaled onto 0-100. Blank terms are ignored; without
        any usable term or field the score is 0.0.
    """
    usable_terms = [term for term in terms if term.strip()]
    usable_fields = [field for field in fields if field]
    if not usable_terms or not usable_fields:
        return 0.0

    total = 0.0
    for term in usable_terms:
        grade = score_term(term, usable_fields)
        if grade is MatchGrade.NONE:
            return 0.0
        total += grade.value

    score = PERFECT_SCORE * total / len(usable_terms)
    if not math.isfinite(score):
        return 0.0
    return min(max(score, 0.0), PERFECT_SCORE)
