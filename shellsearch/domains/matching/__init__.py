"""
Matching Domain - Fuzzy scoring and ranking of recent items.

This domain handles:
- Graded, case-insensitive term matching against item fields
- Conjunctive scoring across all query terms
- Stable, total-order ranking of scored candidates
"""

from .contracts import ScoreMatchable
from .engine import MatchGrade, match_score, score_term
from .models import RecentItem
from .ranker import find_matching_items

__all__ = [
    "ScoreMatchable",
    "MatchGrade",
    "match_score",
    "score_term",
    "RecentItem",
    "find_matching_items",
]
