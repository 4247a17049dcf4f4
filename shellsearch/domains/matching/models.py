"""
Matching Models - Data types for matching domain.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel

from .engine import match_score


class RecentItem(BaseModel):
    """A recently used item of an app, e.g. a project directory."""

    name: str
    uri: str  # URI or plain path handed to the app on activation
    description: str | None = None

    model_config = {"frozen": True}

    def match_score(self, terms: Sequence[str]) -> float:
        """Match name and location against ``terms``."""
        return match_score((self.name, self.uri), terms)
