"""
Session Models - Data types for session domain.
"""

from __future__ import annotations

from pydantic import BaseModel


class AppInfo(BaseModel):
    """The app a search session provides results for."""

    id: str  # Desktop file id, e.g. "jetbrains-idea.desktop"
    icon: str  # Serialized GIcon, see g_icon_to_string()

    model_config = {"frozen": True}


class ResultMeta(BaseModel):
    """Display metadata of a single result."""

    id: str
    name: str
    gicon: str
    description: str | None = None
