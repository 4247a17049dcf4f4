"""
Session Domain - The stateful search provider protocol.

This domain handles:
- Full searches that refresh the cached result set from an items source
- Refinement of running searches against the cached set
- Result metadata for the shell
- Activation of results and of the app itself
"""

from .contracts import DisplayItem, ItemsSource, LaunchClient
from .models import AppInfo, ResultMeta
from .session import SearchSession

__all__ = [
    "DisplayItem",
    "ItemsSource",
    "LaunchClient",
    "AppInfo",
    "ResultMeta",
    "SearchSession",
]
