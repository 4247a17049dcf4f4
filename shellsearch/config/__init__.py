"""
Configuration - Application settings, logging setup and error taxonomy.
"""

from .errors import (
    BusNameUnavailableError,
    ErrorCode,
    ItemsSourceError,
    LaunchError,
    LaunchFailedError,
    ResultNotFoundError,
    SearchProviderError,
    SourceUnavailableError,
)
from .log import configure_logging
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "configure_logging",
    # Errors
    "ErrorCode",
    "SearchProviderError",
    "SourceUnavailableError",
    "ResultNotFoundError",
    "LaunchFailedError",
    "ItemsSourceError",
    "LaunchError",
    "BusNameUnavailableError",
]
