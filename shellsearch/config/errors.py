"""
Error Taxonomy - Consistent error codes across the search provider.

Usage:
    from shellsearch.config.errors import ErrorCode, SearchProviderError

    raise SearchProviderError(ErrorCode.SOURCE_UNAVAILABLE, "Failed to read projects")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Search session errors
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
    RESULT_NOT_FOUND = "RESULT_NOT_FOUND"
    LAUNCH_FAILED = "LAUNCH_FAILED"

    # Never raised; tags log records for states that should be unreachable
    INTERNAL_INCONSISTENCY = "INTERNAL_INCONSISTENCY"

    # Items source errors
    SOURCE_READ_FAILED = "SOURCE_READ_FAILED"

    # Bus errors
    BUS_NAME_UNAVAILABLE = "BUS_NAME_UNAVAILABLE"


class SearchProviderError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a transport-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


# Session errors, surfaced to the shell
class SourceUnavailableError(SearchProviderError):
    """The items source failed to deliver a fresh result set."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.SOURCE_UNAVAILABLE, message, details)


class ResultNotFoundError(SearchProviderError):
    """A result id is not part of the current result set."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.RESULT_NOT_FOUND, message, details)


class LaunchFailedError(SearchProviderError):
    """Launching the app failed; the message is safe to show to users."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.LAUNCH_FAILED, message, details)


# Collaborator errors, raised by adapters
class ItemsSourceError(SearchProviderError):
    """Reading recent items from disk failed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.SOURCE_READ_FAILED, message, details)


class LaunchError(SearchProviderError):
    """The launch client could not start the app."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.LAUNCH_FAILED, message, details)


class BusNameUnavailableError(SearchProviderError):
    """The bus refused to hand us the requested name."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.BUS_NAME_UNAVAILABLE, message, details)
