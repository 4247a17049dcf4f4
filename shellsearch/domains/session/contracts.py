"""
Session Contracts - Collaborators consumed by the search session.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from shellsearch.domains.matching.contracts import ScoreMatchable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class DisplayItem(ScoreMatchable, Protocol):
    """An item the session can rank, describe and launch."""

    @property
    def name(self) -> str:
        """Human readable name shown in the result list."""
        ...

    @property
    def uri(self) -> str:
        """URI or path handed to the app on activation."""
        ...


@runtime_checkable
class ItemsSource(Protocol[T_co]):
    """Contract for sources of recent items."""

    async def find_recent_items(self) -> dict[str, T_co]:
        """
        Load the current recent items.

        Returns:
            Mapping of result id to item, in the order items should be
            considered when scores tie

        Raises:
            Exception: Any failure; the session reports it as unavailable
        """
        ...


@runtime_checkable
class LaunchClient(Protocol):
    """Contract for launching apps."""

    async def launch_uri(self, app_id: str, uri: str) -> None:
        """Launch the app ``app_id`` with ``uri`` as argument."""
        ...

    async def launch_app(self, app_id: str) -> None:
        """Launch the app ``app_id`` without arguments."""
        ...
