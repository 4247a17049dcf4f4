"""
Search Session - Implements org.gnome.Shell.SearchProvider2 semantics.

The shell issues five independent calls against one provider:

- GetInitialResultSet: fetch fresh items and rank them
- GetSubsearchResultSet: re-rank previous results for refined terms
- GetResultMetas: describe result ids
- ActivateResult: open one result in the app
- LaunchSearch: open the app itself

Only the initial search talks to the items source. Every other call works
on the result set installed by the most recently requested initial search
whose fetch has completed.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Generic, TypeVar

from shellsearch.config.errors import (
    ErrorCode,
    LaunchFailedError,
    ResultNotFoundError,
    SourceUnavailableError,
)
from shellsearch.domains.matching import find_matching_items

from .contracts import DisplayItem, ItemsSource, LaunchClient
from .models import AppInfo, ResultMeta

logger = logging.getLogger(__name__)

__all__ = ["SearchSession"]

T = TypeVar("T", bound=DisplayItem)


class SearchSession(Generic[T]):
    """
    Search session for the recent items of one app.

    Example:
        >>> session = SearchSession(app, JetbrainsProjectsSource(...), GioLaunchClient())
        >>> ids = await session.get_initial_result_set(["mdcat"])
        >>> metas = session.get_result_metas(ids)
    """

    def __init__(
        self,
        app: AppInfo,
        source: ItemsSource[T],
        launcher: LaunchClient,
    ) -> None:
        """
        Initialize search session.

        Args:
            app: The app whose items this session searches
            source: Loads recent items on every initial search
            launcher: Opens results and the app
        """
        self._app = app
        self._source = source
        self._launcher = launcher

        # Guards the three fields below. The dict itself is never mutated
        # once installed; it is only ever replaced.
        self._lock = threading.Lock()
        self._items: dict[str, T] = {}
        self._requested = 0
        self._applied = 0

    @property
    def app(self) -> AppInfo:
        """The app managed by this session."""
        return self._app

    @property
    def generation(self) -> int:
        """Generation of the installed result set; 0 before the first fetch."""
        with self._lock:
            return self._applied

    @property
    def items(self) -> dict[str, T]:
        """Snapshot of the installed result set."""
        return dict(self._current_items())

    def _current_items(self) -> dict[str, T]:
        with self._lock:
            return self._items

    async def get_initial_result_set(self, terms: Sequence[str]) -> list[str]:
        """
        Start a new search.

        Args:
            terms: Search terms

        Returns:
            Ids of matching items, best first

        Raises:
            SourceUnavailableError: If the items source failed
        """
        with self._lock:
            self._requested += 1
            generation = self._requested

        logger.debug("Searching for %r of %s (generation %d)", terms, self._app.id, generation)
        try:
            fetched = await self._source.find_recent_items()
        except Exception as e:
            logger.exception("Failed to update recent items for %s", self._app.id)
            raise SourceUnavailableError(
                f"Failed to update recent items for {self._app.id}: {e}",
                details={"app_id": self._app.id, "generation": generation},
            ) from e

        candidates = self._apply(generation, fetched)
        ids = find_matching_items(candidates.items(), terms)
        logger.debug("Found ids %r for %s", ids, self._app.id)
        return ids

    def _apply(self, generation: int, fetched: dict[str, T]) -> dict[str, T]:
        """Install ``fetched`` if it is the latest request; return the set to rank."""
        with self._lock:
            if generation == self._requested:
                if generation > self._applied:
                    self._items = fetched
                    self._applied = generation
                    logger.debug(
                        "Installed %d item(s) for %s at generation %d",
                        len(fetched),
                        self._app.id,
                        generation,
                    )
                    return fetched
                logger.warning(
                    "%s: generation %d of %s is the latest request but %d is already applied, "
                    "discarding fetch",
                    ErrorCode.INTERNAL_INCONSISTENCY.value,
                    generation,
                    self._app.id,
                    self._applied,
                )
                return self._items

            logger.debug(
                "Discarding stale fetch of generation %d for %s, latest request is %d",
                generation,
                self._app.id,
                self._requested,
            )
            if self._applied > generation:
                return self._items
            return fetched

    def get_subsearch_result_set(
        self,
        previous_results: Sequence[str],
        terms: Sequence[str],
    ) -> list[str]:
        """
        Refine an ongoing search.

        Args:
            previous_results: Ids returned by an earlier search
            terms: Current search terms

        Returns:
            Those previous ids still known which match ``terms``, best first
        """
        logger.debug(
            "Searching for %r in %r of %s", terms, previous_results, self._app.id
        )
        items = self._current_items()
        candidates = [(id_, items[id_]) for id_ in previous_results if id_ in items]
        ids = find_matching_items(candidates, terms)
        logger.debug("Found ids %r for %s", ids, self._app.id)
        return ids

    def get_result_metas(self, results: Sequence[str]) -> list[ResultMeta]:
        """
        Get metadata for results.

        Unknown ids are skipped, so the result may be shorter than ``results``.
        Items without a description of their own are described by their uri.
        """
        logger.debug("Getting meta info for %r", results)
        items = self._current_items()
        metas = [
            ResultMeta(
                id=id_,
                name=items[id_].name,
                gicon=self._app.icon,
                description=getattr(items[id_], "description", None) or items[id_].uri,
            )
            for id_ in results
            if id_ in items
        ]
        logger.debug("Return meta info %r", metas)
        return metas

    async def activate_result(
        self,
        id: str,
        terms: Sequence[str],
        timestamp: int,
    ) -> None:
        """
        Launch the app with the selected item.

        Raises:
            ResultNotFoundError: If ``id`` is not in the current result set
            LaunchFailedError: If the app failed to launch
        """
        logger.debug("Activating result %s for %r at %d", id, terms, timestamp)
        item = self._current_items().get(id)
        if item is None:
            logger.info("Item with ID %s not found for %s", id, self._app.id)
            raise ResultNotFoundError(f"Result {id} not found", details={"id": id})

        logger.info("Launching recent item %r for %s", item, self._app.id)
        try:
            await self._launcher.launch_uri(self._app.id, item.uri)
        except Exception as e:
            logger.exception("Failed to launch app %s for %r", self._app.id, item.uri)
            raise LaunchFailedError(
                f"Failed to launch app {self._app.id}",
                details={"app_id": self._app.id},
            ) from e

    async def launch_search(self, terms: Sequence[str], timestamp: int) -> None:
        """
        Launch the app itself, without any arguments.

        Raises:
            LaunchFailedError: If the app failed to launch
        """
        logger.info("Launching app %s directly", self._app.id)
        try:
            await self._launcher.launch_app(self._app.id)
        except Exception as e:
            logger.exception("Failed to launch app %s", self._app.id)
            raise LaunchFailedError(
                f"Failed to launch app {self._app.id}",
                details={"app_id": self._app.id},
            ) from e
