"""
Search Provider Object - org.gnome.Shell.SearchProvider2 over dbus-python.

See https://developer.gnome.org/documentation/tutorials/search-provider.html

Calls that suspend (initial search, activation, launch) run as tasks on
the asyncio loop and reply through dbus-python's async callbacks; the
other calls answer directly from the session's cached result set.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine, Iterable
from functools import partial
from typing import Any

import dbus
import dbus.service

from shellsearch.config.errors import SearchProviderError
from shellsearch.domains.session import ResultMeta, SearchSession

logger = logging.getLogger(__name__)

__all__ = ["SEARCH_PROVIDER_IFACE", "SearchProvider", "SearchProviderFailed"]

SEARCH_PROVIDER_IFACE = "org.gnome.Shell.SearchProvider2"


class SearchProviderFailed(dbus.DBusException):
    """Generic failure reply sent to the shell."""

    _dbus_error_name = "org.freedesktop.DBus.Error.Failed"


def _strings(values: Iterable[Any]) -> list[str]:
    return [str(value) for value in values]


def meta_to_dbus(meta: ResultMeta) -> dbus.Dictionary:
    """Convert result metadata to an a{sv} dictionary."""
    values = {
        "id": dbus.String(meta.id),
        "name": dbus.String(meta.name),
        "gicon": dbus.String(meta.gicon),
    }
    if meta.description is not None:
        values["description"] = dbus.String(meta.description)
    return dbus.Dictionary(values, signature="sv")


class SearchProvider(dbus.service.Object):
    """
    D-Bus object serving one search session.

    Example:
        >>> provider = SearchProvider(session, loop, conn=bus, object_path="/de/swsnr/...")
    """

    def __init__(
        self,
        session: SearchSession[Any],
        loop: asyncio.AbstractEventLoop,
        conn: dbus.connection.Connection | None = None,
        object_path: str | None = None,
    ) -> None:
        """
        Initialize provider.

        Args:
            session: The session answering all calls
            loop: Loop running the suspending calls
            conn: Bus connection to export on; None leaves the object unexported
            object_path: Object path to export at
        """
        super().__init__(conn, object_path)
        self._session = session
        self._loop = loop
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def session(self) -> SearchSession[Any]:
        """The session behind this object."""
        return self._session

    @property
    def pending(self) -> int:
        """Number of calls still waiting for a reply."""
        return len(self._tasks)

    def _spawn(
        self,
        call: Coroutine[Any, Any, Any],
        reply: Callable[..., None],
        error: Callable[[Exception], None],
    ) -> None:
        task = self._loop.create_task(call)
        self._tasks.add(task)
        task.add_done_callback(partial(self._finish, reply=reply, error=error))

    def _finish(
        self,
        task: asyncio.Task[Any],
        reply: Callable[..., None],
        error: Callable[[Exception], None],
    ) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            error(SearchProviderFailed("Call cancelled"))
            return

        exc = task.exception()
        if exc is None:
            result = task.result()
            if result is None:
                reply()
            else:
                reply(result)
        elif isinstance(exc, SearchProviderError):
            error(SearchProviderFailed(exc.message))
        else:
            logger.error("Unexpected failure in %s", self._session.app.id, exc_info=exc)
            error(SearchProviderFailed(f"Internal error in {self._session.app.id}"))

    @dbus.service.method(
        SEARCH_PROVIDER_IFACE,
        in_signature="as",
        out_signature="as",
        async_callbacks=("reply", "error"),
    )
    def GetInitialResultSet(self, terms, reply, error):
        """Start a search and return matching result ids."""
        self._spawn(self._session.get_initial_result_set(_strings(terms)), reply, error)

    @dbus.service.method(SEARCH_PROVIDER_IFACE, in_signature="asas", out_signature="as")
    def GetSubsearchResultSet(self, previous_results, terms):
        """Refine a running search."""
        return self._session.get_subsearch_result_set(
            _strings(previous_results), _strings(terms)
        )

    @dbus.service.method(SEARCH_PROVIDER_IFACE, in_signature="as", out_signature="aa{sv}")
    def GetResultMetas(self, results):
        """Describe results for display."""
        metas = self._session.get_result_metas(_strings(results))
        return dbus.Array([meta_to_dbus(meta) for meta in metas], signature="a{sv}")

    @dbus.service.method(
        SEARCH_PROVIDER_IFACE,
        in_signature="sasu",
        out_signature="",
        async_callbacks=("reply", "error"),
    )
    def ActivateResult(self, identifier, terms, timestamp, reply, error):
        """Open a single result in the app."""
        self._spawn(
            self._session.activate_result(str(identifier), _strings(terms), int(timestamp)),
            reply,
            error,
        )

    @dbus.service.method(
        SEARCH_PROVIDER_IFACE,
        in_signature="asu",
        out_signature="",
        async_callbacks=("reply", "error"),
    )
    def LaunchSearch(self, terms, timestamp, reply, error):
        """Open the app itself."""
        self._spawn(
            self._session.launch_search(_strings(terms), int(timestamp)),
            reply,
            error,
        )
