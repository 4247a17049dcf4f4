"""
Gio Launch Client - Launches desktop apps with GIO.

Launching is asynchronous on the GLib side; completion is delivered to the
waiting coroutine through an asyncio future.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import gi

gi.require_version("Gio", "2.0")
from gi.repository import Gio, GLib  # noqa: E402

from shellsearch.config.errors import LaunchError  # noqa: E402

logger = logging.getLogger(__name__)

__all__ = ["GioLaunchClient", "to_uri"]


def to_uri(location: str) -> str:
    """Turn a path or URI into a URI suitable for launching."""
    return Gio.File.new_for_commandline_arg(location).get_uri()


class GioLaunchClient:
    """
    Launch client backed by Gio.DesktopAppInfo.

    Example:
        >>> launcher = GioLaunchClient()
        >>> await launcher.launch_uri("jetbrains-idea.desktop", "/home/x/Code/mdcat")
    """

    def __init__(
        self,
        app_info_factory: Callable[[str], Any] = Gio.DesktopAppInfo.new,
        context_factory: Callable[[], Any] = Gio.AppLaunchContext,
    ) -> None:
        """
        Initialize launch client.

        Args:
            app_info_factory: Looks up the app info of a desktop id; returns
                None for unknown apps
            context_factory: Creates the launch context for every launch
        """
        self._app_info_factory = app_info_factory
        self._context_factory = context_factory

    async def launch_uri(self, app_id: str, uri: str) -> None:
        """Launch ``app_id`` with ``uri``."""
        await self._launch(app_id, [to_uri(uri)])

    async def launch_app(self, app_id: str) -> None:
        """Launch ``app_id`` without arguments."""
        await self._launch(app_id, [])

    async def _launch(self, app_id: str, uris: list[str]) -> None:
        app_info = self._app_info_factory(app_id)
        if app_info is None:
            raise LaunchError(f"App {app_id} not found", details={"app_id": app_id})

        loop = asyncio.get_running_loop()
        launched: asyncio.Future[None] = loop.create_future()

        def resolve(error: LaunchError | None) -> None:
            if launched.done():
                return
            if error is None:
                launched.set_result(None)
            else:
                launched.set_exception(error)

        def on_launched(source: Any, result: Any, *_: Any) -> None:
            try:
                source.launch_uris_finish(result)
            except GLib.Error as e:
                error = LaunchError(
                    f"Failed to launch {app_id}: {e.message}",
                    details={"app_id": app_id, "uris": uris},
                )
                loop.call_soon_threadsafe(resolve, error)
            else:
                loop.call_soon_threadsafe(resolve, None)

        logger.debug("Launching %s with %r", app_id, uris)
        app_info.launch_uris_async(uris, self._context_factory(), None, on_launched)
        await launched
        logger.info("Launched %s with %r", app_id, uris)
