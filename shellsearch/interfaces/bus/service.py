"""
Search Provider Service - Registers providers and runs the main loop.

asyncio runs on top of the GLib main loop (PyGObject's GLibEventLoopPolicy),
so D-Bus dispatch, GIO callbacks and search coroutines share one thread.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import Callable, Iterable
from typing import Any

import dbus
import dbus.exceptions
import dbus.service
import gi
from dbus.mainloop.glib import DBusGMainLoop

gi.require_version("Gio", "2.0")
from gi.events import GLibEventLoopPolicy  # noqa: E402
from gi.repository import Gio, GLib  # noqa: E402

from shellsearch.adapters.gio import GioLaunchClient  # noqa: E402
from shellsearch.adapters.jetbrains import (  # noqa: E402
    PROVIDERS,
    JetbrainsProjectsSource,
    ProviderDefinition,
)
from shellsearch.config import Settings  # noqa: E402
from shellsearch.config.errors import BusNameUnavailableError  # noqa: E402
from shellsearch.domains.session import AppInfo, LaunchClient, SearchSession  # noqa: E402

from .provider import SearchProvider  # noqa: E402

logger = logging.getLogger(__name__)

__all__ = ["acquire_bus_name", "register_providers", "run_service"]

FALLBACK_ICON = "application-x-executable"


def app_info_for(desktop_id: str, app_info_factory: Callable[[str], Any]) -> AppInfo | None:
    """Describe the installed app ``desktop_id``, or None if not installed."""
    desktop_app = app_info_factory(desktop_id)
    if desktop_app is None:
        return None
    icon = desktop_app.get_icon()
    return AppInfo(id=desktop_id, icon=icon.to_string() if icon is not None else FALLBACK_ICON)


def register_providers(
    conn: dbus.connection.Connection | None,
    settings: Settings,
    loop: asyncio.AbstractEventLoop,
    launcher: LaunchClient,
    definitions: Iterable[ProviderDefinition] = PROVIDERS,
    app_info_factory: Callable[[str], Any] = Gio.DesktopAppInfo.new,
) -> list[SearchProvider]:
    """
    Export one search provider for every installed app.

    Args:
        conn: Bus connection to export providers on; None leaves them unexported
        settings: Application settings
        loop: Loop running the suspending calls
        launcher: Launch client shared by all providers
        definitions: Candidate providers
        app_info_factory: Looks up desktop app infos by desktop id

    Returns:
        The created providers, in definition order
    """
    providers = []
    for definition in definitions:
        app = app_info_for(definition.desktop_id, app_info_factory)
        if app is None:
            logger.debug("Skipping %s, app not installed", definition.desktop_id)
            continue

        object_path = definition.objpath(settings.object_path_prefix)
        logger.info("Registering provider for %s at %s", definition.desktop_id, object_path)
        source = JetbrainsProjectsSource(
            definition.desktop_id,
            definition.config,
            settings.config_home,
            settings.home_dir,
        )
        provider = SearchProvider(SearchSession(app, source, launcher), loop)
        if conn is not None:
            provider.add_to_connection(conn, object_path)
        providers.append(provider)
    return providers


def acquire_bus_name(bus: dbus.Bus, name: str) -> dbus.service.BusName:
    """
    Acquire ``name`` on ``bus`` without queueing.

    Raises:
        BusNameUnavailableError: If another process owns the name
    """
    logger.debug("Requesting name %s", name)
    try:
        return dbus.service.BusName(name, bus, do_not_queue=True)
    except dbus.exceptions.NameExistsException as e:
        raise BusNameUnavailableError(
            f"Failed to acquire bus name {name}",
            details={"bus_name": name},
        ) from e


def run_service(settings: Settings) -> None:
    """
    Run the search provider service until SIGTERM or SIGINT.

    Connects to the session bus, registers a provider for every installed
    app, acquires the bus name and handles calls.
    """
    policy = GLibEventLoopPolicy()
    asyncio.set_event_loop_policy(policy)
    loop = policy.get_event_loop()

    DBusGMainLoop(set_as_default=True)
    bus = dbus.SessionBus()

    providers = register_providers(bus, settings, loop, GioLaunchClient())
    logger.info("%d provider(s) registered, acquiring %s", len(providers), settings.bus_name)
    bus_name = acquire_bus_name(bus, settings.bus_name)
    logger.info("Acquired name %s, handling D-Bus calls", bus_name.get_name())

    def quit_on(signum: int) -> bool:
        logger.debug("Received %s, quitting main loop", signal.Signals(signum).name)
        loop.stop()
        return GLib.SOURCE_REMOVE

    for signum in (signal.SIGTERM, signal.SIGINT):
        GLib.unix_signal_add(GLib.PRIORITY_DEFAULT, signum, quit_on, signum)

    try:
        loop.run_forever()
    finally:
        for provider in providers:
            provider.remove_from_connection()
        logger.info("Main loop stopped")
