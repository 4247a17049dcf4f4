"""
Test collection settings.

The GIO adapter and the bus interface import PyGObject and dbus-python when
their packages load, so their tests are only collected with the ``bus``
extra installed.
"""

from __future__ import annotations

import importlib.util


def _installed(module: str) -> bool:
    parent, _, _ = module.rpartition(".")
    if parent and not _installed(parent):
        return False
    return importlib.util.find_spec(module) is not None


collect_ignore: list[str] = []

if not _installed("gi"):
    collect_ignore.append("adapters/gio")

if not (_installed("dbus") and _installed("gi.events")):
    collect_ignore.append("interfaces/bus")
