"""
Gio Adapter - Launch apps through GIO desktop app infos.
"""

from .launcher import GioLaunchClient, to_uri

__all__ = ["GioLaunchClient", "to_uri"]
