"""
Bus Interface - Exposes search sessions on the D-Bus session bus.

Provides:
- The org.gnome.Shell.SearchProvider2 object for one session
- Provider registration, bus name acquisition and the main loop
"""

from .provider import SEARCH_PROVIDER_IFACE, SearchProvider, SearchProviderFailed
from .service import acquire_bus_name, register_providers, run_service

__all__ = [
    "SEARCH_PROVIDER_IFACE",
    "SearchProvider",
    "SearchProviderFailed",
    "acquire_bus_name",
    "register_providers",
    "run_service",
]
