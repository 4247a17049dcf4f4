"""
Interfaces - Entry points into the search provider.

- bus: org.gnome.Shell.SearchProvider2 on the session bus
- cli: Command-line tools
"""

__all__ = ["bus", "cli"]
