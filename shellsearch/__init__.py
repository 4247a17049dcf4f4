"""
shellsearch - GNOME Shell search provider for recent JetBrains projects.

Example:
    >>> from shellsearch.domains.matching import find_matching_items
    >>> ids = find_matching_items(items.items(), ["foo"])
"""

__version__ = "1.9.1"
__all__ = ["__version__"]
