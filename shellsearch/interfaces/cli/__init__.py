"""
CLI Interface - Command-line tools for the search provider.

Provides commands for:
- Running the D-Bus service
- Listing known providers
- Searching recent projects from a terminal
"""

from .main import app, main

__all__ = ["app", "main"]
