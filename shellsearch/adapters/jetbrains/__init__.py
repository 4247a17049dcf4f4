"""
JetBrains Adapter - Recent projects of JetBrains IDEs as search items.
"""

from .projects import ConfigLocation, VersionedPath, get_project_name, read_recent_projects
from .providers import PROVIDERS, ProviderDefinition
from .source import JetbrainsProjectsSource

__all__ = [
    "ConfigLocation",
    "VersionedPath",
    "get_project_name",
    "read_recent_projects",
    "ProviderDefinition",
    "PROVIDERS",
    "JetbrainsProjectsSource",
]
