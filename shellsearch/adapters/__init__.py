"""
Adapters - Host integrations.

Reading IDE configuration and launching apps is wrapped here to keep the
search domains free of GNOME and JetBrains specifics.
"""

from .jetbrains import PROVIDERS, JetbrainsProjectsSource, ProviderDefinition

__all__ = [
    "JetbrainsProjectsSource",
    "ProviderDefinition",
    "PROVIDERS",
]
