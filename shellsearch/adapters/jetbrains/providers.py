"""
Provider Definitions - The JetBrains IDEs this service provides search for.

For each definition a matching ``providers/*.ini`` file must exist, with
the same desktop id and object path. Object paths must be unique per
desktop id so that every provider launches the right app.
"""

from __future__ import annotations

from pydantic import BaseModel

from .projects import ConfigLocation

__all__ = ["DEFAULT_OBJECT_PATH_PREFIX", "PROVIDERS", "ProviderDefinition"]

DEFAULT_OBJECT_PATH_PREFIX = "/de/swsnr/searchprovider/jetbrains"


class ProviderDefinition(BaseModel):
    """A search provider to expose from this service."""

    label: str  # Human readable
    desktop_id: str  # File name of the desktop file of the app
    relative_obj_path: str
    config: ConfigLocation

    model_config = {"frozen": True}

    def objpath(self, prefix: str = DEFAULT_OBJECT_PATH_PREFIX) -> str:
        """Full object path of this provider."""
        return f"{prefix.rstrip('/')}/{self.relative_obj_path}"


def _toolbox(label: str, name: str, config_glob: str, **config: str) -> ProviderDefinition:
    return ProviderDefinition(
        label=f"{label} (toolbox)",
        desktop_id=f"jetbrains-{name}.desktop",
        relative_obj_path=f"toolbox/{name.replace('-', '')}",
        config=ConfigLocation(
            vendor_dir=config.pop("vendor_dir", "JetBrains"),
            config_glob=config_glob,
            **config,
        ),
    )


PROVIDERS: tuple[ProviderDefinition, ...] = (
    _toolbox("CLion", "clion", "CLion*"),
    _toolbox("GoLand", "goland", "GoLand*"),
    _toolbox("IDEA", "idea", "IntelliJIdea*"),
    _toolbox("IDEA Community Edition", "idea-ce", "IdeaIC*"),
    _toolbox("PHPStorm", "phpstorm", "PhpStorm*"),
    _toolbox("PyCharm", "pycharm", "PyCharm*"),
    _toolbox("Rider", "rider", "Rider*", projects_filename="recentSolutions.xml"),
    _toolbox("RubyMine", "rubymine", "RubyMine*"),
    _toolbox("Android Studio", "studio", "AndroidStudio*", vendor_dir="Google"),
    _toolbox("WebStorm", "webstorm", "WebStorm*"),
)
