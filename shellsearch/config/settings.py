"""
Settings - Daemon configuration using Pydantic Settings.

Loads from SHELLSEARCH_* environment variables and .env files.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_config_home() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else Path.home() / ".config"


class Settings(BaseSettings):
    """Application settings."""

    log_level: str = "INFO"

    # D-Bus
    bus_name: str = "de.swsnr.searchprovider.Jetbrains"
    object_path_prefix: str = "/de/swsnr/searchprovider/jetbrains"

    # Where IDEs keep their configuration, and what $USER_HOME$ expands to
    config_home: Path = Field(default_factory=_default_config_home)
    home_dir: Path = Field(default_factory=Path.home)

    model_config = SettingsConfigDict(
        env_prefix="SHELLSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
