"""
JetBrains Projects - Locate and parse the recent projects list of an IDE.

JetBrains IDEs keep one configuration directory per installed version, e.g.
``~/.config/JetBrains/IdeaIC2021.1``, with the recent projects stored in
``options/recentProjects.xml`` (``recentSolutions.xml`` for Rider).
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from pydantic import BaseModel

logger = logging.getLogger(__name__)

__all__ = ["ConfigLocation", "VersionedPath", "get_project_name", "read_recent_projects"]

VERSION_PATTERN = re.compile(r"(\d{1,4})\.(\d{1,2})")
USER_HOME_VARIABLE = "$USER_HOME$"


@dataclass(frozen=True)
class VersionedPath:
    """A path with an associated (epoch, major) version."""

    path: Path
    version: tuple[int, int]

    @classmethod
    def extract_version(cls, path: Path) -> VersionedPath | None:
        """Extract the version from the file name of ``path``, if any."""
        match = VERSION_PATTERN.search(path.name)
        if match is None:
            return None
        return cls(path=path, version=(int(match.group(1)), int(match.group(2))))


class ConfigLocation(BaseModel):
    """Where a JetBrains product keeps its configuration."""

    vendor_dir: str  # e.g. "JetBrains" or "Google"
    config_glob: str  # Glob for versioned config dirs inside vendor_dir
    projects_filename: str = "recentProjects.xml"

    model_config = {"frozen": True}

    def find_config_dir_of_latest_version(self, config_home: Path) -> VersionedPath | None:
        """Find the configuration directory of the latest installed version."""
        vendor_dir = config_home / self.vendor_dir
        candidates = (
            VersionedPath.extract_version(path) for path in vendor_dir.glob(self.config_glob)
        )
        versioned = [candidate for candidate in candidates if candidate is not None]
        if not versioned:
            logger.debug("No config dir matching %s in %s", self.config_glob, vendor_dir)
            return None
        return max(versioned, key=lambda candidate: candidate.version)

    def find_latest_recent_projects_file(self, config_home: Path) -> Path | None:
        """Find the recent projects file of the latest installed version."""
        latest = self.find_config_dir_of_latest_version(config_home)
        if latest is None:
            return None
        projects_file = latest.path / "options" / self.projects_filename
        return projects_file if projects_file.is_file() else None


def read_recent_projects(source: IO[bytes], home: Path) -> list[str]:
    """
    Read paths of all recent projects from a recent projects XML file.

    Args:
        source: Binary file object with the XML document
        home: Directory substituted for $USER_HOME$

    Returns:
        Project paths in file order; empty if the file has no project list

    Raises:
        xml.etree.ElementTree.ParseError: If the document is malformed
    """
    root = ET.parse(source).getroot()

    manager = next(
        (c for c in root.findall("component") if c.get("name") == "RecentProjectsManager"),
        None,
    )
    if manager is None:
        return []
    option = next(
        (o for o in manager.findall("option") if o.get("name") == "additionalInfo"),
        None,
    )
    if option is None:
        return []
    entries = option.find("map")
    if entries is None:
        return []

    return [
        key.replace(USER_HOME_VARIABLE, str(home))
        for key in (entry.get("key") for entry in entries.findall("entry"))
        if key is not None
    ]


def get_project_name(path: str | Path) -> str | None:
    """
    Get the name of the JetBrains project at ``path``.

    Use the contents of ``.idea/.name`` if readable, otherwise the directory
    name, and None if neither gives a name.
    """
    path = Path(path)
    try:
        name = (path / ".idea" / ".name").read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        name = ""
    return name or path.name or None
