"""
JetBrains Projects Source - Items source over the recent projects of one IDE.
"""

from __future__ import annotations

import asyncio
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from shellsearch.config.errors import ItemsSourceError
from shellsearch.domains.matching import RecentItem

from .projects import ConfigLocation, get_project_name, read_recent_projects

logger = logging.getLogger(__name__)

__all__ = ["JetbrainsProjectsSource"]


class JetbrainsProjectsSource:
    """
    Recent projects of a JetBrains IDE.

    Example:
        >>> source = JetbrainsProjectsSource("jetbrains-idea.desktop", config, config_home, home)
        >>> items = await source.find_recent_items()
    """

    def __init__(
        self,
        app_id: str,
        config: ConfigLocation,
        config_home: Path,
        home_dir: Path,
    ) -> None:
        """
        Initialize source.

        Args:
            app_id: Desktop id of the IDE, part of every result id
            config: Where the IDE keeps its configuration
            config_home: User configuration directory, e.g. ~/.config
            home_dir: Directory substituted for $USER_HOME$
        """
        self._app_id = app_id
        self._config = config
        self._config_home = config_home
        self._home_dir = home_dir

    async def find_recent_items(self) -> dict[str, RecentItem]:
        """Read recent projects off the event loop."""
        return await asyncio.to_thread(self.read_recent_items)

    def read_recent_items(self) -> dict[str, RecentItem]:
        """
        Read recent projects from the latest recent projects file.

        Returns:
            Recent projects by result id; empty if the IDE has no
            configuration yet

        Raises:
            ItemsSourceError: If the recent projects file is unreadable
        """
        logger.info("Searching recent projects for %s", self._app_id)
        items: dict[str, RecentItem] = {}

        projects_file = self._config.find_latest_recent_projects_file(self._config_home)
        if projects_file is None:
            logger.info("No recent projects file for %s", self._app_id)
            return items

        try:
            with projects_file.open("rb") as source:
                paths = read_recent_projects(source, self._home_dir)
        except (OSError, ET.ParseError) as e:
            raise ItemsSourceError(
                f"Failed to read recent projects from {projects_file}: {e}",
                details={"app_id": self._app_id, "path": str(projects_file)},
            ) from e

        for path in paths:
            name = get_project_name(path)
            if name is None:
                logger.debug("Skipping project without name at %s", path)
                continue
            items[f"jetbrains-recent-project-{self._app_id}-{path}"] = RecentItem(
                name=name, uri=path
            )

        logger.info("Found %d project(s) for %s", len(items), self._app_id)
        return items
