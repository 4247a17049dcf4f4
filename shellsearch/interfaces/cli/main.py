"""
CLI Main - Typer-based command-line interface.

Usage:
    shellsearch serve
    shellsearch providers
    shellsearch search idea mdcat
    shellsearch version

Set $SHELLSEARCH_LOG_LEVEL to control the log level.
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.table import Table

from shellsearch.adapters.jetbrains import PROVIDERS, ProviderDefinition
from shellsearch.config.errors import LaunchError

app = typer.Typer(
    name="shellsearch",
    help="GNOME Shell search provider for recent JetBrains projects",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


@app.command()
def serve(
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Override log level"),
) -> None:
    """Run the search provider service on the session bus."""
    from shellsearch import __version__
    from shellsearch.config import SearchProviderError, configure_logging, get_settings

    settings = get_settings()
    configure_logging(log_level or settings.log_level)
    logger.info("Started jetbrains search provider version: %s", __version__)

    from shellsearch.interfaces.bus import run_service

    try:
        run_service(settings)
    except SearchProviderError as e:
        logger.error("Main loop error: %s", e)
        raise typer.Exit(1)
    except Exception:
        logger.exception("Main loop error")
        raise typer.Exit(1)


@app.command()
def providers() -> None:
    """List all providers."""
    for label in sorted(provider.label for provider in PROVIDERS):
        console.print(label)


class NoLaunchClient:
    """Launch client for searches that never open anything."""

    async def launch_uri(self, app_id: str, uri: str) -> None:
        raise LaunchError(f"Launching disabled for {app_id}", details={"uri": uri})

    async def launch_app(self, app_id: str) -> None:
        raise LaunchError(f"Launching disabled for {app_id}")


def _find_provider(name: str) -> ProviderDefinition | None:
    for provider in PROVIDERS:
        short_name = provider.relative_obj_path.rsplit("/", 1)[-1]
        if name in (provider.desktop_id, short_name):
            return provider
    return None


@app.command()
def search(
    provider: str = typer.Argument(..., help="Provider, e.g. 'idea' or 'jetbrains-idea.desktop'"),
    terms: list[str] = typer.Argument(..., help="Search terms"),
    open_first: bool = typer.Option(False, "--open", "-o", help="Open the best match"),
) -> None:
    """Search the recent projects of one IDE."""
    definition = _find_provider(provider)
    if definition is None:
        console.print(f"[red]Error:[/red] Unknown provider: {provider}")
        raise typer.Exit(1)

    asyncio.run(_search_async(definition, terms, open_first))


async def _search_async(
    definition: ProviderDefinition,
    terms: list[str],
    open_first: bool,
) -> None:
    """Async search implementation."""
    from shellsearch.adapters.jetbrains import JetbrainsProjectsSource
    from shellsearch.config import SearchProviderError, configure_logging, get_settings
    from shellsearch.domains.session import AppInfo, LaunchClient, SearchSession

    settings = get_settings()
    configure_logging(settings.log_level)

    launcher: LaunchClient
    if open_first:
        from shellsearch.adapters.gio import GioLaunchClient

        launcher = GioLaunchClient()
    else:
        launcher = NoLaunchClient()

    source = JetbrainsProjectsSource(
        definition.desktop_id,
        definition.config,
        settings.config_home,
        settings.home_dir,
    )
    session = SearchSession(
        AppInfo(id=definition.desktop_id, icon=""),
        source,
        launcher,
    )

    try:
        ids = await session.get_initial_result_set(terms)
        metas = session.get_result_metas(ids)

        table = Table(title=f"{definition.label}: {' '.join(terms)}")
        table.add_column("#", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Location", style="green")
        for rank, meta in enumerate(metas, 1):
            table.add_row(str(rank), meta.name, meta.description or "")
        console.print(table)

        if not ids:
            console.print("[yellow]No matching projects[/yellow]")
        elif open_first:
            await session.activate_result(ids[0], terms, 0)
            console.print(f"[green]Opened:[/green] {metas[0].name}")

    except SearchProviderError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from shellsearch import __version__

    console.print(f"shellsearch v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
