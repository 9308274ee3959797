"""
CLI commands for managing the filesystem cache.

Provides ``ytcast cache clean`` to sweep expired entries from a persistent
cache directory.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ytcast.config import configure_logging
from ytcast.config.settings import settings
from ytcast.exceptions import StorageError
from ytcast.services.cache import Cache, CacheConfig, SweepResult

console = Console()

app = typer.Typer(
    name="cache",
    help="Manage the cache directory.",
    no_args_is_help=True,
)


def _build_cache(root: Path) -> Cache:
    """Build a Cache from application settings.

    Parameters
    ----------
    root : Path
        The configured cache directory.

    Returns
    -------
    Cache
        Cache rooted at the configured ``cache_dir``.
    """
    return Cache(
        CacheConfig(
            root=root,
            ttl_seconds=settings.cache_ttl_seconds,
            refresh_on_access=settings.cache_refresh_on_access,
        )
    )


def _render_result(result: SweepResult) -> Table:
    table = Table(title="Cache Sweep")
    table.add_column("Removed", style="cyan")
    table.add_column("Count", justify="right", style="green")
    table.add_row("Files", str(result.files_removed))
    table.add_row("Directories", str(result.dirs_removed))
    return table


@app.command(name="clean")
def clean() -> None:
    """
    Delete expired cache entries and empty directories.

    Only a persistent cache (``CACHE_DIR``) can be cleaned; the temporary
    cache of a running server is private to that process.

    Examples:
        CACHE_DIR=/var/cache/ytcast ytcast cache clean
    """
    if settings.cache_dir is None:
        console.print(
            "[red]Error: no cache directory configured. "
            "Set CACHE_DIR to clean a persistent cache.[/red]"
        )
        raise typer.Exit(code=1)

    configure_logging(settings.log_level)

    try:
        result = asyncio.run(_build_cache(settings.cache_dir).clean())
    except StorageError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1)

    console.print(_render_result(result))
