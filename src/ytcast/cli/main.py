"""
Main CLI entry point for ytcast.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from ytcast import __version__
from ytcast.cli.commands.cache import app as cache_app
from ytcast.cli.commands.feed import feed
from ytcast.cli.commands.serve import serve

console = Console()

app = typer.Typer(
    name="ytcast",
    help="Serve YouTube channels as podcast feeds",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Add subcommands
app.command(name="serve")(serve)
app.command(name="feed")(feed)
app.add_typer(cache_app, name="cache", help="Cache maintenance commands")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]ytcast[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit"
    ),
) -> None:
    """
    ytcast - YouTube channels as podcast feeds.

    Lists a channel's latest uploads as an RSS feed and serves the videos
    as enclosures, downloading them with yt-dlp on demand.
    """
    if version:
        console.print(f"ytcast v{__version__}")
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        console.print("[yellow]Use 'ytcast --help' for available commands[/yellow]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
