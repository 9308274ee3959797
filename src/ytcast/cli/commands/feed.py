"""CLI command for rendering a channel feed to stdout."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console

from ytcast.config import configure_logging
from ytcast.config.settings import settings
from ytcast.container import container
from ytcast.exceptions import NotFoundError, YtcastError
from ytcast.services.podcast_service import PodcastService

console = Console(stderr=True)


def _build_service(limit: Optional[int]) -> PodcastService:
    if limit is None:
        return container.podcast_service
    return PodcastService(
        fetcher=container.metadata_fetcher,
        feed_builder=container.feed_builder,
        media=container.media_orchestrator,
        playlist_limit=limit,
    )


def feed(
    channel: str = typer.Argument(..., help="YouTube channel name"),
    delay: Optional[int] = typer.Option(
        None,
        "--delay",
        "-d",
        min=0,
        help="Hide videos uploaded fewer than this many days ago",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        min=1,
        help="Number of recent videos to list",
    ),
) -> None:
    """
    Print the podcast feed of a channel.

    The channel allow-list is not applied here.

    Examples:
        ytcast feed techmoan
        ytcast feed techmoan --delay 3 --limit 10
    """
    configure_logging(settings.log_level)

    delay_days = settings.default_delay_days if delay is None else delay
    service = _build_service(limit)

    try:
        document = asyncio.run(
            service.get_feed(channel, settings.media_base_url, delay_days)
        )
    except NotFoundError as e:
        console.print(f"[red]Not found: {e.message}[/red]")
        raise typer.Exit(code=1)
    except YtcastError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1)
    finally:
        container.close()

    typer.echo(document)
