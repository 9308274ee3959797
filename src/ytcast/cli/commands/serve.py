"""CLI command for running the podcast server."""

from __future__ import annotations

from typing import Optional

import typer

from ytcast.config import configure_logging
from ytcast.config.settings import settings


def serve(
    host: Optional[str] = typer.Option(
        None, "--host", help="Interface to bind (default: YTCAST host setting)"
    ),
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Port to run the server on"
    ),
    reload: bool = typer.Option(
        False, "--reload", help="Restart the server when source files change"
    ),
) -> None:
    """
    Start the podcast feed server.

    Examples:
        ytcast serve
        ytcast serve --port 3000
        ytcast serve --host 0.0.0.0 --reload
    """
    import uvicorn

    configure_logging(settings.log_level)

    uvicorn.run(
        "ytcast.api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
