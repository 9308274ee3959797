"""FastAPI application for ytcast."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from ytcast import __version__
from ytcast.api.exception_handlers import register_exception_handlers
from ytcast.api.routers import feed, health, media
from ytcast.container import container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    yield
    # Shutdown: drop a temporary cache directory with its downloads
    container.close()


app = FastAPI(
    title="ytcast",
    description="YouTube channels as podcast feeds",
    version=__version__,
    lifespan=lifespan,
)


def _get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxied requests."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        # Take the first IP in the chain (original client)
        return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host
    return "unknown"


@app.middleware("http")
async def log_requests(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """
    Middleware to log incoming requests and outgoing responses.

    Logs request method, path, and client IP at INFO level.
    Logs response status code and timing with appropriate log level:
    - INFO for 2xx/3xx responses
    - WARNING for 4xx responses
    - ERROR for 5xx responses
    """
    start_time = time.perf_counter()

    method = request.method
    path = request.url.path
    logger.info("Request: %s %s from %s", method, path, _get_client_ip(request))

    response = await call_next(request)

    duration = time.perf_counter() - start_time
    status_code = response.status_code

    if status_code >= 500:
        log_level = logging.ERROR
    elif status_code >= 400:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    logger.log(
        log_level,
        "Response: %s %s - %d (%.3fs)",
        method,
        path,
        status_code,
        duration,
    )

    return response


register_exception_handlers(app)

app.include_router(feed.router)
app.include_router(media.router)
app.include_router(health.router, tags=["health"])
