"""Centralized exception handlers for FastAPI.

Domain exceptions are mapped to bare status responses: ``NotFoundError``
becomes 404 and every other failure becomes 500. Response bodies are empty;
the full error is logged server-side instead.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from ytcast.exceptions import NotFoundError, ToolFailureError, YtcastError

logger = logging.getLogger(__name__)


async def not_found_error_handler(request: Request, exc: NotFoundError) -> Response:
    """Handle NotFoundError with an empty 404 response.

    Parameters
    ----------
    request : Request
        The incoming FastAPI request.
    exc : NotFoundError
        The not-found error.

    Returns
    -------
    Response
        Empty response with 404 status.
    """
    logger.info("%s (path=%s)", exc.message, request.url.path)
    return Response(status_code=404)


async def ytcast_error_handler(request: Request, exc: YtcastError) -> Response:
    """Handle any other YtcastError with an empty 500 response.

    The error and, for yt-dlp failures, the captured stderr are logged for
    debugging; nothing is exposed to the client.

    Parameters
    ----------
    request : Request
        The incoming FastAPI request.
    exc : YtcastError
        The domain error.

    Returns
    -------
    Response
        Empty response with 500 status.
    """
    if isinstance(exc, ToolFailureError):
        logger.error(
            "yt-dlp failure on %s: %s (args=%s)\n%s",
            request.url.path,
            exc.message,
            exc.args_used,
            exc.stderr,
        )
    else:
        logger.error(
            "Request %s failed: %s", request.url.path, exc.message, exc_info=exc
        )
    return Response(status_code=500)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Return framework HTTP errors (unknown routes etc.) with an empty body."""
    return Response(status_code=exc.status_code, headers=exc.headers)


async def generic_error_handler(request: Request, exc: Exception) -> Response:
    """Catch-all for unexpected exceptions; logs the stack trace."""
    logger.exception("Unhandled exception on %s: %s", request.url.path, exc)
    return Response(status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Parameters
    ----------
    app : FastAPI
        The FastAPI application instance.
    """
    app.add_exception_handler(NotFoundError, not_found_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(YtcastError, ytcast_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_error_handler)
