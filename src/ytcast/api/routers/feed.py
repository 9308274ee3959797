"""Podcast feed endpoint.

- GET /feed/{channel_name}?delay={days}: RSS feed of an allow-listed channel
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from starlette.responses import Response

from ytcast.api.deps import get_container
from ytcast.container import Container
from ytcast.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feed"])

FEED_MEDIA_TYPE = "application/xml"


def parse_delay(delay: Optional[str], default: int) -> int:
    """Parse the ``delay`` query value, falling back to *default*.

    Missing, non-numeric and negative values all mean *default*.
    """
    if delay is None:
        return default
    try:
        value = int(delay)
    except ValueError:
        return default
    return value if value >= 0 else default


@router.get(
    "/feed/{channel_name}",
    responses={
        200: {
            "content": {FEED_MEDIA_TYPE: {}},
            "description": "RSS 2.0 podcast feed",
        },
        404: {"description": "Channel not allowed or not found"},
    },
    response_class=Response,
)
async def get_feed(
    channel_name: str,
    delay: Optional[str] = Query(
        default=None,
        description="Hide videos uploaded fewer than this many days ago",
    ),
    container: Container = Depends(get_container),
) -> Response:
    """Serve the podcast feed of a channel.

    Parameters
    ----------
    channel_name : str
        Channel name; must be on the configured allow-list.
    delay : str | None
        Grace period in days before a new upload appears in the feed.

    Returns
    -------
    Response
        The RSS document.
    """
    settings = container.settings
    if not settings.is_channel_allowed(channel_name):
        raise NotFoundError("Channel", channel_name)

    delay_days = parse_delay(delay, settings.default_delay_days)
    feed = await container.podcast_service.get_feed(
        channel_name, settings.media_base_url, delay_days
    )
    return Response(content=feed, media_type=FEED_MEDIA_TYPE)
