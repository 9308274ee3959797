"""
Podcast request pipeline.

Composes the metadata fetcher, the feed builder and the media orchestrator
into the two operations the API and CLI expose.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ytcast.services.feed_builder import FeedBuilder
from ytcast.services.media import MediaOrchestrator
from ytcast.services.metadata_fetcher import DEFAULT_PLAYLIST_LIMIT, MetadataFetcher

logger = logging.getLogger(__name__)


class PodcastService:
    """Serve feeds and media for YouTube channels.

    Parameters
    ----------
    fetcher : MetadataFetcher
        Channel and video metadata source.
    feed_builder : FeedBuilder
        RSS renderer.
    media : MediaOrchestrator
        Media file resolver.
    playlist_limit : int
        Number of recent videos listed per feed.
    """

    def __init__(
        self,
        fetcher: MetadataFetcher,
        feed_builder: FeedBuilder,
        media: MediaOrchestrator,
        playlist_limit: int = DEFAULT_PLAYLIST_LIMIT,
    ) -> None:
        self._fetcher = fetcher
        self._feed_builder = feed_builder
        self._media = media
        self._playlist_limit = playlist_limit

    async def get_feed(
        self, channel_name: str, media_base_url: str, delay_days: int = 0
    ) -> str:
        """Build the RSS feed of a channel.

        Raises
        ------
        NotFoundError
            If the channel does not exist.
        YtcastError
            For any other failure along the pipeline.
        """
        channel = await self._fetcher.fetch_channel(channel_name)
        videos = await self._fetcher.fetch_videos(channel, self._playlist_limit)
        logger.debug("Building feed for %s from %d videos", channel.name, len(videos))
        return self._feed_builder.build(channel, videos, media_base_url, delay_days)

    async def get_media(self, video_id: str) -> Path:
        """Resolve a video to a local media file."""
        return await self._media.resolve(video_id)
