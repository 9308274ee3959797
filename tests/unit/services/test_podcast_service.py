"""
Unit tests for PodcastService, the feed and media pipeline.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ytcast.exceptions import NotFoundError
from ytcast.services.cache import Cache
from ytcast.services.feed_builder import FeedBuilder
from ytcast.services.media import MediaOrchestrator
from ytcast.services.metadata_fetcher import MetadataFetcher, channel_url
from ytcast.services.podcast_service import PodcastService
from tests.factories.fake_provider import FakeProvider
from tests.factories.ytdlp_factory import (
    YtDlpTestData,
    channel_json,
    listing_output,
    upload_date_days_ago,
    video_payload,
)

# CRITICAL: This line ensures async tests work with coverage
pytestmark = pytest.mark.asyncio

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
NAME = YtDlpTestData.CHANNEL_NAME


@pytest.fixture
def service(fake_provider: FakeProvider, cache: Cache) -> PodcastService:
    """Service over the fake provider with a pinned clock."""
    fetcher = MetadataFetcher(fake_provider, cache)
    return PodcastService(
        fetcher=fetcher,
        feed_builder=FeedBuilder(clock=lambda: NOW),
        media=MediaOrchestrator(cache, fetcher),
        playlist_limit=3,
    )


class TestGetFeed:
    """Tests for PodcastService.get_feed."""

    async def test_builds_feed_from_channel_and_listing(
        self, service: PodcastService, fake_provider: FakeProvider
    ) -> None:
        """The feed lists the channel's videos past the delay."""
        fake_provider.channel_responses[channel_url("c", NAME, "about")] = (
            channel_json()
        )
        fake_provider.listing = listing_output(
            [
                video_payload("fresh", upload_date_days_ago(0, NOW)),
                video_payload("older", upload_date_days_ago(4, NOW)),
            ]
        )

        feed = await service.get_feed(NAME, "http://testserver/media/", 2)

        assert "http://testserver/media/older" in feed
        assert "fresh" not in feed
        [call] = fake_provider.calls_to("channel_videos")
        assert call[1] == channel_url("c", NAME, "videos")
        assert call[3] == "3"

    async def test_unknown_channel(self, service: PodcastService) -> None:
        """A channel missing upstream is NotFound."""
        with pytest.raises(NotFoundError):
            await service.get_feed("nobody", "http://testserver/media/")


class TestGetMedia:
    """Tests for PodcastService.get_media."""

    async def test_resolves_media(
        self, service: PodcastService, cache: Cache
    ) -> None:
        """Media resolves to the cached mp4 path."""
        path = await service.get_media("abc")
        assert path == cache.path_for(["media", "abc"], "mp4")
        assert path.exists()
