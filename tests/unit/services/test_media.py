"""
Unit tests for MediaOrchestrator.
"""

from __future__ import annotations

import pytest

from ytcast.exceptions import NotFoundError, ToolFailureError
from ytcast.services.cache import Cache
from ytcast.services.media import MediaOrchestrator
from ytcast.services.metadata_fetcher import MetadataFetcher
from tests.factories.fake_provider import FakeProvider
from tests.factories.ytdlp_factory import YtDlpTestData

# CRITICAL: This line ensures async tests work with coverage
pytestmark = pytest.mark.asyncio


@pytest.fixture
def media(fake_provider: FakeProvider, cache: Cache) -> MediaOrchestrator:
    """Orchestrator wired to the fake provider and a temporary cache."""
    return MediaOrchestrator(cache, MetadataFetcher(fake_provider, cache))


class TestResolve:
    """Tests for MediaOrchestrator.resolve."""

    async def test_cold_id_downloads_once(
        self, media: MediaOrchestrator, fake_provider: FakeProvider, cache: Cache
    ) -> None:
        """The first resolve downloads; the second reuses the file."""
        first = await media.resolve("abc")
        second = await media.resolve("abc")

        assert first == second == cache.path_for(["media", "abc"], "mp4")
        assert first.read_bytes() == fake_provider.video_content
        assert len(fake_provider.calls_to("video")) == 1

    async def test_empty_file_is_refetched(
        self, media: MediaOrchestrator, fake_provider: FakeProvider, cache: Cache
    ) -> None:
        """A zero-length leftover from an interrupted download is replaced."""
        path = await cache.get_path(["media", "abc"], "mp4")
        assert path.stat().st_size == 0

        resolved = await media.resolve("abc")

        assert resolved == path
        assert resolved.stat().st_size > 0
        assert len(fake_provider.calls_to("video")) == 1

    async def test_empty_file_is_removed_before_download(
        self, media: MediaOrchestrator, fake_provider: FakeProvider
    ) -> None:
        """The downloader never sees the placeholder file."""
        seen_existing = []
        original = fake_provider.fetch_video

        async def spy(url, destination):  # type: ignore[no-untyped-def]
            seen_existing.append(destination.exists())
            await original(url, destination)

        fake_provider.fetch_video = spy  # type: ignore[method-assign]

        await media.resolve("abc")

        assert seen_existing == [False]

    async def test_unavailable_video_propagates_not_found(
        self, media: MediaOrchestrator, fake_provider: FakeProvider
    ) -> None:
        """Not-found classification passes through unchanged."""
        fake_provider.video_content = ToolFailureError(
            [], 1, stderr=YtDlpTestData.VIDEO_NOT_FOUND_STDERR
        )

        with pytest.raises(NotFoundError):
            await media.resolve("gone")

    async def test_failed_download_is_retried_next_time(
        self, media: MediaOrchestrator, fake_provider: FakeProvider
    ) -> None:
        """A failure leaves no usable file, so the next call downloads again."""
        fake_provider.video_content = ToolFailureError([], 1, stderr="network")
        with pytest.raises(ToolFailureError):
            await media.resolve("abc")

        fake_provider.video_content = b"video"
        path = await media.resolve("abc")

        assert path.read_bytes() == b"video"
        assert len(fake_provider.calls_to("video")) == 2
