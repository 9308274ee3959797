"""
Channel and video metadata acquisition.

Drives a :class:`MetadataProviderInterface`, re-classifies tool failures
whose diagnostics name a missing channel or video as ``NotFoundError``, and
parses the tool's JSON output into :mod:`ytcast.models` records. The latest
video listing of each channel is kept in the cache under
``["playlist", <channel name>]``.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable, List
from urllib.parse import quote
from uuid import uuid4

from pydantic import ValidationError

from ytcast.exceptions import (
    MalformedUpstreamDataError,
    NotFoundError,
    StorageError,
    ToolFailureError,
)
from ytcast.models import Channel, Video
from ytcast.services.cache import Cache
from ytcast.services.interfaces import MetadataProviderInterface

logger = logging.getLogger(__name__)

YOUTUBE_BASE_URL = "https://www.youtube.com"

# Tried in order; the second only when the first reports the channel missing.
CHANNEL_URL_CONVENTIONS = ("c", "user")

CHANNEL_NOT_FOUND_MARKER = "HTTPError 404"
VIDEO_NOT_FOUND_MARKER = "Video unavailable"

DEFAULT_PLAYLIST_LIMIT = 5


def channel_url(convention: str, channel_name: str, page: str) -> str:
    """Build a channel page URL, e.g. ``/c/<name>/about``."""
    return (
        f"{YOUTUBE_BASE_URL}/{convention}/"
        f"{quote(channel_name, safe='')}/{quote(page, safe='')}"
    )


def video_url(video_id: str) -> str:
    """Build the watch URL of a video."""
    return f"{YOUTUBE_BASE_URL}/watch?v={quote(video_id, safe='')}"


def build_print_template(fields: Iterable[str]) -> str:
    """Build a yt-dlp ``--print`` template rendering one JSON object.

    Only the requested fields are extracted, which keeps listings fast.
    """
    return "{" + ",".join(f'"{name}":%({name})j' for name in fields) + "}"


VIDEO_PRINT_TEMPLATE = build_print_template(Video.upstream_fields())


class MetadataFetcher:
    """Fetch channel and video metadata through a provider.

    Parameters
    ----------
    provider : MetadataProviderInterface
        Capability used to invoke the extraction tool.
    cache : Cache
        Cache holding per-channel video listings.
    """

    def __init__(self, provider: MetadataProviderInterface, cache: Cache) -> None:
        self._provider = provider
        self._cache = cache

    # ------------------------------------------------------------------
    # Channels
    # ------------------------------------------------------------------

    async def fetch_channel(self, channel_name: str) -> Channel:
        """Resolve a channel by name.

        The ``/c/`` URL is tried first. Only if that lookup classifies as
        not-found is the ``/user/`` URL tried; any other failure is raised
        immediately.

        Parameters
        ----------
        channel_name : str
            Channel name as used in YouTube URLs.

        Returns
        -------
        Channel
            The channel, with ``videos_url`` pointing at the videos page of
            the URL convention that succeeded.

        Raises
        ------
        NotFoundError
            If no URL convention knows the channel.
        ToolUnavailableError, ToolFailureError
            If yt-dlp cannot run or fails for another reason.
        MalformedUpstreamDataError
            If the output is not a valid channel object.
        """
        logger.debug("fetch_channel(%s)", channel_name)

        not_found: NotFoundError | None = None
        for convention in CHANNEL_URL_CONVENTIONS:
            try:
                output = await self._fetch_channel_info(
                    channel_url(convention, channel_name, "about"), channel_name
                )
            except NotFoundError as e:
                logger.info(
                    "Channel %s not found under /%s/ URL", channel_name, convention
                )
                not_found = e
                continue

            channel = self._parse_channel(output)
            return channel.with_videos_url(
                channel_url(convention, channel_name, "videos")
            )

        assert not_found is not None
        raise not_found

    async def _fetch_channel_info(self, url: str, channel_name: str) -> str:
        try:
            return await self._provider.fetch_channel_info(url)
        except ToolFailureError as e:
            if self._is_not_found(e, CHANNEL_NOT_FOUND_MARKER):
                raise NotFoundError("Channel", channel_name) from e
            raise

    @staticmethod
    def _parse_channel(output: str) -> Channel:
        try:
            return Channel.model_validate_json(output)
        except ValidationError as e:
            raise MalformedUpstreamDataError(
                f"failed to parse yt-dlp channel output: {e}", source=output
            ) from e

    # ------------------------------------------------------------------
    # Video listings
    # ------------------------------------------------------------------

    async def fetch_videos(
        self, channel: Channel, limit: int = DEFAULT_PLAYLIST_LIMIT
    ) -> List[Video]:
        """List a channel's most recent videos, using the cached listing if any.

        A non-empty cached listing is parsed without invoking the tool. An
        empty one (new, or re-created after expiry) triggers a listing of at
        most *limit* videos, which is then written to the cache. A failed
        cache write is logged and otherwise ignored.

        Parameters
        ----------
        channel : Channel
            Channel returned by :meth:`fetch_channel`.
        limit : int
            Maximum number of videos to list on a cache miss.

        Returns
        -------
        list[Video]
            Videos in the tool's native order (most recent first).

        Raises
        ------
        StorageError
            If the cache entry cannot be created or read.
        ToolUnavailableError, ToolFailureError
            If yt-dlp cannot run or fails.
        MalformedUpstreamDataError
            If a line of the listing is not a valid video object.
        """
        logger.debug("fetch_videos(%s, limit=%d)", channel.name, limit)

        cache_path = await self._cache.get_path(["playlist", channel.name])
        output = await self._read_cached_listing(cache_path)

        if output:
            logger.debug("Playlist cache hit for %s", channel.name)
        else:
            logger.info("Playlist cache miss for %s; listing videos", channel.name)
            try:
                output = await self._provider.fetch_channel_videos(
                    channel.videos_url, VIDEO_PRINT_TEMPLATE, limit
                )
            except ToolFailureError as e:
                logger.error(
                    "yt-dlp listing failed for %s: %s\n%s",
                    channel.videos_url,
                    e,
                    e.stderr,
                )
                raise
            await self._save_listing(cache_path, output)

        return self._parse_videos(output)

    @staticmethod
    async def _read_cached_listing(cache_path: Path) -> str:
        try:
            return await asyncio.to_thread(cache_path.read_text, encoding="utf-8")
        except FileNotFoundError:
            # Swept by a concurrent request; treat as a miss.
            return ""
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(
                f"cache read failed for {cache_path}",
                path=cache_path,
                original_error=e,
            ) from e

    @staticmethod
    async def _save_listing(cache_path: Path, output: str) -> None:
        """Write *output* to the cache atomically (temp file, then rename)."""

        def write() -> None:
            tmp_path = cache_path.with_name(f".{cache_path.name}.tmp.{uuid4()}")
            try:
                tmp_path.write_text(output, encoding="utf-8")
                tmp_path.replace(cache_path)
            finally:
                tmp_path.unlink(missing_ok=True)

        try:
            await asyncio.to_thread(write)
        except OSError as e:
            logger.error("Failed to save playlist cache %s: %s", cache_path, e)

    @staticmethod
    def _parse_videos(output: str) -> List[Video]:
        videos: List[Video] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            try:
                videos.append(Video.model_validate_json(line))
            except ValidationError as e:
                raise MalformedUpstreamDataError(
                    f"couldn't parse yt-dlp output: {e}", source=line
                ) from e
        return videos

    # ------------------------------------------------------------------
    # Downloads
    # ------------------------------------------------------------------

    async def fetch_video(self, video_id: str, destination: Path) -> None:
        """Download a video to *destination*.

        Raises
        ------
        NotFoundError
            If yt-dlp reports the video unavailable.
        ToolUnavailableError, ToolFailureError
            If yt-dlp cannot run or fails for another reason.
        """
        logger.info("Downloading video %s to %s", video_id, destination)
        try:
            await self._provider.fetch_video(video_url(video_id), destination)
        except ToolFailureError as e:
            if self._is_not_found(e, VIDEO_NOT_FOUND_MARKER):
                raise NotFoundError("Video", video_id) from e
            raise

    @staticmethod
    def _is_not_found(error: ToolFailureError, marker: str) -> bool:
        """Whether a tool failure means the requested item does not exist."""
        if marker in error.stderr:
            return True
        logger.error("yt-dlp output error: %s\n%s", error, error.stderr)
        return False
