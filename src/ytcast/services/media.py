"""
Media file resolution.

Maps a video id to a cached ``.mp4`` file, downloading it only when the
cache holds nothing usable.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from ytcast.services.cache import Cache
from ytcast.services.metadata_fetcher import MetadataFetcher

logger = logging.getLogger(__name__)

MEDIA_EXTENSION = "mp4"


class MediaOrchestrator:
    """Resolve video ids to downloaded media files in the cache.

    Parameters
    ----------
    cache : Cache
        Cache that stores media under ``["media", <id>]``.
    fetcher : MetadataFetcher
        Used to download a video on a cache miss.
    """

    def __init__(self, cache: Cache, fetcher: MetadataFetcher) -> None:
        self._cache = cache
        self._fetcher = fetcher

    async def resolve(self, video_id: str) -> Path:
        """Return the path of the downloaded video, downloading it if needed.

        ``get_path`` touches the entry, so a cold id yields a zero-length
        file; so does a download that was interrupted. Either way the empty
        file is deleted and the video is fetched again. A non-empty file is
        reused as-is.

        Parameters
        ----------
        video_id : str
            YouTube video ID.

        Returns
        -------
        Path
            Path of the media file.

        Raises
        ------
        NotFoundError
            If the video is unavailable upstream.
        ToolUnavailableError, ToolFailureError
            If the download fails.
        StorageError
            If the cache entry cannot be created or cleared.
        """
        path = await self._cache.get_path(["media", video_id], MEDIA_EXTENSION)

        size = await asyncio.to_thread(self._file_size, path)
        if size == 0:
            logger.debug("Removing empty media file %s", path)
            await self._cache.remove(path)
            size = None

        if size is None:
            logger.info("Media cache miss for %s", video_id)
            await self._fetcher.fetch_video(video_id, path)
        else:
            logger.debug("Media cache hit for %s (%d bytes)", video_id, size)

        return path

    @staticmethod
    def _file_size(path: Path) -> int | None:
        try:
            return path.stat().st_size
        except FileNotFoundError:
            return None
