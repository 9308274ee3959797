"""
Dependency Injection Container for ytcast.

This module provides a centralized container for wiring the cache, the yt-dlp
provider and the services built on them from application settings.

- Components are singletons cached via ``@cached_property`` (lazy)
- Tests can inject a provider double or swap settings before first use
- ``close()`` releases the temporary cache directory, if one was created

Usage
-----
    >>> from ytcast.container import container
    >>> feed = await container.podcast_service.get_feed("techmoan", base, 3)
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from functools import cached_property
from pathlib import Path
from typing import Optional

from ytcast.config.settings import Settings
from ytcast.config.settings import settings as default_settings
from ytcast.services.cache import Cache, CacheConfig
from ytcast.services.feed_builder import FeedBuilder
from ytcast.services.interfaces import MetadataProviderInterface
from ytcast.services.media import MediaOrchestrator
from ytcast.services.metadata_fetcher import MetadataFetcher
from ytcast.services.podcast_service import PodcastService
from ytcast.services.ytdlp import YtDlpProvider

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container for ytcast.

    Parameters
    ----------
    settings : Settings
        Application settings the components are configured from.
    provider : MetadataProviderInterface | None
        Metadata provider to use instead of the yt-dlp subprocess provider.

    Notes
    -----
    When ``settings.cache_dir`` is unset the cache lives in a fresh
    temporary directory owned by the container and removed by ``close()``.
    """

    def __init__(
        self,
        settings: Settings,
        provider: Optional[MetadataProviderInterface] = None,
    ) -> None:
        self.settings = settings
        self._provider_override = provider
        self._temp_dir: Optional[Path] = None

    # -------------------------------------------------------------------------
    # Singletons
    # -------------------------------------------------------------------------

    @cached_property
    def cache(self) -> Cache:
        """The filesystem cache."""
        root = self.settings.cache_dir
        if root is None:
            self._temp_dir = Path(tempfile.mkdtemp(prefix="ytcast-"))
            root = self._temp_dir
        logger.info("Using cache directory %s", root)
        return Cache(
            CacheConfig(
                root=root,
                ttl_seconds=self.settings.cache_ttl_seconds,
                refresh_on_access=self.settings.cache_refresh_on_access,
            )
        )

    @cached_property
    def metadata_provider(self) -> MetadataProviderInterface:
        """The metadata provider (yt-dlp unless overridden)."""
        if self._provider_override is not None:
            return self._provider_override
        return YtDlpProvider(self.settings.ytdlp_path)

    @cached_property
    def metadata_fetcher(self) -> MetadataFetcher:
        """Channel/video metadata fetcher."""
        return MetadataFetcher(self.metadata_provider, self.cache)

    @cached_property
    def feed_builder(self) -> FeedBuilder:
        """RSS feed builder."""
        return FeedBuilder()

    @cached_property
    def media_orchestrator(self) -> MediaOrchestrator:
        """Media file resolver."""
        return MediaOrchestrator(self.cache, self.metadata_fetcher)

    @cached_property
    def podcast_service(self) -> PodcastService:
        """Feed and media pipeline."""
        return PodcastService(
            fetcher=self.metadata_fetcher,
            feed_builder=self.feed_builder,
            media=self.media_orchestrator,
            playlist_limit=self.settings.playlist_limit,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Remove the temporary cache directory, if the container created one."""
        if self._temp_dir is not None:
            shutil.rmtree(self._temp_dir, ignore_errors=True)
            self._temp_dir = None


# Global container instance
container = Container(default_settings)
