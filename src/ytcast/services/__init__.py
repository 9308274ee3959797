"""
Services module for ytcast.

Contains the filesystem cache, the yt-dlp metadata pipeline, the RSS feed
builder and the media orchestrator.
"""

from __future__ import annotations

from ytcast.services.cache import Cache, CacheConfig, SweepResult
from ytcast.services.feed_builder import FeedBuilder
from ytcast.services.media import MediaOrchestrator
from ytcast.services.metadata_fetcher import MetadataFetcher
from ytcast.services.podcast_service import PodcastService
from ytcast.services.ytdlp import YtDlpProvider

__all__: list[str] = [
    "Cache",
    "CacheConfig",
    "FeedBuilder",
    "MediaOrchestrator",
    "MetadataFetcher",
    "PodcastService",
    "SweepResult",
    "YtDlpProvider",
]
