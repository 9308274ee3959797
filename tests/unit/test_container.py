"""
Tests for the dependency injection container.
"""

from __future__ import annotations

from pathlib import Path

from ytcast.config.settings import Settings
from ytcast.container import Container
from ytcast.services.ytdlp import YtDlpProvider
from tests.factories.fake_provider import FakeProvider


class TestContainer:
    """Tests for Container wiring and lifecycle."""

    def test_singletons(self, test_container: Container) -> None:
        """Test components are created once."""
        assert test_container.cache is test_container.cache
        assert test_container.podcast_service is test_container.podcast_service

    def test_cache_uses_settings(
        self, test_container: Container, test_settings: Settings
    ) -> None:
        """Test the cache root and TTL come from settings."""
        assert test_container.cache.root == test_settings.cache_dir
        assert test_container.cache.ttl_seconds == test_settings.cache_ttl_seconds

    def test_provider_override(
        self, test_container: Container, fake_provider: FakeProvider
    ) -> None:
        """Test an injected provider replaces yt-dlp."""
        assert test_container.metadata_provider is fake_provider

    def test_default_provider_is_ytdlp(self) -> None:
        """Test the yt-dlp provider uses the configured binary."""
        container = Container(Settings(_env_file=None, ytdlp_path="/opt/yt-dlp"))
        provider = container.metadata_provider
        assert isinstance(provider, YtDlpProvider)
        assert provider.ytdlp_path == "/opt/yt-dlp"

    def test_temporary_cache_removed_on_close(self) -> None:
        """Test a container-owned temporary cache is deleted by close()."""
        container = Container(Settings(_env_file=None, cache_dir=None))
        root = container.cache.root
        assert root.is_dir()
        assert root.name.startswith("ytcast-")

        container.close()

        assert not root.exists()

    def test_configured_cache_survives_close(
        self, test_container: Container, cache_root: Path
    ) -> None:
        """Test a configured cache directory is left alone."""
        _ = test_container.cache
        test_container.close()
        assert cache_root.is_dir()
