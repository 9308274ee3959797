"""
Pytest configuration and fixtures for ytcast tests.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from ytcast.config.settings import Settings
from ytcast.container import Container
from ytcast.services.cache import Cache, CacheConfig
from tests.factories.fake_provider import FakeProvider
from tests.factories.ytdlp_factory import YtDlpTestData


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """Cache root directory below the test's tmp_path."""
    return tmp_path / "cache"


@pytest.fixture
def test_settings(cache_root: Path) -> Settings:
    """Settings for testing, isolated from any local .env file."""
    return Settings(
        _env_file=None,
        base_url="http://testserver",
        channel_whitelist=[YtDlpTestData.CHANNEL_NAME],
        cache_dir=cache_root,
    )


@pytest.fixture
def cache(cache_root: Path) -> Cache:
    """Cache with the default TTL rooted in a temporary directory."""
    return Cache(CacheConfig(root=cache_root))


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider double with no channels configured."""
    return FakeProvider()


@pytest.fixture
def test_container(
    test_settings: Settings, fake_provider: FakeProvider
) -> Generator[Container, None, None]:
    """Container wired to the fake provider."""
    container = Container(test_settings, provider=fake_provider)
    yield container
    container.close()
