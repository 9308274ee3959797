"""
Application settings and configuration management.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = Field(default="ytcast")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, gt=0, lt=65536)
    base_url: str = Field(default="http://localhost:8000")
    channel_whitelist: Annotated[list[str], NoDecode] = Field(default_factory=list)

    # Cache
    cache_dir: Optional[Path] = Field(default=None)
    cache_ttl_seconds: int = Field(default=86400, gt=0)
    cache_refresh_on_access: bool = Field(default=False)

    # yt-dlp
    ytdlp_path: str = Field(default="yt-dlp")
    playlist_limit: int = Field(default=5, gt=0)
    default_delay_days: int = Field(default=0, ge=0)

    @field_validator("channel_whitelist", mode="before")
    @classmethod
    def parse_channel_whitelist(cls, v: str | list[str]) -> list[str]:
        """Parse the allow-list from a comma-separated string or list."""
        if isinstance(v, str):
            return [name.strip() for name in v.split(",") if name.strip()]
        return v

    @field_validator("cache_dir", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path | None) -> Path | None:
        """Ensure the cache directory is a Path object."""
        if isinstance(v, str):
            return Path(v) if v else None
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Drop trailing slashes so media links join cleanly."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @property
    def media_base_url(self) -> str:
        """URL prefix that a video id is appended to in feed enclosures."""
        return f"{self.base_url}/media/"

    def is_channel_allowed(self, channel_name: str) -> bool:
        """Check whether a channel is on the allow-list."""
        return channel_name in self.channel_whitelist

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


# Global settings instance
settings = get_settings()
