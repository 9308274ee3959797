"""
Channel models for yt-dlp channel metadata.

Defines Pydantic models for the subset of ``yt-dlp -J`` channel output that
the feed needs.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Thumbnail(BaseModel):
    """A channel artwork candidate; dimensions may be unknown."""

    url: str = Field(..., description="Image URL")
    width: Optional[int] = Field(default=None, ge=0, description="Width in pixels")
    height: Optional[int] = Field(default=None, ge=0, description="Height in pixels")

    @property
    def has_dimensions(self) -> bool:
        """Whether both width and height are known and non-zero."""
        return bool(self.width) and bool(self.height)

    model_config = ConfigDict(frozen=True, extra="ignore")


class Channel(BaseModel):
    """
    A YouTube channel as reported by yt-dlp.

    Instances are immutable; ``videos_url`` is stamped after the lookup by
    producing a copy with :meth:`with_videos_url`.
    """

    name: str = Field(..., alias="channel", description="Channel display name")
    description: str = Field(default="", description="Channel description")
    thumbnails: List[Thumbnail] = Field(default_factory=list)
    webpage_url: str = Field(..., description="Channel page URL")
    videos_url: str = Field(default="", description="Videos listing URL")
    epoch: int = Field(default=0, description="Extraction time (unix seconds)")

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Optional[str]) -> str:
        """Treat a null description as empty."""
        return v or ""

    @field_validator("thumbnails", mode="before")
    @classmethod
    def default_thumbnails(cls, v: Optional[list]) -> list:
        """Treat null thumbnails as an empty list."""
        return v or []

    def with_videos_url(self, videos_url: str) -> "Channel":
        """Return a copy of this channel with ``videos_url`` set."""
        return self.model_copy(update={"videos_url": videos_url})

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
