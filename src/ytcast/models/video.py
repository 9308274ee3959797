"""
Video models for yt-dlp playlist entries.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Video(BaseModel):
    """One channel upload, as printed by yt-dlp for a playlist entry."""

    id: str = Field(..., min_length=1, description="YouTube video ID")
    title: str = Field(default="", description="Video title")
    description: str = Field(default="", description="Video description")
    upload_date: str = Field(default="", description="Upload date as YYYYMMDD")
    uploader: str = Field(default="", description="Uploader name")
    duration: str = Field(
        default="", alias="duration_string", description="Display duration"
    )

    @field_validator(
        "title", "description", "upload_date", "uploader", "duration", mode="before"
    )
    @classmethod
    def null_as_empty(cls, v: Optional[object]) -> str:
        """yt-dlp prints null for fields a video lacks; read those as empty."""
        if v is None:
            return ""
        return str(v)

    @classmethod
    def upstream_fields(cls) -> List[str]:
        """Field names as yt-dlp knows them, in declaration order."""
        return [
            field.alias or name for name, field in cls.model_fields.items()
        ]

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
