"""
Data models module for ytcast.

Defines Pydantic models for the channel and video records read from yt-dlp.
"""

from __future__ import annotations

from .channel import Channel, Thumbnail
from .video import Video

__all__ = ["Channel", "Thumbnail", "Video"]
