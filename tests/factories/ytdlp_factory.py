"""
Builders for yt-dlp output used across the test suite.

yt-dlp prints one JSON object for ``-J`` on a channel page and one JSON
object per line for a ``--print`` listing; these helpers produce both.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence


class YtDlpTestData:
    """Test data constants for yt-dlp output."""

    CHANNEL_NAME = "techmoan"
    CHANNEL_URL = "https://www.youtube.com/c/techmoan"
    VIDEO_IDS = ["dQw4w9WgXcQ", "9bZkp7q19f0", "kJQP7kiw5Fk", "OPf0YbXqDm0"]

    # (width, height); the 40x40 one is the square pick
    THUMBNAIL_SIZES = [(100, 50), (40, 40), (10, 100)]

    CHANNEL_NOT_FOUND_STDERR = "ERROR: [youtube] techmoan: HTTPError 404: Not Found"
    VIDEO_NOT_FOUND_STDERR = "ERROR: [youtube] xyz: Video unavailable"


def upload_date_days_ago(days: int, now: Optional[datetime] = None) -> str:
    """Return the ``YYYYMMDD`` date *days* before *now*."""
    now = now or datetime.now(timezone.utc)
    return (now - timedelta(days=days)).strftime("%Y%m%d")


def channel_payload(
    name: str = YtDlpTestData.CHANNEL_NAME,
    description: Optional[str] = "Retro tech reviews",
    webpage_url: str = YtDlpTestData.CHANNEL_URL,
    thumbnails: Optional[Sequence[tuple[int, int]]] = None,
) -> Dict[str, Any]:
    """Build a ``yt-dlp -J`` channel object as a dict."""
    sizes = YtDlpTestData.THUMBNAIL_SIZES if thumbnails is None else thumbnails
    return {
        "id": "UCLOtgq1_oYyLkf7c1xdHc9A",
        "channel": name,
        "description": description,
        "webpage_url": webpage_url,
        "epoch": 1700000000,
        "thumbnails": [
            {"url": f"https://yt3.example/{w}x{h}.jpg", "width": w, "height": h}
            for w, h in sizes
        ],
        "entries": [],
    }


def channel_json(**kwargs: Any) -> str:
    """Build a ``yt-dlp -J`` channel object as JSON text."""
    return json.dumps(channel_payload(**kwargs))


def video_payload(
    video_id: str = YtDlpTestData.VIDEO_IDS[0],
    upload_date: str = "20240101",
    title: Optional[str] = "A video",
    description: Optional[str] = "About the video",
    uploader: Optional[str] = "Techmoan",
    duration_string: Optional[str] = "12:34",
) -> Dict[str, Any]:
    """Build one listing entry as printed by the video print template."""
    return {
        "id": video_id,
        "title": title,
        "description": description,
        "upload_date": upload_date,
        "uploader": uploader,
        "duration_string": duration_string,
    }


def listing_output(videos: List[Dict[str, Any]]) -> str:
    """Join listing entries the way yt-dlp prints them, one per line."""
    return "".join(json.dumps(video) + "\n" for video in videos)
