"""
RSS podcast feed generation.

Turns a channel and its videos into an RSS 2.0 document with the iTunes
podcast extension. Videos younger than a configurable delay are held back,
and the channel artwork is the thumbnail closest to a square.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import Callable, List, Optional, Sequence, Tuple

from ytcast.exceptions import FeedBuildError, MalformedUpstreamDataError
from ytcast.models import Channel, Thumbnail, Video

logger = logging.getLogger(__name__)

ITUNES_NAMESPACE = "http://www.itunes.com/dtds/podcast-1.0.dtd"

# The real size is unknown without downloading; podcast clients only need a hint.
ENCLOSURE_LENGTH = 1_073_741_824
ENCLOSURE_TYPE = "video/mp4"

UPLOAD_DATE_FORMAT = "%Y%m%d"

# Characters outside the XML 1.0 Char production.
_XML_ILLEGAL_CHARS = re.compile(
    "[^\u0009\u000A\u000D\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)

ET.register_namespace("itunes", ITUNES_NAMESPACE)


def _itunes(tag: str) -> str:
    return f"{{{ITUNES_NAMESPACE}}}{tag}"


def _xml_text(value: str) -> str:
    """Drop characters that XML 1.0 cannot represent, even escaped."""
    return _XML_ILLEGAL_CHARS.sub("", value)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_upload_date(upload_date: str) -> datetime:
    """Parse a ``YYYYMMDD`` upload date as midnight UTC.

    Raises
    ------
    MalformedUpstreamDataError
        If the value is not an eight-digit calendar date.
    """
    if len(upload_date) != 8 or not upload_date.isdigit():
        raise MalformedUpstreamDataError(
            f"bad upload date: {upload_date!r}", source=upload_date
        )
    try:
        date = datetime.strptime(upload_date, UPLOAD_DATE_FORMAT)
    except ValueError as e:
        raise MalformedUpstreamDataError(
            f"bad upload date: {upload_date!r}", source=upload_date
        ) from e
    return date.replace(tzinfo=timezone.utc)


def select_thumbnail(thumbnails: Sequence[Thumbnail]) -> Optional[Thumbnail]:
    """Pick the thumbnail whose aspect ratio is closest to 1:1.

    Thumbnails without both dimensions are skipped. Ties keep the earliest.
    """
    best: Optional[Thumbnail] = None
    best_score = 0.0
    for thumbnail in thumbnails:
        if not thumbnail.has_dimensions:
            continue
        assert thumbnail.width is not None and thumbnail.height is not None
        score = abs(100 - 100 * thumbnail.width / thumbnail.height)
        if best is None or score < best_score:
            best = thumbnail
            best_score = score
    return best


class FeedBuilder:
    """Build podcast RSS documents from channel metadata.

    Parameters
    ----------
    clock : Callable[[], datetime] | None
        Returns the current UTC time; defaults to the system clock.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or _utc_now

    def build(
        self,
        channel: Channel,
        videos: Sequence[Video],
        media_base_url: str,
        delay_days: int = 0,
    ) -> str:
        """Render the feed for *channel*.

        Every upload date is parsed before anything is emitted, so one bad
        date fails the whole build. Videos uploaded less than *delay_days*
        ago are left out. The channel publication date is the oldest date
        among the included videos (the build time when none remain).

        Parameters
        ----------
        channel : Channel
            Channel metadata.
        videos : Sequence[Video]
            Channel videos, in any order.
        media_base_url : str
            Prefix that each video id is appended to for the enclosure URL.
        delay_days : int
            Minimum age in days for a video to be listed.

        Returns
        -------
        str
            The RSS document, with XML declaration.

        Raises
        ------
        MalformedUpstreamDataError
            If an upload date is not a valid ``YYYYMMDD`` date.
        FeedBuildError
            If a required feed field is missing.
        """
        if delay_days < 0:
            raise FeedBuildError(f"delay_days must be non-negative, got {delay_days}")
        if not channel.name:
            raise FeedBuildError("channel title is required")
        if not channel.webpage_url:
            raise FeedBuildError("channel link is required")

        now = self._clock()
        # Any delay past timedelta's range already exceeds every possible age.
        delay = timedelta(days=min(delay_days, timedelta.max.days))

        dated: List[Tuple[datetime, Video]] = [
            (parse_upload_date(video.upload_date), video) for video in videos
        ]

        included: List[Tuple[datetime, Video]] = []
        for date, video in dated:
            if now - date < delay:
                logger.info(
                    "Ignoring video %s which hasn't been out for %d days yet",
                    video.id,
                    delay_days,
                )
                continue
            included.append((date, video))

        # Newest first; ties keep the upstream order.
        included.sort(key=lambda pair: pair[0], reverse=True)
        pub_date = min((date for date, _ in included), default=now)

        rss = ET.Element("rss", {"version": "2.0"})
        rss_channel = ET.SubElement(rss, "channel")
        ET.SubElement(rss_channel, "title").text = _xml_text(channel.name)
        ET.SubElement(rss_channel, "link").text = _xml_text(channel.webpage_url)
        ET.SubElement(rss_channel, "description").text = _xml_text(channel.description)

        thumbnail = select_thumbnail(channel.thumbnails)
        if thumbnail is not None:
            image = ET.SubElement(rss_channel, "image")
            ET.SubElement(image, "url").text = _xml_text(thumbnail.url)
            ET.SubElement(image, "title").text = _xml_text(channel.name)
            ET.SubElement(image, "link").text = _xml_text(thumbnail.url)
            ET.SubElement(image, "width").text = str(thumbnail.width)
            ET.SubElement(image, "height").text = str(thumbnail.height)

        ET.SubElement(rss_channel, "pubDate").text = format_datetime(pub_date)
        ET.SubElement(rss_channel, _itunes("subtitle")).text = _xml_text(
            channel.description
        )
        ET.SubElement(rss_channel, _itunes("author")).text = _xml_text(channel.name)
        ET.SubElement(rss_channel, _itunes("block")).text = "Yes"

        for date, video in included:
            self._add_item(rss_channel, video, date, media_base_url)

        ET.indent(rss, space="  ")
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(
            rss, encoding="unicode"
        )

    @staticmethod
    def _add_item(
        rss_channel: ET.Element,
        video: Video,
        date: datetime,
        media_base_url: str,
    ) -> None:
        if not video.id:
            raise FeedBuildError("video id is required")
        if not video.title and not video.description:
            raise FeedBuildError(f"video {video.id} needs a title or description")

        item = ET.SubElement(rss_channel, "item")
        ET.SubElement(item, "title").text = _xml_text(video.title)
        ET.SubElement(item, "description").text = _xml_text(video.description)
        ET.SubElement(
            item,
            "enclosure",
            {
                "url": _xml_text(media_base_url + video.id),
                "length": str(ENCLOSURE_LENGTH),
                "type": ENCLOSURE_TYPE,
            },
        )
        ET.SubElement(item, "guid", {"isPermaLink": "false"}).text = _xml_text(video.id)
        ET.SubElement(item, "pubDate").text = format_datetime(date)
        ET.SubElement(item, _itunes("author")).text = _xml_text(video.uploader)
        ET.SubElement(item, _itunes("duration")).text = _xml_text(video.duration)
        ET.SubElement(item, _itunes("subtitle")).text = _xml_text(video.description)
        ET.SubElement(item, _itunes("summary")).text = _xml_text(video.description)
