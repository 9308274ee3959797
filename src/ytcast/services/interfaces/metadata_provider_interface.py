"""
Abstract Base Class for the external metadata provider.

This interface defines the contract for invoking the metadata-extraction
tool, enabling:
- Testability via deterministic doubles instead of a real subprocess
- Swappable implementations (e.g., a different extractor binary)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class MetadataProviderInterface(ABC):
    """
    Abstract interface for the metadata-extraction tool.

    Implementations return the tool's raw standard output and leave parsing
    and not-found classification to the caller.

    Every method raises ``ToolUnavailableError`` when the tool cannot be
    executed and ``ToolFailureError`` (carrying stdout, stderr and the exit
    status) when it exits non-zero.

    Examples
    --------
    >>> class FakeProvider(MetadataProviderInterface):
    ...     async def fetch_channel_info(self, url: str) -> str:
    ...         return '{"channel": "Techmoan", "webpage_url": "..."}'
    """

    @abstractmethod
    async def fetch_channel_info(self, url: str) -> str:
        """
        Fetch metadata for one channel.

        Parameters
        ----------
        url : str
            Channel page URL.

        Returns
        -------
        str
            A single JSON object describing the channel.
        """
        pass

    @abstractmethod
    async def fetch_channel_videos(
        self, url: str, print_template: str, limit: int
    ) -> str:
        """
        List the most recent videos of a channel.

        Parameters
        ----------
        url : str
            Channel videos-listing URL.
        print_template : str
            Output template rendered once per video.
        limit : int
            Maximum number of entries, in the tool's native ordering.

        Returns
        -------
        str
            One rendered template (a JSON object) per line.
        """
        pass

    @abstractmethod
    async def fetch_video(self, url: str, destination: Path) -> None:
        """
        Download one video.

        Parameters
        ----------
        url : str
            Video watch URL.
        destination : Path
            File path the video is written to.
        """
        pass
