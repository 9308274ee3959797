"""
yt-dlp subprocess provider.

Runs the ``yt-dlp`` binary with captured output and turns spawn failures and
non-zero exits into typed errors. No timeout is applied here; bounding
request duration is left to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Sequence

from ytcast.exceptions import ToolFailureError, ToolUnavailableError
from ytcast.services.interfaces import MetadataProviderInterface

logger = logging.getLogger(__name__)

# Prefer widely supported containers, capped at 720p.
VIDEO_FORMAT_SORT = "ext,height:720"
LISTING_FORMAT_SORT = "ext"


class YtDlpProvider(MetadataProviderInterface):
    """Metadata provider backed by the ``yt-dlp`` command-line tool.

    Parameters
    ----------
    ytdlp_path : str
        Name or path of the yt-dlp executable.
    """

    def __init__(self, ytdlp_path: str = "yt-dlp") -> None:
        self.ytdlp_path = ytdlp_path

    async def run(self, args: Sequence[str]) -> str:
        """Run yt-dlp with *args* and return its standard output.

        Parameters
        ----------
        args : Sequence[str]
            Command-line arguments (without the executable).

        Returns
        -------
        str
            Decoded standard output.

        Raises
        ------
        ToolUnavailableError
            If the executable cannot be spawned.
        ToolFailureError
            If the process exits with a non-zero status.
        """
        logger.debug("Running %s %s", self.ytdlp_path, " ".join(args))
        try:
            process = await asyncio.create_subprocess_exec(
                self.ytdlp_path,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error("Error running %s: %s", self.ytdlp_path, e)
            raise ToolUnavailableError(self.ytdlp_path, e) from e

        stdout, stderr = await process.communicate()
        stdout_text = stdout.decode("utf-8", errors="replace") if stdout else ""
        stderr_text = stderr.decode("utf-8", errors="replace") if stderr else ""

        if process.returncode != 0:
            raise ToolFailureError(
                args_used=args,
                returncode=process.returncode,
                stdout=stdout_text,
                stderr=stderr_text,
            )
        return stdout_text

    async def fetch_channel_info(self, url: str) -> str:
        return await self.run(["-J", url])

    async def fetch_channel_videos(
        self, url: str, print_template: str, limit: int
    ) -> str:
        return await self.run(
            [
                "-S",
                LISTING_FORMAT_SORT,
                "--print",
                print_template,
                "--playlist-end",
                str(limit),
                url,
            ]
        )

    async def fetch_video(self, url: str, destination: Path) -> None:
        await self.run(
            [
                "--sponsorblock-remove",
                "all",
                "-S",
                VIDEO_FORMAT_SORT,
                "-o",
                str(destination),
                url,
            ]
        )
