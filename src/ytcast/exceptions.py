"""
Custom exceptions for the ytcast application.

This module defines the domain-specific exceptions raised by the cache, the
yt-dlp pipeline and the feed builder. The API layer maps ``NotFoundError``
to HTTP 404 and every other ``YtcastError`` to HTTP 500.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class YtcastError(Exception):
    """Base exception for all ytcast errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize YtcastError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class NotFoundError(YtcastError):
    """
    Exception raised when a channel or video does not exist.

    Allow-list misses, unknown channels and unavailable videos are all
    reported with this exception so callers can treat them identically.

    Attributes
    ----------
    message : str
        Human-readable error message.
    resource_type : str
        The type of resource that was not found (e.g., "Channel", "Video").
    identifier : str
        The identifier used to look up the resource.

    Examples
    --------
    >>> raise NotFoundError(resource_type="Channel", identifier="techmoan")
    """

    def __init__(self, resource_type: str, identifier: str) -> None:
        """
        Initialize NotFoundError.

        Parameters
        ----------
        resource_type : str
            The type of resource that was not found.
        identifier : str
            The identifier used to look up the resource.
        """
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} '{identifier}' not found")


class ToolUnavailableError(YtcastError):
    """
    Exception raised when the yt-dlp binary cannot be executed.

    This is distinct from a content "not found": the tool itself is missing
    or not executable, so no request can succeed until it is installed.

    Attributes
    ----------
    message : str
        Human-readable error message.
    binary : str
        The binary that was invoked.
    original_error : Exception | None
        The OS error raised while spawning the process.
    """

    def __init__(self, binary: str, original_error: Exception | None = None) -> None:
        """
        Initialize ToolUnavailableError.

        Parameters
        ----------
        binary : str
            The binary that was invoked.
        original_error : Exception | None, optional
            The OS error raised while spawning the process (default: None).
        """
        self.binary = binary
        self.original_error = original_error
        message = f"{binary} could not be executed"
        if original_error is not None:
            message += f": {original_error}"
        super().__init__(message)


class ToolFailureError(YtcastError):
    """
    Exception raised when yt-dlp exits with a non-zero status.

    Carries the captured output so callers can re-classify the failure
    (e.g. as not-found) and so the full diagnostic can be logged.

    Attributes
    ----------
    message : str
        Human-readable error message.
    args_used : list[str]
        Arguments the tool was invoked with.
    returncode : int | None
        The process exit status.
    stdout : str
        Captured standard output.
    stderr : str
        Captured standard error.

    Examples
    --------
    >>> try:
    ...     await provider.fetch_channel_info(url)
    ... except ToolFailureError as e:
    ...     if "HTTPError 404" in e.stderr:
    ...         raise NotFoundError("Channel", name) from e
    """

    def __init__(
        self,
        args_used: Sequence[str],
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        """
        Initialize ToolFailureError.

        Parameters
        ----------
        args_used : Sequence[str]
            Arguments the tool was invoked with.
        returncode : int | None
            The process exit status.
        stdout : str, optional
            Captured standard output (default: "").
        stderr : str, optional
            Captured standard error (default: "").
        """
        self.args_used = list(args_used)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"yt-dlp exited with an error: {returncode}")


class MalformedUpstreamDataError(YtcastError):
    """
    Exception raised when yt-dlp output cannot be interpreted.

    Covers JSON decoding and schema failures as well as upload dates that
    do not parse as ``YYYYMMDD``.

    Attributes
    ----------
    message : str
        Human-readable error message.
    source : str | None
        Short description of the data that failed to parse.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        """
        Initialize MalformedUpstreamDataError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        source : str | None, optional
            The offending input, truncated for logging (default: None).
        """
        self.source = source[:200] if source else source
        super().__init__(message)


class FeedBuildError(YtcastError):
    """Exception raised when a feed field violates an RSS precondition."""


class StorageError(YtcastError):
    """
    Exception raised for cache filesystem failures.

    Attributes
    ----------
    message : str
        Human-readable error message.
    path : Path | None
        The path being operated on.
    original_error : Exception | None
        The underlying OS error.
    """

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize StorageError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        path : Path | None, optional
            The path being operated on (default: None).
        original_error : Exception | None, optional
            The underlying OS error (default: None).
        """
        self.path = path
        self.original_error = original_error
        super().__init__(message)


class EmptyCacheKeyError(StorageError):
    """Exception raised when a cache key has no segments."""

    def __init__(self) -> None:
        super().__init__("empty key")
