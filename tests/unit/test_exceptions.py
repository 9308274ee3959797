"""
Tests for custom exceptions module.

This module tests all custom exception classes, their attributes and the
inheritance hierarchy the API layer relies on.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from ytcast.exceptions import (
    EmptyCacheKeyError,
    FeedBuildError,
    MalformedUpstreamDataError,
    NotFoundError,
    StorageError,
    ToolFailureError,
    ToolUnavailableError,
    YtcastError,
)


class TestYtcastError:
    """Tests for base YtcastError exception."""

    def test_base_error_with_message(self) -> None:
        """Test base error stores message correctly."""
        error = YtcastError("Test error message")
        assert error.message == "Test error message"
        assert str(error) == "Test error message"

    @pytest.mark.parametrize(
        "error",
        [
            NotFoundError("Channel", "x"),
            ToolUnavailableError("yt-dlp"),
            ToolFailureError([], 1),
            MalformedUpstreamDataError("bad"),
            FeedBuildError("bad"),
            StorageError("bad"),
            EmptyCacheKeyError(),
        ],
    )
    def test_all_errors_share_the_base(self, error: YtcastError) -> None:
        """Test every domain error is a YtcastError."""
        assert isinstance(error, YtcastError)


class TestNotFoundError:
    """Tests for NotFoundError."""

    def test_message_and_attributes(self) -> None:
        """Test the message names the resource."""
        error = NotFoundError(resource_type="Video", identifier="abc")
        assert error.resource_type == "Video"
        assert error.identifier == "abc"
        assert error.message == "Video 'abc' not found"


class TestToolErrors:
    """Tests for ToolUnavailableError and ToolFailureError."""

    def test_unavailable_includes_os_error(self) -> None:
        """Test the OS error is part of the message."""
        cause = FileNotFoundError("No such file or directory")
        error = ToolUnavailableError("yt-dlp", cause)
        assert error.binary == "yt-dlp"
        assert error.original_error is cause
        assert "No such file or directory" in error.message

    def test_unavailable_without_cause(self) -> None:
        """Test the message without an OS error."""
        assert ToolUnavailableError("yt-dlp").message == "yt-dlp could not be executed"

    def test_failure_carries_output(self) -> None:
        """Test captured output is kept for classification."""
        error = ToolFailureError(
            args_used=("-J", "url"), returncode=2, stdout="out", stderr="err"
        )
        assert error.args_used == ["-J", "url"]
        assert error.returncode == 2
        assert error.stdout == "out"
        assert error.stderr == "err"
        assert error.message == "yt-dlp exited with an error: 2"


class TestDataErrors:
    """Tests for MalformedUpstreamDataError and storage errors."""

    def test_source_is_truncated(self) -> None:
        """Test long sources are cut for logging."""
        error = MalformedUpstreamDataError("bad json", source="x" * 1000)
        assert error.source is not None
        assert len(error.source) == 200

    def test_storage_error_attributes(self) -> None:
        """Test path and cause are kept."""
        cause = PermissionError("denied")
        error = StorageError("cannot write", path=Path("/tmp/x"), original_error=cause)
        assert error.path == Path("/tmp/x")
        assert error.original_error is cause

    def test_empty_key_is_storage_error(self) -> None:
        """Test EmptyCacheKeyError specialises StorageError."""
        error = EmptyCacheKeyError()
        assert isinstance(error, StorageError)
        assert error.message == "empty key"
