"""
TTL filesystem cache for playlist snapshots and downloaded media.

Keys are ordered string segments mapped onto a directory tree below the cache
root. A file's modification time is its only freshness signal: every
``get_path`` call touches the entry and then sweeps the whole tree, deleting
files older than the TTL and pruning directories left empty.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat
import time
from pathlib import Path
from typing import NoReturn, Sequence
from urllib.parse import quote

from pydantic import BaseModel, Field

from ytcast.exceptions import EmptyCacheKeyError, StorageError

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 86400


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Pydantic V2 models                                                ║
# ╚══════════════════════════════════════════════════════════════════════╝


class CacheConfig(BaseModel):
    """Configuration for the filesystem cache.

    Attributes
    ----------
    root : Path
        Cache root directory. Created if missing.
    ttl_seconds : int
        Maximum age of an entry before the sweep deletes it.
    refresh_on_access : bool
        If ``True``, touching an existing entry updates its mtime so that
        entries live for the TTL after their last access. If ``False`` an
        existing entry keeps its mtime and expires a TTL after creation.
    """

    root: Path
    ttl_seconds: int = Field(default=DEFAULT_TTL_SECONDS, gt=0)
    refresh_on_access: bool = False


class SweepResult(BaseModel):
    """Counts of what a cache sweep removed."""

    files_removed: int = 0
    dirs_removed: int = 0


def encode_segment(segment: str) -> str:
    """Encode one key segment into a filesystem-safe name.

    Segments are percent-encoded and every ``%`` in the result is then
    rewritten to ``+``, so ``"a/b"`` becomes ``"a+2Fb"``. Segments made of
    dots only have their dots encoded too so they cannot name ``.``/``..``.

    Raises
    ------
    StorageError
        If the segment is empty.
    """
    if not segment:
        raise StorageError("empty key segment")
    encoded = quote(segment, safe="").replace("%", "+")
    if set(encoded) == {"."}:
        encoded = encoded.replace(".", "+2E")
    return encoded


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Cache                                                              ║
# ╚══════════════════════════════════════════════════════════════════════╝


class Cache:
    """Key-addressed filesystem store with TTL-based lazy eviction.

    There is no locking: concurrent calls for the same key converge on the
    same path. Blocking filesystem work runs in a worker thread so the event
    loop only suspends at these I/O boundaries.

    Parameters
    ----------
    config : CacheConfig
        Root directory, TTL and touch policy.
    """

    def __init__(self, config: CacheConfig) -> None:
        self._config = config
        try:
            config.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"failed to create cache root {config.root}",
                path=config.root,
                original_error=e,
            ) from e

    @property
    def root(self) -> Path:
        """The cache root directory."""
        return self._config.root

    @property
    def ttl_seconds(self) -> int:
        """The configured time-to-live in seconds."""
        return self._config.ttl_seconds

    # ------------------------------------------------------------------
    # Key resolution
    # ------------------------------------------------------------------

    def path_for(self, key: Sequence[str], ext: str | None = None) -> Path:
        """Compute the on-disk path for *key* without touching anything.

        Parameters
        ----------
        key : Sequence[str]
            Ordered key segments; all but the last name directories.
        ext : str | None
            Optional file extension appended to the last segment.

        Returns
        -------
        Path
            Path below the cache root.

        Raises
        ------
        EmptyCacheKeyError
            If *key* has no segments.
        """
        if not key:
            raise EmptyCacheKeyError()
        *parents, leaf = [encode_segment(segment) for segment in key]
        filename = f"{leaf}.{ext}" if ext else leaf
        return self._config.root.joinpath(*parents, filename)

    async def get_path(self, key: Sequence[str], ext: str | None = None) -> Path:
        """Resolve *key* to a cache file, creating or touching it.

        Missing directories are created and the leaf file is touched; an
        entry already past its TTL is replaced by an empty file. A full
        sweep then runs before the path is returned, so every cache access
        pays for one traversal of the tree.

        Parameters
        ----------
        key : Sequence[str]
            Ordered, non-empty key segments.
        ext : str | None
            Optional file extension.

        Returns
        -------
        Path
            Path of an existing (possibly empty) cache file.

        Raises
        ------
        EmptyCacheKeyError
            If *key* has no segments.
        StorageError
            If the directories or the file cannot be created.
        """
        path = self.path_for(key, ext)
        await asyncio.to_thread(self._touch, path)
        await self.clean()
        return path

    def _touch(self, path: Path) -> None:
        """Create *path* (and its parents) or refresh it, per the touch policy."""
        # A concurrent sweep may prune the parent between mkdir and touch.
        for attempt in range(2):
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                self._touch_file(path)
                return
            except FileNotFoundError as e:
                if attempt == 0:
                    continue
                self._raise_touch_error(path, e)
            except OSError as e:
                self._raise_touch_error(path, e)

    def _touch_file(self, path: Path) -> None:
        if self._is_expired(path, time.time()):
            # Expired content is replaced by a fresh empty entry, never revived.
            path.unlink(missing_ok=True)
            path.touch()
        elif self._config.refresh_on_access:
            path.touch()
        else:
            with path.open("ab"):
                pass

    @staticmethod
    def _raise_touch_error(path: Path, error: OSError) -> NoReturn:
        logger.error("Failed to touch/create cache file %s: %s", path, error)
        raise StorageError(
            f"failed to touch/create cache file {path}",
            path=path,
            original_error=error,
        ) from error

    async def remove(self, path: Path) -> None:
        """Delete a cache file; a missing file is not an error.

        Raises
        ------
        StorageError
            If the file exists but cannot be removed.
        """
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as e:
            raise StorageError(
                f"failed to remove cache file {path}", path=path, original_error=e
            ) from e

    # ------------------------------------------------------------------
    # Sweep
    # ------------------------------------------------------------------

    async def clean(self) -> SweepResult:
        """Delete expired files and prune empty directories.

        Failures to delete are logged and skipped; the sweep always runs to
        completion.

        Returns
        -------
        SweepResult
            Number of files and directories removed.
        """
        result = await asyncio.to_thread(self._sweep)
        logger.debug(
            "Cache sweep of %s removed %d files and %d directories",
            self._config.root,
            result.files_removed,
            result.dirs_removed,
        )
        return result

    def _sweep(self) -> SweepResult:
        result = SweepResult()
        root = self._config.root
        now = time.time()

        # Bottom-up, so a directory is judged after its children were swept.
        for dirpath, _dirnames, filenames in os.walk(root, topdown=False):
            directory = Path(dirpath)
            for name in filenames:
                file_path = directory / name
                if not self._is_expired(file_path, now):
                    continue
                try:
                    file_path.unlink()
                    result.files_removed += 1
                except FileNotFoundError:
                    pass
                except OSError as e:
                    logger.warning("Couldn't remove expired cache file %s: %s", file_path, e)

            if directory == root or not self._is_empty_dir(directory):
                continue
            try:
                directory.rmdir()
                result.dirs_removed += 1
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Couldn't remove empty cache directory %s: %s", directory, e)

        return result

    def _is_expired(self, file_path: Path, now: float) -> bool:
        try:
            st = file_path.lstat()
        except OSError:
            return False
        if not stat.S_ISREG(st.st_mode):
            return False
        return now - st.st_mtime > self._config.ttl_seconds

    @staticmethod
    def _is_empty_dir(directory: Path) -> bool:
        try:
            with os.scandir(directory) as entries:
                return next(entries, None) is None
        except OSError:
            return False
