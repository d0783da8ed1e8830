"""Filesystem access for streaming media files."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import BinaryIO, Protocol

from mpdsonic.exceptions import MediaOpenError


class MediaFile(Protocol):
    """A readable, seekable byte stream with size and modification time."""

    @property
    def size(self) -> int:
        """Size in bytes."""
        ...

    @property
    def mtime(self) -> float:
        """Modification time as POSIX seconds."""
        ...

    def read(self, size: int = -1, /) -> bytes: ...

    def seek(self, offset: int, whence: int = os.SEEK_SET, /) -> int: ...

    def close(self) -> None: ...


class Filesystem(Protocol):
    """Protocol for opening media files by path."""

    def open(self, path: str) -> MediaFile:
        """Open path for reading. Raises MediaOpenError on failure."""
        ...


class LocalMediaFile:
    """MediaFile over a regular file on disk."""

    def __init__(self, handle: BinaryIO, size: int, mtime: float) -> None:
        self._handle = handle
        self._size = size
        self._mtime = mtime

    @property
    def size(self) -> int:
        return self._size

    @property
    def mtime(self) -> float:
        return self._mtime

    def read(self, size: int = -1, /) -> bytes:
        return self._handle.read(size)

    def seek(self, offset: int, whence: int = os.SEEK_SET, /) -> int:
        return self._handle.seek(offset, whence)

    def close(self) -> None:
        self._handle.close()


class LocalFilesystem:
    """Production filesystem. Implements Filesystem."""

    def open(self, path: str) -> LocalMediaFile:
        target = Path(path)
        try:
            handle = target.open("rb")
        except OSError as exc:
            raise MediaOpenError(path, exc.strerror) from exc

        try:
            info = os.fstat(handle.fileno())
        except OSError as exc:
            handle.close()
            raise MediaOpenError(path, exc.strerror) from exc

        if not stat.S_ISREG(info.st_mode):
            handle.close()
            raise MediaOpenError(path, "not a regular file")

        return LocalMediaFile(handle, size=info.st_size, mtime=info.st_mtime)
