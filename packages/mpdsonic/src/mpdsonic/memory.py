"""In-memory implementations of the database and filesystem protocols.

Used by tests and by the CLI's --from-file mode, where a plain list of paths
stands in for a running MPD server.
"""

from __future__ import annotations

import io
import os
import threading
import time
from collections.abc import Iterable, Mapping

from mpdsonic.exceptions import AttributesNotFoundError, DatabaseError, MediaOpenError


class MemoryDatabase:
    """Music database held in a dict of path -> attributes.

    Implements MusicDatabase. Paths are listed in insertion order, which
    lets tests control exactly what the index builder sees.

    Example:
        >>> db = MemoryDatabase({"a/b.mp3": {"TITLE": "B"}})
        >>> db.list_files()
        ['a/b.mp3']
    """

    def __init__(self, files: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self._files = {path: dict(attrs) for path, attrs in (files or {}).items()}
        self._lock = threading.Lock()
        self.online = True
        self.ping_count = 0
        self.closed = False

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> MemoryDatabase:
        """Create a database of untagged files."""
        return cls({path: {} for path in paths})

    def add(self, path: str, **attrs: str) -> None:
        with self._lock:
            self._files[path] = dict(attrs)

    def list_files(self) -> list[str]:
        self._check_online()
        with self._lock:
            return list(self._files)

    def read_attributes(self, path: str) -> dict[str, str]:
        self._check_online()
        with self._lock:
            attrs = self._files.get(path)
        if attrs is None:
            raise AttributesNotFoundError(path)
        return dict(attrs)

    def ping(self) -> None:
        with self._lock:
            self.ping_count += 1
        self._check_online()

    def close(self) -> None:
        self.closed = True

    def _check_online(self) -> None:
        if not self.online:
            raise DatabaseError("database offline")


class MemoryMediaFile(io.BytesIO):
    """MediaFile over an in-memory buffer."""

    def __init__(self, data: bytes, mtime: float) -> None:
        super().__init__(data)
        self._size = len(data)
        self._mtime = mtime

    @property
    def size(self) -> int:
        return self._size

    @property
    def mtime(self) -> float:
        return self._mtime


class MemoryFilesystem:
    """Filesystem held in a dict of path -> bytes. Implements Filesystem.

    Keeps track of every path opened, in order, in `opened`.
    """

    def __init__(
        self,
        files: Mapping[str, bytes] | None = None,
        mtime: float | None = None,
    ) -> None:
        self._files = {
            os.path.normpath(path): data for path, data in (files or {}).items()
        }
        self._mtimes: dict[str, float] = {}
        self._default_mtime = time.time() if mtime is None else mtime
        self.opened: list[str] = []

    def add(self, path: str, data: bytes, mtime: float | None = None) -> None:
        self._files[os.path.normpath(path)] = data
        if mtime is not None:
            self._mtimes[os.path.normpath(path)] = mtime

    def open(self, path: str) -> MemoryMediaFile:
        key = os.path.normpath(path)
        self.opened.append(key)
        data = self._files.get(key)
        if data is None:
            raise MediaOpenError(path, "no such file")
        return MemoryMediaFile(data, self._mtimes.get(key, self._default_mtime))
