"""Virtual filesystem entry models."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field

# Backend paths always use forward slashes, whatever the host platform.
SEPARATOR = "/"


@dataclass(frozen=True, slots=True)
class IndexedEntry:
    """A synthesized directory or a listed file with its request-scoped id.

    Attributes:
        id: Position-derived identifier, unique within one index build.
        path: Backend path. For directories, a prefix of some file's path.
        is_dir: True for synthesized directories, False for listed files.
    """

    id: int
    path: str
    is_dir: bool = False

    @property
    def name(self) -> str:
        """Last path segment."""
        return posixpath.basename(self.path)

    @property
    def depth(self) -> int:
        """Number of separators in the path (0 for top-level entries)."""
        return self.path.count(SEPARATOR)

    @property
    def is_top_level(self) -> bool:
        return SEPARATOR not in self.path

    @property
    def parent_path(self) -> str:
        """Path of the containing directory, empty for top-level entries."""
        return posixpath.dirname(self.path)

    @property
    def suffix(self) -> str:
        """File extension without the dot, empty for directories."""
        if self.is_dir:
            return ""
        _, dot, ext = self.name.rpartition(".")
        return ext if dot else ""


@dataclass(frozen=True, slots=True)
class Tags:
    """Artist, album and title attached to an entry."""

    artist: str = ""
    album: str = ""
    title: str = ""


@dataclass(frozen=True, slots=True)
class MetadataEntry:
    """An IndexedEntry with its tags attached."""

    entry: IndexedEntry
    tags: Tags = field(default_factory=Tags)

    @property
    def id(self) -> int:
        return self.entry.id

    @property
    def path(self) -> str:
        return self.entry.path

    @property
    def is_dir(self) -> bool:
        return self.entry.is_dir

    @property
    def artist(self) -> str:
        return self.tags.artist

    @property
    def album(self) -> str:
        return self.tags.album

    @property
    def title(self) -> str:
        return self.tags.title
