"""Per-request pipelines over the music database."""

from __future__ import annotations

import logging

from mpdsonic.database import MusicDatabase
from mpdsonic.models.entry import IndexedEntry, MetadataEntry
from mpdsonic.services.index import build_index, child_entries, top_level_entries
from mpdsonic.services.tagger import tag_entries

logger = logging.getLogger(__name__)


class MusicLibrary:
    """Virtual filesystem view of a music database.

    Nothing is cached: every call lists the database again and rebuilds the
    index, so ids always reflect the current listing.

    Example:
        >>> library = MusicLibrary(MemoryDatabase.from_paths(["a/b.mp3"]))
        >>> start, children = library.directory(0)
        >>> [c.path for c in children]
        ['a/b.mp3']
    """

    def __init__(self, database: MusicDatabase) -> None:
        self._database = database

    def index(self) -> list[IndexedEntry]:
        """List the database and build the full index.

        Raises:
            DatabaseError: If listing fails.
        """
        paths = self._database.list_files()
        index = build_index(paths)
        logger.debug("Indexed %d paths into %d entries", len(paths), len(index))
        return index

    def top_level(self) -> list[IndexedEntry]:
        """Entries directly under the music root."""
        return top_level_entries(self.index())

    def resolve(self, entry_id: int) -> IndexedEntry | None:
        """Look up one entry by id. None if out of range."""
        index = self.index()
        if entry_id < 0 or entry_id >= len(index):
            return None
        return index[entry_id]

    def directory(
        self, entry_id: int
    ) -> tuple[IndexedEntry | None, list[MetadataEntry]]:
        """Return the entry for entry_id and its tagged immediate children.

        Raises:
            DatabaseError: If listing or any attribute lookup fails.
        """
        index = self.index()
        children = child_entries(index, entry_id)
        if not children:
            return None, []
        return index[entry_id], tag_entries(self._database, children)
