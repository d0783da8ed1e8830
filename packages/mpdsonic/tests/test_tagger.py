"""Tests for tag attachment."""

from unittest.mock import MagicMock

import pytest
from mpdsonic import DatabaseError, IndexedEntry, MemoryDatabase, Tags, tag_entries


class TestTagEntries:
    """Tests for tag_entries."""

    def test_files_get_backend_tags(self, tagged_database: MemoryDatabase) -> None:
        """Should copy artist, album and title from file attributes."""
        entry = IndexedEntry(2, "Boston/1976 - Boston/01 - More Than A Feeling.flac")

        [tagged] = tag_entries(tagged_database, [entry])

        assert tagged.entry == entry
        assert tagged.tags == Tags(
            artist="Boston", album="Boston", title="More Than a Feeling"
        )

    def test_directory_titled_by_name(self) -> None:
        """Should title a directory after its last path segment."""
        database = MemoryDatabase()
        entries = [
            IndexedEntry(0, "Boston", is_dir=True),
            IndexedEntry(1, "Boston/1976 - Boston", is_dir=True),
        ]

        tagged = tag_entries(database, entries)

        assert [t.title for t in tagged] == ["Boston", "1976 - Boston"]
        assert all(t.artist == "" and t.album == "" for t in tagged)

    def test_directory_inherits_album_as_title(self) -> None:
        """Should backfill a nested directory from a file inside it."""
        database = MemoryDatabase(
            {"a/b/c.mp3": {"ARTIST": "Artist", "ALBUM": "Album", "TITLE": "Song"}}
        )
        entries = [
            IndexedEntry(1, "a/b", is_dir=True),
            IndexedEntry(2, "a/b/c.mp3"),
        ]

        directory, track = tag_entries(database, entries)

        assert directory.tags == Tags(artist="Artist", album="Album", title="Album")
        assert track.title == "Song"

    def test_top_level_directory_keeps_name(self) -> None:
        """Should not backfill a top-level directory."""
        database = MemoryDatabase(
            {"a/c.mp3": {"ARTIST": "Artist", "ALBUM": "Album", "TITLE": "Song"}}
        )
        entries = [IndexedEntry(0, "a", is_dir=True), IndexedEntry(1, "a/c.mp3")]

        directory, _ = tag_entries(database, entries)

        assert directory.tags == Tags(title="a")

    def test_last_file_wins(self) -> None:
        """Should backfill from the last file processed in a directory."""
        database = MemoryDatabase(
            {
                "a/b/1.mp3": {"ALBUM": "First"},
                "a/b/2.mp3": {"ALBUM": "Second"},
            }
        )
        entries = [
            IndexedEntry(1, "a/b", is_dir=True),
            IndexedEntry(2, "a/b/1.mp3"),
            IndexedEntry(3, "a/b/2.mp3"),
        ]

        directory, *_ = tag_entries(database, entries)

        assert directory.title == "Second"

    def test_missing_tags_are_empty(self) -> None:
        """Should leave absent tags as empty strings."""
        database = MemoryDatabase({"x.mp3": {"TITLE": "Only Title"}})

        [tagged] = tag_entries(database, [IndexedEntry(0, "x.mp3")])

        assert tagged.tags == Tags(title="Only Title")

    def test_keys_match_any_case(self) -> None:
        """Should accept lower-case attribute keys."""
        database = MemoryDatabase({"x.mp3": {"artist": "A", "Album": "B"}})

        [tagged] = tag_entries(database, [IndexedEntry(0, "x.mp3")])

        assert tagged.tags == Tags(artist="A", album="B")

    def test_preserves_order(self, tagged_database: MemoryDatabase) -> None:
        """Should return entries in input order."""
        entries = [
            IndexedEntry(4, "Boston/demo.mp3"),
            IndexedEntry(1, "Boston/1976 - Boston", is_dir=True),
        ]

        tagged = tag_entries(tagged_database, entries)

        assert [t.id for t in tagged] == [4, 1]

    def test_lookup_failure_propagates(self) -> None:
        """Should raise instead of returning a partial result."""
        source = MagicMock()
        source.read_attributes.side_effect = [
            {"TITLE": "ok"},
            DatabaseError("connection lost"),
        ]
        entries = [IndexedEntry(0, "a.mp3"), IndexedEntry(1, "b.mp3")]

        with pytest.raises(DatabaseError, match="connection lost"):
            tag_entries(source, entries)

    def test_unknown_file_raises(self) -> None:
        """Should raise when the backend has no attributes for a file."""
        with pytest.raises(DatabaseError):
            tag_entries(MemoryDatabase(), [IndexedEntry(0, "missing.mp3")])

    def test_directories_skip_backend(self) -> None:
        """Should not look up attributes for directories."""
        source = MagicMock()

        tag_entries(source, [IndexedEntry(0, "a", is_dir=True)])

        source.read_attributes.assert_not_called()
