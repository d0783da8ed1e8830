"""Alphabetical grouping of top-level entries for getIndexes."""

from __future__ import annotations

from collections.abc import Iterable

from mpdsonic import IndexedEntry

from mpdsonic_api.schemas.subsonic import Artist, Index

DIGIT_INDEX = "#"


def index_name(name: str) -> str:
    """Bucket name for an entry: its first character, "#" for any digit."""
    initial = name[:1]
    return DIGIT_INDEX if initial.isdecimal() else initial


def group_by_initial(entries: Iterable[IndexedEntry]) -> list[Index]:
    """Group top-level entries into indexes by first character.

    Case is kept as-is, so "a" and "A" are separate buckets. Buckets and the
    artists inside them keep the order in which they first appear.
    """
    buckets: dict[str, list[Artist]] = {}
    for entry in entries:
        if not entry.path:
            continue
        artist = Artist(id=str(entry.id), name=entry.path)
        buckets.setdefault(index_name(entry.path), []).append(artist)
    return [Index(name=name, artist=artists) for name, artists in buckets.items()]
