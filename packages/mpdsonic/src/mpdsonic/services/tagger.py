"""Attach artist/album/title tags to index entries."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace

from mpdsonic.database import AttributeSource
from mpdsonic.models.entry import IndexedEntry, MetadataEntry, Tags

logger = logging.getLogger(__name__)


def _tags_from_attributes(attrs: Mapping[str, str]) -> Tags:
    """Pick ARTIST, ALBUM and TITLE out of backend attributes.

    Key case varies between tag formats, so keys are matched upper-cased.
    """
    upper = {key.upper(): value for key, value in attrs.items()}
    return Tags(
        artist=upper.get("ARTIST", ""),
        album=upper.get("ALBUM", ""),
        title=upper.get("TITLE", ""),
    )


def tag_entries(
    source: AttributeSource, entries: Iterable[IndexedEntry]
) -> list[MetadataEntry]:
    """Tag files from the backend and let directories inherit from them.

    Directories are titled after their last path segment. Each file's tags
    are remembered under its parent directory, the last file processed
    winning. A nested directory found in that record then takes its artist
    and album from it, and its title from the remembered *album*. Top-level
    directories keep their plain name.

    Args:
        source: Backend used for per-file attribute lookups.
        entries: Entries to tag, usually one directory listing.

    Returns:
        Tagged entries in input order.

    Raises:
        DatabaseError: If any attribute lookup fails. Nothing is returned.
    """
    tagged: list[MetadataEntry] = []
    by_parent: dict[str, Tags] = {}

    for entry in entries:
        if entry.is_dir:
            tagged.append(MetadataEntry(entry=entry, tags=Tags(title=entry.name)))
            continue

        tags = _tags_from_attributes(source.read_attributes(entry.path))
        tagged.append(MetadataEntry(entry=entry, tags=tags))
        by_parent[entry.parent_path] = tags

    for position, item in enumerate(tagged):
        if not item.is_dir or item.entry.is_top_level:
            continue
        inherited = by_parent.get(item.path)
        if inherited is None:
            continue
        # Title takes the album value, not the file title
        tagged[position] = replace(
            item,
            tags=Tags(
                artist=inherited.artist,
                album=inherited.album,
                title=inherited.album,
            ),
        )

    logger.debug("Tagged %d entries", len(tagged))
    return tagged
