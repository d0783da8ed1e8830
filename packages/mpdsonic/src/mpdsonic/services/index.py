"""Virtual index synthesis over a flat backend file listing.

MPD only knows files. Subsonic clients browse folders addressed by integer
ids. This module bridges the two:

1. build_index() - Walk the listing once, emitting every ancestor directory
   the first time it is seen, followed by the file itself. Ids are positions
   in the resulting list.
2. child_entries() - Narrow a built index to the immediate children of one
   directory id.

Ids are only stable within one build. They are reproducible across builds as
long as the backend lists files in the same (sorted) order.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Sequence

from mpdsonic.models.entry import SEPARATOR, IndexedEntry


def _unseen_ancestors(path: str, seen: dict[str, bool]) -> list[str]:
    """Return ancestors of path not yet in seen, nearest parent first."""
    ancestors: list[str] = []
    directory = posixpath.dirname(path)
    while directory and directory != posixpath.dirname(directory):
        if not seen.get(directory, False):
            seen[directory] = True
            ancestors.append(directory)
        directory = posixpath.dirname(directory)
    return ancestors


def build_index(paths: Iterable[str]) -> list[IndexedEntry]:
    """Build the ordered virtual index for a file listing.

    Args:
        paths: Backend file paths, in listing order.

    Returns:
        Directories and files, each directory exactly once and always before
        anything it contains. An entry's id equals its position in the list.

    Example:
        >>> [(e.id, e.path, e.is_dir) for e in build_index(["a/b/c.mp3"])]
        [(0, 'a', True), (1, 'a/b', True), (2, 'a/b/c.mp3', False)]
    """
    seen: dict[str, bool] = {}
    index: list[IndexedEntry] = []

    for path in paths:
        # Shallowest ancestor gets the lowest id
        for directory in reversed(_unseen_ancestors(path, seen)):
            index.append(IndexedEntry(id=len(index), path=directory, is_dir=True))
        index.append(IndexedEntry(id=len(index), path=path, is_dir=False))

    return index


def child_entries(index: Sequence[IndexedEntry], start_id: int) -> list[IndexedEntry]:
    """Return the immediate children of the entry at start_id.

    Relies on build_index placing a directory's contents in one contiguous
    run right after it. The run is cut at the first path that does not start
    with the directory's path; deeper descendants are then dropped by
    separator count.

    The prefix is a plain string prefix, so a top-level sibling such as
    "Boston Symphony" is listed under "Boston" along with its own children.

    Args:
        index: A full index from build_index().
        start_id: Id of the directory to list.

    Returns:
        Children in index order. Empty when start_id is out of range or
        nothing lies below it.
    """
    if start_id < 0 or start_id >= len(index):
        return []

    prefix = index[start_id].path
    end = start_id
    while end < len(index) and index[end].path.startswith(prefix):
        end += 1

    max_depth = prefix.count(SEPARATOR) + 1
    kept = [e for e in index[start_id:end] if e.path.count(SEPARATOR) <= max_depth]

    # First kept entry is the start entry itself
    return kept[1:]


def top_level_entries(index: Iterable[IndexedEntry]) -> list[IndexedEntry]:
    """Return entries that live directly in the music root."""
    return [e for e in index if e.is_top_level]
