"""Virtual filesystem services for mpdsonic.

Public API:
    MusicLibrary - List, index, filter and tag in one call per request
    build_index - Flat path listing to ordered directory/file entries
    child_entries - Immediate children of one directory id
    tag_entries - Attach artist/album/title to entries
"""

from mpdsonic.services.index import build_index, child_entries, top_level_entries
from mpdsonic.services.library import MusicLibrary
from mpdsonic.services.tagger import tag_entries

__all__ = [
    "MusicLibrary",
    "build_index",
    "child_entries",
    "tag_entries",
    "top_level_entries",
]
