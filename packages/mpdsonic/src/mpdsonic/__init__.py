"""mpdsonic - Browse an MPD database as a Subsonic folder tree.

MPD exposes a flat list of file paths with per-file tags. Subsonic clients
expect folders and files addressed by integer ids. This library synthesizes
that tree on demand from the file listing.

Examples:
    Build the virtual index and list one directory:
    ```python
    from mpdsonic import MPDDatabase, MusicLibrary

    database = MPDDatabase(host="localhost", port=6600)
    library = MusicLibrary(database)
    for entry in library.top_level():
        print(entry.id, entry.path)
    start, children = library.directory(0)
    ```
"""

from mpdsonic.database import AttributeSource, MPDDatabase, MusicDatabase
from mpdsonic.exceptions import (
    AttributesNotFoundError,
    DatabaseError,
    MediaOpenError,
    MpdsonicError,
)
from mpdsonic.filesystem import Filesystem, LocalFilesystem, MediaFile
from mpdsonic.memory import MemoryDatabase, MemoryFilesystem
from mpdsonic.models import IndexedEntry, MetadataEntry, Tags
from mpdsonic.services import (
    MusicLibrary,
    build_index,
    child_entries,
    tag_entries,
    top_level_entries,
)

__all__ = [
    "AttributeSource",
    "AttributesNotFoundError",
    "DatabaseError",
    "Filesystem",
    "IndexedEntry",
    "LocalFilesystem",
    "MPDDatabase",
    "MediaFile",
    "MediaOpenError",
    "MemoryDatabase",
    "MemoryFilesystem",
    "MetadataEntry",
    "MpdsonicError",
    "MusicDatabase",
    "MusicLibrary",
    "Tags",
    "build_index",
    "child_entries",
    "tag_entries",
    "top_level_entries",
]
