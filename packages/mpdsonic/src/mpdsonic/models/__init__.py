"""Data models for mpdsonic.

Public API:
    IndexedEntry - Directory or file in the virtual index
    MetadataEntry - IndexedEntry with tags attached
    Tags - Artist, album and title
"""

from mpdsonic.models.entry import SEPARATOR, IndexedEntry, MetadataEntry, Tags

__all__ = [
    "SEPARATOR",
    "IndexedEntry",
    "MetadataEntry",
    "Tags",
]
