"""Subsonic protocol schemas."""

from mpdsonic_api.schemas.subsonic import (
    API_VERSION,
    XML_NAMESPACE,
    Artist,
    Child,
    Directory,
    ErrorInfo,
    Index,
    Indexes,
    License,
    MusicFolder,
    MusicFolders,
    ResponseStatus,
    SubsonicResponse,
)

__all__ = [
    "API_VERSION",
    "XML_NAMESPACE",
    "Artist",
    "Child",
    "Directory",
    "ErrorInfo",
    "Index",
    "Indexes",
    "License",
    "MusicFolder",
    "MusicFolders",
    "ResponseStatus",
    "SubsonicResponse",
]
