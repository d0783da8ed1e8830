"""Browsing endpoints: getIndexes, getMusicDirectory, getMusicFolders."""

import logging
import time

from fastapi import HTTPException, Request, status
from fastapi.responses import Response
from mpdsonic import DatabaseError, MetadataEntry

from mpdsonic_api.api.auth import parse_id
from mpdsonic_api.api.deps import LibraryDep, ParamsDep, SettingsDep
from mpdsonic_api.api.exceptions import GenericError
from mpdsonic_api.api.responses import render
from mpdsonic_api.api.routing import subsonic_route, subsonic_router
from mpdsonic_api.schemas.subsonic import (
    Child,
    Directory,
    Indexes,
    MusicFolder,
    MusicFolders,
    SubsonicResponse,
)
from mpdsonic_api.services.content import guess_content_type
from mpdsonic_api.services.indexes import group_by_initial

logger = logging.getLogger(__name__)

router = subsonic_router("browsing")

# getMusicFolders always reports a single folder with this id
MUSIC_FOLDER_ID = 0


def _child(item: MetadataEntry, parent_id: int) -> Child:
    """Convert a tagged entry into a directory child."""
    suffix = item.entry.suffix
    return Child(
        id=str(item.id),
        parent=str(parent_id),
        title=item.title,
        album=item.album,
        artist=item.artist,
        is_dir=item.is_dir,
        suffix=None if item.is_dir else suffix,
        content_type=None if item.is_dir else guess_content_type(item.path),
    )


@subsonic_route(router, "getIndexes")
def get_indexes(request: Request, library: LibraryDep) -> Response:
    """List top-level directories and files grouped by initial character."""
    try:
        entries = library.top_level()
    except DatabaseError as exc:
        logger.error("Error listing files from MPD for building indexes: %s", exc)
        raise GenericError() from exc

    indexes = Indexes(
        last_modified=int(time.time() * 1000),
        index=group_by_initial(entries),
    )
    return render(request, SubsonicResponse(indexes=indexes))


@subsonic_route(router, "getMusicDirectory")
def get_music_directory(
    request: Request, params: ParamsDep, library: LibraryDep
) -> Response:
    """List the immediate children of one directory, with tags."""
    entry_id = parse_id(params)

    try:
        start, children = library.directory(entry_id)
    except DatabaseError as exc:
        logger.error("Error reading MPD for music directory %d: %s", entry_id, exc)
        raise GenericError() from exc

    if start is None or not children:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    directory = Directory(
        id=str(entry_id),
        name=start.path,
        child=[_child(item, entry_id) for item in children],
    )
    return render(request, SubsonicResponse(directory=directory))


@subsonic_route(router, "getMusicFolders")
def get_music_folders(request: Request, settings: SettingsDep) -> Response:
    """Report MPD's music directory as the one and only music folder."""
    folders = MusicFolders(
        music_folder=[
            MusicFolder(id=MUSIC_FOLDER_ID, name=settings.music_directory.name)
        ]
    )
    return render(request, SubsonicResponse(music_folders=folders))
