"""Media retrieval endpoints: stream."""

import logging
import os

from fastapi import HTTPException, Request, status
from fastapi.responses import Response
from mpdsonic import DatabaseError, MediaOpenError

from mpdsonic_api.api.auth import parse_id
from mpdsonic_api.api.deps import FilesystemDep, LibraryDep, ParamsDep, SettingsDep
from mpdsonic_api.api.exceptions import GenericError
from mpdsonic_api.api.routing import subsonic_route, subsonic_router
from mpdsonic_api.services.content import serve_content

logger = logging.getLogger(__name__)

router = subsonic_router("media")


@subsonic_route(router, "stream")
def stream(
    request: Request,
    params: ParamsDep,
    library: LibraryDep,
    filesystem: FilesystemDep,
    settings: SettingsDep,
) -> Response:
    """Stream the raw bytes of one file, honouring Range requests."""
    entry_id = parse_id(params)

    try:
        entry = library.resolve(entry_id)
    except DatabaseError as exc:
        logger.error("Error listing files from MPD for streaming: %s", exc)
        raise GenericError() from exc

    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    path = os.path.join(settings.music_directory, entry.path)
    try:
        media = filesystem.open(path)
    except MediaOpenError as exc:
        logger.error("Error opening file for streaming %r: %s", path, exc.reason)
        raise GenericError() from exc

    logger.debug("Streaming %s (%d bytes)", path, media.size)
    return serve_content(request, media, path)
