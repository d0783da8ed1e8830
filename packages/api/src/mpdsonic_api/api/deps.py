"""FastAPI dependency injection factories.

This module provides type-safe dependency injection for FastAPI routes.
Dependencies are defined as Annotated types for clean, reusable injection.

Usage in routes:
    from mpdsonic_api.api.deps import LibraryDep, ParamsDep

    @router.api_route("/ping", methods=["GET", "POST"])
    def ping(request: Request, params: ParamsDep) -> Response:
        ...
"""

from typing import Annotated

from fastapi import Depends, Request
from mpdsonic import Filesystem, MusicLibrary

from mpdsonic_api.api.auth import authenticate, read_params
from mpdsonic_api.api.container import Services, get_services
from mpdsonic_api.settings import Settings

# -- Settings --


def _get_settings(request: Request) -> Settings:
    """Get settings the app was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(_get_settings)]

# -- Service dependencies (request-scoped via app.state) --

ServicesDep = Annotated[Services, Depends(get_services)]


def _get_library(services: ServicesDep) -> MusicLibrary:
    """Get music library from services container."""
    return services.library


def _get_filesystem(services: ServicesDep) -> Filesystem:
    """Get filesystem from services container."""
    return services.filesystem


LibraryDep = Annotated[MusicLibrary, Depends(_get_library)]
FilesystemDep = Annotated[Filesystem, Depends(_get_filesystem)]

# -- Request parameters --

ParamsDep = Annotated[dict[str, str], Depends(read_params)]


async def require_auth(params: ParamsDep, settings: SettingsDep) -> None:
    """Reject the request unless it carries valid Subsonic credentials."""
    authenticate(params, settings.user, settings.password)
