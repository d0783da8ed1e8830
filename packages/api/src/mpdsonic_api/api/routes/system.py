"""System endpoints: ping and getLicense."""

from fastapi import Request
from fastapi.responses import Response

from mpdsonic_api.api.responses import render
from mpdsonic_api.api.routing import subsonic_route, subsonic_router
from mpdsonic_api.schemas.subsonic import License, SubsonicResponse

router = subsonic_router("system")


@subsonic_route(router, "ping")
def ping(request: Request) -> Response:
    """Return an empty success envelope to show the server is up."""
    return render(request, SubsonicResponse())


@subsonic_route(router, "getLicense")
def get_license(request: Request) -> Response:
    """Report a license that is always valid so clients unlock every feature."""
    return render(request, SubsonicResponse(license=License(valid=True)))
