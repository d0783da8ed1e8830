"""Route registration helpers for Subsonic endpoints."""

from collections.abc import Callable
from typing import Any, TypeVar

from fastapi import APIRouter, Depends

from mpdsonic_api.api.deps import require_auth

F = TypeVar("F", bound=Callable[..., Any])

# Subsonic only defines GET and POST; anything else gets a plain 405
METHODS = ["GET", "POST"]


def subsonic_router(tag: str) -> APIRouter:
    """Create a /rest router whose routes all require authentication."""
    return APIRouter(prefix="/rest", tags=[tag], dependencies=[Depends(require_auth)])


def subsonic_route(router: APIRouter, name: str) -> Callable[[F], F]:
    """Register an endpoint as /rest/<name> and /rest/<name>.view.

    Clients use both spellings of every method path.
    """

    def decorator(func: F) -> F:
        for path in (f"/{name}", f"/{name}.view"):
            router.add_api_route(
                path,
                func,
                methods=METHODS,
                name=path.lstrip("/"),
                response_model=None,
            )
        return func

    return decorator
