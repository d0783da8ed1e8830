"""Subsonic protocol errors and their exception handlers.

Protocol-level failures never change the HTTP status. They are rendered as a
200 response whose envelope has status="failed" and an error element:

    <subsonic-response status="failed" ...>
        <error code="10" message="Required parameter is missing."/>
    </subsonic-response>

Only unknown ids (404) and disallowed methods (405) use HTTP status codes.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import Response
from mpdsonic import MpdsonicError

from mpdsonic_api.api.responses import render
from mpdsonic_api.schemas.subsonic import SubsonicResponse

logger = logging.getLogger(__name__)


# -- Base Exceptions --


class SubsonicError(Exception):
    """Base exception for Subsonic protocol errors.

    Subclasses should define:
    - code: Subsonic error code
    - default_message: Human-readable description sent to the client
    """

    code: int = 0
    default_message: str = "An error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class GenericError(SubsonicError):
    """Raised for any failure the protocol has no specific code for."""


class MissingParameterError(SubsonicError):
    """Raised when a required request parameter is absent."""

    code = 10
    default_message = "Required parameter is missing."

    def __init__(self, parameter: str | None = None) -> None:
        self.parameter = parameter
        super().__init__()


class UnauthorizedError(SubsonicError):
    """Raised when the username or password is wrong."""

    code = 40
    default_message = "Wrong username or password."


# -- Exception Handlers --


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on the FastAPI app."""

    @app.exception_handler(SubsonicError)
    async def subsonic_error_handler(request: Request, exc: SubsonicError) -> Response:
        """Render protocol errors as a failed envelope."""
        return render(request, SubsonicResponse.failed(exc.code, exc.message))

    @app.exception_handler(MpdsonicError)
    async def backend_error_handler(request: Request, exc: MpdsonicError) -> Response:
        """Log backend failures and hide their details from the client."""
        logger.error("Backend failure serving %s: %s", request.url.path, exc)
        error = GenericError()
        return render(request, SubsonicResponse.failed(error.code, error.message))
