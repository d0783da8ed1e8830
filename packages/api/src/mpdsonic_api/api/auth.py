"""Request parameters and Subsonic authentication.

Every request must carry u (user), c (client) and v (protocol version), plus
one proof of the password:

- p: the password itself, optionally hex-encoded as "enc:<hex>"
- t and s: a token and the salt it was made with, see verify_token()

Parameters come from the query string, and for POST also from a form body.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import logging
import re
from collections.abc import Mapping

from fastapi import Request

from mpdsonic_api.api.exceptions import (
    GenericError,
    MissingParameterError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

_ENCODED_PREFIX = "enc:"
_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
_INTEGER = re.compile(r"[+-]?[0-9]+")

REQUIRED_PARAMETERS = ("u", "c", "v")


async def read_params(request: Request) -> dict[str, str]:
    """Collect request parameters, query string first.

    The result is cached on request.state so handlers and renderers see the
    same values.
    """
    cached = getattr(request.state, "params", None)
    if cached is not None:
        return cached

    params = dict(request.query_params)
    content_type = request.headers.get("content-type", "")
    if request.method == "POST" and content_type.startswith(_FORM_TYPES):
        form = await request.form()
        for key, value in form.items():
            if isinstance(value, str):
                params.setdefault(key, value)

    request.state.params = params
    return params


def decode_password(password: str) -> str:
    """Decode an "enc:"-prefixed hex password. Invalid hex gives ""."""
    if not password.startswith(_ENCODED_PREFIX):
        return password
    try:
        # Whitespace inside the hex is invalid
        raw = binascii.unhexlify(password.removeprefix(_ENCODED_PREFIX))
    except (binascii.Error, ValueError):
        return ""
    return raw.decode("utf-8", errors="replace")


def _same(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def verify_token(password: str, salt: str, token: str) -> bool:
    """Check a token against the configured password.

    The token is the lowercase hex MD5 digest of password + salt.
    """
    expected = hashlib.md5((password + salt).encode("utf-8")).hexdigest()
    return _same(expected, token.lower())


def authenticate(params: Mapping[str, str], user: str, password: str) -> None:
    """Validate request credentials.

    Raises:
        MissingParameterError: If u, c or v is absent, or no password proof
            (p, or t with s) is given.
        UnauthorizedError: If the user or the password proof is wrong.
    """
    for name in REQUIRED_PARAMETERS:
        if not params.get(name):
            raise MissingParameterError(name)

    token, salt = params.get("t"), params.get("s")
    if token and salt:
        valid = verify_token(password, salt, token)
    else:
        candidate = decode_password(params.get("p", ""))
        if not candidate:
            raise MissingParameterError("p")
        valid = _same(candidate, password)

    if not _same(params["u"], user) or not valid:
        logger.info(
            "Rejected credentials for user %r (client %r)", params["u"], params["c"]
        )
        raise UnauthorizedError()


def parse_id(params: Mapping[str, str], name: str = "id") -> int:
    """Read a base-10 integer id parameter.

    Raises:
        MissingParameterError: If the parameter is absent.
        GenericError: If it is not an integer.
    """
    raw = params.get(name)
    if not raw:
        raise MissingParameterError(name)
    if not _INTEGER.fullmatch(raw):
        raise GenericError(f"Invalid {name}: {raw!r}")
    return int(raw)
