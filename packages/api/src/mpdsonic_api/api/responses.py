"""Rendering of the Subsonic envelope as XML or JSON."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from mpdsonic_api.schemas.subsonic import XML_NAMESPACE, SubsonicResponse

ROOT_ELEMENT = "subsonic-response"
XML_MEDIA_TYPE = "text/xml; charset=utf-8"


def _attribute(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _fill(element: ET.Element, data: dict[str, Any]) -> None:
    """Copy a dumped model into element: scalars as attributes, rest as children."""
    for key, value in data.items():
        if isinstance(value, dict):
            _fill(ET.SubElement(element, key), value)
        elif isinstance(value, list):
            for item in value:
                _fill(ET.SubElement(element, key), item)
        else:
            element.set(key, _attribute(value))


def to_xml(envelope: SubsonicResponse) -> bytes:
    """Serialize an envelope as a Subsonic XML document."""
    root = ET.Element(ROOT_ELEMENT, {"xmlns": XML_NAMESPACE})
    _fill(root, envelope.model_dump(mode="json", by_alias=True, exclude_none=True))
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def to_json(envelope: SubsonicResponse) -> dict[str, Any]:
    """Serialize an envelope as a Subsonic JSON document."""
    body = envelope.model_dump(mode="json", by_alias=True, exclude_none=True)
    return {ROOT_ELEMENT: body}


def render(request: Request, envelope: SubsonicResponse) -> Response:
    """Render envelope in the format the client asked for with `f`.

    Protocol failures are reported in the body, so the status is always 200.
    """
    params = getattr(request.state, "params", None) or request.query_params
    if params.get("f") == "json":
        return JSONResponse(to_json(envelope))
    return Response(content=to_xml(envelope), media_type=XML_MEDIA_TYPE)
