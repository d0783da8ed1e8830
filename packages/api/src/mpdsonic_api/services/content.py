"""Serve media bytes with HTTP range and conditional request support.

Audio players seek by requesting byte ranges and revalidate cached tracks
with If-Modified-Since. This module answers both from any MediaFile:

- If-Modified-Since not older than the file: 304, no body
- Single "bytes=" range: 206 with Content-Range
- Unsatisfiable or malformed range: 416
- No range, or several ranges: 200 with the whole file
"""

from __future__ import annotations

import logging
import mimetypes
import os
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import formatdate, parsedate_to_datetime

from fastapi import Request, status
from fastapi.responses import Response, StreamingResponse
from mpdsonic import MediaFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class RangeNotSatisfiableError(Exception):
    """Raised when a Range header cannot be served for the file size."""


@dataclass(frozen=True, slots=True)
class ByteRange:
    """Inclusive byte range within a file."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, size: int) -> str:
        return f"bytes {self.start}-{self.end}/{size}"


def guess_content_type(name: str) -> str:
    """Guess a media type from a file name's extension."""
    content_type, _ = mimetypes.guess_type(name)
    return content_type or DEFAULT_CONTENT_TYPE


def parse_range(header: str, size: int) -> list[ByteRange]:
    """Parse a Range header value against a file size.

    Args:
        header: Header value, e.g. "bytes=0-499", "bytes=500-" or "bytes=-500".
        size: Total file size in bytes.

    Returns:
        Satisfiable ranges, clamped to the file size.

    Raises:
        RangeNotSatisfiableError: If the header is malformed or no range
            overlaps the file.
    """
    unit, _, byte_ranges = header.partition("=")
    if unit.strip().lower() != "bytes" or not byte_ranges.strip():
        raise RangeNotSatisfiableError(header)

    ranges: list[ByteRange] = []
    for part in byte_ranges.split(","):
        first, dash, last = part.strip().partition("-")
        if not dash:
            raise RangeNotSatisfiableError(header)
        first, last = first.strip(), last.strip()

        if not first:
            # Suffix range: the final N bytes
            if not last.isdecimal() or int(last) == 0:
                raise RangeNotSatisfiableError(header)
            start = max(size - int(last), 0)
            end = size - 1
        else:
            if not first.isdecimal() or (last and not last.isdecimal()):
                raise RangeNotSatisfiableError(header)
            start = int(first)
            end = min(int(last), size - 1) if last else size - 1
            if last and int(last) < start:
                raise RangeNotSatisfiableError(header)
            if start >= size:
                continue

        ranges.append(ByteRange(start, end))

    if not ranges or size == 0:
        raise RangeNotSatisfiableError(header)
    return ranges


def _parse_http_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _modified_at(media: MediaFile) -> datetime:
    # HTTP dates have second precision
    return datetime.fromtimestamp(int(media.mtime), tz=UTC)


def _not_modified(request: Request, modified: datetime) -> bool:
    if request.method not in ("GET", "HEAD"):
        return False
    since = _parse_http_date(request.headers.get("if-modified-since"))
    return since is not None and modified <= since


def _range_applies(request: Request, modified: datetime) -> bool:
    """Check If-Range: a stale validator means the range must be ignored."""
    if_range = request.headers.get("if-range")
    if if_range is None:
        return True
    validator = _parse_http_date(if_range)
    return validator is not None and validator == modified


def _iter_bytes(media: MediaFile, start: int, length: int) -> Iterator[bytes]:
    """Yield length bytes from start, closing media when done."""
    try:
        media.seek(start, os.SEEK_SET)
        remaining = length
        while remaining > 0:
            chunk = media.read(min(CHUNK_SIZE, remaining))
            if not chunk:
                break
            remaining -= len(chunk)
            yield chunk
    finally:
        media.close()


def serve_content(request: Request, media: MediaFile, name: str) -> Response:
    """Build the response for streaming media to the client.

    Takes ownership of media: it is closed once the response body has been
    sent, or right away when no body is needed.

    Args:
        request: Incoming request, read for Range and conditional headers.
        media: Open media file.
        name: File name used to guess the Content-Type.
    """
    size = media.size
    modified = _modified_at(media)
    headers = {
        "Accept-Ranges": "bytes",
        "Last-Modified": formatdate(modified.timestamp(), usegmt=True),
    }
    content_type = guess_content_type(name)

    if _not_modified(request, modified):
        media.close()
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers=headers)

    range_header = request.headers.get("range")
    if range_header and _range_applies(request, modified):
        try:
            ranges = parse_range(range_header, size)
        except RangeNotSatisfiableError:
            media.close()
            logger.debug("Unsatisfiable range %r for %s", range_header, name)
            return Response(
                status_code=416,
                headers={**headers, "Content-Range": f"bytes */{size}"},
            )

        if len(ranges) == 1:
            byte_range = ranges[0]
            headers["Content-Range"] = byte_range.content_range(size)
            headers["Content-Length"] = str(byte_range.length)
            return StreamingResponse(
                _iter_bytes(media, byte_range.start, byte_range.length),
                status_code=status.HTTP_206_PARTIAL_CONTENT,
                media_type=content_type,
                headers=headers,
            )
        # TODO: answer multi-range requests with multipart/byteranges

    headers["Content-Length"] = str(size)
    return StreamingResponse(
        _iter_bytes(media, 0, size),
        media_type=content_type,
        headers=headers,
    )
