"""Custom exceptions for mpdsonic.

Backend and filesystem adapters translate their library-specific errors into
these types so callers only ever handle one hierarchy.
"""


class MpdsonicError(Exception):
    """Base exception for mpdsonic."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DatabaseError(MpdsonicError):
    """Music database request failed.

    Raised when listing files, reading attributes or pinging the backend
    fails for any reason (connection lost, protocol error, timeout).
    """


class AttributesNotFoundError(DatabaseError):
    """No attributes exist for the requested path.

    Raised by attribute lookups when the backend does not know the path.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No attributes found for {path!r}")


class MediaOpenError(MpdsonicError):
    """Media file could not be opened for streaming."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        message = f"Cannot open {path!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
