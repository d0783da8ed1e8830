"""MPD database client wrapper."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from mpd import CommandError, MPDClient, MPDError

from mpdsonic.exceptions import AttributesNotFoundError, DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# MPD ACK code for "no such file or directory"
_ACK_ERROR_NO_EXIST = 50


class AttributeSource(Protocol):
    """Anything that can look up per-file tag attributes."""

    def read_attributes(self, path: str) -> dict[str, str]:
        """Return attributes for path, keyed by tag name."""
        ...


class MusicDatabase(AttributeSource, Protocol):
    """Protocol for music database backends.

    This protocol enables dependency injection and testing.
    Implement it to serve the virtual filesystem from another source.
    """

    def list_files(self) -> list[str]:
        """List every file path, in a stable sorted order."""
        ...

    def ping(self) -> None:
        """Check the backend is alive. Raises DatabaseError if not."""
        ...

    def close(self) -> None:
        """Release backend connections. Safe to call more than once."""
        ...


def _first_value(value: Any) -> str:
    # Repeated tags come back as a list
    if isinstance(value, list):
        return str(value[0]) if value else ""
    return str(value)


def _is_no_exist(exc: CommandError) -> bool:
    return str(exc).startswith(f"[{_ACK_ERROR_NO_EXIST}@")


class MPDDatabase:
    """Production music database backed by python-mpd2.

    MPDClient is not thread-safe, so every command holds a lock for its
    duration. A lost connection is dropped and re-established on the next
    command; the failing command itself is not retried.
    Implements MusicDatabase.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6600,
        password: str | None = None,
        timeout: float | None = 10.0,
        client: MPDClient | None = None,
    ) -> None:
        """Initialize the database.

        Args:
            host: MPD host name, or a UNIX socket path.
            port: MPD TCP port. Ignored for UNIX sockets.
            password: Optional MPD password.
            timeout: Socket timeout in seconds for every command.
            client: Optional MPDClient instance. Creates one if not provided.
        """
        self._host = host
        self._port = port
        self._password = password
        self._client = client or MPDClient()
        self._client.timeout = timeout
        self._lock = threading.Lock()
        self._connected = False

    @property
    def address(self) -> str:
        if self._host.startswith("/"):
            return f"unix://{self._host}"
        return f"tcp://{self._host}:{self._port}"

    def connect(self) -> None:
        """Connect to MPD. Raises DatabaseError on failure."""
        with self._lock:
            if not self._connected:
                self._connect()

    def close(self) -> None:
        """Disconnect from MPD, ignoring errors on an already broken link."""
        with self._lock:
            if not self._connected:
                return
            try:
                self._client.close()
            except (MPDError, OSError):
                pass
            self._drop()
        logger.debug("Disconnected from MPD at %s", self.address)

    def list_files(self) -> list[str]:
        try:
            result = self._call(lambda client: client.list("file"))
        except CommandError as exc:
            raise DatabaseError(f"list failed: {exc}") from exc
        paths: list[str] = []
        for item in result:
            # python-mpd2 returns dicts for newer MPD versions, strings before
            if isinstance(item, dict):
                path = item.get("file")
                if path:
                    paths.append(_first_value(path))
            elif item:
                paths.append(str(item))
        return sorted(paths)

    def read_attributes(self, path: str) -> dict[str, str]:
        try:
            attrs = self._call(lambda client: client.readcomments(path))
        except CommandError as exc:
            if _is_no_exist(exc):
                raise AttributesNotFoundError(path) from exc
            raise DatabaseError(f"readcomments failed for {path!r}: {exc}") from exc
        return {str(key): _first_value(value) for key, value in attrs.items()}

    def ping(self) -> None:
        try:
            self._call(lambda client: client.ping())
        except CommandError as exc:
            raise DatabaseError(f"ping failed: {exc}") from exc

    def _connect(self) -> None:
        try:
            self._client.connect(self._host, self._port)
            if self._password:
                self._client.password(self._password)
        except (MPDError, OSError) as exc:
            self._drop()
            message = f"Cannot connect to MPD at {self.address}: {exc}"
            raise DatabaseError(message) from exc
        self._connected = True
        logger.info("Connected to MPD at %s", self.address)

    def _drop(self) -> None:
        self._connected = False
        try:
            self._client.disconnect()
        except (MPDError, OSError):
            pass

    def _call(self, command: Callable[[MPDClient], T]) -> T:
        """Run one command under the lock.

        CommandError (an ACK from MPD) is re-raised untouched so callers can
        inspect it; connection-level failures become DatabaseError.
        """
        with self._lock:
            if not self._connected:
                self._connect()
            try:
                return command(self._client)
            except CommandError:
                raise
            except (MPDError, OSError) as exc:
                logger.warning("MPD connection lost, reconnecting next call: %s", exc)
                self._drop()
                raise DatabaseError(f"MPD request failed: {exc}") from exc
