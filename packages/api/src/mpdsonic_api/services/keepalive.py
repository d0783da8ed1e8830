"""Background keepalive pings to the music database."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime, timedelta

from mpdsonic import DatabaseError, MusicDatabase

logger = logging.getLogger(__name__)


class Keepalive:
    """Background task that pings the database at a fixed interval.

    MPD drops idle clients after its connection_timeout. Pinging more often
    than that keeps the shared connection open between requests.
    """

    def __init__(self, database: MusicDatabase, interval_seconds: float) -> None:
        """Initialize keepalive. An interval of 0 disables it."""
        self._database = database
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()
        self._next_ping_at: datetime | None = None

    @property
    def enabled(self) -> bool:
        return self._interval > 0

    @property
    def is_running(self) -> bool:
        """Check if the keepalive task is running."""
        return self._task is not None and not self._task.done()

    @property
    def next_ping_at(self) -> datetime | None:
        return self._next_ping_at

    def start(self) -> None:
        """Start the keepalive task. Does nothing when disabled or running."""
        if not self.enabled or self._task is not None:
            return
        self._stop_event.clear()
        self._next_ping_at = datetime.now(UTC) + timedelta(seconds=self._interval)
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Keepalive started (every %ss)", self._interval)

    async def stop(self) -> None:
        """Signal the loop to stop and wait for it to finish its tick."""
        if self._task is None:
            return
        self._stop_event.set()
        await self._task
        self._task = None
        self._next_ping_at = None
        logger.info("Keepalive stopped")

    async def _run_loop(self) -> None:
        """Main keepalive loop."""
        while not self._stop_event.is_set():
            self._next_ping_at = datetime.now(UTC) + timedelta(seconds=self._interval)

            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
                break  # Stop event was set
            except TimeoutError:
                pass  # Interval elapsed, time to ping

            await self._ping()

    async def _ping(self) -> None:
        try:
            await asyncio.to_thread(self._database.ping)
        except DatabaseError as exc:
            logger.warning("Failed to send keepalive message: %s", exc)
        else:
            logger.debug("Keepalive ping sent")
