"""Background connection health monitor.

Every tick the monitor probes the current client. When the probe fails the
client is rebuilt from the connection manager's settings and probed again.
Failures never leave the loop: they are reported as connection events and
retried on the next tick, with exponential backoff and jitter while the
cluster stays unreachable.
"""

from __future__ import annotations

import asyncio
import contextlib
import random
from typing import TYPE_CHECKING

from entity_search.interfaces import ConnectionEvent, ConnectionState, IReporter
from entity_search.logging import get_logger

if TYPE_CHECKING:
    from entity_search.opensearch.connection import ConnectionManager

logger = get_logger(__name__)


class ConnectionMonitor:
    """Probe and rebuild the client of a ConnectionManager.

    States: HEALTHY -> (probe fails) -> RECONNECTING -> (rebuild ok) -> HEALTHY.
    A failed rebuild stays in RECONNECTING and is retried on the next tick.
    """

    def __init__(
        self,
        *,
        connection: ConnectionManager,
        reporter: IReporter,
        interval: float = 10.0,
        max_interval: float = 60.0,
        jitter: float = 1.0,
    ) -> None:
        """Initialize the monitor.

        Args:
            connection: Connection manager owning the client handle
            reporter: Sink for connection events
            interval: Delay between probes while healthy, in seconds
            max_interval: Upper bound of the backoff delay, in seconds
            jitter: Maximum random delay added to the backoff, in seconds
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        if max_interval < interval:
            raise ValueError(f"max_interval ({max_interval}) must be >= interval ({interval})")

        self._connection = connection
        self._reporter = reporter
        self._interval = interval
        self._max_interval = max_interval
        self._jitter = jitter
        self._state: ConnectionState | None = None
        self._consecutive_failures = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> ConnectionState | None:
        """Last known state, None before the first probe."""
        return self._state

    @property
    def consecutive_failures(self) -> int:
        """Number of failed rebuilds since the last healthy probe."""
        return self._consecutive_failures

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task[None]:
        """Start the monitor loop as a background task.

        Calling start() on a running monitor returns the existing task.

        Raises:
            RuntimeError: If there is no running event loop
        """
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run(), name="entity-search-connection-monitor")
        return self._task

    async def stop(self) -> None:
        """Cancel the monitor loop and wait for it to finish."""
        if self._task is None:
            return

        task, self._task = self._task, None
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def run(self) -> None:
        """Probe forever, until cancelled."""
        logger.debug(f"Connection monitor started (interval: {self._interval}s)")
        try:
            while True:
                await self.check()
                await asyncio.sleep(self.next_delay())
        finally:
            self._state = ConnectionState.STOPPED
            self._emit(ConnectionState.STOPPED, "OpenSearch connection monitor stopped")

    async def check(self) -> ConnectionState:
        """Run a single probe, rebuilding the client if the probe fails."""
        error = await self._connection.probe()

        if error is None:
            if self._state is not ConnectionState.HEALTHY:
                self._emit(ConnectionState.HEALTHY, "OpenSearch connection successful")
            self._mark_healthy()
            return ConnectionState.HEALTHY

        self._emit(ConnectionState.FAILED, "OpenSearch connection failed", error)
        self._state = ConnectionState.RECONNECTING
        self._emit(ConnectionState.RECONNECTING, "Re-establishing the OpenSearch connection...")

        try:
            await self._connection.reconnect()
            error = await self._connection.probe()
        except Exception as e:
            error = f"{type(e).__name__}: {e}"

        if error is None:
            self._emit(
                ConnectionState.HEALTHY, "OpenSearch connection was successfully re-established"
            )
            self._mark_healthy()
            return ConnectionState.HEALTHY

        self._consecutive_failures += 1
        self._emit(ConnectionState.FAILED, "OpenSearch reconnection failure", error)
        return ConnectionState.RECONNECTING

    def next_delay(self) -> float:
        """Seconds to wait before the next probe."""
        if self._consecutive_failures == 0:
            return self._interval

        attempt_number = self._consecutive_failures - 1
        backoff = min(self._interval * 2**attempt_number, self._max_interval)
        return backoff + random.uniform(0, self._jitter)

    def _mark_healthy(self) -> None:
        self._state = ConnectionState.HEALTHY
        self._consecutive_failures = 0

    def _emit(self, state: ConnectionState, message: str, error: str | None = None) -> None:
        event = ConnectionEvent(state=state, message=message, error=error)
        logger.debug(f"{state.value}: {message}" + (f" ({error})" if error else ""))
        try:
            self._reporter.on_connection_event(event)
        except Exception as e:
            # A broken reporter must not stop the monitor
            logger.warning(f"Connection event reporter failed: {e}")
