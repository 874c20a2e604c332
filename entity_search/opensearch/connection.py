"""Shared, reconnectable OpenSearch client handle."""

from collections.abc import Callable, MutableMapping
from functools import partial
from typing import Any, Self

from opensearchpy import AsyncOpenSearch

from entity_search.interfaces import IReporter
from entity_search.logging import get_logger
from entity_search.logging_reporter import LoggingReporter
from entity_search.opensearch.client import clone_client, create_client
from entity_search.opensearch.monitor import ConnectionMonitor
from entity_search.opensearch.settings import ConnectionSettings

logger = get_logger(__name__)


class ConnectionManager:
    """Owns the current client and everything needed to rebuild it.

    Repositories receive the manager and read ``client`` on every call, so a
    client swapped in by the monitor is picked up by the next operation.
    Calls already in flight on the stale client may fail; they are not retried.
    """

    def __init__(
        self,
        *,
        settings: ConnectionSettings | None = None,
        client: AsyncOpenSearch | None = None,
        client_factory: Callable[[], AsyncOpenSearch] | None = None,
        reporter: IReporter | None = None,
    ) -> None:
        """Initialize the connection manager.

        Args:
            settings: Connection settings used to build (and rebuild) the client
            client: Pre-built client. Without settings or a factory it is rebuilt
                from its own transport configuration.
            client_factory: Callable building a new client, overrides the settings-based factory
            reporter: Sink for connection events (default: LoggingReporter)

        Raises:
            ValueError: If neither settings nor client is provided
        """
        if settings is None and client is None:
            raise ValueError("Either settings or client is required")

        self._settings = settings
        self._reporter = reporter or LoggingReporter()

        if client_factory is None:
            if settings is not None:
                client_factory = partial(create_client, settings)
            else:
                client_factory = partial(clone_client, client)
        self._client_factory: Callable[[], AsyncOpenSearch] = client_factory

        self._client = client if client is not None else self._client_factory()
        self._reconnect_count = 0

        monitor_settings = settings or ConnectionSettings()
        self.monitor = ConnectionMonitor(
            connection=self,
            reporter=self._reporter,
            interval=monitor_settings.monitor_interval,
            max_interval=monitor_settings.monitor_max_interval,
            jitter=monitor_settings.monitor_jitter,
        )

    @property
    def client(self) -> AsyncOpenSearch:
        """The current client."""
        return self._client

    @property
    def settings(self) -> ConnectionSettings | None:
        return self._settings

    @property
    def reporter(self) -> IReporter:
        return self._reporter

    @property
    def reconnect_count(self) -> int:
        """Number of times the client has been rebuilt."""
        return self._reconnect_count

    async def probe(self) -> str | None:
        """Ping the current client.

        Returns:
            None if the cluster answered, otherwise a description of the failure
        """
        try:
            if await self._client.ping():
                return None
            return "ping failed"
        except Exception as e:
            return f"{type(e).__name__}: {e}"

    async def ping(self) -> bool:
        """Liveness check, never raises."""
        return await self.probe() is None

    async def reconnect(self) -> AsyncOpenSearch:
        """Replace the current client with a new one and close the stale one.

        Raises:
            ConnectionRebuildError: If a pre-built client's configuration cannot be read
        """
        stale = self._client
        self._client = self._client_factory()
        self._reconnect_count += 1
        logger.info(f"OpenSearch client rebuilt (reconnects: {self._reconnect_count})")

        try:
            await stale.close()
        except Exception as e:
            logger.warning(f"Failed to close stale OpenSearch client: {e}")

        return self._client

    def start_monitor(self) -> None:
        """Start the background connection monitor (no-op if already running)."""
        self.monitor.start()

    async def stop_monitor(self) -> None:
        await self.monitor.stop()

    async def close(self) -> None:
        """Stop the monitor and close the current client."""
        await self.monitor.stop()
        await self._client.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def register_entity_search(
    services: MutableMapping[Any, Any] | None,
    target: ConnectionSettings | AsyncOpenSearch | None,
    *,
    reporter: IReporter | None = None,
    start_monitor: bool = True,
) -> MutableMapping[Any, Any]:
    """Register a shared ConnectionManager in a service registry.

    The manager is stored under the ``ConnectionManager`` key and its connection
    monitor is started. Must be called from a running event loop when
    ``start_monitor`` is True.

    Args:
        services: The host application's service registry
        target: Connection settings, or a pre-built AsyncOpenSearch client
        reporter: Sink for connection events
        start_monitor: Whether to start the connection monitor

    Returns:
        The same registry, for chaining

    Raises:
        ValueError: If services or target is None
    """
    if services is None:
        raise ValueError("services must not be None")
    if target is None:
        raise ValueError("target must not be None")

    if isinstance(target, ConnectionSettings):
        manager = ConnectionManager(settings=target, reporter=reporter)
    else:
        manager = ConnectionManager(client=target, reporter=reporter)

    services[ConnectionManager] = manager

    if start_monitor:
        manager.start_monitor()

    return services
