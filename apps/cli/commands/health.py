import asyncio
import sys

from apps.cli.utils import CONNECTION_ARGUMENTS
from entity_search.console_reporter import ConsoleReporter
from entity_search.interfaces import ConnectionEvent, ConnectionState, IReporter
from entity_search.opensearch.connection import ConnectionManager
from entity_search.opensearch.settings import ConnectionSettings
from entity_search.utils import get_connection_settings

DEFINITION = {
    "name": "health",
    "description": "Check the OpenSearch connection, or watch it with the connection monitor",
    "arguments": [
        *CONNECTION_ARGUMENTS,
        {
            "name": "watch",
            "type": float,
            "nargs": "?",
            "const": 10.0,
            "required": False,
            "help": "Keep probing every WATCH seconds, reconnecting on failure (default: 10)",
        },
    ],
}


async def check_health(*, reporter: IReporter, settings: ConnectionSettings) -> bool:
    """Probe the cluster once and report the result as a connection event."""
    async with ConnectionManager(settings=settings, reporter=reporter) as connection:
        error = await connection.probe()

    if error is None:
        reporter.on_connection_event(
            ConnectionEvent(state=ConnectionState.HEALTHY, message="OpenSearch connection successful")
        )
        return True

    reporter.on_connection_event(
        ConnectionEvent(
            state=ConnectionState.FAILED, message="OpenSearch connection failed", error=error
        )
    )
    return False


async def watch_health(*, reporter: IReporter, settings: ConnectionSettings) -> None:
    """Run the connection monitor until interrupted."""
    async with ConnectionManager(settings=settings, reporter=reporter) as connection:
        await connection.monitor.start()


def main(
    *,
    assume_role: str | None = None,
    opensearch_host: str | None = None,
    opensearch_port: int | None = None,
    profile: str | None = None,
    region: str | None = None,
    watch: float | None = None,
) -> None:
    """
    Main entry point for the health command.

    Args:
        assume_role: AWS role to assume for OpenSearch operations
        opensearch_host: OpenSearch host
        opensearch_port: OpenSearch port
        profile: AWS profile to use
        region: AWS region
        watch: Probe interval in seconds; probe once when not set
    """
    reporter = ConsoleReporter()

    overrides = {}
    if watch is not None:
        overrides = {"monitor_interval": watch, "monitor_max_interval": max(watch, 60.0)}

    settings = get_connection_settings(
        host=opensearch_host,
        port=opensearch_port,
        profile=profile,
        assume_role=assume_role,
        region=region,
        **overrides,
    )

    if watch is not None:
        asyncio.run(watch_health(reporter=reporter, settings=settings))
        return

    if not asyncio.run(check_health(reporter=reporter, settings=settings)):
        sys.exit(1)
