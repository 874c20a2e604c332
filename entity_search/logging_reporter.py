"""Reporter that forwards everything to the standard logging module."""

import logging

from entity_search.interfaces import ConnectionEvent, ConnectionState, IReporter
from entity_search.logging import get_logger

logger = get_logger(__name__)

STATE_LEVELS = {
    ConnectionState.HEALTHY: logging.INFO,
    ConnectionState.RECONNECTING: logging.WARNING,
    ConnectionState.FAILED: logging.ERROR,
    ConnectionState.STOPPED: logging.INFO,
}


class LoggingReporter(IReporter):
    """Reporter for services: no console output, connection events become log records."""

    def on_message(self, *messages: str) -> None:
        for message in messages:
            logger.info(message)

    def on_connection_event(self, event: ConnectionEvent) -> None:
        message = f"{event.message}: {event.error}" if event.error else event.message
        logger.log(
            STATE_LEVELS[event.state],
            message,
            extra={"connection_state": event.state.value, "event_timestamp": event.timestamp},
        )

    def start_progress(self, total: int) -> None:
        logger.debug(f"Starting {total} steps")

    def stop_progress(self) -> None:
        """Nothing to tear down."""

    def on_progress(self, value: int) -> None:
        """Progress is not logged."""
