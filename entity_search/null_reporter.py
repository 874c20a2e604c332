"""Null reporter for testing purposes, or when no reporter is needed."""

from entity_search.interfaces import ConnectionEvent, IReporter


class NullReporter(IReporter):
    """Null reporter that does nothing."""

    def on_message(self, *messages: str) -> None:
        """Do nothing."""

    def on_connection_event(self, event: ConnectionEvent) -> None:
        """Do nothing."""

    def start_progress(self, total: int) -> None:
        """Do nothing."""

    def stop_progress(self) -> None:
        """Do nothing."""

    def on_progress(self, value: int) -> None:
        """Do nothing."""
