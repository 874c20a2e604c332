"""Console reporter for CLI commands."""

from typing import NoReturn

from tqdm import tqdm

from entity_search.interfaces import ConnectionEvent, ConnectionState, IReporter

RESET = "\033[0m"

STATE_COLORS = {
    ConnectionState.HEALTHY: "\033[32m",
    ConnectionState.RECONNECTING: "\033[33m",
    ConnectionState.FAILED: "\033[31m",
    ConnectionState.STOPPED: "",
}


class ConsoleReporter(IReporter):
    """Console reporter that prints messages to stdout and updates a progress bar."""

    def __init__(self, *, color: bool = True) -> None:
        """Initialize the reporter."""
        self._color = color
        self._progress_bar: tqdm[NoReturn] | None = None

    def on_message(self, *messages: str) -> None:
        """Print message to console."""
        for message in messages:
            tqdm.write(message)

    def on_connection_event(self, event: ConnectionEvent) -> None:
        """Print a connection state change, prefixed with its UTC timestamp."""
        line = f"{event.timestamp:%Y-%m-%d %H:%M:%SZ} {event.message}"
        if event.error:
            line = f"{line}: {event.error}"

        color = STATE_COLORS[event.state] if self._color else ""
        tqdm.write(f"{color}{line}{RESET}" if color else line)

    def start_progress(self, total: int) -> None:
        """Start progress bar."""
        self._progress_bar = tqdm(total=total)

    def stop_progress(self) -> None:
        """Stop progress bar."""
        if self._progress_bar:
            self._progress_bar.close()
            self._progress_bar = None

    def on_progress(self, value: int) -> None:
        """Update progress bar."""
        if self._progress_bar:
            self._progress_bar.update(value)
