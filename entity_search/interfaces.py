"""Type definitions and interfaces for the entity search library."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ConnectionState(Enum):
    """Connection states reported by the connection monitor."""

    HEALTHY = "healthy"
    RECONNECTING = "reconnecting"
    FAILED = "failed"
    STOPPED = "stopped"


@dataclass(frozen=True)
class ConnectionEvent:
    """A connection state transition."""

    state: ConnectionState
    message: str
    error: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class IReporter(ABC):
    """Reporter interface."""

    @abstractmethod
    def on_message(self, *messages: str) -> None:
        """On message callback."""

    @abstractmethod
    def on_connection_event(self, event: ConnectionEvent) -> None:
        """On connection state change callback."""

    @abstractmethod
    def start_progress(self, total: int) -> None:
        """On start progress callback."""

    @abstractmethod
    def stop_progress(self) -> None:
        """On stop progress callback."""

    @abstractmethod
    def on_progress(self, value: int) -> None:
        """On progress callback."""


@dataclass
class SearchResults:
    """Search result."""

    hits: list[dict[str, Any]]
    count: int


@dataclass
class SearchQuery:
    """Search query."""

    index: str
    body: dict[str, Any]
    params: dict[str, Any] = field(default_factory=dict)


class ISearchService(ABC):
    """Search service interface."""

    @abstractmethod
    async def query(self, query: SearchQuery) -> SearchResults:
        """Search for documents matching the query."""

    @abstractmethod
    async def count(self, query: SearchQuery) -> int:
        """Count documents matching the query."""
