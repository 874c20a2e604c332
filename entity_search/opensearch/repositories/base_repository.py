"""Base repository class for OpenSearch repositories."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from opensearchpy import AsyncOpenSearch

    from entity_search.opensearch.connection import ConnectionManager


def normalize_index_name(name: str) -> str:
    """Lower-case an index name.

    OpenSearch only accepts lower-case index names; every repository applies
    this once, at construction, so all operations use the same name.

    Raises:
        ValueError: If the name is empty
    """
    normalized = name.strip().lower()
    if not normalized:
        raise ValueError("Index name must not be empty")
    return normalized


class BaseRepository[T](ABC):
    """Abstract base class for OpenSearch repositories.

    Repositories handle ALL persistence operations for domain objects.
    They never hold a client themselves: the current client is read from the
    connection manager on every call.

    Type Parameters:
        T: The type of object this repository manages
    """

    def __init__(self, *, connection: ConnectionManager) -> None:
        """Initialize the repository with a connection manager."""
        self._connection = connection

    @property
    def _client(self) -> AsyncOpenSearch:
        return self._connection.client

    @abstractmethod
    async def get(self, *_: Any, **__: Any) -> T | None:
        """Get an object by identifier."""

    @abstractmethod
    async def delete(self, *_: Any, **__: Any) -> Any:
        """Delete an object.

        Returns:
            Deletion response
        """
