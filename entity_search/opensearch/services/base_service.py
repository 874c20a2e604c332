from opensearchpy import AsyncOpenSearch

from entity_search.opensearch.connection import ConnectionManager


class BaseService:
    """Base service for OpenSearch."""

    def __init__(self, *, connection: ConnectionManager) -> None:
        self._connection = connection

    @property
    def _client(self) -> AsyncOpenSearch:
        # Resolved per call so a reconnected client is used
        return self._connection.client
