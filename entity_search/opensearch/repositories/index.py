"""Index repository."""

from __future__ import annotations

from typing import Any

from entity_search.logging import get_logger
from entity_search.opensearch.entities.index import Index
from entity_search.opensearch.repositories.base_repository import (
    BaseRepository,
    normalize_index_name,
)

logger = get_logger(__name__)


class IndexRepository(BaseRepository[Index]):
    """Repository for managing Index entities."""

    async def create(
        self,
        *,
        index: str,
        mappings: dict[str, Any] | None = None,
        settings: dict[str, Any] | None = None,
    ) -> Index:
        """Create a new index and return an Index instance.

        Args:
            index: Name of the index
            mappings: Optional mappings, e.g. {"properties": {"name": {"type": "keyword"}}}
            settings: Optional index settings, e.g. {"number_of_shards": 1}

        Returns:
            An Index domain model instance
        """
        name = normalize_index_name(index)
        body: dict[str, Any] = {}
        if settings:
            body["settings"] = settings
        if mappings:
            body["mappings"] = mappings

        logger.info(f"Creating index '{name}'")
        await self._client.indices.create(index=name, body=body or None)

        return Index(
            name=name,
            settings=settings or {},
            mappings=mappings or {},
            _repository=self,
        )

    async def get(self, *, index: str, **_: Any) -> Index:
        """Get index settings and mappings.

        Raises:
            opensearchpy.NotFoundError: If the index does not exist
        """
        name = normalize_index_name(index)
        data = await self._client.indices.get(index=name)
        return self._to_entity(name, data[name])

    async def list(self) -> list[Index]:
        """List all indexes."""
        response = await self._client.indices.get(index="*")
        return [self._to_entity(name, data) for name, data in response.items()]

    async def exists(self, *, index: str) -> bool:
        """Check if an index exists."""
        return await self._client.indices.exists(index=normalize_index_name(index))

    async def refresh(self, *, index: str) -> Any:
        """Make recent writes visible to search and count."""
        return await self._client.indices.refresh(index=normalize_index_name(index))

    async def truncate(self, *, index: str) -> Any:
        """Delete all documents but keep the index structure."""
        name = normalize_index_name(index)
        logger.info(f"Truncating index '{name}'")
        return await self._client.delete_by_query(index=name, body={"query": {"match_all": {}}})

    async def delete(self, *, index: str, **_: Any) -> Any:
        """Delete an index. Missing indexes are ignored."""
        name = normalize_index_name(index)
        logger.info(f"Deleting index '{name}'")
        return await self._client.indices.delete(index=name, ignore=[400, 404])

    def _to_entity(self, name: str, data: dict[str, Any]) -> Index:
        return Index(
            name=name,
            settings=data.get("settings", {}),
            mappings=data.get("mappings", {}),
            _repository=self,
        )
