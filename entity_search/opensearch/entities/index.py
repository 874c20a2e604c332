"""Index domain entity."""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, PrivateAttr

from entity_search.opensearch.entities.base_entity import BaseEntity

if TYPE_CHECKING:
    from entity_search.opensearch.repositories.index import IndexRepository


class Index(BaseModel, BaseEntity):
    """Domain model representing an OpenSearch Index."""

    name: str
    settings: dict[str, Any] = Field(default_factory=dict)
    mappings: dict[str, Any] = Field(default_factory=dict)
    _repository: "IndexRepository" = PrivateAttr()

    def __init__(self, **data: Any) -> None:
        """Initialize Index with repository support."""
        repository = data.pop("_repository", None)
        super().__init__(**data)
        if repository is not None:
            self._repository = repository

    async def delete(self) -> Any:
        """Delete this index.

        Returns:
            Deletion response from OpenSearch
        """
        return await self._repository.delete(index=self.name)

    async def exists(self) -> bool:
        return await self._repository.exists(index=self.name)

    async def refresh(self) -> Any:
        return await self._repository.refresh(index=self.name)

    async def truncate(self) -> Any:
        """Delete all documents but keep the index, its settings and mappings."""
        return await self._repository.truncate(index=self.name)
