"""Generic document repository."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Iterator, Mapping, Sized
from typing import TYPE_CHECKING, Any

from opensearchpy.exceptions import ConnectionError as OpenSearchConnectionError
from opensearchpy.exceptions import NotFoundError, TransportError
from pydantic import BaseModel

from entity_search.logging import get_logger
from entity_search.opensearch.entities.page import Page
from entity_search.opensearch.repositories.base_repository import (
    BaseRepository,
    normalize_index_name,
)
from entity_search.opensearch.services.bulk_service import (
    DEFAULT_CHUNK_SIZE,
    BulkItem,
    BulkService,
    BulkSummary,
)
from entity_search.opensearch.services.search_query_builder import SearchQueryBuilder, Sort
from entity_search.opensearch.services.search_service import SearchService

if TYPE_CHECKING:
    from entity_search.interfaces import IReporter
    from entity_search.opensearch.connection import ConnectionManager

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 5


class EntityRepository[T: BaseModel](BaseRepository[T]):
    """CRUD, bulk ingestion, count and pagination for one document type in one index.

    Documents are pydantic models. Ids are always supplied by the caller, either
    explicitly or through the ``key`` extractor; the repository never generates them.
    Client responses and errors are returned unchanged.
    """

    def __init__(
        self,
        *,
        connection: ConnectionManager,
        index: str,
        document_type: type[T],
        key: Callable[[T], str | None] | None = None,
        reporter: IReporter | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            connection: Shared connection manager
            index: Index name, lower-cased before use
            document_type: Pydantic model used to decode documents
            key: Extracts the id of a document, for add_range/bulk on plain iterables
            reporter: Receives bulk ingestion progress
        """
        super().__init__(connection=connection)
        self._index = normalize_index_name(index)
        self._document_type = document_type
        self._key = key
        self._search = SearchService(connection=connection)
        self._bulk = BulkService(connection=connection, reporter=reporter)

    @property
    def index(self) -> str:
        return self._index

    async def get(self, id: str, *, strict: bool = False) -> T | None:
        """Get a document by id.

        Missing documents return None. So do invalid responses (any other HTTP
        error status) unless ``strict`` is set, in which case they are raised.
        Transport failures without a response (connection refused, timeout)
        are always raised.
        """
        try:
            response = await self._client.get(index=self._index, id=id)
        except NotFoundError:
            return None
        except OpenSearchConnectionError:
            raise
        except TransportError as e:
            if strict:
                raise
            logger.warning(f"Invalid response getting '{id}' from {self._index}: {e}")
            return None

        if not response.get("found"):
            return None
        if "_source" not in response:
            logger.warning(f"Document '{id}' in {self._index} has no _source")
            return None
        return self._to_entity(response["_source"])

    async def add(self, document: T, id: str) -> dict[str, Any]:
        """Index a document at the given id, replacing any existing one."""
        return await self._client.index(index=self._index, id=id, body=self._to_source(document))

    async def add_range(
        self,
        entities: Mapping[str, T] | Iterable[T],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> BulkSummary:
        """Index many documents in sequential bulk requests of chunk_size documents.

        Args:
            entities: Documents keyed by id, or documents whose id is given by ``key``
            chunk_size: Maximum number of documents per bulk request

        Raises:
            ValueError: If entities is not a mapping and the repository has no key
            BulkIngestionError: If a chunk reports item errors; later chunks are not sent
        """
        total = len(entities) if isinstance(entities, Sized) else None
        return await self._bulk.index_chunks(
            index=self._index,
            items=self._to_bulk_items(entities),
            chunk_size=chunk_size,
            total=total,
        )

    async def bulk(self, entities: Mapping[str, T] | Iterable[T]) -> dict[str, Any]:
        """Index all documents in a single bulk request and return the raw response."""
        return await self._bulk.bulk(index=self._index, items=self._to_bulk_items(entities))

    async def update(self, document: T, id: str) -> dict[str, Any]:
        """Merge the non-None fields of document into the stored document."""
        return await self._client.update(
            index=self._index,
            id=id,
            body={"doc": document.model_dump(mode="json", exclude_none=True)},
        )

    async def delete(self, id: str) -> dict[str, Any]:
        """Delete a document by id."""
        return await self._client.delete(index=self._index, id=id)

    async def delete_by_query(self, filter: dict[str, Any]) -> dict[str, Any]:
        """Delete every document matching a query DSL clause."""
        return await self._client.delete_by_query(index=self._index, body={"query": filter})

    async def count(self, filter: dict[str, Any] | None = None) -> int:
        """Count documents, optionally only those matching a query DSL clause."""
        query = SearchQueryBuilder(self._index).query(filter).build_count()
        return await self._search.count(query)

    async def paginate(
        self,
        page: int,
        size: int,
        filter: dict[str, Any] | None = None,
        sort: Iterable[Sort] | None = None,
    ) -> Page[T]:
        """Return one page of documents.

        ``page`` below 1 is raised to 1 and ``size`` of 0 or less falls back
        to 5. Count and search run concurrently against the same query.
        ``from + size`` is not checked against the index's result window:
        deep pages can come back empty while total_count is still set.

        Args:
            page: 1-based page number
            size: Page size
            filter: Query DSL clause, match_all when None
            sort: (field, order) pairs, applied in order; engine default when empty
        """
        page = max(page, 1)
        size = size if size > 0 else DEFAULT_PAGE_SIZE

        builder = (
            SearchQueryBuilder(self._index)
            .query(filter)
            .sort(sort)
            .paginate(offset=(page - 1) * size, size=size)
        )

        total_count, results = await asyncio.gather(
            self._search.count(builder.build_count()),
            self._search.query(builder.build()),
        )

        return Page(
            page=page,
            size=size,
            total_count=total_count,
            items=[self._to_entity(hit["_source"]) for hit in results.hits],
        )

    def _to_bulk_items(self, entities: Mapping[str, T] | Iterable[T]) -> Iterator[BulkItem]:
        if isinstance(entities, Mapping):
            return ((id, self._to_source(document)) for id, document in entities.items())

        if self._key is None:
            raise ValueError(
                f"Repository for '{self._index}' has no key extractor; pass documents keyed by id"
            )
        key = self._key
        return ((key(document), self._to_source(document)) for document in entities)

    def _to_entity(self, source: dict[str, Any]) -> T:
        return self._document_type.model_validate(source)

    def _to_source(self, document: T) -> dict[str, Any]:
        return document.model_dump(mode="json")
