"""Chunked bulk ingestion."""

import itertools
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from entity_search.exceptions import BulkIngestionError
from entity_search.interfaces import IReporter
from entity_search.logging import get_logger
from entity_search.null_reporter import NullReporter
from entity_search.opensearch.connection import ConnectionManager
from entity_search.opensearch.services.base_service import BaseService

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 10_000

# (document id, document source)
type BulkItem = tuple[str | None, dict[str, Any]]


@dataclass
class BulkSummary:
    """Outcome of a chunked ingestion."""

    chunks: int = 0
    indexed: int = 0
    skipped: int = 0


class BulkService(BaseService):
    """Bulk writes for OpenSearch.

    Chunks are submitted one at a time: a chunk is only sent once the previous
    bulk request has completed. There is no atomicity across chunks, so a
    failure leaves earlier chunks indexed and later chunks unattempted.
    """

    def __init__(self, *, connection: ConnectionManager, reporter: IReporter | None = None) -> None:
        super().__init__(connection=connection)
        self._reporter = reporter or NullReporter()

    async def bulk(self, *, index: str, items: Iterable[BulkItem]) -> dict[str, Any]:
        """Index all items in a single bulk request.

        Returns:
            The raw bulk response; item errors are not checked
        """
        body, skipped = self._create_bulk_body(index=index, items=items)
        if skipped:
            logger.debug(f"Skipped {skipped} items without id")
        if not body:
            return {"took": 0, "errors": False, "items": []}
        return await self._client.bulk(body=body)

    async def index_chunks(
        self,
        *,
        index: str,
        items: Iterable[BulkItem],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        total: int | None = None,
    ) -> BulkSummary:
        """Index items in sequential bulk requests of at most chunk_size operations.

        Items with a None or empty id are skipped. Input order is preserved
        within and across chunks.

        Args:
            index: Target index name
            items: (id, source) pairs
            chunk_size: Maximum number of items per bulk request
            total: Number of items, when known, to size the progress report

        Returns:
            Number of submitted chunks, indexed and skipped items

        Raises:
            ValueError: If chunk_size is not positive
            BulkIngestionError: If a bulk response reports item errors
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        if total is not None:
            self._reporter.start_progress(total=math.ceil(total / chunk_size))

        summary = BulkSummary()
        try:
            for chunk_num, chunk in enumerate(itertools.batched(items, chunk_size), 1):
                body, skipped = self._create_bulk_body(index=index, items=chunk)
                summary.skipped += skipped

                if not body:
                    logger.debug(f"Chunk {chunk_num} has no items with an id, not submitted")
                    self._reporter.on_progress(1)
                    continue

                logger.debug(f"Submitting chunk {chunk_num} ({len(body) // 2} items) to {index}")
                response = await self._client.bulk(body=body)
                self._parse_bulk_errors(response=response, chunk_num=chunk_num)

                summary.chunks += 1
                summary.indexed += len(body) // 2
                self._reporter.on_progress(1)
        finally:
            if total is not None:
                self._reporter.stop_progress()

        logger.info(
            f"Indexed {summary.indexed} documents into {index} in {summary.chunks} chunks "
            f"({summary.skipped} skipped)"
        )
        return summary

    def _create_bulk_body(
        self, *, index: str, items: Iterable[BulkItem]
    ) -> tuple[list[dict[str, Any]], int]:
        """Create bulk body from (id, source) pairs, skipping items without id."""
        body: list[dict[str, Any]] = []
        skipped = 0
        for doc_id, source in items:
            if not doc_id:
                skipped += 1
                continue
            body.append({"index": {"_index": index, "_id": doc_id}})
            body.append(source)
        return body, skipped

    def _parse_bulk_errors(self, *, response: dict[str, Any], chunk_num: int) -> None:
        """Raise if the bulk response reports failed items."""
        if not response.get("errors"):
            return

        errors: dict[str, Any] = {}
        for item in response.get("items", []):
            result = item.get("index", {})
            if "error" not in result:
                continue
            errors.setdefault(result["error"]["type"], {})[result["_id"]] = result["error"]

        if errors:
            error_count = sum(len(by_id) for by_id in errors.values())
            error_msg = f"Chunk {chunk_num} has {error_count} errors ({list(errors.keys())})"
            logger.warning(errors)
            raise BulkIngestionError(error_msg, chunk=chunk_num, errors=errors)
