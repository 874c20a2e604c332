"""OpenSearch service classes for high-level operations."""

from entity_search.opensearch.services.base_service import BaseService
from entity_search.opensearch.services.bulk_service import BulkItem, BulkService, BulkSummary
from entity_search.opensearch.services.search_query_builder import (
    SearchQueryBuilder,
    Sort,
    SortOrder,
)
from entity_search.opensearch.services.search_service import SearchService

__all__ = [
    "BaseService",
    "BulkItem",
    "BulkService",
    "BulkSummary",
    "SearchQueryBuilder",
    "SearchService",
    "Sort",
    "SortOrder",
]
