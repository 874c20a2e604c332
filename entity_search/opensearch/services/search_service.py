"""Search service for OpenSearch queries."""

from entity_search.interfaces import ISearchService, SearchQuery, SearchResults
from entity_search.opensearch.services.base_service import BaseService


class SearchService(BaseService, ISearchService):
    """Search service for OpenSearch."""

    async def query(self, query: SearchQuery) -> SearchResults:
        """Execute a search query."""
        response = await self._client.search(index=query.index, body=query.body, params=query.params)
        total = response["hits"]["total"]
        return SearchResults(
            hits=response["hits"]["hits"],
            count=total["value"] if isinstance(total, dict) else total,
        )

    async def count(self, query: SearchQuery) -> int:
        """Count the documents matching a query."""
        response = await self._client.count(index=query.index, body=query.body)
        return response["count"]
