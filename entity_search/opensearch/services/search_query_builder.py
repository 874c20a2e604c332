"""Query builder for OpenSearch queries."""

from collections.abc import Iterable
from enum import Enum
from typing import Any, Self

from entity_search.interfaces import SearchQuery


class SortOrder(Enum):
    """Sort direction of a field sort clause."""

    ASC = "asc"
    DESC = "desc"


# (field, direction) pair; the direction may also be given as "asc" / "desc"
type Sort = tuple[str, SortOrder | str]


class SearchQueryBuilder:
    """Search query builder for OpenSearch."""

    def __init__(self, index: str) -> None:
        """Initialize SearchQueryBuilder with an index name."""
        self._exclude_fields: list[str] = []
        self._filters: list[dict[str, Any]] = []
        self._from: int | None = None
        self._index = index
        self._query: dict[str, Any] = {"match_all": {}}
        self._size: int | None = None
        self._sort: list[dict[str, Any]] = []

    def query(self, value: dict[str, Any] | None) -> Self:
        """Use a raw query DSL clause. None keeps match_all."""
        if value is not None:
            self._query = value
        return self

    def add_filter(self, value: dict[str, Any]) -> Self:
        """Add a single filter to the query."""
        self.add_filters([value])
        return self

    def add_filters(self, values: list[dict[str, Any]]) -> Self:
        """Add multiple filters to the query."""
        self._filters.extend(values)
        return self

    def match(self, *, field: str, value: str) -> Self:
        """Match a field to a query."""
        self._query = {"match": {field: value}}
        return self

    def match_exactly(self, *, field: str, value: str) -> Self:
        """Match a field to a query exactly."""
        self._query = {"term": {f"{field}.keyword": value}}
        return self

    def sort_by(self, field: str, order: SortOrder | str = SortOrder.ASC) -> Self:
        """Append a field sort clause. Clauses keep the order they are added in."""
        if not field:
            raise ValueError("Sort field must not be empty")
        if isinstance(order, str):
            order = SortOrder(order.lower())
        self._sort.append({field: {"order": order.value}})
        return self

    def sort(self, clauses: Iterable[Sort] | None) -> Self:
        """Append several (field, order) sort clauses."""
        for field, order in clauses or []:
            self.sort_by(field, order)
        return self

    def paginate(self, *, offset: int, size: int) -> Self:
        """Return the window [offset, offset + size) of the results."""
        if offset < 0:
            raise ValueError("offset must be >= 0")
        self._from = offset
        self._size = size
        return self

    def exclude_fields(self, fields: list[str]) -> Self:
        """Exclude fields from the query."""
        self._exclude_fields.extend(fields)
        return self

    def limit_results(self, size: int) -> Self:
        """Limit the number of results."""
        self._size = size
        return self

    def build_query(self) -> dict[str, Any]:
        """Build the query clause shared by search and count requests."""
        if len(self._filters) > 0:
            return {
                "bool": {
                    "must": [self._query],
                    "filter": self._filters,
                }
            }
        return self._query

    def build(self) -> SearchQuery:
        """Build the search request."""
        body: dict[str, Any] = {"query": self.build_query()}

        if len(self._exclude_fields) > 0:
            body["_source"] = {"excludes": self._exclude_fields}

        if self._from is not None:
            body["from"] = self._from

        if self._size is not None:
            body["size"] = self._size

        if len(self._sort) > 0:
            body["sort"] = self._sort

        return SearchQuery(index=self._index, body=body)

    def build_count(self) -> SearchQuery:
        """Build a count request for the same documents the search would match."""
        return SearchQuery(index=self._index, body={"query": self.build_query()})
