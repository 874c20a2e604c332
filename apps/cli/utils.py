"""
Utility functions for the entity search CLI.
"""

from collections.abc import Callable
from typing import Any

from entity_search.opensearch.entities import Document
from entity_search.opensearch.services import Sort, SortOrder

CONNECTION_ARGUMENTS: list[dict[str, Any]] = [
    {
        "name": "assume-role",
        "type": str,
        "required": False,
        "help": "AWS role to assume for OpenSearch operations",
    },
    {
        "name": "opensearch-host",
        "type": str,
        "required": False,
        "help": "OpenSearch host (default: $ENTITY_SEARCH_HOST or localhost)",
    },
    {
        "name": "opensearch-port",
        "type": int,
        "required": False,
        "help": "OpenSearch port (default: $ENTITY_SEARCH_PORT or 9200)",
    },
    {
        "name": "profile",
        "type": str,
        "required": False,
        "help": "AWS profile to use",
    },
    {
        "name": "region",
        "type": str,
        "required": False,
        "help": "AWS region (default: $ENTITY_SEARCH_REGION or us-east-1)",
    },
]


def parse_sort(values: list[str] | None) -> list[Sort]:
    """
    Parse "field" / "field:asc" / "field:desc" arguments into sort clauses.

    Raises:
        ValueError: If a direction is not asc or desc
    """
    clauses: list[Sort] = []
    for value in values or []:
        field, _, order = value.partition(":")
        if not field:
            raise ValueError(f"Invalid sort argument: {value!r}")
        try:
            clauses.append((field, SortOrder(order.lower() or "asc")))
        except ValueError:
            raise ValueError(f"Invalid sort direction in {value!r}, use asc or desc") from None
    return clauses


def build_term_filter(field: str | None, value: str | None) -> dict[str, Any] | None:
    """Build an exact-match filter on the keyword sub-field, or None."""
    if not field or value is None:
        return None
    return {"term": {f"{field}.keyword": value}}


def column_key(column: str) -> Callable[[Document], str | None]:
    """Id extractor reading the id from a document field. Missing or empty ids give None."""

    def key(document: Document) -> str | None:
        value = getattr(document, column, None)
        if value is None or value == "":
            return None
        # pandas turns integer columns with gaps into floats
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value)

    return key
