import asyncio
import sys

from apps.cli.utils import CONNECTION_ARGUMENTS, build_term_filter, parse_sort
from entity_search.console_reporter import ConsoleReporter
from entity_search.interfaces import IReporter
from entity_search.opensearch.connection import ConnectionManager
from entity_search.opensearch.entities import Document, Page
from entity_search.opensearch.repositories import EntityRepository
from entity_search.opensearch.services import Sort
from entity_search.opensearch.settings import ConnectionSettings
from entity_search.utils import get_connection_settings

DEFINITION = {
    "name": "search",
    "description": "Page through the documents of an index",
    "arguments": [
        *CONNECTION_ARGUMENTS,
        {
            "name": "filter-field",
            "type": str,
            "required": False,
            "help": "Field to filter on (exact match on its keyword sub-field)",
        },
        {
            "name": "filter-value",
            "type": str,
            "required": False,
            "help": "Value the filter field must match",
        },
        {
            "name": "index",
            "type": str,
            "required": True,
            "help": "Index name to search",
        },
        {
            "name": "page",
            "type": int,
            "required": False,
            "default": 1,
            "help": "Page number, starting at 1 (default: 1)",
        },
        {
            "name": "size",
            "type": int,
            "required": False,
            "default": 10,
            "help": "Number of documents per page (default: 10)",
        },
        {
            "name": "sort",
            "type": str,
            "nargs": "*",
            "required": False,
            "help": "Sort fields as field[:asc|desc], applied in order",
        },
    ],
}


async def search(
    *,
    filter_field: str | None,
    filter_value: str | None,
    index: str,
    page: int,
    reporter: IReporter,
    settings: ConnectionSettings,
    size: int,
    sort: list[Sort],
) -> Page[Document]:
    async with ConnectionManager(settings=settings, reporter=reporter) as connection:
        repository = EntityRepository(
            connection=connection,
            index=index,
            document_type=Document,
        )
        return await repository.paginate(
            page,
            size,
            filter=build_term_filter(filter_field, filter_value),
            sort=sort,
        )


def main(
    *,
    assume_role: str | None = None,
    filter_field: str | None = None,
    filter_value: str | None = None,
    index: str,
    opensearch_host: str | None = None,
    opensearch_port: int | None = None,
    page: int = 1,
    profile: str | None = None,
    region: str | None = None,
    size: int = 10,
    sort: list[str] | None = None,
) -> None:
    """
    Main entry point for the search command.

    Args:
        assume_role: AWS role to assume for OpenSearch operations
        filter_field: Field to filter on
        filter_value: Value the filter field must match
        index: Index name to search
        opensearch_host: OpenSearch host
        opensearch_port: OpenSearch port
        page: Page number, starting at 1
        profile: AWS profile to use
        region: AWS region
        size: Number of documents per page
        sort: Sort fields as field[:asc|desc]
    """
    reporter = ConsoleReporter()

    if (filter_field is None) != (filter_value is None):
        reporter.on_message("Error: --filter-field and --filter-value must be used together")
        sys.exit(1)

    try:
        sort_clauses = parse_sort(sort)
    except ValueError as e:
        reporter.on_message(f"Error: {e}")
        sys.exit(1)

    settings = get_connection_settings(
        host=opensearch_host,
        port=opensearch_port,
        profile=profile,
        assume_role=assume_role,
        region=region,
    )

    result = asyncio.run(
        search(
            filter_field=filter_field,
            filter_value=filter_value,
            index=index,
            page=page,
            reporter=reporter,
            settings=settings,
            size=size,
            sort=sort_clauses,
        )
    )

    reporter.on_message(
        f"Page {result.page}/{result.pages_count} "
        f"({len(result.items)} of {result.total_count} documents)"
    )
    for item in result.items:
        reporter.on_message(item.model_dump_json())
