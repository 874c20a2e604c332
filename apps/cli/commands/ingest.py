import asyncio
import sys

from apps.cli.utils import CONNECTION_ARGUMENTS, column_key
from entity_search.console_reporter import ConsoleReporter
from entity_search.data_reader import DataReader
from entity_search.interfaces import IReporter
from entity_search.opensearch.connection import ConnectionManager
from entity_search.opensearch.entities import Document
from entity_search.opensearch.repositories import EntityRepository, IndexRepository
from entity_search.opensearch.services import BulkSummary
from entity_search.opensearch.settings import ConnectionSettings
from entity_search.utils import get_connection_settings

DEFINITION = {
    "name": "ingest",
    "description": "Ingest data from file",
    "arguments": [
        *CONNECTION_ARGUMENTS,
        {
            "name": "chunk-size",
            "type": int,
            "required": False,
            "help": "Documents per bulk request (default: $ENTITY_SEARCH_BULK_CHUNK_SIZE or 10000)",
        },
        {
            "name": "delete",
            "action": "store_true",
            "required": False,
            "help": "Delete all documents from the index before ingestion",
        },
        {
            "name": "file",
            "type": str,
            "required": True,
            "help": "Excel (.xlsx, .xls), CSV (.csv) or JSON Lines (.jsonl) file to import",
        },
        {
            "name": "id-column",
            "type": str,
            "required": True,
            "help": "Column holding the document id; rows without an id are skipped",
        },
        {
            "name": "index",
            "type": str,
            "required": True,
            "help": "Index name to use",
        },
        {
            "name": "limit-rows",
            "type": int,
            "required": False,
            "help": "Limit the number of rows to process (after skipping rows)",
        },
        {
            "name": "skip-rows",
            "type": int,
            "required": False,
            "default": 0,
            "help": "Number of rows to skip at the beginning (for resuming ingestion)",
        },
    ],
}


async def ingest(
    *,
    chunk_size: int,
    delete: bool,
    documents: list[Document],
    id_column: str,
    index: str,
    reporter: IReporter,
    settings: ConnectionSettings,
) -> BulkSummary:
    """Index documents into an OpenSearch index in sequential chunks."""
    async with ConnectionManager(settings=settings, reporter=reporter) as connection:
        if delete:
            await IndexRepository(connection=connection).truncate(index=index)
            reporter.on_message(f"Deleted all documents from index {index}")

        repository = EntityRepository(
            connection=connection,
            index=index,
            document_type=Document,
            key=column_key(id_column),
            reporter=reporter,
        )
        return await repository.add_range(documents, chunk_size=chunk_size)


def main(
    *,
    assume_role: str | None = None,
    chunk_size: int | None = None,
    delete: bool = False,
    file: str,
    id_column: str,
    index: str,
    limit_rows: int | None = None,
    opensearch_host: str | None = None,
    opensearch_port: int | None = None,
    profile: str | None = None,
    region: str | None = None,
    skip_rows: int = 0,
) -> None:
    """
    Main entry point for the ingest command.

    Args:
        assume_role: AWS role to assume for OpenSearch operations
        chunk_size: Documents per bulk request
        delete: Delete all documents from the index before ingestion
        file: Excel, CSV or JSON Lines file to import
        id_column: Column holding the document id
        index: Index name to use
        limit_rows: Limit the number of rows to process (after skipping rows)
        opensearch_host: OpenSearch host
        opensearch_port: OpenSearch port
        profile: AWS profile to use
        region: AWS region
        skip_rows: Number of rows to skip at the beginning
    """
    reporter = ConsoleReporter()

    if not file:
        reporter.on_message("Error: File path is required for ingest command")
        sys.exit(1)

    settings = get_connection_settings(
        host=opensearch_host,
        port=opensearch_port,
        profile=profile,
        assume_role=assume_role,
        region=region,
    )

    reader = DataReader(
        file_path=file,
        limit_rows=limit_rows,
        skip_rows=skip_rows,
        reporter=reporter,
    )
    documents = [Document(**record) for record in reader]

    if not documents:
        reporter.on_message("No rows to ingest")
        return

    reporter.on_message(f"Ingesting {len(documents)} rows into {index}")

    summary = asyncio.run(
        ingest(
            chunk_size=chunk_size or settings.bulk_chunk_size,
            delete=delete,
            documents=documents,
            id_column=id_column,
            index=index,
            reporter=reporter,
            settings=settings,
        )
    )

    reporter.on_message(
        f"Indexed {summary.indexed} documents in {summary.chunks} chunks "
        f"({summary.skipped} rows skipped without '{id_column}')"
    )
