import asyncio
import json
import sys
from typing import Any

from apps.cli.utils import CONNECTION_ARGUMENTS
from entity_search.console_reporter import ConsoleReporter
from entity_search.interfaces import IReporter
from entity_search.opensearch.connection import ConnectionManager
from entity_search.opensearch.repositories import IndexRepository
from entity_search.opensearch.settings import ConnectionSettings
from entity_search.utils import get_connection_settings

DEFINITION = {
    "name": "setup",
    "description": "Create an index",
    "arguments": [
        *CONNECTION_ARGUMENTS,
        {
            "name": "delete",
            "action": "store_true",
            "required": False,
            "help": "Delete and recreate the index if it already exists",
        },
        {
            "name": "index",
            "type": str,
            "required": True,
            "help": "Index name to create",
        },
        {
            "name": "mappings-file",
            "type": str,
            "required": False,
            "help": "JSON file with the index mappings",
        },
        {
            "name": "shards",
            "type": int,
            "required": False,
            "help": "Number of primary shards",
        },
    ],
}


async def setup_index(
    *,
    delete: bool,
    index: str,
    mappings: dict[str, Any] | None,
    reporter: IReporter,
    settings: ConnectionSettings,
    shards: int | None,
) -> bool:
    """Create the index. Returns False if it already exists and delete is not set."""
    async with ConnectionManager(settings=settings, reporter=reporter) as connection:
        indexes = IndexRepository(connection=connection)

        if await indexes.exists(index=index):
            if not delete:
                return False
            await indexes.delete(index=index)

        await indexes.create(
            index=index,
            mappings=mappings,
            settings={"number_of_shards": shards} if shards else None,
        )
        return True


def main(
    *,
    assume_role: str | None = None,
    delete: bool = False,
    index: str,
    mappings_file: str | None = None,
    opensearch_host: str | None = None,
    opensearch_port: int | None = None,
    profile: str | None = None,
    region: str | None = None,
    shards: int | None = None,
) -> None:
    """
    Main entry point for the setup command.

    Args:
        assume_role: AWS role to assume for OpenSearch operations
        delete: Delete and recreate the index if it already exists
        index: Index name to create
        mappings_file: JSON file with the index mappings
        opensearch_host: OpenSearch host
        opensearch_port: OpenSearch port
        profile: AWS profile to use
        region: AWS region
        shards: Number of primary shards
    """
    reporter = ConsoleReporter()

    mappings = None
    if mappings_file:
        try:
            with open(mappings_file, encoding="utf-8") as f:
                mappings = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            reporter.on_message(f"Error: Could not read mappings from {mappings_file}: {e}")
            sys.exit(1)

    settings = get_connection_settings(
        host=opensearch_host,
        port=opensearch_port,
        profile=profile,
        assume_role=assume_role,
        region=region,
    )

    created = asyncio.run(
        setup_index(
            delete=delete,
            index=index,
            mappings=mappings,
            reporter=reporter,
            settings=settings,
            shards=shards,
        )
    )

    if created:
        reporter.on_message(f"Index '{index.lower()}' created")
    else:
        reporter.on_message(f"Index '{index.lower()}' already exists, use --delete to recreate it")
