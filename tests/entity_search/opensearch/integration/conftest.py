"""Pytest fixtures for integration tests against a live OpenSearch cluster."""

import os
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from entity_search.null_reporter import NullReporter
from entity_search.opensearch.connection import ConnectionManager
from entity_search.opensearch.repositories import IndexRepository
from entity_search.opensearch.settings import ConnectionSettings
from entity_search.utils import get_connection_settings


@pytest.fixture(scope="session")
def opensearch_settings() -> ConnectionSettings:
    """Connection settings from OPENSEARCH_HOST / OPENSEARCH_PORT."""
    host = os.getenv("OPENSEARCH_HOST")
    port = os.getenv("OPENSEARCH_PORT")
    if not host or not port:
        pytest.skip("OPENSEARCH_HOST and OPENSEARCH_PORT must be set for integration tests")

    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"OPENSEARCH_PORT must be a valid integer, got: {port}")

    return get_connection_settings(
        host=host,
        port=port_number,
        profile=os.getenv("AWS_PROFILE"),
        assume_role=os.getenv("ASSUME_ROLE"),
        region=os.getenv("AWS_REGION"),
        user=os.getenv("OPENSEARCH_USER"),
        password=os.getenv("OPENSEARCH_PASSWORD"),
    )


@pytest_asyncio.fixture
async def connection(
    opensearch_settings: ConnectionSettings,
) -> AsyncGenerator[ConnectionManager, None]:
    async with ConnectionManager(settings=opensearch_settings, reporter=NullReporter()) as manager:
        yield manager


@pytest_asyncio.fixture
async def test_index(connection: ConnectionManager) -> AsyncGenerator[str, None]:
    """Create a uniquely named index and delete it afterwards."""
    indexes = IndexRepository(connection=connection)
    name = f"test-entity-search-{uuid.uuid4().hex[:8]}"
    await indexes.create(
        index=name,
        mappings={
            "properties": {
                "id": {"type": "keyword"},
                "name": {"type": "text", "fields": {"keyword": {"type": "keyword"}}},
                "age": {"type": "integer"},
            }
        },
    )

    yield name

    await indexes.delete(index=name)
