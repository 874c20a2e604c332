"""Shared pytest fixtures."""

from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest

from entity_search.null_reporter import NullReporter
from entity_search.opensearch.connection import ConnectionManager
from entity_search.opensearch.settings import ENV_PREFIX, ENV_VARS


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ENTITY_SEARCH_* variables of the shell out of the tests."""
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(f"{ENV_PREFIX}{env_var}", raising=False)


@pytest.fixture
def mock_client() -> AsyncMock:
    """Create a mock AsyncOpenSearch client."""
    client = AsyncMock()
    client.ping.return_value = True
    client.search.return_value = {"hits": {"hits": [], "total": {"value": 0}}}
    client.count.return_value = {"count": 0}
    client.bulk.return_value = {"took": 1, "errors": False, "items": []}
    return client


@pytest.fixture
def connection(mock_client: AsyncMock) -> Generator[ConnectionManager, None, None]:
    """Connection manager around the mock client."""
    yield ConnectionManager(client=mock_client, reporter=NullReporter())
