"""Pytest fixtures for CLI command tests."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from entity_search.null_reporter import NullReporter
from entity_search.opensearch.connection import ConnectionManager


@pytest.fixture
def connection_factory(mock_client: AsyncMock) -> Callable[..., ConnectionManager]:
    """Stands in for ConnectionManager in command modules; every manager wraps mock_client."""

    def create(**_: Any) -> ConnectionManager:
        return ConnectionManager(client=mock_client, reporter=NullReporter())

    return create


@pytest.fixture
def messages(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Console output of the commands."""
    output: list[str] = []
    monkeypatch.setattr(
        "entity_search.console_reporter.tqdm.write", lambda message: output.append(message)
    )
    return output
