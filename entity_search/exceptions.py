"""Exceptions raised by the entity search library.

Errors coming from the search engine itself are not wrapped: callers receive
the ``opensearchpy.exceptions`` types unchanged.
"""

from typing import Any


class EntitySearchError(Exception):
    """Base class for entity search errors."""


class ConnectionRebuildError(EntitySearchError):
    """The client handle cannot be rebuilt (no readable client configuration)."""


class CredentialsError(EntitySearchError):
    """AWS credentials could not be resolved or the role could not be assumed."""


class BulkIngestionError(EntitySearchError):
    """A bulk request reported item-level failures."""

    def __init__(self, message: str, *, chunk: int, errors: dict[str, Any]) -> None:
        super().__init__(message)
        self.chunk = chunk
        self.errors = errors
