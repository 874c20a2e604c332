"""
OpenSearch repositories.

Repositories handle persistence operations and return domain model instances.
"""

from entity_search.opensearch.repositories.base_repository import (
    BaseRepository,
    normalize_index_name,
)
from entity_search.opensearch.repositories.entity import EntityRepository
from entity_search.opensearch.repositories.index import IndexRepository

__all__ = [
    "BaseRepository",
    "EntityRepository",
    "IndexRepository",
    "normalize_index_name",
]
