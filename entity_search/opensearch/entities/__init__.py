"""
OpenSearch domain entities.

Entities are pure domain objects; persistence is delegated to repositories.
"""

from entity_search.opensearch.entities.base_entity import BaseEntity
from entity_search.opensearch.entities.document import Document
from entity_search.opensearch.entities.index import Index
from entity_search.opensearch.entities.page import Page

__all__ = [
    "BaseEntity",
    "Document",
    "Index",
    "Page",
]
