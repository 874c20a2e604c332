"""Base entity class for OpenSearch domain models."""

from abc import ABC, abstractmethod
from typing import Any


class BaseEntity(ABC):
    """Abstract base class for OpenSearch domain entities.

    Entities are pure domain objects that delegate all persistence
    operations to their repository.
    """

    @abstractmethod
    async def delete(self) -> Any:
        """Delete this entity through its repository."""
