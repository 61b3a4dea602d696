"""Base repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Generic, List, TypeVar

from storekit.models.domain import Entity

T = TypeVar('T', bound=Entity)


class Repository(ABC, Generic[T]):
    """
    Base repository interface.

    Abstracts keyed entity storage. Lookups of missing ids raise
    NotFoundError rather than returning None, so callers cannot mistake an
    absent entity for a present one.
    """

    @abstractmethod
    def add(self, entity: T) -> T:
        """Insert a new entity. Raises DuplicateKeyError if the id exists."""
        pass

    @abstractmethod
    def get(self, id: int) -> T:
        """Get entity by ID. Raises NotFoundError if absent."""
        pass

    @abstractmethod
    def list(self) -> List[T]:
        """List all entities as an independent snapshot."""
        pass

    @abstractmethod
    def remove(self, id: int) -> None:
        """Delete entity by ID. Raises NotFoundError if absent."""
        pass

    @abstractmethod
    def update_field(self, id: int, new_value: Any) -> T:
        """Overwrite the entity's mutable field after validating it."""
        pass
