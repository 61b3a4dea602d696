"""storekit - generic in-memory entity store.

Provides:
- EntityStore: keyed container with unique ids and a bounded mutable field
- build_index / DerivedIndex: one-to-many grouping by a foreign key
- JsonSnapshotRepository: JSON file round-trip of a whole store
- A closed error taxonomy (storekit.models.errors)

Usage:
    storekit-demo  # Run the demonstration programs
"""

from .models.errors import (
    DuplicateKeyError,
    ErrorKind,
    InvalidValueError,
    NotFoundError,
    PersistenceError,
    StoreError,
    ValueOverflowError,
)
from .repositories.derived_index import DerivedIndex, build_index
from .repositories.entity_store import EntityStore
from .repositories.json_repository import JsonSnapshotRepository, LoadResult

__all__ = [
    "DerivedIndex",
    "DuplicateKeyError",
    "EntityStore",
    "ErrorKind",
    "InvalidValueError",
    "JsonSnapshotRepository",
    "LoadResult",
    "NotFoundError",
    "PersistenceError",
    "StoreError",
    "ValueOverflowError",
    "build_index",
]

__version__ = "1.0.0"
