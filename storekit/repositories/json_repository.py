"""Snapshot repository - JSON file implementation."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, List, Type

from pydantic import TypeAdapter, ValidationError

from storekit.models.dto import SnapshotRecord, record_model_for
from storekit.models.errors import DuplicateKeyError, InvalidValueError, PersistenceError, ValueOverflowError
from storekit.repositories.base import T
from storekit.repositories.entity_store import EntityStore

logger = logging.getLogger(__name__)


@dataclass
class LoadResult(Generic[T]):
    """Outcome of JsonSnapshotRepository.load().

    ``restored`` is False when no snapshot file existed (a cold start).
    """
    store: EntityStore[T]
    restored: bool


class JsonSnapshotRepository(Generic[T]):
    """
    Persists the full contents of one EntityStore to a JSON file.

    Current implementation: Filesystem (one JSON array per store)
    The file handle is opened and closed within each save/load call.
    Every entity field round-trips exactly: dates and datetimes are ISO 8601
    with microseconds, decimals are written as strings.
    """

    def __init__(self, path: Path, entity_type: Type[T]):
        self.path = Path(path)
        self.entity_type = entity_type
        self.record_model: Type[SnapshotRecord] = record_model_for(entity_type)
        self._adapter = TypeAdapter(List[self.record_model])

    def exists(self) -> bool:
        """Check whether a snapshot file is present."""
        return self.path.exists()

    def save(self, store: EntityStore[T]) -> None:
        """Write the store's current snapshot, replacing any previous file.

        Raises:
            PersistenceError: If the file cannot be written
        """
        if store.entity_type is not self.entity_type:
            raise TypeError(
                f"Snapshot at {self.path} holds {self.entity_type.__name__}, "
                f"not {store.entity_type.__name__}"
            )

        records = [self.record_model.from_entity(entity) for entity in store.list()]
        payload = self._adapter.dump_json(records, indent=2)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "wb") as f:
                f.write(payload)
        except OSError as exc:
            raise PersistenceError(
                f"Error saving file {self.path}: {exc}",
                operation="save",
                details={"path": str(self.path)},
            ) from exc

        logger.info("Saved %d %s record(s) to %s", len(records), self.entity_type.__name__, self.path)

    def load(self) -> LoadResult[T]:
        """Read the snapshot into a new store.

        A missing file is a normal cold start and yields an empty store with
        ``restored=False``.

        Raises:
            PersistenceError: If the file cannot be read, does not match
                the record shape, or holds an out-of-bounds mutable value
            DuplicateKeyError: If the snapshot repeats an id
        """
        if not self.path.exists():
            logger.info("No snapshot at %s, starting empty", self.path)
            return LoadResult(EntityStore(self.entity_type), restored=False)

        try:
            with open(self.path, "rb") as f:
                raw = f.read()
        except OSError as exc:
            raise PersistenceError(
                f"Error loading file {self.path}: {exc}",
                operation="load",
                details={"path": str(self.path)},
            ) from exc

        try:
            records = self._adapter.validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError(
                f"File {self.path} is not a valid {self.entity_type.__name__} snapshot "
                f"({exc.error_count()} error(s))",
                operation="load",
                details={"path": str(self.path), "error_count": exc.error_count()},
            ) from exc

        try:
            store = EntityStore.from_items(self.entity_type, (record.to_entity() for record in records))
        except DuplicateKeyError as exc:
            raise DuplicateKeyError(
                f"File {self.path} contains duplicate Id {exc.details.get('id')}.",
                operation="load",
                details={"path": str(self.path), **exc.details},
            ) from exc
        except (InvalidValueError, ValueOverflowError) as exc:
            raise PersistenceError(
                f"File {self.path} holds an out-of-range value: {exc.message}",
                operation="load",
                details={"path": str(self.path), **exc.details},
            ) from exc

        logger.info("Loaded %d %s record(s) from %s", len(store), self.entity_type.__name__, self.path)
        return LoadResult(store, restored=True)

    def delete(self) -> bool:
        """Delete the snapshot file. Returns True if deleted, False if not found."""
        if not self.path.exists():
            return False
        try:
            self.path.unlink()
        except OSError as exc:
            raise PersistenceError(
                f"Error deleting file {self.path}: {exc}",
                operation="delete",
                details={"path": str(self.path)},
            ) from exc
        return True
