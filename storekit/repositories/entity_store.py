"""Entity store - generic in-memory implementation."""

import copy
import logging
from decimal import Decimal, Inexact, localcontext
from typing import Any, Dict, Iterable, List, Type

from storekit.models.errors import (
    DuplicateKeyError,
    InvalidValueError,
    NotFoundError,
    ValueOverflowError,
)
from storekit.repositories.base import Repository, T

logger = logging.getLogger(__name__)

# Enough digits for any in-range balance plus its fractional part.
DECIMAL_PRECISION = 60


class EntityStore(Repository[T]):
    """
    Keyed store for a single entity type.

    Current implementation: In-memory (dict keyed by id, insertion ordered)
    Rationale: Stores live for one session; persistence is explicit via
    JsonSnapshotRepository.

    A store has exactly one owner at a time. Nothing here is locked, so
    calling mutators from several threads without external synchronization
    is not supported.
    """

    def __init__(self, entity_type: Type[T]):
        self.entity_type = entity_type
        self._items: Dict[int, T] = {}

    @classmethod
    def from_items(cls, entity_type: Type[T], items: Iterable[T]) -> "EntityStore[T]":
        """Build a store by adding each item in order.

        Raises:
            DuplicateKeyError: If two items share an id
            InvalidValueError, ValueOverflowError: If an item's mutable
                field is out of bounds
        """
        store = cls(entity_type)
        for item in items:
            store.add(item)
        return store

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, id: object) -> bool:
        return id in self._items

    def __repr__(self) -> str:
        return f"EntityStore({self.entity_type.__name__}, size={len(self)})"

    def ids(self) -> List[int]:
        """List stored ids in enumeration order."""
        return list(self._items)

    def add(self, item: T) -> T:
        """Insert a new entity.

        The mutable field is held to the same type and bounds as
        ``update_field``.

        Raises:
            DuplicateKeyError: If the id is already stored
            InvalidValueError: If the mutable field has the wrong type or is
                below its minimum
            ValueOverflowError: If the mutable field is above its maximum
        """
        if not isinstance(item, self.entity_type):
            raise TypeError(
                f"{self!r} only accepts {self.entity_type.__name__}, "
                f"got {type(item).__name__}"
            )
        if item.id in self._items:
            raise DuplicateKeyError(
                f"{self._label} with Id {item.id} already exists.",
                operation="add",
                details={"id": item.id},
            )
        field = self.entity_type.mutable_field
        if field is not None:
            value = self._validate(item.id, field, item.mutable_value, "add")
            object.__setattr__(item, field, value)
        self._items[item.id] = item
        logger.debug("Added %s %s", self._label, item.id)
        return item

    def get(self, id: int) -> T:
        """Get the stored entity itself (not a copy)."""
        return self._require(id, "get")

    def list(self) -> List[T]:
        """List copies of all entities in enumeration order."""
        return [copy.copy(item) for item in self._items.values()]

    def remove(self, id: int) -> None:
        """Delete entity by ID."""
        self._require(id, "remove")
        del self._items[id]
        logger.debug("Removed %s %s", self._label, id)

    def update_field(self, id: int, new_value: Any) -> T:
        """
        Overwrite the mutable field of an existing entity in place.

        Raises:
            NotFoundError: If the id is absent
            InvalidValueError: If the value has the wrong type, is below the
                field's minimum, or the entity type has no mutable field
            ValueOverflowError: If the value is above the field's maximum
        """
        return self._apply(id, new_value, "update_field")

    def adjust_field(self, id: int, delta: Any) -> T:
        """
        Add ``delta`` to the mutable field of an existing entity.

        The sum is validated exactly like ``update_field``; on failure the
        stored value is left unchanged. Decimal sums are never rounded: one
        that cannot be held exactly is rejected.
        """
        item = self._require(id, "adjust_field")
        self._require_mutable_field(id, "adjust_field")
        delta = self._coerce(delta, "adjust_field")
        return self._apply(id, self._exact_sum(id, item.mutable_value, delta), "adjust_field")

    @property
    def _label(self) -> str:
        return self.entity_type.__name__

    def _require(self, id: int, operation: str) -> T:
        try:
            return self._items[id]
        except KeyError:
            raise NotFoundError(
                f"{self._label} with Id {id} not found.",
                operation=operation,
                details={"id": id},
            ) from None

    def _require_mutable_field(self, id: int, operation: str) -> str:
        field = self.entity_type.mutable_field
        if field is None:
            raise InvalidValueError(
                f"{self._label} has no mutable field.",
                operation=operation,
                details={"id": id},
            )
        return field

    def _apply(self, id: int, new_value: Any, operation: str) -> T:
        item = self._require(id, operation)
        field = self._require_mutable_field(id, operation)
        value = self._validate(id, field, new_value, operation)

        object.__setattr__(item, field, value)
        logger.debug("Set %s %s %s=%s", self._label, id, field, value)
        return item

    def _exact_sum(self, id: int, current: Any, delta: Any) -> Any:
        if self.entity_type.mutable_type is not Decimal:
            return current + delta
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            ctx.traps[Inexact] = True
            try:
                return current + delta
            except Inexact:
                raise InvalidValueError(
                    f"{current} + {delta} cannot be represented exactly.",
                    operation="adjust_field",
                    details={"id": id, "delta": str(delta)},
                ) from None

    def _validate(self, id: int, field: str, new_value: Any, operation: str) -> Any:
        """Coerce a candidate value and check it against the field bounds."""
        value = self._coerce(new_value, operation)
        if value < self.entity_type.min_value:
            if self.entity_type.min_value == 0:
                message = f"{field.capitalize()} cannot be negative."
            else:
                message = f"{field.capitalize()} cannot be below {self.entity_type.min_value}."
            raise InvalidValueError(
                message,
                operation=operation,
                details={"id": id, "value": str(value)},
            )
        if value > self.entity_type.max_value:
            raise ValueOverflowError(
                f"{field.capitalize()} {value} exceeds the maximum of {self.entity_type.max_value}.",
                operation=operation,
                details={"id": id, "value": str(value)},
            )
        return value

    def _coerce(self, value: Any, operation: str) -> Any:
        """Check a value against the field type; ints widen to Decimal."""
        mutable_type = self.entity_type.mutable_type
        if not isinstance(value, bool):
            if mutable_type is Decimal and isinstance(value, (int, Decimal)):
                value = Decimal(value)
                if value.is_finite():
                    return value
            elif isinstance(value, mutable_type):
                return value

        raise InvalidValueError(
            f"Expected a finite {mutable_type.__name__}, got {value!r}.",
            operation=operation,
        )
