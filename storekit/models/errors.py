"""Error taxonomy for the entity store and the record parser.

Two closed families:

- ``StoreError`` and its subclasses are raised by the entity store, the
  index builder and the persistence adapter.
- ``RecordParseError`` and its subclasses are raised at the delimited-record
  parsing boundary, before any entity reaches a store.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Discriminator carried by every store and parse error."""
    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    INVALID_VALUE = "invalid_value"
    OVERFLOW = "overflow"
    PERSISTENCE = "persistence"
    MISSING_FIELD = "missing_field"
    MALFORMED_FIELD = "malformed_field"


class StoreError(Exception):
    """
    Base class for store failures.

    Subclasses fix ``kind``; callers catch the specific subclass they can
    handle rather than this base.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            message: Human readable description
            operation: Store operation that failed (e.g. ``add``)
            details: Extra context such as the offending id
        """
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Render the error for reporting."""
        result: Dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.operation:
            result["operation"] = self.operation
        if self.details:
            result["details"] = self.details
        return result


class DuplicateKeyError(StoreError):
    """An entity with the same id is already stored."""
    kind = ErrorKind.DUPLICATE_KEY


class NotFoundError(StoreError):
    """No entity with the requested id is stored."""
    kind = ErrorKind.NOT_FOUND


class InvalidValueError(StoreError):
    """A new value for the mutable field violates its domain constraint."""
    kind = ErrorKind.INVALID_VALUE


class ValueOverflowError(StoreError):
    """A computed value does not fit the mutable field's range."""
    kind = ErrorKind.OVERFLOW


class PersistenceError(StoreError):
    """Reading or writing a snapshot or record file failed."""
    kind = ErrorKind.PERSISTENCE


class RecordParseError(Exception):
    """Base class for delimited-record parsing failures."""

    kind: ErrorKind

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.line = line


class MissingFieldError(RecordParseError):
    """A record line has fewer fields than required."""
    kind = ErrorKind.MISSING_FIELD


class MalformedFieldError(RecordParseError):
    """A numeric field could not be parsed."""
    kind = ErrorKind.MALFORMED_FIELD
