"""Domain entities - internal representation (storage-agnostic)."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, ClassVar, Optional

INT32_MAX = 2**31 - 1
DECIMAL_MAX = Decimal("79228162514264337593543950335")


@dataclass
class Entity:
    """
    Minimal contract for anything held by an EntityStore.

    Every attribute is read-only once set. Entity types with a mutable
    numeric field name it in ``mutable_field``; that field is changed only
    through ``EntityStore.update_field``/``adjust_field``, which enforce
    ``min_value``/``max_value``.
    """
    id: int

    mutable_field: ClassVar[Optional[str]] = None
    mutable_type: ClassVar[type] = int
    min_value: ClassVar[Any] = 0
    max_value: ClassVar[Any] = INT32_MAX

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.__dict__:
            raise AttributeError(
                f"{type(self).__name__}.{name} is read-only; "
                f"use the owning store to change it"
            )
        object.__setattr__(self, name, value)

    @property
    def mutable_value(self) -> Any:
        """Current value of the mutable field, or None if there is none."""
        if self.mutable_field is None:
            return None
        return getattr(self, self.mutable_field)


@dataclass
class ElectronicItem(Entity):
    """Warehouse electronics stock line."""
    name: str
    quantity: int
    brand: str
    warranty_months: int

    mutable_field: ClassVar[Optional[str]] = "quantity"


@dataclass
class GroceryItem(Entity):
    """Warehouse grocery stock line."""
    name: str
    quantity: int
    expiry_date: date

    mutable_field: ClassVar[Optional[str]] = "quantity"


@dataclass
class InventoryItem(Entity):
    """Immutable inventory log record."""
    name: str
    quantity: int
    date_added: datetime


@dataclass
class Patient(Entity):
    """Patient domain entity."""
    name: str
    age: int
    gender: str


@dataclass
class Prescription(Entity):
    """Prescription issued to a patient (``patient_id`` references Patient.id)."""
    patient_id: int
    medication_name: str
    date_issued: date


@dataclass
class Student(Entity):
    """Student result record."""
    full_name: str
    score: int

    mutable_field: ClassVar[Optional[str]] = "score"

    @property
    def grade(self) -> str:
        """Letter grade for the current score."""
        if 80 <= self.score <= 100:
            return "A"
        if self.score >= 70:
            return "B"
        if self.score >= 60:
            return "C"
        if self.score >= 50:
            return "D"
        return "F"


@dataclass
class Transaction(Entity):
    """Financial transaction record."""
    date: datetime
    amount: Decimal
    category: str


@dataclass
class SavingsAccount(Entity):
    """Savings account; the balance may never go below zero."""
    account_number: str
    balance: Decimal

    mutable_field: ClassVar[Optional[str]] = "balance"
    mutable_type: ClassVar[type] = Decimal
    min_value: ClassVar[Any] = Decimal("0")
    max_value: ClassVar[Any] = DECIMAL_MAX
