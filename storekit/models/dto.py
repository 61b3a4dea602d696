"""Snapshot records - the on-disk contract for persisted entities.

Each record lists exactly the public fields of one entity type. Records
forbid unknown keys so a snapshot written in another shape is rejected
instead of guessed at.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Dict, Type

from pydantic import BaseModel, ConfigDict

from storekit.models.domain import (
    ElectronicItem,
    Entity,
    GroceryItem,
    InventoryItem,
    Patient,
    Prescription,
    SavingsAccount,
    Student,
    Transaction,
)


class SnapshotRecord(BaseModel):
    """Base for persisted entity records."""

    entity_type: ClassVar[Type[Entity]]

    model_config = ConfigDict(extra="forbid", from_attributes=True)

    @classmethod
    def from_entity(cls, entity: Entity) -> "SnapshotRecord":
        """Build a record from a domain entity."""
        return cls.model_validate(entity)

    def to_entity(self) -> Entity:
        """Convert record back to its domain entity."""
        return self.entity_type(**self.model_dump())


class ElectronicItemRecord(SnapshotRecord):
    entity_type: ClassVar[Type[Entity]] = ElectronicItem

    id: int
    name: str
    quantity: int
    brand: str
    warranty_months: int


class GroceryItemRecord(SnapshotRecord):
    entity_type: ClassVar[Type[Entity]] = GroceryItem

    id: int
    name: str
    quantity: int
    expiry_date: date


class InventoryItemRecord(SnapshotRecord):
    entity_type: ClassVar[Type[Entity]] = InventoryItem

    id: int
    name: str
    quantity: int
    date_added: datetime


class PatientRecord(SnapshotRecord):
    entity_type: ClassVar[Type[Entity]] = Patient

    id: int
    name: str
    age: int
    gender: str


class PrescriptionRecord(SnapshotRecord):
    entity_type: ClassVar[Type[Entity]] = Prescription

    id: int
    patient_id: int
    medication_name: str
    date_issued: date


class StudentRecord(SnapshotRecord):
    entity_type: ClassVar[Type[Entity]] = Student

    id: int
    full_name: str
    score: int


class TransactionRecord(SnapshotRecord):
    entity_type: ClassVar[Type[Entity]] = Transaction

    id: int
    date: datetime
    amount: Decimal
    category: str


class SavingsAccountRecord(SnapshotRecord):
    entity_type: ClassVar[Type[Entity]] = SavingsAccount

    id: int
    account_number: str
    balance: Decimal


RECORD_MODELS: Dict[Type[Entity], Type[SnapshotRecord]] = {
    record.entity_type: record
    for record in (
        ElectronicItemRecord,
        GroceryItemRecord,
        InventoryItemRecord,
        PatientRecord,
        PrescriptionRecord,
        StudentRecord,
        TransactionRecord,
        SavingsAccountRecord,
    )
}


def record_model_for(entity_type: Type[Entity]) -> Type[SnapshotRecord]:
    """Get the snapshot record class for an entity type.

    Raises:
        KeyError: If the entity type has no registered record
    """
    try:
        return RECORD_MODELS[entity_type]
    except KeyError:
        raise KeyError(f"No snapshot record registered for {entity_type.__name__}") from None
