"""Pytest configuration and fixtures."""

import io
import sys
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

# Make the package importable from a checkout - do this before other imports
repo_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(repo_root))

import pytest

from storekit.models.domain import ElectronicItem, GroceryItem, InventoryItem, Prescription, SavingsAccount
from storekit.repositories.entity_store import EntityStore
from storekit.services.reporting import ReportSink


@pytest.fixture
def mock_env_vars(monkeypatch, tmp_path):
    """Point storekit's data and log directories at a temp dir."""
    data_dir = tmp_path / "data"
    data_dir.mkdir(exist_ok=True)

    log_dir = tmp_path / "logs"

    monkeypatch.setenv("STOREKIT_DATA_DIR", str(data_dir))
    monkeypatch.setenv("STOREKIT_LOG_DIR", str(log_dir))
    monkeypatch.delenv("STOREKIT_MAX_LOGS", raising=False)

    return {
        "data_dir": data_dir,
        "log_dir": log_dir,
    }


@pytest.fixture
def output():
    """Text buffer that a ReportSink writes into."""
    return io.StringIO()


@pytest.fixture
def sink(output):
    return ReportSink(output)


@pytest.fixture
def electronics():
    """Store holding {id=1, qty=10} and {id=2, qty=25}."""
    store = EntityStore(ElectronicItem)
    store.add(ElectronicItem(1, "Laptop", 10, "Lenovo", 24))
    store.add(ElectronicItem(2, "Smartphone", 25, "Samsung", 12))
    return store


@pytest.fixture
def groceries():
    store = EntityStore(GroceryItem)
    store.add(GroceryItem(101, "Rice 5kg", 40, date(2027, 1, 15)))
    store.add(GroceryItem(102, "Milk 1L", 60, date(2026, 11, 7)))
    return store


@pytest.fixture
def prescriptions():
    """Prescriptions A, B for patient 1 and C for patient 2."""
    store = EntityStore(Prescription)
    store.add(Prescription(101, 1, "A", date(2026, 10, 1)))
    store.add(Prescription(102, 1, "B", date(2026, 10, 2)))
    store.add(Prescription(103, 2, "C", date(2026, 10, 3)))
    return store


@pytest.fixture
def inventory_items():
    added = datetime(2026, 10, 18, 9, 30, 15, 123456)
    return [
        InventoryItem(1, "Laptop", 10, added),
        InventoryItem(2, "Keyboard", 25, added),
        InventoryItem(3, "Mouse", 30, added),
    ]


@pytest.fixture
def accounts():
    store = EntityStore(SavingsAccount)
    store.add(SavingsAccount(1, "SA-001", Decimal("1000")))
    return store
