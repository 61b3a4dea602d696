"""Inventory log service - persisted inventory records."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from storekit.models.domain import InventoryItem
from storekit.repositories.entity_store import EntityStore
from storekit.repositories.json_repository import JsonSnapshotRepository
from storekit.services.reporting import ReportSink

SNAPSHOT_FILENAME = "inventory.json"


class InventoryLogService:
    """
    Service for an inventory log that survives between sessions.

    Loading replaces the in-memory log with the file's contents; it never
    merges with entries already held.
    """

    def __init__(self, file_path: Path, sink: Optional[ReportSink] = None):
        self.sink = sink or ReportSink()
        self.snapshots: JsonSnapshotRepository[InventoryItem] = JsonSnapshotRepository(file_path, InventoryItem)
        self.store: EntityStore[InventoryItem] = EntityStore(InventoryItem)

    def seed_sample_data(self, now: Optional[datetime] = None) -> None:
        now = now or datetime.now()
        self.store.add(InventoryItem(1, "Laptop", 10, now))
        self.store.add(InventoryItem(2, "Keyboard", 25, now))
        self.store.add(InventoryItem(3, "Mouse", 30, now))

    def save_data(self) -> bool:
        """Persist the log. Returns False if the save was reported as failed."""
        def _save() -> bool:
            self.snapshots.save(self.store)
            return True

        return bool(self.sink.run_step("save_data", _save))

    def load_data(self) -> bool:
        """Replace the log with the saved snapshot.

        Returns:
            True if a snapshot was restored, False on cold start or failure
        """
        result = self.sink.run_step("load_data", self.snapshots.load)
        if result is None:
            return False
        self.store = result.store
        if not result.restored:
            self.sink.info("No saved inventory found. Starting with empty log.")
        return result.restored

    def print_all_items(self) -> None:
        for item in self.store.list():
            self.sink.info(
                f"{item.name} (ID: {item.id}) - Qty: {item.quantity}, "
                f"Added: {item.date_added.isoformat(sep=' ', timespec='seconds')}"
            )

    @classmethod
    def run(cls, data_dir: Path, sink: Optional[ReportSink] = None) -> "InventoryLogService":
        """Save a seeded log, then restore it in a fresh session.

        Returns:
            The second (restored) service instance
        """
        file_path = Path(data_dir) / SNAPSHOT_FILENAME

        app = cls(file_path, sink)
        app.sink.run_step("seed_sample_data", app.seed_sample_data)
        if app.save_data():
            app.sink.info("Data saved. Simulating new session...")
        app.sink.info()

        new_app = cls(file_path, app.sink)
        new_app.load_data()
        new_app.print_all_items()
        return new_app
