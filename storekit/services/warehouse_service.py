"""Warehouse service - electronics and grocery stock management."""

from datetime import date, timedelta
from typing import Optional

from storekit.models.domain import ElectronicItem, Entity, GroceryItem
from storekit.repositories.entity_store import EntityStore
from storekit.services.reporting import ReportSink


def describe_item(item: Entity) -> str:
    """One-line display form of a warehouse item."""
    if isinstance(item, ElectronicItem):
        return (
            f"ElectronicItem {{ Id={item.id}, Name={item.name}, Qty={item.quantity}, "
            f"Brand={item.brand}, Warranty={item.warranty_months}m }}"
        )
    if isinstance(item, GroceryItem):
        return (
            f"GroceryItem {{ Id={item.id}, Name={item.name}, Qty={item.quantity}, "
            f"Expiry={item.expiry_date.isoformat()} }}"
        )
    return repr(item)


class WarehouseService:
    """
    Orchestrates two stock stores.

    Responsibilities:
    - Seed sample stock
    - Print, restock and remove items
    - Route every store failure to the report sink
    """

    def __init__(self, sink: Optional[ReportSink] = None, today: Optional[date] = None):
        self.sink = sink or ReportSink()
        self.today = today or date.today()
        self.electronics: EntityStore[ElectronicItem] = EntityStore(ElectronicItem)
        self.groceries: EntityStore[GroceryItem] = EntityStore(GroceryItem)

    def seed_data(self) -> None:
        """Add the sample electronics and groceries."""
        self.electronics.add(ElectronicItem(1, "Laptop", 10, "Lenovo", 24))
        self.electronics.add(ElectronicItem(2, "Smartphone", 25, "Samsung", 12))
        self.electronics.add(ElectronicItem(3, "Router", 15, "TP-Link", 18))

        self.groceries.add(GroceryItem(101, "Rice 5kg", 40, self.today + timedelta(days=365)))
        self.groceries.add(GroceryItem(102, "Milk 1L", 60, self.today + timedelta(days=20)))
        self.groceries.add(GroceryItem(103, "Eggs 12-pack", 30, self.today + timedelta(days=14)))

    def print_all_items(self, store: EntityStore) -> None:
        for item in store.list():
            self.sink.info(describe_item(item))

    def add_item(self, store: EntityStore, item: Entity) -> Optional[Entity]:
        added = self.sink.run_step("add_item", store.add, item)
        if added is not None:
            self.sink.info(f"Item added: Id={item.id}")
        return added

    def increase_stock(self, store: EntityStore, id: int, quantity: int) -> Optional[Entity]:
        """Add ``quantity`` to an item's stock; failures are reported."""
        item = self.sink.run_step("increase_stock", store.adjust_field, id, quantity)
        if item is not None:
            self.sink.info(f"Stock increased: Id={id}, NewQty={item.quantity}")
        return item

    def update_quantity(self, store: EntityStore, id: int, quantity: int) -> Optional[Entity]:
        item = self.sink.run_step("update_quantity", store.update_field, id, quantity)
        if item is not None:
            self.sink.info(f"Quantity updated: Id={id}, NewQty={item.quantity}")
        return item

    def remove_item_by_id(self, store: EntityStore, id: int) -> bool:
        """Remove an item; returns False if the removal was reported as failed."""
        def _remove() -> bool:
            store.remove(id)
            return True

        if not self.sink.run_step("remove_item", _remove):
            return False
        self.sink.info(f"Item removed: Id={id}")
        return True

    def run(self) -> None:
        """Run the fixed demonstration sequence."""
        self.sink.run_step("seed_data", self.seed_data)

        self.sink.heading("Groceries")
        self.print_all_items(self.groceries)

        self.sink.info()
        self.sink.heading("Electronics")
        self.print_all_items(self.electronics)

        self.sink.info()
        self.sink.heading("Error Scenarios")
        self.add_item(self.electronics, ElectronicItem(1, "Tablet", 5, "Apple", 12))
        self.remove_item_by_id(self.groceries, 999)
        self.update_quantity(self.electronics, 2, -5)

        self.increase_stock(self.groceries, 101, 10)
