"""Unit tests for the demonstration services."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from storekit.models.domain import ElectronicItem, Prescription, Transaction
from storekit.models.errors import InvalidValueError, NotFoundError
from storekit.services.finance_service import (
    BankTransferProcessor,
    CryptoWalletProcessor,
    FinanceService,
    MobileMoneyProcessor,
)
from storekit.services.grading_service import GradingService
from storekit.services.health_service import HealthService
from storekit.services.inventory_service import SNAPSHOT_FILENAME, InventoryLogService
from storekit.services.warehouse_service import WarehouseService

TODAY = date(2026, 10, 18)


class TestWarehouseService:
    """Test WarehouseService orchestration."""

    def test_seed_data(self, sink):
        service = WarehouseService(sink, today=TODAY)
        service.seed_data()

        assert service.electronics.ids() == [1, 2, 3]
        assert service.groceries.ids() == [101, 102, 103]
        assert service.groceries.get(102).expiry_date == date(2026, 11, 7)

    def test_increase_stock(self, sink, output):
        service = WarehouseService(sink, today=TODAY)
        service.seed_data()

        item = service.increase_stock(service.groceries, 101, 10)

        assert item.quantity == 50
        assert "Stock increased: Id=101, NewQty=50" in output.getvalue()

    def test_increase_stock_missing_item_reported(self, sink, output):
        service = WarehouseService(sink, today=TODAY)

        assert service.increase_stock(service.groceries, 101, 10) is None
        assert "[increase_stock] not_found: GroceryItem with Id 101 not found." in output.getvalue()

    def test_run_reports_every_failure_and_finishes(self, sink, output):
        service = WarehouseService(sink, today=TODAY)
        service.run()

        lines = output.getvalue().splitlines()
        assert "[add_item] duplicate_key: ElectronicItem with Id 1 already exists." in lines
        assert "[remove_item] not_found: GroceryItem with Id 999 not found." in lines
        assert "[update_quantity] invalid_value: Quantity cannot be negative." in lines
        assert lines[-1] == "Stock increased: Id=101, NewQty=50"

        assert service.electronics.get(1).name == "Laptop"
        assert service.electronics.get(2).quantity == 25

    def test_run_prints_groceries_before_electronics(self, sink, output):
        WarehouseService(sink, today=TODAY).run()
        text = output.getvalue()

        assert text.index("=== Groceries ===") < text.index("=== Electronics ===")
        assert "GroceryItem { Id=101, Name=Rice 5kg, Qty=40, Expiry=2027-10-18 }" in text
        assert "ElectronicItem { Id=1, Name=Laptop, Qty=10, Brand=Lenovo, Warranty=24m }" in text

    def test_remove_item(self, sink):
        service = WarehouseService(sink, today=TODAY)
        service.electronics.add(ElectronicItem(1, "Laptop", 10, "Lenovo", 24))

        assert service.remove_item_by_id(service.electronics, 1) is True
        assert service.remove_item_by_id(service.electronics, 1) is False


class TestHealthService:
    """Test HealthService prescription lookups."""

    def test_prescriptions_by_patient(self, sink):
        service = HealthService(sink, today=TODAY)
        service.seed_data()
        service.build_prescription_map()

        assert [rx.id for rx in service.get_prescriptions_by_patient_id(1)] == [101, 102]
        assert [rx.id for rx in service.get_prescriptions_by_patient_id(2)] == [103, 105]
        assert service.get_prescriptions_by_patient_id(9) == []

    def test_map_is_stale_until_rebuilt(self, sink):
        service = HealthService(sink, today=TODAY)
        service.seed_data()
        service.build_prescription_map()

        service.prescriptions.add(Prescription(106, 3, "Cetirizine 10mg", TODAY))
        assert [rx.id for rx in service.get_prescriptions_by_patient_id(3)] == [104]

        service.build_prescription_map()
        assert [rx.id for rx in service.get_prescriptions_by_patient_id(3)] == [104, 106]

    def test_empty_before_first_build(self, sink):
        service = HealthService(sink, today=TODAY)
        service.seed_data()
        assert service.get_prescriptions_by_patient_id(1) == []

    def test_run_output(self, sink, output):
        HealthService(sink, today=TODAY).run(patient_id=2)
        lines = output.getvalue().splitlines()

        assert "Patient { Id=2, Name=Kwame Boateng, Age=35, Gender=Male }" in lines
        assert "=== Prescriptions for PatientId=2 ===" in lines
        assert lines[-2:] == [
            "Prescription { Id=103, PatientId=2, Medication=Loratadine 10mg, Date=2026-10-18 }",
            "Prescription { Id=105, PatientId=2, Medication=Paracetamol 500mg, Date=2026-10-17 }",
        ]

    def test_run_unknown_patient(self, sink, output):
        HealthService(sink, today=TODAY).run(patient_id=42)
        assert output.getvalue().splitlines()[-1] == "No prescriptions found."


class TestInventoryLogService:
    """Test InventoryLogService persistence flow."""

    def test_save_then_load_in_new_session(self, tmp_path, sink):
        path = tmp_path / SNAPSHOT_FILENAME
        now = datetime(2026, 10, 18, 9, 30)

        app = InventoryLogService(path, sink)
        app.seed_sample_data(now)
        assert app.save_data() is True

        new_app = InventoryLogService(path, sink)
        assert new_app.load_data() is True
        assert new_app.store.list() == app.store.list()

    def test_load_replaces_existing_entries(self, tmp_path, sink, inventory_items):
        path = tmp_path / SNAPSHOT_FILENAME
        app = InventoryLogService(path, sink)
        app.store.add(inventory_items[0])
        app.save_data()

        app.store.add(inventory_items[1])
        app.load_data()

        assert app.store.ids() == [1]

    def test_cold_start(self, tmp_path, sink, output):
        app = InventoryLogService(tmp_path / SNAPSHOT_FILENAME, sink)

        assert app.load_data() is False
        assert len(app.store) == 0
        assert "No saved inventory found. Starting with empty log." in output.getvalue()

    def test_corrupt_snapshot_reported(self, tmp_path, sink, output, inventory_items):
        path = tmp_path / SNAPSHOT_FILENAME
        path.write_text("[{", encoding="utf-8")
        app = InventoryLogService(path, sink)
        app.store.add(inventory_items[0])

        assert app.load_data() is False
        assert "[load_data] persistence:" in output.getvalue()
        assert app.store.ids() == [1]

    def test_run(self, tmp_path, sink, output):
        restored = InventoryLogService.run(tmp_path, sink)

        assert restored.store.ids() == [1, 2, 3]
        assert (tmp_path / SNAPSHOT_FILENAME).exists()
        text = output.getvalue()
        assert "Data saved. Simulating new session..." in text
        assert "Keyboard (ID: 2) - Qty: 25, Added: " in text


class TestGradingService:
    """Test GradingService report generation."""

    def test_generate_report(self, tmp_path, sink, output):
        input_path = tmp_path / "students.txt"
        output_path = tmp_path / "report.txt"
        input_path.write_text("1,Ama Mensah,85\n2,Kwame Boateng,55\n", encoding="utf-8")

        assert GradingService(sink).run(input_path, output_path) is True

        assert output_path.read_text(encoding="utf-8").splitlines() == [
            "Ama Mensah (ID: 1): Score = 85, Grade = A",
            "Kwame Boateng (ID: 2): Score = 55, Grade = D",
        ]
        assert output.getvalue() == "Report generated successfully.\n"

    @pytest.mark.parametrize("content, kind", [
        ("1,Ama Mensah\n", "missing_field"),
        ("1,Ama Mensah,high\n", "malformed_field"),
        ("1,Ama Mensah,85\n1,Ama Again,70\n", "duplicate_key"),
    ])
    def test_bad_input_reported_without_report(self, tmp_path, sink, output, content, kind):
        input_path = tmp_path / "students.txt"
        output_path = tmp_path / "report.txt"
        input_path.write_text(content, encoding="utf-8")

        assert GradingService(sink).run(input_path, output_path) is False

        assert output.getvalue().startswith(f"[generate_report] {kind}:")
        assert not output_path.exists()

    def test_missing_input_reported(self, tmp_path, sink, output):
        assert GradingService(sink).run(tmp_path / "missing.txt", tmp_path / "report.txt") is False
        assert output.getvalue().startswith("[generate_report] persistence: Input file could not be read")


class TestFinanceService:
    """Test FinanceService transaction handling."""

    def test_processors(self):
        t = Transaction(1, datetime(2026, 10, 18), Decimal("150"), "Groceries")

        assert MobileMoneyProcessor().process(t) == "[Mobile Money] Processed $150.00 for Groceries"
        assert BankTransferProcessor().process(t) == "[Bank Transfer] Processed $150.00 for Groceries"
        assert CryptoWalletProcessor().process(t) == "[Crypto Wallet] Processed $150.00 for Groceries"

    def test_apply_transaction(self, sink, output):
        service = FinanceService(sink)
        service.open_account(1, "SA-001", Decimal("1000"))

        account = service.apply_transaction(1, Transaction(1, datetime(2026, 10, 18), Decimal("150"), "Groceries"))

        assert account.balance == Decimal("850")
        assert output.getvalue() == "Transaction applied. Updated balance: $850.00\n"

    def test_insufficient_funds(self, sink):
        service = FinanceService(sink)
        service.open_account(1, "SA-001", Decimal("100"))

        with pytest.raises(InvalidValueError, match="Insufficient funds"):
            service.apply_transaction(1, Transaction(1, datetime(2026, 10, 18), Decimal("150"), "Rent"))
        assert service.accounts.get(1).balance == Decimal("100")

    def test_non_positive_amount(self, sink):
        service = FinanceService(sink)
        service.open_account(1, "SA-001", Decimal("100"))

        with pytest.raises(InvalidValueError, match="must be positive"):
            service.apply_transaction(1, Transaction(1, datetime(2026, 10, 18), Decimal("0"), "Nothing"))

    @pytest.mark.parametrize("amount", [Decimal("NaN"), Decimal("Infinity"), 150])
    def test_non_finite_or_non_decimal_amount(self, sink, amount):
        service = FinanceService(sink)
        service.open_account(1, "SA-001", Decimal("100"))

        with pytest.raises(InvalidValueError, match="finite decimal"):
            service.apply_transaction(1, Transaction(1, datetime(2026, 10, 18), amount, "Odd"))
        assert service.accounts.get(1).balance == Decimal("100")

    def test_inexact_debit_not_reported_as_insufficient_funds(self, sink):
        service = FinanceService(sink)
        service.open_account(1, "SA-001", Decimal("100"))

        with pytest.raises(InvalidValueError) as exc_info:
            service.apply_transaction(1, Transaction(1, datetime(2026, 10, 18), Decimal("1e-100"), "Dust"))

        assert "Insufficient funds" not in exc_info.value.message
        assert service.accounts.get(1).balance == Decimal("100")

    def test_unknown_account(self, sink):
        with pytest.raises(NotFoundError):
            FinanceService(sink).apply_transaction(7, Transaction(1, datetime(2026, 10, 18), Decimal("1"), "X"))

    def test_run(self, sink, output):
        service = FinanceService(sink)
        service.run(now=datetime(2026, 10, 18, 12, 0))

        lines = output.getvalue().splitlines()
        assert "Transaction applied. Updated balance: $350.00" in lines
        assert any(line.startswith("[apply_transaction] invalid_value: Insufficient funds") for line in lines)
        assert service.accounts.get(1).balance == Decimal("350")
        assert len(service.transactions) == 4
        assert lines[-1] == "4 transactions recorded."
