"""Finance service - transaction processing against a savings account."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from storekit.models.domain import SavingsAccount, Transaction
from storekit.models.errors import InvalidValueError
from storekit.repositories.entity_store import EntityStore
from storekit.services.reporting import ReportSink


def format_amount(amount: Decimal) -> str:
    return f"${amount:,.2f}"


class TransactionProcessor(ABC):
    """Channel a transaction is processed through."""

    label: str = ""

    @abstractmethod
    def process(self, transaction: Transaction) -> str:
        """Process a transaction and return the confirmation message."""
        pass


class BankTransferProcessor(TransactionProcessor):
    label = "Bank Transfer"

    def process(self, transaction: Transaction) -> str:
        return f"[{self.label}] Processed {format_amount(transaction.amount)} for {transaction.category}"


class MobileMoneyProcessor(TransactionProcessor):
    label = "Mobile Money"

    def process(self, transaction: Transaction) -> str:
        return f"[{self.label}] Processed {format_amount(transaction.amount)} for {transaction.category}"


class CryptoWalletProcessor(TransactionProcessor):
    label = "Crypto Wallet"

    def process(self, transaction: Transaction) -> str:
        return f"[{self.label}] Processed {format_amount(transaction.amount)} for {transaction.category}"


class FinanceService:
    """
    Service for applying transactions to savings accounts.

    Debits go through ``EntityStore.adjust_field`` so a balance can never
    drop below zero.
    """

    def __init__(self, sink: Optional[ReportSink] = None):
        self.sink = sink or ReportSink()
        self.accounts: EntityStore[SavingsAccount] = EntityStore(SavingsAccount)
        self.transactions: EntityStore[Transaction] = EntityStore(Transaction)

    def open_account(self, id: int, account_number: str, initial_balance: Decimal) -> SavingsAccount:
        return self.accounts.add(SavingsAccount(id, account_number, Decimal(initial_balance)))

    def apply_transaction(self, account_id: int, transaction: Transaction) -> SavingsAccount:
        """
        Debit a transaction from an account.

        Raises:
            NotFoundError: If the account does not exist
            InvalidValueError: If the amount is not a finite positive decimal,
                exceeds the balance, or cannot be debited exactly
        """
        amount = transaction.amount
        if not isinstance(amount, Decimal) or not amount.is_finite():
            raise InvalidValueError(
                f"Transaction amount must be a finite decimal, got {amount!r}.",
                operation="apply_transaction",
                details={"transaction_id": transaction.id},
            )
        if amount <= 0:
            raise InvalidValueError(
                f"Transaction amount must be positive, got {amount}.",
                operation="apply_transaction",
                details={"transaction_id": transaction.id},
            )
        balance = self.accounts.get(account_id).balance
        if amount > balance:
            raise InvalidValueError(
                f"Insufficient funds: {format_amount(amount)} requested, "
                f"balance is {format_amount(balance)}.",
                operation="apply_transaction",
                details={"account_id": account_id, "transaction_id": transaction.id},
            )
        account = self.accounts.adjust_field(account_id, amount.copy_negate())
        self.sink.info(f"Transaction applied. Updated balance: {format_amount(account.balance)}")
        return account

    def record_transactions(self, transactions: List[Transaction]) -> None:
        for transaction in transactions:
            self.transactions.add(transaction)

    def run(self, now: Optional[datetime] = None) -> None:
        """Run the fixed demonstration sequence."""
        now = now or datetime.now()
        self.sink.run_step("open_account", self.open_account, 1, "SA-001", Decimal("1000"))

        batch = [
            (Transaction(1, now, Decimal("150"), "Groceries"), MobileMoneyProcessor()),
            (Transaction(2, now, Decimal("200"), "Utilities"), BankTransferProcessor()),
            (Transaction(3, now, Decimal("300"), "Entertainment"), CryptoWalletProcessor()),
            (Transaction(4, now, Decimal("400"), "Rent"), BankTransferProcessor()),
        ]

        for transaction, processor in batch:
            self.sink.info(processor.process(transaction))

        for transaction, _ in batch:
            self.sink.run_step("apply_transaction", self.apply_transaction, 1, transaction)

        self.sink.run_step("record_transactions", self.record_transactions, [t for t, _ in batch])
        self.sink.info()
        self.sink.info(f"{len(self.transactions)} transactions recorded.")
