"""Cash transaction repository protocol."""

from datetime import date
from typing import Protocol, Optional

from networth.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for cash transaction (ledger) data access."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction together with its splits."""
        ...

    def earliest_date(self, account_id: str) -> Optional[date]:
        """Date of the account's first non-void transaction."""
        ...

    def list_for_balance(self, account_id: str, end_date: date) -> list[Transaction]:
        """List non-void transactions dated on or before end_date, splits loaded."""
        ...
