"""Monthly snapshot repository protocol."""

from datetime import date
from typing import Protocol, Optional

from networth.domain.models import MonthlyAccountBalance
from networth.domain.views import SnapshotRow


class SnapshotRepository(Protocol):
    """Interface for the monthly account balance cache."""

    def count_for_user(self, user_id: str) -> int:
        """Number of snapshot rows stored for a user."""
        ...

    def list_for_account(self, account_id: str) -> list[MonthlyAccountBalance]:
        """All snapshot rows of an account, ordered by month."""
        ...

    def list_rows(
        self,
        user_id: str,
        start_month: date,
        end_month: date,
        account_ids: Optional[list[str]] = None,
        investment_only: bool = False,
    ) -> list[SnapshotRow]:
        """Snapshot rows joined with account attributes, ordered by month."""
        ...

    def replace_for_account(
        self,
        account_id: str,
        balances: list[MonthlyAccountBalance],
    ) -> None:
        """
        Delete every row of the account and insert balances in one transaction.

        On failure the transaction is rolled back and the error re-raised.
        """
        ...

    def rollback(self) -> None:
        """Discard uncommitted work so the session can serve the next account."""
        ...
