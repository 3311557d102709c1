"""Persistence of reconstructed monthly balances."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from networth.domain.models import Account, MonthlyAccountBalance
from networth.repositories.protocols import SnapshotRepository

logger = logging.getLogger(__name__)


class SnapshotWriter:
    """
    Swaps an account's snapshot set in one transaction.

    Readers see either the previous complete set or the new one.
    """

    def __init__(self, snapshot_repo: SnapshotRepository):
        self._snapshot_repo = snapshot_repo

    @staticmethod
    def build_rows(
        account: Account,
        balances: list[tuple[date, Decimal]],
        market_values: Optional[dict[date, Decimal]] = None,
    ) -> list[MonthlyAccountBalance]:
        """Combine balance rows with optional market values into snapshots."""
        return [
            MonthlyAccountBalance(
                user_id=account.user_id,
                account_id=account.account_id,
                month=month,
                balance=balance,
                market_value=(
                    market_values.get(month, Decimal("0"))
                    if market_values is not None
                    else None
                ),
            )
            for month, balance in balances
        ]

    def write(self, account: Account, rows: list[MonthlyAccountBalance]) -> None:
        """Replace every snapshot of the account with rows."""
        self._snapshot_repo.replace_for_account(account.account_id, rows)
        logger.debug("Wrote %d monthly snapshots for account %s", len(rows), account.account_id)
