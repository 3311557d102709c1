"""Month-end cash balance reconstruction from the transaction ledger."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from networth.core.months import iter_months, month_end, month_start, year_month
from networth.domain.models import Account, AccountType, Transaction
from networth.repositories.protocols import (
    InvestmentTransactionRepository,
    TransactionRepository,
)


def cumulative_month_balances(
    opening_balance: Decimal,
    transactions: Iterable[Transaction],
    months: list[date],
) -> list[tuple[date, Decimal]]:
    """
    Running balance at each month end.

    Each month's balance is the opening balance plus every transaction
    dated on or before that month's last day, not just that month's activity.
    Void transactions are skipped; split parents count through their lines.
    """
    ordered = sorted(
        (t for t in transactions if not t.is_void),
        key=lambda t: t.transaction_date,
    )
    rows: list[tuple[date, Decimal]] = []
    running = opening_balance
    idx = 0

    for month in months:
        cutoff = month_end(month)
        while idx < len(ordered) and ordered[idx].transaction_date <= cutoff:
            running += ordered[idx].effective_amount
            idx += 1
        rows.append((month, running))

    return rows


def zero_before_acquisition(
    rows: list[tuple[date, Decimal]],
    date_acquired: Optional[date],
) -> list[tuple[date, Decimal]]:
    """Force months strictly before the acquisition month to zero."""
    if date_acquired is None:
        return rows
    acquired = year_month(date_acquired)
    return [
        (month, Decimal("0") if year_month(month) < acquired else balance)
        for month, balance in rows
    ]


class BalanceReconstructor:
    """
    Computes one account's month-end balances from the ledger.

    Stored running balances are never trusted; history is replayed from the
    opening balance every time.
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        investment_repo: InvestmentTransactionRepository,
    ):
        self._transaction_repo = transaction_repo
        self._investment_repo = investment_repo

    def effective_start(self, account: Account, as_of: date) -> date:
        """
        First day the balance series covers.

        Earliest transaction (cash, or investment for accounts that hold
        securities), else the creation date. An ASSET's date_acquired wins
        when it is earlier.
        """
        candidates = [self._transaction_repo.earliest_date(account.account_id)]
        if account.holds_securities:
            candidates.append(self._investment_repo.earliest_date(account.account_id))
        known = [d for d in candidates if d is not None]

        if known:
            start = min(known)
        elif account.created_at is not None:
            start = account.created_at.date()
        else:
            start = as_of

        if (
            account.account_type == AccountType.ASSET
            and account.date_acquired is not None
            and account.date_acquired < start
        ):
            start = account.date_acquired
        return start

    def months_for(self, account: Account, as_of: date) -> list[date]:
        """First-of-month dates from the effective start through the current month."""
        start = month_start(self.effective_start(account, as_of))
        return list(iter_months(start, as_of)) if start <= as_of else []

    def reconstruct(
        self,
        account: Account,
        as_of: date,
    ) -> list[tuple[date, Decimal]]:
        """
        Return (month, balance) rows for the account.

        Transactions dated after as_of are ignored.
        """
        months = self.months_for(account, as_of)
        if not months:
            return []

        transactions = self._transaction_repo.list_for_balance(
            account.account_id,
            end_date=as_of,
        )
        rows = cumulative_month_balances(account.opening_balance, transactions, months)

        if account.account_type == AccountType.ASSET:
            rows = zero_before_acquisition(rows, account.date_acquired)
        return rows
