"""Monthly snapshot model for derived balances."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class MonthlyAccountBalance:
    """
    Derived month-end balance per account.

    IMPORTANT: Never edit directly; the whole set for an account is
    regenerated from the ledger and swapped in one transaction.
    """

    user_id: str
    account_id: str
    month: date  # first day of the month
    balance: Decimal
    market_value: Optional[Decimal] = None
