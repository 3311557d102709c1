"""View models for net worth outputs."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from networth.domain.models.enums import AccountType, AccountSubType


@dataclass
class SnapshotRow:
    """Snapshot joined with the account attributes aggregation needs."""

    account_id: str
    month: date
    balance: Decimal
    market_value: Optional[Decimal]
    account_type: AccountType
    account_sub_type: Optional[AccountSubType]
    currency_code: str


@dataclass
class MonthlyNetWorth:
    """Net worth totals for one month, rounded to whole units."""

    month: str
    assets: int
    liabilities: int
    net_worth: int


@dataclass
class MonthlyInvestmentValue:
    """Investment portfolio value for one month, rounded to whole units."""

    month: str
    value: int


@dataclass
class AccountRecalcResult:
    """Outcome of recomputing one account inside a batch."""

    account_id: str
    ok: bool
    error: Optional[str] = None
