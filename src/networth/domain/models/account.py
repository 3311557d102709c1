"""Account domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from networth.domain.models.enums import AccountType, AccountSubType


@dataclass
class Account:
    """
    Ledger account owned by a user.

    ASSET accounts may carry date_acquired; months before it report zero.
    Investment cash and brokerage accounts point at each other through
    linked_account_id. The link is a lookup relation only.
    """

    account_id: str
    user_id: str
    name: str
    account_type: AccountType
    currency_code: str = "USD"
    account_sub_type: Optional[AccountSubType] = None
    opening_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    date_acquired: Optional[date] = None
    linked_account_id: Optional[str] = None
    is_closed: bool = False
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.account_type, str):
            self.account_type = AccountType(self.account_type)
        if isinstance(self.account_sub_type, str):
            self.account_sub_type = AccountSubType(self.account_sub_type)

    @property
    def is_brokerage(self) -> bool:
        """Brokerage side of an investment pair."""
        return self.account_sub_type == AccountSubType.INVESTMENT_BROKERAGE

    @property
    def is_standalone_investment(self) -> bool:
        """Investment account holding both cash and securities."""
        return self.account_type == AccountType.INVESTMENT and self.account_sub_type is None

    @property
    def holds_securities(self) -> bool:
        """Return True if the account's value includes security holdings."""
        return self.is_brokerage or self.is_standalone_investment
