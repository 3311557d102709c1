"""Security, price and investment transaction domain models."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from networth.domain.models.enums import InvestmentAction


@dataclass
class Security:
    """
    Tradable security.

    skip_price_updates marks securities with no market price feed; they are
    valued from the prices recorded on their own trades.
    """

    security_id: str
    symbol: str
    name: str
    currency_code: str = "USD"
    skip_price_updates: bool = False


@dataclass
class SecurityPrice:
    """Daily close price for a security."""

    security_id: str
    price_date: date
    close_price: Decimal


@dataclass
class InvestmentTransaction:
    """
    Action on a security inside a brokerage account.

    For SPLIT the quantity is the resulting share count, not a delta.
    Rows without a quantity leave holdings unchanged.
    """

    investment_transaction_id: str
    account_id: str
    action: InvestmentAction
    transaction_date: date
    security_id: Optional[str] = None
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if isinstance(self.action, str):
            self.action = InvestmentAction(self.action)
