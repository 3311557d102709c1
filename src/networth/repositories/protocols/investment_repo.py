"""Investment transaction and security repository protocols."""

from datetime import date
from decimal import Decimal
from typing import Protocol, Optional

from networth.domain.models import InvestmentTransaction, Security, SecurityPrice


class InvestmentTransactionRepository(Protocol):
    """Interface for brokerage activity data access."""

    def create(self, transaction: InvestmentTransaction) -> InvestmentTransaction:
        """Persist a new investment transaction."""
        ...

    def earliest_date(self, account_id: str) -> Optional[date]:
        """Date of the account's first investment transaction."""
        ...

    def list_by_account(self, account_id: str, end_date: date) -> list[InvestmentTransaction]:
        """List transactions dated on or before end_date, ordered by date ascending."""
        ...

    def list_trade_prices(
        self,
        security_ids: list[str],
    ) -> dict[str, list[tuple[date, Decimal]]]:
        """Positive BUY/SELL/REINVEST prices per security, ordered by date ascending."""
        ...


class SecurityRepository(Protocol):
    """Interface for securities and their price history."""

    def create(self, security: Security) -> Security:
        """Persist a new security."""
        ...

    def get_many(self, security_ids: list[str]) -> dict[str, Security]:
        """Retrieve securities keyed by ID."""
        ...

    def add_price(self, price: SecurityPrice) -> SecurityPrice:
        """Persist a close price."""
        ...

    def list_prices(self, security_ids: list[str]) -> dict[str, list[SecurityPrice]]:
        """Close prices per security, ordered by date ascending."""
        ...
