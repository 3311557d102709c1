"""Exchange rate and preference repository protocols."""

from datetime import date
from typing import Protocol, Optional

from networth.domain.models import ExchangeRate, UserPreference


class ExchangeRateRepository(Protocol):
    """Interface for exchange rate data access."""

    def create(self, rate: ExchangeRate) -> ExchangeRate:
        """Persist a new exchange rate."""
        ...

    def list_between(
        self,
        currencies: list[str],
        target_currency: str,
        start_date: date,
        end_date: date,
    ) -> list[ExchangeRate]:
        """
        Rates between any of currencies and target_currency, in either direction,
        dated within [start_date, end_date], ordered by date ascending.
        """
        ...


class PreferenceRepository(Protocol):
    """Interface for user preference lookup."""

    def get(self, user_id: str) -> Optional[UserPreference]:
        """Retrieve the user's preferences."""
        ...

    def upsert(self, preference: UserPreference) -> UserPreference:
        """Insert or update the user's preferences."""
        ...
