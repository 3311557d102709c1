"""Exchange rate and user preference domain models."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class ExchangeRate:
    """Directional rate: 1 unit of from_currency = rate units of to_currency."""

    from_currency: str
    to_currency: str
    rate_date: date
    rate: Decimal


@dataclass
class UserPreference:
    """User display preferences relevant to reporting."""

    user_id: str
    default_currency: Optional[str] = None
