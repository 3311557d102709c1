"""Per-security price sources used to value holdings at month end."""

from bisect import bisect_right
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Protocol

from networth.domain.models import Security, SecurityPrice


class PriceSource(Protocol):
    """Strategy resolving a security's price at a point in time."""

    def price_on(self, as_of: date) -> Optional[Decimal]:
        """Latest known price on or before as_of, or None if never priced."""
        ...


class _DatedPriceSeries:
    """Sorted (date, price) series with at-or-before lookup."""

    def __init__(self, points: Iterable[tuple[date, Decimal]]):
        ordered = sorted(points, key=lambda p: p[0])
        self._dates = [d for d, _ in ordered]
        self._prices = [p for _, p in ordered]

    def price_on(self, as_of: date) -> Optional[Decimal]:
        pos = bisect_right(self._dates, as_of)
        if pos == 0:
            return None
        return self._prices[pos - 1]


class MarketPriceSource(_DatedPriceSeries):
    """Values a security from its close-price history."""

    def __init__(self, prices: Iterable[SecurityPrice]):
        super().__init__((p.price_date, p.close_price) for p in prices)


class TradePriceSource(_DatedPriceSeries):
    """Values a security from the prices recorded on its own trades."""


def select_price_source(
    security: Optional[Security],
    market_prices: dict[str, list[SecurityPrice]],
    trade_prices: dict[str, list[tuple[date, Decimal]]],
    security_id: str,
) -> PriceSource:
    """Pick the valuation strategy for one security, once."""
    if security is not None and security.skip_price_updates:
        return TradePriceSource(trade_prices.get(security_id, []))
    return MarketPriceSource(market_prices.get(security_id, []))
