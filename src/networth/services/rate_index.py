"""In-memory exchange rate lookup for one aggregation call."""

from bisect import bisect_right
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from networth.domain.models import ExchangeRate
from networth.repositories.protocols import ExchangeRateRepository

# Rates are loaded slightly outside the requested range so the first
# months can still use a recent prior rate.
RATE_LOOKBACK_DAYS = 90
RATE_LOOKAHEAD_DAYS = 31


class RateIndex:
    """
    Currency pair -> dated rate list, sorted ascending by date.

    Pairs are directional: (EUR, USD) and (USD, EUR) are separate series.
    """

    def __init__(self, rates: Iterable[ExchangeRate] = ()):
        grouped: dict[tuple[str, str], list[tuple[date, Decimal]]] = defaultdict(list)
        for r in rates:
            grouped[(r.from_currency, r.to_currency)].append((r.rate_date, r.rate))

        self._dates: dict[tuple[str, str], list[date]] = {}
        self._rates: dict[tuple[str, str], list[Decimal]] = {}
        for pair, series in grouped.items():
            series.sort(key=lambda item: item[0])
            self._dates[pair] = [d for d, _ in series]
            self._rates[pair] = [r for _, r in series]

    @classmethod
    def load(
        cls,
        rate_repo: ExchangeRateRepository,
        currencies: Iterable[str],
        target_currency: str,
        start_date: date,
        end_date: date,
    ) -> "RateIndex":
        """Load every rate between currencies and target_currency around the range."""
        sources = sorted({c for c in currencies if c != target_currency})
        if not sources:
            return cls()
        rates = rate_repo.list_between(
            currencies=sources,
            target_currency=target_currency,
            start_date=start_date - timedelta(days=RATE_LOOKBACK_DAYS),
            end_date=end_date + timedelta(days=RATE_LOOKAHEAD_DAYS),
        )
        return cls(rates)

    def latest(self, from_currency: str, to_currency: str, on: date) -> Optional[Decimal]:
        """Most recent from->to rate dated on or before the given day."""
        dates = self._dates.get((from_currency, to_currency))
        if not dates:
            return None
        pos = bisect_right(dates, on)
        if pos == 0:
            return None
        return self._rates[(from_currency, to_currency)][pos - 1]

    def pairs(self) -> list[tuple[str, str]]:
        """Currency pairs present in the index."""
        return sorted(self._dates)

    def __len__(self) -> int:
        return sum(len(d) for d in self._dates.values())
