"""
Unit tests for RateIndex and CurrencyConverter.

Tests cover:
- Direct, inverse and missing rate lookups
- At-or-before date semantics
- Rate loading window around the requested range
"""

from datetime import date
from decimal import Decimal

from networth.domain.models import ExchangeRate
from networth.services import CurrencyConverter, RateIndex


def _rate(from_currency: str, to_currency: str, rate_date: date, rate: str) -> ExchangeRate:
    return ExchangeRate(
        from_currency=from_currency,
        to_currency=to_currency,
        rate_date=rate_date,
        rate=Decimal(rate),
    )


class FakeRateRepository:
    """Records list_between calls."""

    def __init__(self, rates=None):
        self.rates = rates or []
        self.calls = []

    def list_between(self, currencies, target_currency, start_date, end_date):
        self.calls.append((list(currencies), target_currency, start_date, end_date))
        return self.rates


# =============================================================================
# RATE INDEX
# =============================================================================


class TestRateIndex:
    """Tests for dated rate lookup."""

    def test_latest_picks_most_recent_at_or_before(self):
        index = RateIndex([
            _rate("EUR", "USD", date(2024, 1, 1), "1.10"),
            _rate("EUR", "USD", date(2024, 1, 20), "1.08"),
            _rate("EUR", "USD", date(2024, 2, 5), "1.12"),
        ])

        assert index.latest("EUR", "USD", date(2024, 1, 31)) == Decimal("1.08")
        assert index.latest("EUR", "USD", date(2024, 1, 20)) == Decimal("1.08")

    def test_latest_none_before_first_rate(self):
        index = RateIndex([_rate("EUR", "USD", date(2024, 1, 10), "1.10")])

        assert index.latest("EUR", "USD", date(2024, 1, 9)) is None

    def test_pairs_are_directional(self):
        index = RateIndex([_rate("EUR", "USD", date(2024, 1, 1), "1.10")])

        assert index.pairs() == [("EUR", "USD")]
        assert index.latest("USD", "EUR", date(2024, 2, 1)) is None
        assert len(index) == 1

    def test_load_widens_window(self):
        """
        GIVEN a requested range of 2024-01-01..2024-03-31
        WHEN rates are loaded
        THEN the query covers 90 days before and 31 days after
        """
        repo = FakeRateRepository()

        RateIndex.load(repo, {"EUR", "USD"}, "USD", date(2024, 1, 1), date(2024, 3, 31))

        assert repo.calls == [(["EUR"], "USD", date(2023, 10, 3), date(2024, 5, 1))]

    def test_load_skips_query_for_single_currency(self):
        repo = FakeRateRepository()

        index = RateIndex.load(repo, {"USD"}, "USD", date(2024, 1, 1), date(2024, 3, 31))

        assert repo.calls == []
        assert len(index) == 0


# =============================================================================
# CURRENCY CONVERTER
# =============================================================================


class TestCurrencyConverter:
    """Tests for conversion into the display currency."""

    def test_same_currency_unchanged(self):
        converter = CurrencyConverter(RateIndex(), "USD")

        assert converter.convert(Decimal("123.45"), "USD", date(2024, 1, 31)) == Decimal("123.45")

    def test_direct_rate_multiplies(self):
        index = RateIndex([_rate("EUR", "USD", date(2024, 1, 15), "1.10")])
        converter = CurrencyConverter(index, "USD")

        assert converter.convert(Decimal("1000"), "EUR", date(2024, 1, 31)) == Decimal("1100.00")

    def test_inverse_rate_divides(self):
        """
        GIVEN only a USD->EUR rate of 0.92
        WHEN converting 1000 EUR to USD
        THEN the amount is divided by the rate (~1086.96)
        """
        index = RateIndex([_rate("USD", "EUR", date(2024, 1, 15), "0.92")])
        converter = CurrencyConverter(index, "USD")

        result = converter.convert(Decimal("1000"), "EUR", date(2024, 1, 31))

        assert result.quantize(Decimal("0.01")) == Decimal("1086.96")

    def test_direct_rate_preferred_over_inverse(self):
        index = RateIndex([
            _rate("EUR", "USD", date(2024, 1, 15), "1.10"),
            _rate("USD", "EUR", date(2024, 1, 15), "0.50"),
        ])
        converter = CurrencyConverter(index, "USD")

        assert converter.convert(Decimal("10"), "EUR", date(2024, 1, 31)) == Decimal("11.00")

    def test_missing_rate_returns_unconverted(self):
        converter = CurrencyConverter(RateIndex(), "USD")

        assert converter.convert(Decimal("1000"), "GBP", date(2024, 1, 31)) == Decimal("1000")

    def test_future_rate_not_used(self):
        """
        GIVEN the only EUR->USD rate is dated after the lookup date
        WHEN converting
        THEN the amount is returned unconverted
        """
        index = RateIndex([_rate("EUR", "USD", date(2024, 2, 1), "1.10")])
        converter = CurrencyConverter(index, "USD")

        assert converter.convert(Decimal("500"), "EUR", date(2024, 1, 31)) == Decimal("500")

    def test_zero_inverse_rate_ignored(self):
        index = RateIndex([_rate("USD", "EUR", date(2024, 1, 1), "0")])
        converter = CurrencyConverter(index, "USD")

        assert converter.convert(Decimal("40"), "EUR", date(2024, 1, 31)) == Decimal("40")
