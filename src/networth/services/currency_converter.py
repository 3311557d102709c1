"""Conversion of account amounts into the display currency."""

import logging
from datetime import date
from decimal import Decimal

from networth.services.rate_index import RateIndex

logger = logging.getLogger(__name__)


class CurrencyConverter:
    """
    Converts amounts into one target currency using a RateIndex.

    Lookup order: same currency, direct rate, inverse rate. When no rate
    resolves, the amount is returned unconverted so a missing rate never
    blocks reporting. Callers needing strict results must load rates first.
    """

    def __init__(self, rate_index: RateIndex, target_currency: str):
        self._rate_index = rate_index
        self._target = target_currency

    @property
    def target_currency(self) -> str:
        return self._target

    def convert(self, amount: Decimal, from_currency: str, on: date) -> Decimal:
        """Convert amount from from_currency using the latest rate on or before `on`."""
        if from_currency == self._target:
            return amount

        direct = self._rate_index.latest(from_currency, self._target, on)
        if direct is not None:
            return amount * direct

        inverse = self._rate_index.latest(self._target, from_currency, on)
        if inverse is not None and inverse != 0:
            return amount / inverse

        logger.debug(
            "No %s/%s rate on or before %s; using unconverted amount",
            from_currency,
            self._target,
            on,
        )
        return amount
