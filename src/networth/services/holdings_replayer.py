"""Holdings replay and month-end valuation for brokerage accounts."""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable

from networth.core.months import month_end
from networth.domain.models import InvestmentAction, InvestmentTransaction
from networth.repositories.protocols import (
    InvestmentTransactionRepository,
    SecurityRepository,
)
from networth.services.security_valuation import PriceSource, select_price_source

logger = logging.getLogger(__name__)

# Quantities below this are residue from offsetting trades and hold no value
NEGLIGIBLE_QUANTITY = Decimal("0.000001")


class HoldingEffect(Enum):
    """How an investment action changes the quantity held."""

    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    REPLACE = "REPLACE"

    def apply(self, held: Decimal, quantity: Decimal) -> Decimal:
        if self is HoldingEffect.ADD:
            return held + quantity
        if self is HoldingEffect.SUBTRACT:
            return held - quantity
        return quantity


ACTION_EFFECTS: dict[InvestmentAction, HoldingEffect] = {
    InvestmentAction.BUY: HoldingEffect.ADD,
    InvestmentAction.REINVEST: HoldingEffect.ADD,
    InvestmentAction.TRANSFER_IN: HoldingEffect.ADD,
    InvestmentAction.SELL: HoldingEffect.SUBTRACT,
    InvestmentAction.TRANSFER_OUT: HoldingEffect.SUBTRACT,
    # Split rows carry the post-split share count
    InvestmentAction.SPLIT: HoldingEffect.REPLACE,
}


def is_negligible(quantity: Decimal) -> bool:
    return abs(quantity) < NEGLIGIBLE_QUANTITY


def replay_quantities(
    transactions: Iterable[InvestmentTransaction],
    months: list[date],
) -> dict[date, dict[str, Decimal]]:
    """
    Walk transactions in date order and snapshot per-security quantities.

    Args:
        transactions: Investment transactions of one account.
        months: First-of-month dates, ascending.

    Returns:
        Mapping of month -> {security_id: quantity held at month end}.
    """
    ordered = sorted(transactions, key=lambda t: t.transaction_date)
    holdings: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    result: dict[date, dict[str, Decimal]] = {}
    idx = 0

    for month in months:
        cutoff = month_end(month)
        while idx < len(ordered) and ordered[idx].transaction_date <= cutoff:
            txn = ordered[idx]
            idx += 1
            if not txn.security_id or txn.quantity is None:
                continue
            effect = ACTION_EFFECTS[txn.action]
            holdings[txn.security_id] = effect.apply(holdings[txn.security_id], txn.quantity)
        result[month] = dict(holdings)

    return result


def value_holdings(
    quantities_by_month: dict[date, dict[str, Decimal]],
    price_sources: dict[str, PriceSource],
) -> dict[date, Decimal]:
    """
    Market value per month as the sum of quantity x price.

    Negligible quantities and securities without a price on or before the
    month end contribute nothing.
    """
    values: dict[date, Decimal] = {}
    for month, quantities in quantities_by_month.items():
        cutoff = month_end(month)
        total = Decimal("0")
        for security_id, quantity in quantities.items():
            if is_negligible(quantity):
                continue
            source = price_sources.get(security_id)
            price = source.price_on(cutoff) if source is not None else None
            if price is None:
                continue
            total += quantity * price
        values[month] = total
    return values


class HoldingsReplayer:
    """
    Reconstructs month-end market value of a brokerage account.

    Loads the account's investment activity and the price data of every
    security it touched, then replays and values in memory.
    """

    def __init__(
        self,
        investment_repo: InvestmentTransactionRepository,
        security_repo: SecurityRepository,
    ):
        self._investment_repo = investment_repo
        self._security_repo = security_repo

    def market_values(
        self,
        account_id: str,
        months: list[date],
        as_of: date,
    ) -> dict[date, Decimal]:
        """Market value for each month; 0 for every month when nothing was traded."""
        if not months:
            return {}

        transactions = self._investment_repo.list_by_account(account_id, end_date=as_of)
        if not transactions:
            return {month: Decimal("0") for month in months}

        security_ids = sorted({t.security_id for t in transactions if t.security_id})
        price_sources = self._load_price_sources(security_ids)

        quantities = replay_quantities(transactions, months)
        values = value_holdings(quantities, price_sources)
        logger.debug(
            "Replayed %d investment transactions over %d months for account %s",
            len(transactions),
            len(months),
            account_id,
        )
        return values

    def _load_price_sources(self, security_ids: list[str]) -> dict[str, PriceSource]:
        securities = self._security_repo.get_many(security_ids)
        market_ids = [i for i in security_ids if not self._skips_prices(securities.get(i))]
        trade_ids = [i for i in security_ids if self._skips_prices(securities.get(i))]

        market_prices = self._security_repo.list_prices(market_ids)
        trade_prices = self._investment_repo.list_trade_prices(trade_ids)

        return {
            security_id: select_price_source(
                securities.get(security_id),
                market_prices,
                trade_prices,
                security_id,
            )
            for security_id in security_ids
        }

    @staticmethod
    def _skips_prices(security) -> bool:
        return security is not None and security.skip_price_updates
