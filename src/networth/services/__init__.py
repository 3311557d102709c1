"""Service layer - net worth reconstruction engine."""

from networth.services.rate_index import RateIndex
from networth.services.currency_converter import CurrencyConverter
from networth.services.security_valuation import (
    PriceSource,
    MarketPriceSource,
    TradePriceSource,
    select_price_source,
)
from networth.services.holdings_replayer import HoldingsReplayer, HoldingEffect
from networth.services.balance_reconstructor import BalanceReconstructor
from networth.services.snapshot_writer import SnapshotWriter
from networth.services.recalculation import RecalculationOrchestrator
from networth.services.net_worth_aggregator import NetWorthAggregator, InvestmentAggregator

__all__ = [
    "RateIndex",
    "CurrencyConverter",
    "PriceSource",
    "MarketPriceSource",
    "TradePriceSource",
    "select_price_source",
    "HoldingsReplayer",
    "HoldingEffect",
    "BalanceReconstructor",
    "SnapshotWriter",
    "RecalculationOrchestrator",
    "NetWorthAggregator",
    "InvestmentAggregator",
]
