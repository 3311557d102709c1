"""View models for service outputs."""

from networth.domain.views.net_worth import (
    SnapshotRow,
    MonthlyNetWorth,
    MonthlyInvestmentValue,
    AccountRecalcResult,
)

__all__ = [
    "SnapshotRow",
    "MonthlyNetWorth",
    "MonthlyInvestmentValue",
    "AccountRecalcResult",
]
