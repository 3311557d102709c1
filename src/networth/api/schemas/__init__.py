"""API schemas package."""

from networth.api.schemas.net_worth import (
    MonthlyNetWorthResponse,
    MonthlyInvestmentResponse,
    FailedAccountResponse,
    RecalculationResponse,
)

__all__ = [
    "MonthlyNetWorthResponse",
    "MonthlyInvestmentResponse",
    "FailedAccountResponse",
    "RecalculationResponse",
]
