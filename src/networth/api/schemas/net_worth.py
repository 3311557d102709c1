"""Pydantic schemas for net worth API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MonthlyNetWorthResponse(BaseModel):
    """Net worth totals for one month."""

    model_config = ConfigDict(populate_by_name=True)

    month: str
    assets: int
    liabilities: int
    net_worth: int = Field(serialization_alias="netWorth")


class MonthlyInvestmentResponse(BaseModel):
    """Investment value for one month."""

    month: str
    value: int


class FailedAccountResponse(BaseModel):
    """Account whose recalculation failed."""

    account_id: str
    error: Optional[str] = None


class RecalculationResponse(BaseModel):
    """Summary of a batch recalculation."""

    processed: int
    failed: list[FailedAccountResponse] = []
