"""Net worth API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from networth.api.deps import (
    get_current_user_id,
    get_investment_aggregator,
    get_net_worth_aggregator,
    get_orchestrator,
)
from networth.api.schemas import (
    FailedAccountResponse,
    MonthlyInvestmentResponse,
    MonthlyNetWorthResponse,
    RecalculationResponse,
)
from networth.core.exceptions import ValidationError
from networth.core.timezone import parse_iso_date
from networth.services import (
    InvestmentAggregator,
    NetWorthAggregator,
    RecalculationOrchestrator,
)

router = APIRouter(prefix="/net-worth", tags=["net-worth"])


def _parse_range(start_date: Optional[str], end_date: Optional[str]):
    start = parse_iso_date(start_date, field="start_date")
    end = parse_iso_date(end_date, field="end_date")
    if start and end and start > end:
        raise ValidationError("start_date must not be after end_date", field="start_date")
    return start, end


@router.get(
    "/monthly",
    response_model=list[MonthlyNetWorthResponse],
    response_model_by_alias=True,
)
def get_monthly_net_worth(
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD (default: 1990-01-01)"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD (default: today)"),
    user_id: str = Depends(get_current_user_id),
    aggregator: NetWorthAggregator = Depends(get_net_worth_aggregator),
) -> list[MonthlyNetWorthResponse]:
    """Monthly assets, liabilities and net worth in the user's currency."""
    start, end = _parse_range(start_date, end_date)
    rows = aggregator.get_monthly_net_worth(user_id, start, end)
    return [
        MonthlyNetWorthResponse(
            month=r.month,
            assets=r.assets,
            liabilities=r.liabilities,
            net_worth=r.net_worth,
        )
        for r in rows
    ]


@router.get("/investments/monthly", response_model=list[MonthlyInvestmentResponse])
def get_monthly_investments(
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD (default: 1990-01-01)"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD (default: today)"),
    account_ids: Optional[list[str]] = Query(None),
    display_currency: Optional[str] = Query(None, min_length=3, max_length=3),
    user_id: str = Depends(get_current_user_id),
    aggregator: InvestmentAggregator = Depends(get_investment_aggregator),
) -> list[MonthlyInvestmentResponse]:
    """Monthly investment portfolio value."""
    start, end = _parse_range(start_date, end_date)
    rows = aggregator.get_monthly_investments(
        user_id,
        start,
        end,
        account_ids=account_ids,
        display_currency=display_currency.upper() if display_currency else None,
    )
    return [MonthlyInvestmentResponse(month=r.month, value=r.value) for r in rows]


@router.post("/recalculate", response_model=RecalculationResponse)
def recalculate_all_accounts(
    user_id: str = Depends(get_current_user_id),
    orchestrator: RecalculationOrchestrator = Depends(get_orchestrator),
) -> RecalculationResponse:
    """Rebuild every snapshot of the user. Safe to repeat."""
    results = orchestrator.recalculate_all_accounts(user_id)
    return RecalculationResponse(
        processed=len(results),
        failed=[
            FailedAccountResponse(account_id=r.account_id, error=r.error)
            for r in results
            if not r.ok
        ],
    )


@router.post("/accounts/{account_id}/recalculate", status_code=status.HTTP_204_NO_CONTENT)
def recalculate_account(
    account_id: str,
    user_id: str = Depends(get_current_user_id),
    orchestrator: RecalculationOrchestrator = Depends(get_orchestrator),
) -> Response:
    """Rebuild one account's snapshots."""
    orchestrator.recalculate_account(user_id, account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
