"""Dependency injection for FastAPI."""

from datetime import date
from typing import Callable

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from networth.core.timezone import today_local
from networth.repositories.sqlalchemy.database import get_db
from networth.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyInvestmentTransactionRepository,
    SqlAlchemySecurityRepository,
    SqlAlchemyExchangeRateRepository,
    SqlAlchemyPreferenceRepository,
    SqlAlchemySnapshotRepository,
)
from networth.services import (
    BalanceReconstructor,
    HoldingsReplayer,
    SnapshotWriter,
    RecalculationOrchestrator,
    NetWorthAggregator,
    InvestmentAggregator,
)


def get_current_user_id(x_user_id: str = Header(..., alias="X-User-Id")) -> str:
    """Provide the caller's user ID (set by the authentication layer in front)."""
    return x_user_id


def build_orchestrator(
    db: Session,
    clock: Callable[[], date] = today_local,
) -> RecalculationOrchestrator:
    """Wire a RecalculationOrchestrator onto one session."""
    investment_repo = SqlAlchemyInvestmentTransactionRepository(db)
    snapshot_repo = SqlAlchemySnapshotRepository(db)
    return RecalculationOrchestrator(
        account_repo=SqlAlchemyAccountRepository(db),
        snapshot_repo=snapshot_repo,
        reconstructor=BalanceReconstructor(
            transaction_repo=SqlAlchemyTransactionRepository(db),
            investment_repo=investment_repo,
        ),
        replayer=HoldingsReplayer(
            investment_repo=investment_repo,
            security_repo=SqlAlchemySecurityRepository(db),
        ),
        writer=SnapshotWriter(snapshot_repo),
        clock=clock,
    )


def get_orchestrator(db: Session = Depends(get_db)) -> RecalculationOrchestrator:
    """Provide RecalculationOrchestrator instance."""
    return build_orchestrator(db)


def get_net_worth_aggregator(
    db: Session = Depends(get_db),
    orchestrator: RecalculationOrchestrator = Depends(get_orchestrator),
) -> NetWorthAggregator:
    """Provide NetWorthAggregator instance."""
    return NetWorthAggregator(
        snapshot_repo=SqlAlchemySnapshotRepository(db),
        rate_repo=SqlAlchemyExchangeRateRepository(db),
        preference_repo=SqlAlchemyPreferenceRepository(db),
        orchestrator=orchestrator,
    )


def get_investment_aggregator(
    db: Session = Depends(get_db),
    orchestrator: RecalculationOrchestrator = Depends(get_orchestrator),
) -> InvestmentAggregator:
    """Provide InvestmentAggregator instance."""
    return InvestmentAggregator(
        snapshot_repo=SqlAlchemySnapshotRepository(db),
        rate_repo=SqlAlchemyExchangeRateRepository(db),
        preference_repo=SqlAlchemyPreferenceRepository(db),
        orchestrator=orchestrator,
        account_repo=SqlAlchemyAccountRepository(db),
    )
