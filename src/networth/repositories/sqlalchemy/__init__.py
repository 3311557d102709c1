"""SQLAlchemy repository implementations."""

from networth.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    session_scope,
    init_db,
    reset_database,
    Base,
)
from networth.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from networth.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from networth.repositories.sqlalchemy.investment_repo import (
    SqlAlchemyInvestmentTransactionRepository,
    SqlAlchemySecurityRepository,
)
from networth.repositories.sqlalchemy.currency_repo import (
    SqlAlchemyExchangeRateRepository,
    SqlAlchemyPreferenceRepository,
)
from networth.repositories.sqlalchemy.snapshot_repo import SqlAlchemySnapshotRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "session_scope",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyInvestmentTransactionRepository",
    "SqlAlchemySecurityRepository",
    "SqlAlchemyExchangeRateRepository",
    "SqlAlchemyPreferenceRepository",
    "SqlAlchemySnapshotRepository",
]
