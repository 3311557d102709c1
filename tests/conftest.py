"""
Pytest configuration and fixtures for net worth engine tests.

This module provides:
- In-memory SQLite database fixtures
- Repository and service fixtures wired onto one session
- A fixed "today" so month ranges are deterministic
- Factory helpers for accounts, transactions, securities, prices and rates
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi import Depends
from fastapi.testclient import TestClient

from networth.main import app
from networth.api.deps import build_orchestrator, get_orchestrator
from networth.config.settings import Settings, set_settings, reset_settings
from networth.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from networth.repositories.sqlalchemy import orm_models  # noqa: F401
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
from networth.domain.models import (
    Account,
    AccountType,
    AccountSubType,
    ExchangeRate,
    InvestmentAction,
    InvestmentTransaction,
    MonthlyAccountBalance,
    Security,
    SecurityPrice,
    Transaction,
    TransactionSplit,
    TransactionStatus,
    UserPreference,
)


USER_ID = "user-1"
OTHER_USER_ID = "user-2"
FIXED_TODAY = date(2024, 3, 15)


def fixed_clock() -> date:
    """Deterministic 'today' for recomputation tests."""
    return FIXED_TODAY


def month(year: int, month_number: int) -> date:
    """First day of a month."""
    return date(year, month_number, 1)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def investment_repo(test_session) -> SqlAlchemyInvestmentTransactionRepository:
    return SqlAlchemyInvestmentTransactionRepository(test_session)


@pytest.fixture
def security_repo(test_session) -> SqlAlchemySecurityRepository:
    return SqlAlchemySecurityRepository(test_session)


@pytest.fixture
def rate_repo(test_session) -> SqlAlchemyExchangeRateRepository:
    return SqlAlchemyExchangeRateRepository(test_session)


@pytest.fixture
def preference_repo(test_session) -> SqlAlchemyPreferenceRepository:
    return SqlAlchemyPreferenceRepository(test_session)


@pytest.fixture
def snapshot_repo(test_session) -> SqlAlchemySnapshotRepository:
    return SqlAlchemySnapshotRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def reconstructor(transaction_repo, investment_repo) -> BalanceReconstructor:
    return BalanceReconstructor(
        transaction_repo=transaction_repo,
        investment_repo=investment_repo,
    )


@pytest.fixture
def replayer(investment_repo, security_repo) -> HoldingsReplayer:
    return HoldingsReplayer(
        investment_repo=investment_repo,
        security_repo=security_repo,
    )


@pytest.fixture
def snapshot_writer(snapshot_repo) -> SnapshotWriter:
    return SnapshotWriter(snapshot_repo)


@pytest.fixture
def orchestrator(
    account_repo,
    snapshot_repo,
    reconstructor,
    replayer,
    snapshot_writer,
) -> RecalculationOrchestrator:
    return RecalculationOrchestrator(
        account_repo=account_repo,
        snapshot_repo=snapshot_repo,
        reconstructor=reconstructor,
        replayer=replayer,
        writer=snapshot_writer,
        clock=fixed_clock,
    )


@pytest.fixture
def net_worth_aggregator(
    snapshot_repo,
    rate_repo,
    preference_repo,
    orchestrator,
) -> NetWorthAggregator:
    return NetWorthAggregator(
        snapshot_repo=snapshot_repo,
        rate_repo=rate_repo,
        preference_repo=preference_repo,
        orchestrator=orchestrator,
        clock=fixed_clock,
    )


@pytest.fixture
def investment_aggregator(
    snapshot_repo,
    rate_repo,
    preference_repo,
    orchestrator,
    account_repo,
) -> InvestmentAggregator:
    return InvestmentAggregator(
        snapshot_repo=snapshot_repo,
        rate_repo=rate_repo,
        preference_repo=preference_repo,
        orchestrator=orchestrator,
        account_repo=account_repo,
        clock=fixed_clock,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(account_repo) -> Callable[..., Account]:
    """Factory for creating test accounts."""

    def _create_account(
        account_type: AccountType = AccountType.CHEQUING,
        user_id: str = USER_ID,
        opening_balance: Decimal = Decimal("0"),
        currency_code: str = "USD",
        account_sub_type: Optional[AccountSubType] = None,
        date_acquired: Optional[date] = None,
        linked_account_id: Optional[str] = None,
        created_at: datetime = datetime(2024, 1, 1, 9, 0, 0),
        account_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Account:
        account_id = account_id or str(uuid.uuid4())
        return account_repo.create(
            Account(
                account_id=account_id,
                user_id=user_id,
                name=name or f"Account {account_id[:8]}",
                account_type=account_type,
                account_sub_type=account_sub_type,
                currency_code=currency_code,
                opening_balance=opening_balance,
                date_acquired=date_acquired,
                linked_account_id=linked_account_id,
                created_at=created_at,
            )
        )

    return _create_account


@pytest.fixture
def transaction_factory(transaction_repo) -> Callable[..., Transaction]:
    """Factory for creating cash transactions."""

    def _create_transaction(
        account: Account,
        transaction_date: date,
        amount: Decimal,
        status: TransactionStatus = TransactionStatus.CLEARED,
        split_amounts: Optional[list[Decimal]] = None,
    ) -> Transaction:
        transaction_id = str(uuid.uuid4())
        splits = [
            TransactionSplit(
                split_id=str(uuid.uuid4()),
                transaction_id=transaction_id,
                amount=split_amount,
            )
            for split_amount in (split_amounts or [])
        ]
        return transaction_repo.create(
            Transaction(
                transaction_id=transaction_id,
                account_id=account.account_id,
                transaction_date=transaction_date,
                amount=amount,
                status=status,
                is_split=bool(splits),
                splits=splits,
            )
        )

    return _create_transaction


@pytest.fixture
def security_factory(security_repo) -> Callable[..., Security]:
    """Factory for creating securities."""

    def _create_security(
        symbol: str,
        skip_price_updates: bool = False,
    ) -> Security:
        return security_repo.create(
            Security(
                security_id=str(uuid.uuid4()),
                symbol=symbol,
                name=f"{symbol} Inc.",
                skip_price_updates=skip_price_updates,
            )
        )

    return _create_security


@pytest.fixture
def price_factory(security_repo) -> Callable[..., SecurityPrice]:
    """Factory for creating security close prices."""

    def _create_price(security: Security, price_date: date, close: Decimal) -> SecurityPrice:
        return security_repo.add_price(
            SecurityPrice(
                security_id=security.security_id,
                price_date=price_date,
                close_price=close,
            )
        )

    return _create_price


@pytest.fixture
def investment_factory(investment_repo) -> Callable[..., InvestmentTransaction]:
    """Factory for creating investment transactions."""

    def _create_investment(
        account: Account,
        security: Optional[Security],
        action: InvestmentAction,
        transaction_date: date,
        quantity: Optional[Decimal],
        price: Optional[Decimal] = None,
    ) -> InvestmentTransaction:
        return investment_repo.create(
            InvestmentTransaction(
                investment_transaction_id=str(uuid.uuid4()),
                account_id=account.account_id,
                security_id=security.security_id if security else None,
                action=action,
                transaction_date=transaction_date,
                quantity=quantity,
                price=price,
            )
        )

    return _create_investment


@pytest.fixture
def rate_factory(rate_repo) -> Callable[..., ExchangeRate]:
    """Factory for creating exchange rates."""

    def _create_rate(
        from_currency: str,
        to_currency: str,
        rate_date: date,
        rate: Decimal,
    ) -> ExchangeRate:
        return rate_repo.create(
            ExchangeRate(
                from_currency=from_currency,
                to_currency=to_currency,
                rate_date=rate_date,
                rate=rate,
            )
        )

    return _create_rate


@pytest.fixture
def snapshot_factory(snapshot_repo) -> Callable[..., list[MonthlyAccountBalance]]:
    """
    Write snapshots for an account directly.

    values maps month -> balance, or month -> (balance, market_value).
    """

    def _create_snapshots(
        account: Account,
        values: dict,
    ) -> list[MonthlyAccountBalance]:
        rows = []
        for month_start, value in sorted(values.items()):
            balance, market_value = value if isinstance(value, tuple) else (value, None)
            rows.append(
                MonthlyAccountBalance(
                    user_id=account.user_id,
                    account_id=account.account_id,
                    month=month_start,
                    balance=Decimal(str(balance)),
                    market_value=Decimal(str(market_value)) if market_value is not None else None,
                )
            )
        snapshot_repo.replace_for_account(account.account_id, rows)
        return rows

    return _create_snapshots


@pytest.fixture
def set_preference(preference_repo) -> Callable[[str, Optional[str]], UserPreference]:
    def _set(user_id: str, currency: Optional[str]) -> UserPreference:
        return preference_repo.upsert(UserPreference(user_id=user_id, default_currency=currency))

    return _set


# =============================================================================
# API CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, tmp_path) -> TestClient:
    """Provide FastAPI test client with test database and fixed clock."""
    set_settings(Settings(data_dir=tmp_path))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    def override_get_orchestrator(db: Session = Depends(get_db)) -> RecalculationOrchestrator:
        return build_orchestrator(db, clock=fixed_clock)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_orchestrator] = override_get_orchestrator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# ASSERTION HELPERS
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.0001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
