"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Boolean,
    Text,
    ForeignKey,
    Integer,
    Numeric,
    UniqueConstraint,
    Index,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from networth.repositories.sqlalchemy.database import Base
from networth.domain.models.enums import (
    AccountType,
    AccountSubType,
    TransactionStatus,
    InvestmentAction,
)


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    account_id = Column(String(36), primary_key=True)
    user_id = Column(String(36), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    account_type = Column(SqlEnum(AccountType), nullable=False)
    account_sub_type = Column(SqlEnum(AccountSubType), nullable=True)
    currency_code = Column(String(3), nullable=False, default="USD")
    opening_balance = Column(Numeric(precision=20, scale=4), default=Decimal("0"))
    date_acquired = Column(Date, nullable=True)
    # Lookup only: deleting either side nulls the other's reference
    linked_account_id = Column(
        String(36),
        ForeignKey("accounts.account_id", ondelete="SET NULL"),
        nullable=True,
    )
    is_closed = Column(Boolean, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    transactions = relationship("TransactionORM", back_populates="account")


class TransactionORM(Base):
    """SQLAlchemy model for a cash Transaction (ledger entry)."""

    __tablename__ = "transactions"

    transaction_id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    transaction_date = Column(Date, nullable=False)
    amount = Column(Numeric(precision=20, scale=4), nullable=False)
    status = Column(
        SqlEnum(TransactionStatus),
        default=TransactionStatus.UNRECONCILED,
        nullable=False,
    )
    is_split = Column(Boolean, default=False)
    linked_transaction_id = Column(
        String(36),
        ForeignKey("transactions.transaction_id", ondelete="SET NULL"),
        nullable=True,
    )
    description = Column(Text, nullable=True)

    account = relationship("AccountORM", back_populates="transactions")
    splits = relationship(
        "TransactionSplitORM",
        back_populates="transaction",
        cascade="all, delete-orphan",
    )

    __table_args__ = (Index("ix_transactions_account_date", "account_id", "transaction_date"),)


class TransactionSplitORM(Base):
    """SQLAlchemy model for TransactionSplit."""

    __tablename__ = "transaction_splits"

    split_id = Column(String(36), primary_key=True)
    transaction_id = Column(
        String(36),
        ForeignKey("transactions.transaction_id", ondelete="CASCADE"),
        nullable=False,
    )
    category_id = Column(String(36), nullable=True)
    amount = Column(Numeric(precision=20, scale=4), nullable=False)
    memo = Column(Text, nullable=True)

    transaction = relationship("TransactionORM", back_populates="splits")


class SecurityORM(Base):
    """SQLAlchemy model for Security."""

    __tablename__ = "securities"

    security_id = Column(String(36), primary_key=True)
    symbol = Column(String(20), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    currency_code = Column(String(3), nullable=False, default="USD")
    skip_price_updates = Column(Boolean, default=False)


class SecurityPriceORM(Base):
    """SQLAlchemy model for SecurityPrice."""

    __tablename__ = "security_prices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    security_id = Column(
        String(36),
        ForeignKey("securities.security_id", ondelete="CASCADE"),
        nullable=False,
    )
    price_date = Column(Date, nullable=False)
    close_price = Column(Numeric(precision=20, scale=4), nullable=False)

    __table_args__ = (UniqueConstraint("security_id", "price_date"),)


class InvestmentTransactionORM(Base):
    """SQLAlchemy model for InvestmentTransaction."""

    __tablename__ = "investment_transactions"

    investment_transaction_id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    security_id = Column(String(36), ForeignKey("securities.security_id"), nullable=True)
    action = Column(SqlEnum(InvestmentAction), nullable=False)
    transaction_date = Column(Date, nullable=False)
    quantity = Column(Numeric(precision=20, scale=8), nullable=True)
    price = Column(Numeric(precision=20, scale=4), nullable=True)

    __table_args__ = (
        Index("ix_investment_transactions_account_date", "account_id", "transaction_date"),
    )


class ExchangeRateORM(Base):
    """SQLAlchemy model for ExchangeRate."""

    __tablename__ = "exchange_rates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    from_currency = Column(String(3), nullable=False)
    to_currency = Column(String(3), nullable=False)
    rate_date = Column(Date, nullable=False)
    rate = Column(Numeric(precision=20, scale=10), nullable=False)

    __table_args__ = (UniqueConstraint("from_currency", "to_currency", "rate_date"),)


class UserPreferenceORM(Base):
    """SQLAlchemy model for UserPreference."""

    __tablename__ = "user_preferences"

    user_id = Column(String(36), primary_key=True)
    default_currency = Column(String(3), nullable=True)


class MonthlyAccountBalanceORM(Base):
    """SQLAlchemy model for the monthly snapshot cache (derived data)."""

    __tablename__ = "monthly_account_balances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), nullable=False)
    account_id = Column(
        String(36),
        ForeignKey("accounts.account_id", ondelete="CASCADE"),
        nullable=False,
    )
    month = Column(Date, nullable=False)
    balance = Column(Numeric(precision=20, scale=4), nullable=False, default=Decimal("0"))
    market_value = Column(Numeric(precision=20, scale=4), nullable=True)

    __table_args__ = (
        UniqueConstraint("account_id", "month"),
        Index("ix_mab_user_month", "user_id", "month"),
    )
