"""SQLAlchemy implementations of the investment repositories."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from networth.domain.models import (
    InvestmentAction,
    InvestmentTransaction,
    Security,
    SecurityPrice,
)
from networth.repositories.sqlalchemy.orm_models import (
    InvestmentTransactionORM,
    SecurityORM,
    SecurityPriceORM,
)

# Actions whose price reflects a real trade
PRICED_ACTIONS = (InvestmentAction.BUY, InvestmentAction.SELL, InvestmentAction.REINVEST)


class SqlAlchemyInvestmentTransactionRepository:
    """SQLAlchemy-backed investment transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: InvestmentTransaction) -> InvestmentTransaction:
        """Persist a new investment transaction."""
        orm_txn = InvestmentTransactionORM(
            investment_transaction_id=transaction.investment_transaction_id,
            account_id=transaction.account_id,
            security_id=transaction.security_id,
            action=transaction.action,
            transaction_date=transaction.transaction_date,
            quantity=transaction.quantity,
            price=transaction.price,
        )
        self._db.add(orm_txn)
        self._db.commit()
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    def earliest_date(self, account_id: str) -> Optional[date]:
        """Date of the account's first investment transaction."""
        return (
            self._db.query(func.min(InvestmentTransactionORM.transaction_date))
            .filter(InvestmentTransactionORM.account_id == account_id)
            .scalar()
        )

    def list_by_account(self, account_id: str, end_date: date) -> list[InvestmentTransaction]:
        """List transactions dated on or before end_date, ordered by date ascending."""
        orm_txns = (
            self._db.query(InvestmentTransactionORM)
            .filter(
                InvestmentTransactionORM.account_id == account_id,
                InvestmentTransactionORM.transaction_date <= end_date,
            )
            .order_by(
                InvestmentTransactionORM.transaction_date,
                InvestmentTransactionORM.investment_transaction_id,
            )
            .all()
        )
        return [self._to_domain(t) for t in orm_txns]

    def list_trade_prices(
        self,
        security_ids: list[str],
    ) -> dict[str, list[tuple[date, Decimal]]]:
        """Positive BUY/SELL/REINVEST prices per security, ordered by date ascending."""
        result: dict[str, list[tuple[date, Decimal]]] = defaultdict(list)
        if not security_ids:
            return result

        rows = (
            self._db.query(
                InvestmentTransactionORM.security_id,
                InvestmentTransactionORM.transaction_date,
                InvestmentTransactionORM.price,
            )
            .filter(
                InvestmentTransactionORM.security_id.in_(security_ids),
                InvestmentTransactionORM.action.in_(PRICED_ACTIONS),
                InvestmentTransactionORM.price.is_not(None),
                InvestmentTransactionORM.price > 0,
            )
            .order_by(
                InvestmentTransactionORM.security_id,
                InvestmentTransactionORM.transaction_date,
            )
            .all()
        )
        for row in rows:
            result[row.security_id].append((row.transaction_date, Decimal(str(row.price))))
        return result

    @staticmethod
    def _to_domain(orm: InvestmentTransactionORM) -> InvestmentTransaction:
        """Convert ORM model to domain model."""
        return InvestmentTransaction(
            investment_transaction_id=orm.investment_transaction_id,
            account_id=orm.account_id,
            security_id=orm.security_id,
            action=orm.action,
            transaction_date=orm.transaction_date,
            quantity=Decimal(str(orm.quantity)) if orm.quantity is not None else None,
            price=Decimal(str(orm.price)) if orm.price is not None else None,
        )


class SqlAlchemySecurityRepository:
    """SQLAlchemy-backed security and price repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, security: Security) -> Security:
        """Persist a new security."""
        orm_security = SecurityORM(
            security_id=security.security_id,
            symbol=security.symbol,
            name=security.name,
            currency_code=security.currency_code,
            skip_price_updates=security.skip_price_updates,
        )
        self._db.add(orm_security)
        self._db.commit()
        self._db.refresh(orm_security)
        return self._security_to_domain(orm_security)

    def get_many(self, security_ids: list[str]) -> dict[str, Security]:
        """Retrieve securities keyed by ID."""
        if not security_ids:
            return {}
        orm_securities = (
            self._db.query(SecurityORM)
            .filter(SecurityORM.security_id.in_(security_ids))
            .all()
        )
        return {s.security_id: self._security_to_domain(s) for s in orm_securities}

    def add_price(self, price: SecurityPrice) -> SecurityPrice:
        """Persist a close price."""
        orm_price = SecurityPriceORM(
            security_id=price.security_id,
            price_date=price.price_date,
            close_price=price.close_price,
        )
        self._db.add(orm_price)
        self._db.commit()
        return price

    def list_prices(self, security_ids: list[str]) -> dict[str, list[SecurityPrice]]:
        """Close prices per security, ordered by date ascending."""
        result: dict[str, list[SecurityPrice]] = defaultdict(list)
        if not security_ids:
            return result

        orm_prices = (
            self._db.query(SecurityPriceORM)
            .filter(SecurityPriceORM.security_id.in_(security_ids))
            .order_by(SecurityPriceORM.security_id, SecurityPriceORM.price_date)
            .all()
        )
        for p in orm_prices:
            result[p.security_id].append(
                SecurityPrice(
                    security_id=p.security_id,
                    price_date=p.price_date,
                    close_price=Decimal(str(p.close_price)),
                )
            )
        return result

    @staticmethod
    def _security_to_domain(orm: SecurityORM) -> Security:
        """Convert ORM model to domain model."""
        return Security(
            security_id=orm.security_id,
            symbol=orm.symbol,
            name=orm.name,
            currency_code=orm.currency_code,
            skip_price_updates=bool(orm.skip_price_updates),
        )
