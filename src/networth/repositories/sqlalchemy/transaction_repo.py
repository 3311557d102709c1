"""SQLAlchemy implementation of TransactionRepository."""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from networth.domain.models import Transaction, TransactionSplit, TransactionStatus
from networth.repositories.sqlalchemy.orm_models import TransactionORM, TransactionSplitORM


def _not_void():
    return or_(
        TransactionORM.status.is_(None),
        TransactionORM.status != TransactionStatus.VOID,
    )


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed cash transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction together with its splits."""
        orm_txn = TransactionORM(
            transaction_id=transaction.transaction_id,
            account_id=transaction.account_id,
            transaction_date=transaction.transaction_date,
            amount=transaction.amount,
            status=transaction.status,
            is_split=transaction.is_split,
            linked_transaction_id=transaction.linked_transaction_id,
            description=transaction.description,
            splits=[
                TransactionSplitORM(
                    split_id=s.split_id,
                    transaction_id=transaction.transaction_id,
                    category_id=s.category_id,
                    amount=s.amount,
                    memo=s.memo,
                )
                for s in transaction.splits
            ],
        )
        self._db.add(orm_txn)
        self._db.commit()
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    def earliest_date(self, account_id: str) -> Optional[date]:
        """Date of the account's first non-void transaction."""
        return (
            self._db.query(func.min(TransactionORM.transaction_date))
            .filter(TransactionORM.account_id == account_id, _not_void())
            .scalar()
        )

    def list_for_balance(self, account_id: str, end_date: date) -> list[Transaction]:
        """List non-void transactions dated on or before end_date, splits loaded."""
        orm_txns = (
            self._db.query(TransactionORM)
            .options(selectinload(TransactionORM.splits))
            .filter(
                TransactionORM.account_id == account_id,
                TransactionORM.transaction_date <= end_date,
                _not_void(),
            )
            .order_by(TransactionORM.transaction_date, TransactionORM.transaction_id)
            .all()
        )
        return [self._to_domain(t) for t in orm_txns]

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            transaction_id=orm.transaction_id,
            account_id=orm.account_id,
            transaction_date=orm.transaction_date,
            amount=Decimal(str(orm.amount)) if orm.amount is not None else Decimal("0"),
            status=orm.status or TransactionStatus.UNRECONCILED,
            is_split=bool(orm.is_split),
            linked_transaction_id=orm.linked_transaction_id,
            description=orm.description,
            splits=[
                TransactionSplit(
                    split_id=s.split_id,
                    transaction_id=s.transaction_id,
                    amount=Decimal(str(s.amount)),
                    category_id=s.category_id,
                    memo=s.memo,
                )
                for s in orm.splits
            ],
        )
