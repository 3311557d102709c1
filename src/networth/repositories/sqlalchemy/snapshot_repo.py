"""SQLAlchemy implementation of SnapshotRepository."""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from networth.domain.models import AccountType, AccountSubType, MonthlyAccountBalance
from networth.domain.views import SnapshotRow
from networth.repositories.sqlalchemy.orm_models import AccountORM, MonthlyAccountBalanceORM


class SqlAlchemySnapshotRepository:
    """SQLAlchemy-backed monthly snapshot repository."""

    def __init__(self, db: Session):
        self._db = db

    def count_for_user(self, user_id: str) -> int:
        """Number of snapshot rows stored for a user."""
        return (
            self._db.query(MonthlyAccountBalanceORM)
            .filter(MonthlyAccountBalanceORM.user_id == user_id)
            .count()
        )

    def list_for_account(self, account_id: str) -> list[MonthlyAccountBalance]:
        """All snapshot rows of an account, ordered by month."""
        orm_rows = (
            self._db.query(MonthlyAccountBalanceORM)
            .filter(MonthlyAccountBalanceORM.account_id == account_id)
            .order_by(MonthlyAccountBalanceORM.month)
            .all()
        )
        return [self._to_domain(r) for r in orm_rows]

    def list_rows(
        self,
        user_id: str,
        start_month: date,
        end_month: date,
        account_ids: Optional[list[str]] = None,
        investment_only: bool = False,
    ) -> list[SnapshotRow]:
        """Snapshot rows joined with account attributes, ordered by month."""
        query = (
            self._db.query(MonthlyAccountBalanceORM, AccountORM)
            .join(AccountORM, AccountORM.account_id == MonthlyAccountBalanceORM.account_id)
            .filter(
                MonthlyAccountBalanceORM.user_id == user_id,
                MonthlyAccountBalanceORM.month >= start_month,
                MonthlyAccountBalanceORM.month <= end_month,
            )
        )
        if account_ids is not None:
            query = query.filter(AccountORM.account_id.in_(account_ids))
        elif investment_only:
            query = query.filter(
                or_(
                    AccountORM.account_sub_type.in_(
                        [AccountSubType.INVESTMENT_CASH, AccountSubType.INVESTMENT_BROKERAGE]
                    ),
                    and_(
                        AccountORM.account_type == AccountType.INVESTMENT,
                        AccountORM.account_sub_type.is_(None),
                    ),
                )
            )

        rows = query.order_by(
            MonthlyAccountBalanceORM.month,
            MonthlyAccountBalanceORM.account_id,
        ).all()
        return [
            SnapshotRow(
                account_id=account.account_id,
                month=snapshot.month,
                balance=Decimal(str(snapshot.balance)) if snapshot.balance is not None else Decimal("0"),
                market_value=(
                    Decimal(str(snapshot.market_value))
                    if snapshot.market_value is not None
                    else None
                ),
                account_type=account.account_type,
                account_sub_type=account.account_sub_type,
                currency_code=account.currency_code,
            )
            for snapshot, account in rows
        ]

    def replace_for_account(
        self,
        account_id: str,
        balances: list[MonthlyAccountBalance],
    ) -> None:
        """Delete every row of the account and insert balances in one transaction."""
        try:
            self._db.query(MonthlyAccountBalanceORM).filter(
                MonthlyAccountBalanceORM.account_id == account_id
            ).delete(synchronize_session=False)
            self._db.add_all(
                [
                    MonthlyAccountBalanceORM(
                        user_id=b.user_id,
                        account_id=account_id,
                        month=b.month,
                        balance=b.balance,
                        market_value=b.market_value,
                    )
                    for b in balances
                ]
            )
            self._db.flush()
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

    def rollback(self) -> None:
        """Discard uncommitted work, including a transaction left failed by an earlier error."""
        self._db.rollback()

    @staticmethod
    def _to_domain(orm: MonthlyAccountBalanceORM) -> MonthlyAccountBalance:
        """Convert ORM model to domain model."""
        return MonthlyAccountBalance(
            user_id=orm.user_id,
            account_id=orm.account_id,
            month=orm.month,
            balance=Decimal(str(orm.balance)) if orm.balance is not None else Decimal("0"),
            market_value=(
                Decimal(str(orm.market_value)) if orm.market_value is not None else None
            ),
        )
