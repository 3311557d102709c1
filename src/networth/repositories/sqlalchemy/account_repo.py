"""SQLAlchemy implementation of AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from networth.domain.models import Account, AccountType, AccountSubType
from networth.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            account_id=account.account_id,
            user_id=account.user_id,
            name=account.name,
            account_type=account.account_type,
            account_sub_type=account.account_sub_type,
            currency_code=account.currency_code,
            opening_balance=account.opening_balance,
            date_acquired=account.date_acquired,
            linked_account_id=account.linked_account_id,
            is_closed=account.is_closed,
        )
        if account.created_at is not None:
            orm_account.created_at = account.created_at
        self._db.add(orm_account)
        self._db.commit()
        self._db.refresh(orm_account)
        return self._to_domain(orm_account)

    def get_by_id(self, user_id: str, account_id: str) -> Optional[Account]:
        """Retrieve one of the user's accounts by ID."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id,
            AccountORM.user_id == user_id,
        ).first()
        return self._to_domain(orm_account) if orm_account else None

    def list_by_user(self, user_id: str) -> list[Account]:
        """List all accounts of a user, closed ones included."""
        orm_accounts = (
            self._db.query(AccountORM)
            .filter(AccountORM.user_id == user_id)
            .order_by(AccountORM.name, AccountORM.account_id)
            .all()
        )
        return [self._to_domain(a) for a in orm_accounts]

    def list_holding_securities(self) -> list[Account]:
        """List brokerage and standalone investment accounts of every user."""
        orm_accounts = (
            self._db.query(AccountORM)
            .filter(
                AccountORM.account_type == AccountType.INVESTMENT,
                or_(
                    AccountORM.account_sub_type == AccountSubType.INVESTMENT_BROKERAGE,
                    AccountORM.account_sub_type.is_(None),
                ),
            )
            .order_by(AccountORM.user_id, AccountORM.account_id)
            .all()
        )
        return [self._to_domain(a) for a in orm_accounts]

    def resolve_linked_ids(self, user_id: str, account_id: str) -> set[str]:
        """Return the account ID together with its linked cash/brokerage partner."""
        partner_of = (
            self._db.query(AccountORM.linked_account_id)
            .filter(AccountORM.account_id == account_id)
            .scalar_subquery()
        )
        rows = (
            self._db.query(AccountORM.account_id)
            .filter(
                AccountORM.user_id == user_id,
                or_(
                    AccountORM.account_id == account_id,
                    AccountORM.linked_account_id == account_id,
                    AccountORM.account_id == partner_of,
                ),
            )
            .all()
        )
        return {row.account_id for row in rows}

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            user_id=orm.user_id,
            name=orm.name,
            account_type=orm.account_type,
            account_sub_type=orm.account_sub_type,
            currency_code=orm.currency_code,
            opening_balance=Decimal(str(orm.opening_balance)) if orm.opening_balance else Decimal("0"),
            date_acquired=orm.date_acquired,
            linked_account_id=orm.linked_account_id,
            is_closed=bool(orm.is_closed),
            created_at=orm.created_at,
        )
