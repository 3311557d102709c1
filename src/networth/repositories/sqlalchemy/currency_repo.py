"""SQLAlchemy implementations of exchange rate and preference repositories."""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from networth.domain.models import ExchangeRate, UserPreference
from networth.repositories.sqlalchemy.orm_models import ExchangeRateORM, UserPreferenceORM


class SqlAlchemyExchangeRateRepository:
    """SQLAlchemy-backed exchange rate repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, rate: ExchangeRate) -> ExchangeRate:
        """Persist a new exchange rate."""
        orm_rate = ExchangeRateORM(
            from_currency=rate.from_currency,
            to_currency=rate.to_currency,
            rate_date=rate.rate_date,
            rate=rate.rate,
        )
        self._db.add(orm_rate)
        self._db.commit()
        return rate

    def list_between(
        self,
        currencies: list[str],
        target_currency: str,
        start_date: date,
        end_date: date,
    ) -> list[ExchangeRate]:
        """Rates between currencies and target_currency in either direction."""
        if not currencies:
            return []

        orm_rates = (
            self._db.query(ExchangeRateORM)
            .filter(
                or_(
                    and_(
                        ExchangeRateORM.from_currency.in_(currencies),
                        ExchangeRateORM.to_currency == target_currency,
                    ),
                    and_(
                        ExchangeRateORM.from_currency == target_currency,
                        ExchangeRateORM.to_currency.in_(currencies),
                    ),
                ),
                ExchangeRateORM.rate_date >= start_date,
                ExchangeRateORM.rate_date <= end_date,
            )
            .order_by(ExchangeRateORM.rate_date)
            .all()
        )
        return [
            ExchangeRate(
                from_currency=r.from_currency,
                to_currency=r.to_currency,
                rate_date=r.rate_date,
                rate=Decimal(str(r.rate)),
            )
            for r in orm_rates
        ]


class SqlAlchemyPreferenceRepository:
    """SQLAlchemy-backed user preference repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, user_id: str) -> Optional[UserPreference]:
        """Retrieve the user's preferences."""
        orm_pref = self._db.query(UserPreferenceORM).filter(
            UserPreferenceORM.user_id == user_id
        ).first()
        if not orm_pref:
            return None
        return UserPreference(
            user_id=orm_pref.user_id,
            default_currency=orm_pref.default_currency,
        )

    def upsert(self, preference: UserPreference) -> UserPreference:
        """Insert or update the user's preferences."""
        orm_pref = self._db.query(UserPreferenceORM).filter(
            UserPreferenceORM.user_id == preference.user_id
        ).first()

        if orm_pref:
            orm_pref.default_currency = preference.default_currency
        else:
            orm_pref = UserPreferenceORM(
                user_id=preference.user_id,
                default_currency=preference.default_currency,
            )
            self._db.add(orm_pref)

        self._db.commit()
        return preference
