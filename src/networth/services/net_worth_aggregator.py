"""Monthly net worth and investment value series from stored snapshots."""

from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_FLOOR
from typing import Callable, Optional

from networth.config.settings import get_settings
from networth.core.months import month_end, month_start
from networth.core.timezone import today_local
from networth.domain.models import AccountType, AccountSubType
from networth.domain.views import MonthlyInvestmentValue, MonthlyNetWorth, SnapshotRow
from networth.repositories.protocols import (
    AccountRepository,
    ExchangeRateRepository,
    PreferenceRepository,
    SnapshotRepository,
)
from networth.services.currency_converter import CurrencyConverter
from networth.services.rate_index import RateIndex
from networth.services.recalculation import RecalculationOrchestrator


def snapshot_value(row: SnapshotRow) -> Decimal:
    """
    Monetary value of one snapshot row in the account's own currency.

    Brokerage accounts are worth their holdings, standalone investment
    accounts their holdings plus cash, everything else its balance.
    """
    if row.market_value is not None:
        if row.account_sub_type == AccountSubType.INVESTMENT_BROKERAGE:
            return row.market_value
        if row.account_type == AccountType.INVESTMENT and row.account_sub_type is None:
            return row.market_value + row.balance
    return row.balance


def round_whole(value: Decimal) -> int:
    """Nearest whole unit, halves toward positive infinity (2.5 -> 3, -2.5 -> -2)."""
    return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


class _SnapshotAggregator:
    """Shared range handling, currency resolution and conversion."""

    def __init__(
        self,
        snapshot_repo: SnapshotRepository,
        rate_repo: ExchangeRateRepository,
        preference_repo: PreferenceRepository,
        orchestrator: RecalculationOrchestrator,
        clock: Callable[[], date] = today_local,
    ):
        self._snapshot_repo = snapshot_repo
        self._rate_repo = rate_repo
        self._preference_repo = preference_repo
        self._orchestrator = orchestrator
        self._clock = clock

    def _resolve_range(
        self,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> tuple[date, date]:
        start = start_date or get_settings().history_start_date
        end = end_date or self._clock()
        return start, end

    def _display_currency(self, user_id: str, override: Optional[str] = None) -> str:
        if override:
            return override
        preference = self._preference_repo.get(user_id)
        if preference and preference.default_currency:
            return preference.default_currency
        return get_settings().default_currency

    def _converter(
        self,
        rows: list[SnapshotRow],
        target_currency: str,
        start: date,
        end: date,
    ) -> CurrencyConverter:
        rate_index = RateIndex.load(
            self._rate_repo,
            currencies={r.currency_code for r in rows},
            target_currency=target_currency,
            start_date=start,
            end_date=end,
        )
        return CurrencyConverter(rate_index, target_currency)


class NetWorthAggregator(_SnapshotAggregator):
    """Assets, liabilities and net worth per month for one user."""

    def get_monthly_net_worth(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[MonthlyNetWorth]:
        """
        Monthly totals in the user's display currency.

        Liability accounts contribute their absolute value to liabilities;
        every other account adds its value to assets.
        """
        self._orchestrator.ensure_populated(user_id)

        start, end = self._resolve_range(start_date, end_date)
        currency = self._display_currency(user_id)
        rows = self._snapshot_repo.list_rows(user_id, month_start(start), month_start(end))
        if not rows:
            return []

        converter = self._converter(rows, currency, start, end)
        totals: dict[date, dict[str, Decimal]] = defaultdict(
            lambda: {"assets": Decimal("0"), "liabilities": Decimal("0")}
        )
        for row in rows:
            converted = converter.convert(
                snapshot_value(row),
                row.currency_code,
                month_end(row.month),
            )
            if row.account_type.is_liability:
                totals[row.month]["liabilities"] += abs(converted)
            else:
                totals[row.month]["assets"] += converted

        result = []
        for month in sorted(totals):
            assets = round_whole(totals[month]["assets"])
            liabilities = round_whole(totals[month]["liabilities"])
            result.append(
                MonthlyNetWorth(
                    month=month.isoformat(),
                    assets=assets,
                    liabilities=liabilities,
                    net_worth=assets - liabilities,
                )
            )
        return result


class InvestmentAggregator(_SnapshotAggregator):
    """Investment portfolio value per month for one user."""

    def __init__(
        self,
        snapshot_repo: SnapshotRepository,
        rate_repo: ExchangeRateRepository,
        preference_repo: PreferenceRepository,
        orchestrator: RecalculationOrchestrator,
        account_repo: AccountRepository,
        clock: Callable[[], date] = today_local,
    ):
        super().__init__(snapshot_repo, rate_repo, preference_repo, orchestrator, clock)
        self._account_repo = account_repo

    def get_monthly_investments(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_ids: Optional[list[str]] = None,
        display_currency: Optional[str] = None,
    ) -> list[MonthlyInvestmentValue]:
        """
        Monthly investment value in the display currency.

        Without account_ids every investment cash, brokerage and standalone
        investment account is included. With account_ids each selected
        account is widened to its linked cash/brokerage partner.
        """
        self._orchestrator.ensure_populated(user_id)

        start, end = self._resolve_range(start_date, end_date)
        currency = self._display_currency(user_id, display_currency)

        if account_ids:
            resolved = self._resolve_linked(user_id, account_ids)
            if not resolved:
                return []
            rows = self._snapshot_repo.list_rows(
                user_id,
                month_start(start),
                month_start(end),
                account_ids=resolved,
            )
        else:
            rows = self._snapshot_repo.list_rows(
                user_id,
                month_start(start),
                month_start(end),
                investment_only=True,
            )
        if not rows:
            return []

        converter = self._converter(rows, currency, start, end)
        totals: dict[date, Decimal] = defaultdict(lambda: Decimal("0"))
        for row in rows:
            totals[row.month] += converter.convert(
                snapshot_value(row),
                row.currency_code,
                month_end(row.month),
            )

        return [
            MonthlyInvestmentValue(month=month.isoformat(), value=round_whole(totals[month]))
            for month in sorted(totals)
        ]

    def _resolve_linked(self, user_id: str, account_ids: list[str]) -> list[str]:
        resolved: set[str] = set()
        for account_id in account_ids:
            resolved |= self._account_repo.resolve_linked_ids(user_id, account_id)
        return sorted(resolved)
