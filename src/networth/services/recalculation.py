"""Decides when monthly snapshots are rebuilt and rebuilds them."""

import logging
from datetime import date
from typing import Callable

from networth.core.timezone import today_local
from networth.domain.models import Account
from networth.domain.views import AccountRecalcResult
from networth.repositories.protocols import AccountRepository, SnapshotRepository
from networth.services.balance_reconstructor import BalanceReconstructor
from networth.services.holdings_replayer import HoldingsReplayer
from networth.services.snapshot_writer import SnapshotWriter

logger = logging.getLogger(__name__)


class RecalculationOrchestrator:
    """
    Rebuilds monthly snapshots per account.

    Accounts are processed one after another; each is its own
    all-or-nothing unit of work, and a failure on one account is recorded
    and does not stop the rest of the batch.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        snapshot_repo: SnapshotRepository,
        reconstructor: BalanceReconstructor,
        replayer: HoldingsReplayer,
        writer: SnapshotWriter,
        clock: Callable[[], date] = today_local,
    ):
        self._account_repo = account_repo
        self._snapshot_repo = snapshot_repo
        self._reconstructor = reconstructor
        self._replayer = replayer
        self._writer = writer
        self._clock = clock

    def recalculate_account(self, user_id: str, account_id: str) -> None:
        """
        Rebuild one account's snapshots.

        A missing account is a silent no-op. Storage errors are re-raised
        after the snapshot transaction has been rolled back.
        """
        account = self._account_repo.get_by_id(user_id, account_id)
        if not account:
            logger.debug("Account %s not found for user %s; skipping", account_id, user_id)
            return
        self._recalculate(account)

    def recalculate_all_accounts(self, user_id: str) -> list[AccountRecalcResult]:
        """Rebuild every account of the user, closed ones included."""
        accounts = self._account_repo.list_by_user(user_id)
        results = self._run_batch(accounts)
        self._log_summary(f"user {user_id}", results)
        return results

    def recalculate_all_investment_snapshots(self) -> list[AccountRecalcResult]:
        """Rebuild every account that holds securities, across all users."""
        accounts = self._account_repo.list_holding_securities()
        results = self._run_batch(accounts)
        self._log_summary("investment accounts", results)
        return results

    def ensure_populated(self, user_id: str) -> bool:
        """
        Build snapshots for a user that has none yet.

        Returns True when a full rebuild was triggered.
        """
        if self._snapshot_repo.count_for_user(user_id) > 0:
            return False
        logger.info("No snapshots for user %s; rebuilding all accounts", user_id)
        self.recalculate_all_accounts(user_id)
        return True

    def _run_batch(self, accounts: list[Account]) -> list[AccountRecalcResult]:
        results: list[AccountRecalcResult] = []
        for account in accounts:
            try:
                self._recalculate(account)
            except Exception as exc:
                logger.warning(
                    "Failed to recalculate account %s: %s",
                    account.account_id,
                    exc,
                )
                results.append(
                    AccountRecalcResult(account_id=account.account_id, ok=False, error=str(exc))
                )
            else:
                results.append(AccountRecalcResult(account_id=account.account_id, ok=True))
        return results

    def _recalculate(self, account: Account) -> None:
        try:
            self._rebuild(account)
        except Exception:
            # Leaves the shared session usable for the next account
            self._snapshot_repo.rollback()
            raise

    def _rebuild(self, account: Account) -> None:
        as_of = self._clock()
        balances = self._reconstructor.reconstruct(account, as_of)

        market_values = None
        if account.holds_securities:
            months = [month for month, _ in balances]
            market_values = self._replayer.market_values(account.account_id, months, as_of)

        rows = SnapshotWriter.build_rows(account, balances, market_values)
        self._writer.write(account, rows)

    @staticmethod
    def _log_summary(scope: str, results: list[AccountRecalcResult]) -> None:
        failed = sum(1 for r in results if not r.ok)
        logger.info(
            "Recalculated %d accounts for %s (%d failed)",
            len(results),
            scope,
            failed,
        )
