"""Repository protocol definitions (interfaces)."""

from networth.repositories.protocols.account_repo import AccountRepository
from networth.repositories.protocols.transaction_repo import TransactionRepository
from networth.repositories.protocols.investment_repo import (
    InvestmentTransactionRepository,
    SecurityRepository,
)
from networth.repositories.protocols.currency_repo import (
    ExchangeRateRepository,
    PreferenceRepository,
)
from networth.repositories.protocols.snapshot_repo import SnapshotRepository

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "InvestmentTransactionRepository",
    "SecurityRepository",
    "ExchangeRateRepository",
    "PreferenceRepository",
    "SnapshotRepository",
]
