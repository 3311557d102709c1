"""Repository layer - data access abstractions and implementations."""

from networth.repositories.protocols import (
    AccountRepository,
    TransactionRepository,
    InvestmentTransactionRepository,
    SecurityRepository,
    ExchangeRateRepository,
    PreferenceRepository,
    SnapshotRepository,
)

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "InvestmentTransactionRepository",
    "SecurityRepository",
    "ExchangeRateRepository",
    "PreferenceRepository",
    "SnapshotRepository",
]
