"""Domain models package."""

from networth.domain.models.enums import (
    AccountType,
    AccountSubType,
    TransactionStatus,
    InvestmentAction,
    LIABILITY_TYPES,
)
from networth.domain.models.account import Account
from networth.domain.models.transaction import Transaction, TransactionSplit
from networth.domain.models.investment import (
    Security,
    SecurityPrice,
    InvestmentTransaction,
)
from networth.domain.models.currency import ExchangeRate, UserPreference
from networth.domain.models.snapshot import MonthlyAccountBalance

__all__ = [
    "AccountType",
    "AccountSubType",
    "TransactionStatus",
    "InvestmentAction",
    "LIABILITY_TYPES",
    "Account",
    "Transaction",
    "TransactionSplit",
    "Security",
    "SecurityPrice",
    "InvestmentTransaction",
    "ExchangeRate",
    "UserPreference",
    "MonthlyAccountBalance",
]
