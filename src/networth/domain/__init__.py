"""Domain layer - pure business models with no external dependencies."""

from networth.domain.models import (
    Account,
    AccountType,
    AccountSubType,
    Transaction,
    TransactionSplit,
    TransactionStatus,
    InvestmentAction,
    InvestmentTransaction,
    Security,
    SecurityPrice,
    ExchangeRate,
    UserPreference,
    MonthlyAccountBalance,
)

__all__ = [
    "Account",
    "AccountType",
    "AccountSubType",
    "Transaction",
    "TransactionSplit",
    "TransactionStatus",
    "InvestmentAction",
    "InvestmentTransaction",
    "Security",
    "SecurityPrice",
    "ExchangeRate",
    "UserPreference",
    "MonthlyAccountBalance",
]
