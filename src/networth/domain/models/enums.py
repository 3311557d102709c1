"""Enumerations for domain models."""

from enum import Enum


class AccountType(str, Enum):
    """Kinds of ledger accounts."""

    CHEQUING = "CHEQUING"
    SAVINGS = "SAVINGS"
    CREDIT_CARD = "CREDIT_CARD"
    LOAN = "LOAN"
    MORTGAGE = "MORTGAGE"
    INVESTMENT = "INVESTMENT"
    CASH = "CASH"
    LINE_OF_CREDIT = "LINE_OF_CREDIT"
    ASSET = "ASSET"
    OTHER = "OTHER"

    @property
    def is_liability(self) -> bool:
        """Return True for account types that count against net worth."""
        return self in LIABILITY_TYPES


LIABILITY_TYPES = frozenset(
    {
        AccountType.CREDIT_CARD,
        AccountType.LOAN,
        AccountType.MORTGAGE,
        AccountType.LINE_OF_CREDIT,
    }
)


class AccountSubType(str, Enum):
    """Sub-types pairing an investment cash account with its brokerage side."""

    INVESTMENT_CASH = "INVESTMENT_CASH"
    INVESTMENT_BROKERAGE = "INVESTMENT_BROKERAGE"


class TransactionStatus(str, Enum):
    """Reconciliation status of a cash transaction."""

    UNRECONCILED = "UNRECONCILED"
    CLEARED = "CLEARED"
    RECONCILED = "RECONCILED"
    VOID = "VOID"  # excluded from every balance


class InvestmentAction(str, Enum):
    """Actions recorded against a security in a brokerage account."""

    BUY = "BUY"
    SELL = "SELL"
    REINVEST = "REINVEST"
    TRANSFER_IN = "TRANSFER_IN"
    TRANSFER_OUT = "TRANSFER_OUT"
    SPLIT = "SPLIT"
