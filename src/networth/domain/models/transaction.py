"""Cash transaction and split domain models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from networth.domain.models.enums import TransactionStatus


@dataclass
class TransactionSplit:
    """One category line of a split transaction."""

    split_id: str
    transaction_id: str
    amount: Decimal
    category_id: Optional[str] = None
    memo: Optional[str] = None


@dataclass
class Transaction:
    """
    Signed cash movement in one account (source of truth for balances).

    Positive amounts are deposits, negative amounts are withdrawals.
    """

    transaction_id: str
    account_id: str
    transaction_date: date
    amount: Decimal
    status: TransactionStatus = TransactionStatus.UNRECONCILED
    is_split: bool = False
    linked_transaction_id: Optional[str] = None
    description: Optional[str] = None
    splits: list[TransactionSplit] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.status, str):
            self.status = TransactionStatus(self.status)

    @property
    def is_void(self) -> bool:
        return self.status == TransactionStatus.VOID

    @property
    def effective_amount(self) -> Decimal:
        """
        Amount that counts toward the account balance.

        A split parent contributes the sum of its split lines instead of
        its own amount, so the two are never counted together.
        """
        if self.is_split and self.splits:
            return sum((s.amount for s in self.splits), Decimal("0"))
        return self.amount
