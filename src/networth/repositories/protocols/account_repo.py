"""Account repository protocol."""

from typing import Protocol, Optional

from networth.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(self, user_id: str, account_id: str) -> Optional[Account]:
        """Retrieve one of the user's accounts by ID."""
        ...

    def list_by_user(self, user_id: str) -> list[Account]:
        """List all accounts of a user, closed ones included."""
        ...

    def list_holding_securities(self) -> list[Account]:
        """List brokerage and standalone investment accounts of every user."""
        ...

    def resolve_linked_ids(self, user_id: str, account_id: str) -> set[str]:
        """Return the account ID together with its linked cash/brokerage partner."""
        ...
