"""Account repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from moneyflow.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access. Every call is scoped to one owner."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(
        self,
        owner_id: str,
        account_id: str,
        for_update: bool = False,
    ) -> Optional[Account]:
        """Retrieve account by ID; ``for_update`` locks the row where supported."""
        ...

    def get_by_name(self, owner_id: str, name: str) -> Optional[Account]:
        """Retrieve account by name."""
        ...

    def list_by_owner(self, owner_id: str) -> list[Account]:
        """List all accounts of an owner, ordered by name."""
        ...

    def update(self, account: Account) -> Account:
        """Overwrite an existing account, including its balance."""
        ...

    def apply_delta(self, owner_id: str, account_id: str, delta: Decimal) -> bool:
        """Add ``delta`` to the stored balance in place. False if no such account."""
        ...

    def delete(self, owner_id: str, account_id: str) -> bool:
        """Delete an account (hard delete). False if no such account."""
        ...

    def delete_by_owner(self, owner_id: str) -> int:
        """Delete every account of an owner; returns the number removed."""
        ...
