"""Transaction repository protocol."""

from typing import Protocol, Optional

from moneyflow.domain.models import Transaction
from moneyflow.domain.views import TransactionFilter


class TransactionRepository(Protocol):
    """Interface for transaction data access. Every call is scoped to one owner."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def get_by_id(self, owner_id: str, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def update(self, transaction: Transaction) -> Transaction:
        """Overwrite an existing transaction."""
        ...

    def delete(self, owner_id: str, txn_id: str) -> bool:
        """Delete a transaction. False if no such transaction."""
        ...

    def list_by_ids(self, owner_id: str, txn_ids: list[str]) -> list[Transaction]:
        """Fetch the listed transactions that exist and belong to the owner."""
        ...

    def list_by_category(self, owner_id: str, category_id: str) -> list[Transaction]:
        """All transactions of an owner in one category."""
        ...

    def list_by_account(self, owner_id: str, account_id: str) -> list[Transaction]:
        """All transactions of an owner against one account."""
        ...

    def count_by_category(self, owner_id: str, category_id: str) -> int:
        """Number of transactions referencing a category."""
        ...

    def delete_many(self, owner_id: str, txn_ids: list[str]) -> int:
        """Delete the listed transactions; returns the number removed."""
        ...

    def delete_by_owner(self, owner_id: str) -> int:
        """Delete every transaction of an owner; returns the number removed."""
        ...

    def query(
        self,
        owner_id: str,
        filters: Optional[TransactionFilter] = None,
    ) -> list[Transaction]:
        """Query transactions with filters, newest date first."""
        ...
