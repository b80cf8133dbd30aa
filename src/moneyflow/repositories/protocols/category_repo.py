"""Category repository protocol."""

from typing import Protocol, Optional

from moneyflow.domain.models import Category, TransactionKind


class CategoryRepository(Protocol):
    """Interface for category data access. Every call is scoped to one owner."""

    def create(self, category: Category) -> Category:
        """Persist a new category."""
        ...

    def get_by_id(self, owner_id: str, category_id: str) -> Optional[Category]:
        """Retrieve category by ID."""
        ...

    def get_by_name(
        self,
        owner_id: str,
        name: str,
        kind: TransactionKind,
    ) -> Optional[Category]:
        """Retrieve category by name and kind."""
        ...

    def list_by_owner(
        self,
        owner_id: str,
        kind: Optional[TransactionKind] = None,
    ) -> list[Category]:
        """List categories of an owner, ordered by name."""
        ...

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        ...

    def delete(self, owner_id: str, category_id: str) -> bool:
        """Delete a category. False if no such category."""
        ...

    def delete_by_owner(self, owner_id: str) -> int:
        """Delete every category of an owner; returns the number removed."""
        ...
