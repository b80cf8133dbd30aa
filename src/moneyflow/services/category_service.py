"""Category service."""

import logging
import uuid
from typing import Optional

from moneyflow.core.exceptions import NotFoundError, ValidationError
from moneyflow.core.timezone import now_utc
from moneyflow.domain.models import Category, TransactionKind
from moneyflow.repositories.sqlalchemy.store import CATEGORIES, LedgerStore, LedgerUnit

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Service for income and expense categories.

    Names are unique per owner and kind, so "Other" may exist once as an
    income category and once as an expense category.
    """

    def __init__(self, store: LedgerStore):
        self._store = store

    def create_category(self, owner_id: str, name: str, kind: TransactionKind) -> Category:
        """Create a new category."""
        name = self._validate_name(name)
        kind = self._validate_kind(kind)

        def _create(unit: LedgerUnit) -> Category:
            self._ensure_unique(unit, owner_id, name, kind)
            created = unit.categories.create(
                Category(
                    category_id=str(uuid.uuid4()),
                    owner_id=owner_id,
                    name=name,
                    kind=kind,
                    created_at=now_utc(),
                )
            )
            unit.mark_changed(owner_id, CATEGORIES)
            return created

        created = self._store.atomic(_create)
        logger.info(
            "Created %s category %s (%s) for owner %s",
            kind.value, created.category_id, name, owner_id,
        )
        return created

    def rename_category(
        self,
        owner_id: str,
        category_id: str,
        name: Optional[str] = None,
        kind: Optional[TransactionKind] = None,
    ) -> Category:
        """
        Rename a category or change its kind.

        The kind can only change while no transaction references the
        category; otherwise those transactions would contradict it.
        """
        new_name = self._validate_name(name) if name is not None else None
        new_kind = self._validate_kind(kind) if kind is not None else None

        def _rename(unit: LedgerUnit) -> Category:
            category = unit.categories.get_by_id(owner_id, category_id)
            if category is None:
                raise NotFoundError("Category", category_id)

            if new_kind is not None and new_kind != category.kind:
                in_use = unit.transactions.count_by_category(owner_id, category_id)
                if in_use:
                    raise ValidationError(
                        f"Cannot change type of category '{category.name}' "
                        f"used by {in_use} transaction(s)"
                    )
                category.kind = new_kind
            if new_name is not None:
                category.name = new_name

            clash = unit.categories.get_by_name(owner_id, category.name, category.kind)
            if clash is not None and clash.category_id != category_id:
                raise ValidationError(
                    f"Category '{category.name}' already exists for {category.kind.value}"
                )

            updated = unit.categories.update(category)
            unit.mark_changed(owner_id, CATEGORIES)
            return updated

        updated = self._store.atomic(_rename)
        logger.info("Updated category %s for owner %s", category_id, owner_id)
        return updated

    def get_category(self, owner_id: str, category_id: str) -> Category:
        """Get category by ID."""
        category = self._store.read(
            lambda unit: unit.categories.get_by_id(owner_id, category_id)
        )
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def list_categories(
        self,
        owner_id: str,
        kind: Optional[TransactionKind] = None,
    ) -> list[Category]:
        """List categories ordered by name, optionally of one kind."""
        kind = self._validate_kind(kind) if kind is not None else None
        return self._store.read(lambda unit: unit.categories.list_by_owner(owner_id, kind))

    @staticmethod
    def _ensure_unique(unit: LedgerUnit, owner_id: str, name: str, kind: TransactionKind) -> None:
        if unit.categories.get_by_name(owner_id, name, kind) is not None:
            raise ValidationError(f"Category '{name}' already exists for {kind.value}")

    @staticmethod
    def _validate_name(name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Category name is required")
        return cleaned

    @staticmethod
    def _validate_kind(kind) -> TransactionKind:
        try:
            return TransactionKind(kind)
        except ValueError:
            raise ValidationError(f"Invalid category type: {kind}")
