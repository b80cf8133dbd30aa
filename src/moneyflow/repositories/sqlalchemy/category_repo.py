"""SQLAlchemy implementation of CategoryRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from moneyflow.core.timezone import now_utc
from moneyflow.domain.models import Category, TransactionKind
from moneyflow.repositories.sqlalchemy.orm_models import CategoryORM


class SqlAlchemyCategoryRepository:
    """SQLAlchemy-backed category repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, category: Category) -> Category:
        """Persist a new category."""
        orm_category = CategoryORM(
            category_id=category.category_id,
            owner_id=category.owner_id,
            name=category.name,
            kind=category.kind,
            created_at=category.created_at or now_utc(),
        )
        self._db.add(orm_category)
        self._db.flush()
        return self._to_domain(orm_category)

    def get_by_id(self, owner_id: str, category_id: str) -> Optional[Category]:
        """Retrieve category by ID."""
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.owner_id == owner_id,
            CategoryORM.category_id == category_id,
        ).first()
        return self._to_domain(orm_category) if orm_category else None

    def get_by_name(
        self,
        owner_id: str,
        name: str,
        kind: TransactionKind,
    ) -> Optional[Category]:
        """Retrieve category by name and kind."""
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.owner_id == owner_id,
            CategoryORM.name == name,
            CategoryORM.kind == kind,
        ).first()
        return self._to_domain(orm_category) if orm_category else None

    def list_by_owner(
        self,
        owner_id: str,
        kind: Optional[TransactionKind] = None,
    ) -> list[Category]:
        """List categories of an owner, ordered by name."""
        query = self._db.query(CategoryORM).filter(CategoryORM.owner_id == owner_id)
        if kind is not None:
            query = query.filter(CategoryORM.kind == kind)
        return [self._to_domain(c) for c in query.order_by(CategoryORM.name).all()]

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.owner_id == category.owner_id,
            CategoryORM.category_id == category.category_id,
        ).first()
        if not orm_category:
            raise ValueError(f"Category not found: {category.category_id}")

        orm_category.name = category.name
        orm_category.kind = category.kind
        self._db.flush()
        return self._to_domain(orm_category)

    def delete(self, owner_id: str, category_id: str) -> bool:
        """Delete a category."""
        deleted = self._db.query(CategoryORM).filter(
            CategoryORM.owner_id == owner_id,
            CategoryORM.category_id == category_id,
        ).delete(synchronize_session=False)
        return deleted == 1

    def delete_by_owner(self, owner_id: str) -> int:
        """Delete every category of an owner."""
        return self._db.query(CategoryORM).filter(
            CategoryORM.owner_id == owner_id
        ).delete(synchronize_session=False)

    @staticmethod
    def _to_domain(orm: CategoryORM) -> Category:
        """Convert ORM model to domain model."""
        return Category(
            category_id=orm.category_id,
            owner_id=orm.owner_id,
            name=orm.name,
            kind=orm.kind,
            created_at=orm.created_at,
        )
