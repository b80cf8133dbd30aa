"""SQLAlchemy implementation of TransactionRepository."""

from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from moneyflow.core.timezone import now_utc
from moneyflow.domain.models import Transaction
from moneyflow.domain.views import TransactionFilter
from moneyflow.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        orm_txn = self._to_orm(transaction)
        if orm_txn.created_at is None:
            orm_txn.created_at = now_utc()
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def get_by_id(self, owner_id: str, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.owner_id == owner_id,
            TransactionORM.txn_id == txn_id,
        ).first()
        return self._to_domain(orm_txn) if orm_txn else None

    def update(self, transaction: Transaction) -> Transaction:
        """Overwrite an existing transaction."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.owner_id == transaction.owner_id,
            TransactionORM.txn_id == transaction.txn_id,
        ).first()
        if not orm_txn:
            raise ValueError(f"Transaction not found: {transaction.txn_id}")

        orm_txn.kind = transaction.kind
        orm_txn.amount = transaction.amount
        orm_txn.category_id = transaction.category_id
        orm_txn.account_id = transaction.account_id
        orm_txn.description = transaction.description
        orm_txn.txn_date = transaction.txn_date
        orm_txn.updated_at = transaction.updated_at or now_utc()

        self._db.flush()
        return self._to_domain(orm_txn)

    def delete(self, owner_id: str, txn_id: str) -> bool:
        """Delete a transaction."""
        deleted = self._db.query(TransactionORM).filter(
            TransactionORM.owner_id == owner_id,
            TransactionORM.txn_id == txn_id,
        ).delete(synchronize_session=False)
        return deleted == 1

    def list_by_ids(self, owner_id: str, txn_ids: list[str]) -> list[Transaction]:
        """Fetch the listed transactions that exist and belong to the owner."""
        if not txn_ids:
            return []
        orm_txns = self._db.query(TransactionORM).filter(
            TransactionORM.owner_id == owner_id,
            TransactionORM.txn_id.in_(txn_ids),
        ).all()
        return [self._to_domain(t) for t in orm_txns]

    def list_by_category(self, owner_id: str, category_id: str) -> list[Transaction]:
        """All transactions of an owner in one category."""
        orm_txns = self._db.query(TransactionORM).filter(
            TransactionORM.owner_id == owner_id,
            TransactionORM.category_id == category_id,
        ).all()
        return [self._to_domain(t) for t in orm_txns]

    def list_by_account(self, owner_id: str, account_id: str) -> list[Transaction]:
        """All transactions of an owner against one account."""
        orm_txns = self._db.query(TransactionORM).filter(
            TransactionORM.owner_id == owner_id,
            TransactionORM.account_id == account_id,
        ).all()
        return [self._to_domain(t) for t in orm_txns]

    def count_by_category(self, owner_id: str, category_id: str) -> int:
        """Number of transactions referencing a category."""
        return self._db.query(TransactionORM).filter(
            TransactionORM.owner_id == owner_id,
            TransactionORM.category_id == category_id,
        ).count()

    def delete_many(self, owner_id: str, txn_ids: list[str]) -> int:
        """Delete the listed transactions."""
        if not txn_ids:
            return 0
        return self._db.query(TransactionORM).filter(
            TransactionORM.owner_id == owner_id,
            TransactionORM.txn_id.in_(txn_ids),
        ).delete(synchronize_session=False)

    def delete_by_owner(self, owner_id: str) -> int:
        """Delete every transaction of an owner."""
        return self._db.query(TransactionORM).filter(
            TransactionORM.owner_id == owner_id
        ).delete(synchronize_session=False)

    def query(
        self,
        owner_id: str,
        filters: Optional[TransactionFilter] = None,
    ) -> list[Transaction]:
        """Query transactions with filters, newest date first."""
        filters = filters or TransactionFilter()
        query = self._db.query(TransactionORM)

        conditions = [TransactionORM.owner_id == owner_id]
        if filters.account_ids:
            conditions.append(TransactionORM.account_id.in_(filters.account_ids))
        if filters.category_ids:
            conditions.append(TransactionORM.category_id.in_(filters.category_ids))
        if filters.kind:
            conditions.append(TransactionORM.kind == filters.kind)
        if filters.start_date:
            conditions.append(TransactionORM.txn_date >= filters.start_date)
        if filters.end_date:
            conditions.append(TransactionORM.txn_date <= filters.end_date)
        if filters.search:
            conditions.append(TransactionORM.description.ilike(f"%{filters.search.strip()}%"))

        query = query.filter(and_(*conditions)).order_by(
            TransactionORM.txn_date.desc(),
            TransactionORM.created_at.desc(),
        )
        if filters.limit:
            query = query.limit(filters.limit)
        return [self._to_domain(t) for t in query.all()]

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            txn_id=txn.txn_id,
            owner_id=txn.owner_id,
            kind=txn.kind,
            amount=txn.amount,
            category_id=txn.category_id,
            account_id=txn.account_id,
            description=txn.description,
            txn_date=txn.txn_date,
            created_at=txn.created_at,
            updated_at=txn.updated_at,
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            owner_id=orm.owner_id,
            kind=orm.kind,
            amount=orm.amount,
            category_id=orm.category_id,
            account_id=orm.account_id,
            txn_date=orm.txn_date,
            description=orm.description,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
