"""SQLAlchemy implementation of AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from moneyflow.core.timezone import now_utc
from moneyflow.domain.models import Account
from moneyflow.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """
    SQLAlchemy-backed account repository.

    Never commits: writes are flushed so constraint violations surface inside
    the caller's atomic unit, which owns commit and rollback.
    """

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            account_id=account.account_id,
            owner_id=account.owner_id,
            name=account.name,
            kind=account.kind,
            balance=account.balance,
            opening_balance=account.opening_balance,
            goal=account.goal,
            description=account.description,
            created_at=account.created_at or now_utc(),
            updated_at=account.updated_at,
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get_by_id(
        self,
        owner_id: str,
        account_id: str,
        for_update: bool = False,
    ) -> Optional[Account]:
        """Retrieve account by ID; ``for_update`` locks the row where supported."""
        query = (
            self._db.query(AccountORM)
            .filter(
                AccountORM.owner_id == owner_id,
                AccountORM.account_id == account_id,
            )
            .populate_existing()
        )
        if for_update:
            query = query.with_for_update()
        orm_account = query.first()
        return self._to_domain(orm_account) if orm_account else None

    def get_by_name(self, owner_id: str, name: str) -> Optional[Account]:
        """Retrieve account by name."""
        orm_account = (
            self._db.query(AccountORM)
            .filter(AccountORM.owner_id == owner_id, AccountORM.name == name)
            .populate_existing()
            .first()
        )
        return self._to_domain(orm_account) if orm_account else None

    def list_by_owner(self, owner_id: str) -> list[Account]:
        """List all accounts of an owner, ordered by name."""
        orm_accounts = (
            self._db.query(AccountORM)
            .filter(AccountORM.owner_id == owner_id)
            .order_by(AccountORM.name)
            .populate_existing()
            .all()
        )
        return [self._to_domain(a) for a in orm_accounts]

    def update(self, account: Account) -> Account:
        """Overwrite an existing account, including its balance."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.owner_id == account.owner_id,
            AccountORM.account_id == account.account_id,
        ).first()
        if not orm_account:
            raise ValueError(f"Account not found: {account.account_id}")

        orm_account.name = account.name
        orm_account.kind = account.kind
        orm_account.balance = account.balance
        orm_account.opening_balance = account.opening_balance
        orm_account.goal = account.goal
        orm_account.description = account.description
        orm_account.updated_at = now_utc()

        self._db.flush()
        return self._to_domain(orm_account)

    def apply_delta(self, owner_id: str, account_id: str, delta: Decimal) -> bool:
        """
        Add ``delta`` to the stored balance in place.

        Issued as ``UPDATE ... SET balance = balance + :delta`` so the
        read-modify-write happens inside the database, under the unit's lock.
        """
        updated = (
            self._db.query(AccountORM)
            .filter(
                AccountORM.owner_id == owner_id,
                AccountORM.account_id == account_id,
            )
            .update(
                {
                    AccountORM.balance: AccountORM.balance + delta,
                    AccountORM.updated_at: now_utc(),
                },
                synchronize_session=False,
            )
        )
        return updated == 1

    def delete(self, owner_id: str, account_id: str) -> bool:
        """Delete an account."""
        deleted = self._db.query(AccountORM).filter(
            AccountORM.owner_id == owner_id,
            AccountORM.account_id == account_id,
        ).delete(synchronize_session=False)
        return deleted == 1

    def delete_by_owner(self, owner_id: str) -> int:
        """Delete every account of an owner."""
        return self._db.query(AccountORM).filter(
            AccountORM.owner_id == owner_id
        ).delete(synchronize_session=False)

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            owner_id=orm.owner_id,
            name=orm.name,
            kind=orm.kind,
            balance=orm.balance if orm.balance is not None else Decimal("0.00"),
            opening_balance=(
                orm.opening_balance if orm.opening_balance is not None else Decimal("0.00")
            ),
            goal=orm.goal,
            description=orm.description,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
