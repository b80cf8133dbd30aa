"""Ledger store: atomic units of work over the SQLAlchemy repositories."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from moneyflow.core.exceptions import AppError, StoreError
from moneyflow.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from moneyflow.repositories.sqlalchemy.category_repo import SqlAlchemyCategoryRepository
from moneyflow.repositories.sqlalchemy.database import get_session_factory
from moneyflow.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACCOUNTS = "accounts"
CATEGORIES = "categories"
TRANSACTIONS = "transactions"


@dataclass(frozen=True)
class LedgerChange:
    """Notification sent to subscribers after a unit commits."""

    owner_ids: frozenset[str]
    entities: frozenset[str]


ChangeListener = Callable[[LedgerChange], None]


class LedgerUnit:
    """
    Repositories bound to one session and one database transaction.

    Handed to the function passed to ``LedgerStore.atomic``; must not be kept
    after that function returns.
    """

    def __init__(self, session: Session):
        self.session = session
        self.accounts = SqlAlchemyAccountRepository(session)
        self.categories = SqlAlchemyCategoryRepository(session)
        self.transactions = SqlAlchemyTransactionRepository(session)
        self._owner_ids: set[str] = set()
        self._entities: set[str] = set()

    def mark_changed(self, owner_id: str, *entities: str) -> None:
        """Record which owner and tables this unit modified."""
        self._owner_ids.add(owner_id)
        self._entities.update(entities)

    def change(self) -> Optional[LedgerChange]:
        if not self._owner_ids:
            return None
        return LedgerChange(
            owner_ids=frozenset(self._owner_ids),
            entities=frozenset(self._entities),
        )


class LedgerStore:
    """
    Sole owner of durable ledger state.

    ``atomic`` runs a function against a ``LedgerUnit`` inside one database
    transaction: either every write it made is committed or none is. Callers
    never issue begin/commit/rollback themselves.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        # None = resolve the module-level factory on each call, so the store
        # follows database reconfiguration
        self._session_factory = session_factory
        self._listeners: list[ChangeListener] = []

    def _new_session(self) -> Session:
        factory = self._session_factory or get_session_factory()
        return factory()

    def atomic(self, fn: Callable[[LedgerUnit], T]) -> T:
        """
        Execute ``fn`` as one atomic unit and return its result.

        Raises:
            AppError subclasses raised by ``fn`` after rolling back.
            StoreError when the database rejects a write or the commit fails.
        """
        session = self._new_session()
        unit = LedgerUnit(session)
        try:
            with session.begin():
                result = fn(unit)
        except AppError as exc:
            logger.warning("Atomic unit rolled back: %s", exc.message)
            raise
        except IntegrityError as exc:
            logger.warning("Atomic unit rolled back on constraint violation: %s", exc.orig)
            raise StoreError("Ledger store rejected the change (constraint violation)") from exc
        except (SQLAlchemyError, OverflowError) as exc:
            # pysqlite raises OverflowError for integers beyond 64 bits
            logger.exception("Atomic unit failed and was rolled back")
            raise StoreError() from exc
        finally:
            session.close()

        change = unit.change()
        if change is not None:
            self._notify(change)
        return result

    def read(self, fn: Callable[[LedgerUnit], T]) -> T:
        """Run read-only queries against a fresh session; nothing is committed."""
        session = self._new_session()
        try:
            return fn(LedgerUnit(session))
        except (SQLAlchemyError, OverflowError) as exc:
            logger.exception("Ledger read failed")
            raise StoreError("Ledger store read failed") from exc
        finally:
            session.rollback()
            session.close()

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback invoked after every committed change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        """Remove a previously registered callback."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, change: LedgerChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                # The unit is committed at this point; listener errors are only logged
                logger.exception("Ledger change listener %r failed", listener)


_store: Optional[LedgerStore] = None


def get_ledger_store() -> LedgerStore:
    """Get or create the process-wide ledger store."""
    global _store
    if _store is None:
        _store = LedgerStore()
    return _store


def reset_ledger_store() -> None:
    """Drop the process-wide store and its subscribers."""
    global _store
    _store = None
