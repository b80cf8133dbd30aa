"""SQLAlchemy repository implementations."""

from moneyflow.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    create_ledger_engine,
    create_session_factory,
    create_tables,
    init_db,
    reset_database,
    Base,
)
from moneyflow.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from moneyflow.repositories.sqlalchemy.category_repo import SqlAlchemyCategoryRepository
from moneyflow.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from moneyflow.repositories.sqlalchemy.store import (
    LedgerStore,
    LedgerUnit,
    LedgerChange,
    get_ledger_store,
    reset_ledger_store,
    ACCOUNTS,
    CATEGORIES,
    TRANSACTIONS,
)

__all__ = [
    "get_engine",
    "get_session_factory",
    "create_ledger_engine",
    "create_session_factory",
    "create_tables",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyCategoryRepository",
    "SqlAlchemyTransactionRepository",
    "LedgerStore",
    "LedgerUnit",
    "LedgerChange",
    "get_ledger_store",
    "reset_ledger_store",
    "ACCOUNTS",
    "CATEGORIES",
    "TRANSACTIONS",
]
