"""
Pytest configuration and fixtures for ledger tests.

This module provides:
- In-memory SQLite engine and ledger store fixtures
- A file-backed store for tests that need real cross-connection locking
- Service fixtures bound to the test store
- Factory helpers for accounts, categories and transactions
- A FastAPI test client wired to the test store
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from moneyflow.api.deps import get_store
from moneyflow.config.settings import Settings, reset_settings, set_settings
from moneyflow.domain.balance import net_effect
from moneyflow.domain.models import Account, AccountKind, Category, Transaction, TransactionKind
from moneyflow.main import app
from moneyflow.repositories.sqlalchemy import (
    Base,
    LedgerStore,
    SqlAlchemyAccountRepository,
    SqlAlchemyCategoryRepository,
    SqlAlchemyTransactionRepository,
    create_ledger_engine,
    create_session_factory,
    create_tables,
    reset_database,
    reset_ledger_store,
)
from moneyflow.services import (
    AccountCreate,
    AccountService,
    CascadeManager,
    CategoryService,
    StatisticsService,
    TransactionCoordinator,
    TransactionCreate,
)
from moneyflow.transfer import SnapshotExporter, SnapshotImporter

OWNER = "owner-alice"
OTHER_OWNER = "owner-bob"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_ledger_engine("sqlite://", busy_timeout=5.0)
    create_tables(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """
    Raw session for repository-level tests.

    The in-memory engine has a single connection; do not use this fixture
    together with the store in the same test.
    """
    session = create_session_factory(test_engine)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def store(test_engine) -> LedgerStore:
    """Provide a LedgerStore over the in-memory database."""
    return LedgerStore(create_session_factory(test_engine))


@pytest.fixture
def file_store(tmp_path) -> LedgerStore:
    """LedgerStore over a SQLite file, one connection per session."""
    engine = create_ledger_engine(f"sqlite:///{tmp_path / 'ledger.db'}", busy_timeout=30.0)
    create_tables(engine)
    yield LedgerStore(create_session_factory(engine))
    engine.dispose()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def category_repo(test_session) -> SqlAlchemyCategoryRepository:
    return SqlAlchemyCategoryRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    return SqlAlchemyTransactionRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def coordinator(store) -> TransactionCoordinator:
    return TransactionCoordinator(store)


@pytest.fixture
def cascade(store) -> CascadeManager:
    return CascadeManager(store)


@pytest.fixture
def account_service(store) -> AccountService:
    return AccountService(store)


@pytest.fixture
def category_service(store) -> CategoryService:
    return CategoryService(store)


@pytest.fixture
def statistics_service(store) -> StatisticsService:
    return StatisticsService(store, recent_limit=5)


@pytest.fixture
def exporter(store) -> SnapshotExporter:
    return SnapshotExporter(store)


@pytest.fixture
def importer(store) -> SnapshotImporter:
    return SnapshotImporter(store)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(account_service) -> Callable[..., Account]:
    """Factory for creating test accounts."""

    def _create_account(
        name: Optional[str] = None,
        balance: str = "0",
        kind: AccountKind = AccountKind.REGULAR,
        goal: Optional[str] = None,
        owner_id: str = OWNER,
    ) -> Account:
        if name is None:
            name = f"Account {uuid.uuid4().hex[:8]}"
        return account_service.create_account(
            owner_id,
            AccountCreate(
                name=name,
                kind=kind,
                balance=Decimal(balance),
                goal=Decimal(goal) if goal is not None else None,
            ),
        )

    return _create_account


@pytest.fixture
def category_factory(category_service) -> Callable[..., Category]:
    """Factory for creating test categories."""

    def _create_category(
        name: Optional[str] = None,
        kind: TransactionKind = TransactionKind.EXPENSE,
        owner_id: str = OWNER,
    ) -> Category:
        if name is None:
            name = f"Category {uuid.uuid4().hex[:8]}"
        return category_service.create_category(owner_id, name, kind)

    return _create_category


@pytest.fixture
def transaction_factory(coordinator) -> Callable[..., Transaction]:
    """Factory for creating test transactions; kind follows the category."""

    def _create_transaction(
        account: Account,
        category: Category,
        amount: str,
        txn_date: Optional[date] = None,
        description: Optional[str] = None,
        owner_id: str = OWNER,
    ) -> Transaction:
        return coordinator.create(
            owner_id,
            TransactionCreate(
                kind=category.kind,
                amount=Decimal(amount),
                category_id=category.category_id,
                account_id=account.account_id,
                txn_date=txn_date,
                description=description,
            ),
        )

    return _create_transaction


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def checking(account_factory) -> Account:
    """Checking account opened with 100.00."""
    return account_factory(name="Checking", balance="100.00")


@pytest.fixture
def savings(account_factory) -> Account:
    """Savings account opened with 500.00."""
    return account_factory(name="Savings", balance="500.00", kind=AccountKind.SAVINGS)


@pytest.fixture
def groceries(category_factory) -> Category:
    return category_factory(name="Groceries", kind=TransactionKind.EXPENSE)


@pytest.fixture
def salary(category_factory) -> Category:
    return category_factory(name="Salary", kind=TransactionKind.INCOME)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(store) -> TestClient:
    """Provide FastAPI test client bound to the test store, acting as OWNER."""
    set_settings(Settings(database_url="sqlite://"))
    reset_database()
    reset_ledger_store()

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        c.headers.update({"X-Owner-Id": OWNER})
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_balances_consistent(store: LedgerStore, owner_id: str = OWNER) -> None:
    """Assert every account balance equals opening balance + ledger effects."""

    def _load(unit):
        return [
            (account, unit.transactions.list_by_account(owner_id, account.account_id))
            for account in unit.accounts.list_by_owner(owner_id)
        ]

    for account, transactions in store.read(_load):
        expected = account.opening_balance + net_effect(transactions)
        assert account.balance == expected, (
            f"{account.name}: stored {account.balance}, expected {expected}"
        )


def stored_balance(store: LedgerStore, account_id: str, owner_id: str = OWNER) -> Decimal:
    """Read an account balance straight from the store."""
    account = store.read(lambda unit: unit.accounts.get_by_id(owner_id, account_id))
    assert account is not None
    return account.balance
