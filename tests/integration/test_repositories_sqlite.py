"""
Integration tests for SQLAlchemy repositories on SQLite.

Tests cover:
- Money stored as integer cents
- In-place balance deltas
- Foreign key and amount constraints
- Owner scoping of deletes
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from moneyflow.domain.models import Account, Category, Transaction, TransactionKind
from tests.conftest import OTHER_OWNER, OWNER


def make_account(account_id="acc-1", owner_id=OWNER, name="Checking", balance="10.00"):
    return Account(
        account_id=account_id,
        owner_id=owner_id,
        name=name,
        balance=Decimal(balance),
        opening_balance=Decimal(balance),
    )


def make_category(category_id="cat-1", owner_id=OWNER, kind=TransactionKind.EXPENSE):
    return Category(category_id=category_id, owner_id=owner_id, name="Food", kind=kind)


def make_txn(txn_id="txn-1", amount="5.00", account_id="acc-1", category_id="cat-1", owner_id=OWNER):
    return Transaction(
        txn_id=txn_id,
        owner_id=owner_id,
        kind=TransactionKind.EXPENSE,
        amount=Decimal(amount),
        category_id=category_id,
        account_id=account_id,
        txn_date=date(2024, 1, 1),
    )


class TestAccountRepository:
    """Tests for SqlAlchemyAccountRepository."""

    def test_balance_stored_as_cents(self, account_repo, test_session):
        """
        GIVEN an account with balance 123.45
        WHEN it is persisted
        THEN the column holds the integer 12345 and reads back as 123.45
        """
        account_repo.create(make_account(balance="123.45"))

        raw = test_session.execute(text("SELECT balance FROM accounts")).scalar_one()
        assert raw == 12345
        assert account_repo.get_by_id(OWNER, "acc-1").balance == Decimal("123.45")

    def test_apply_delta_updates_in_place(self, account_repo):
        account_repo.create(make_account(balance="10.00"))

        assert account_repo.apply_delta(OWNER, "acc-1", Decimal("2.50"))
        assert account_repo.apply_delta(OWNER, "acc-1", Decimal("-0.75"))

        assert account_repo.get_by_id(OWNER, "acc-1").balance == Decimal("11.75")

    def test_apply_delta_scoped_to_owner(self, account_repo):
        account_repo.create(make_account())

        assert not account_repo.apply_delta(OTHER_OWNER, "acc-1", Decimal("1"))
        assert account_repo.get_by_id(OWNER, "acc-1").balance == Decimal("10.00")

    def test_get_by_name(self, account_repo):
        account_repo.create(make_account(name="Wallet"))

        assert account_repo.get_by_name(OWNER, "Wallet").account_id == "acc-1"
        assert account_repo.get_by_name(OTHER_OWNER, "Wallet") is None

    def test_delete_by_owner(self, account_repo):
        account_repo.create(make_account("a1", OWNER, "One"))
        account_repo.create(make_account("a2", OWNER, "Two"))
        account_repo.create(make_account("b1", OTHER_OWNER, "One"))

        assert account_repo.delete_by_owner(OWNER) == 2
        assert [a.account_id for a in account_repo.list_by_owner(OTHER_OWNER)] == ["b1"]


class TestTransactionConstraints:
    """Tests for database-level ledger constraints."""

    def test_unknown_account_rejected(self, category_repo, transaction_repo):
        """
        GIVEN no account "ghost"
        WHEN a transaction referencing it is flushed
        THEN the foreign key rejects it
        """
        category_repo.create(make_category())

        with pytest.raises(IntegrityError):
            transaction_repo.create(make_txn(account_id="ghost"))

    def test_negative_amount_rejected(self, account_repo, category_repo, transaction_repo):
        account_repo.create(make_account())
        category_repo.create(make_category())

        with pytest.raises(IntegrityError):
            transaction_repo.create(make_txn(amount="-1.00"))

    def test_delete_many_scoped_to_owner(self, account_repo, category_repo, transaction_repo):
        account_repo.create(make_account())
        category_repo.create(make_category())
        transaction_repo.create(make_txn("t1"))
        transaction_repo.create(make_txn("t2"))

        assert transaction_repo.delete_many(OTHER_OWNER, ["t1", "t2"]) == 0
        assert transaction_repo.delete_many(OWNER, ["t1", "missing"]) == 1
        assert [t.txn_id for t in transaction_repo.list_by_account(OWNER, "acc-1")] == ["t2"]

    def test_count_by_category(self, account_repo, category_repo, transaction_repo):
        account_repo.create(make_account())
        category_repo.create(make_category())
        transaction_repo.create(make_txn("t1"))
        transaction_repo.create(make_txn("t2"))

        assert transaction_repo.count_by_category(OWNER, "cat-1") == 2
        assert transaction_repo.count_by_category(OTHER_OWNER, "cat-1") == 0
