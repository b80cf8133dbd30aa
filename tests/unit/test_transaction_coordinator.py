"""
Unit tests for TransactionCoordinator.

Tests cover:
- Creating income and expense transactions and their balance effect
- Validation errors (amount, missing ids, category kind, ownership)
- Editing amount, kind and account with exactly-once effects
- Single delete, repeated delete and bulk delete
- Filtered queries
"""

from datetime import date
from decimal import Decimal

import pytest

from moneyflow.core.exceptions import InvalidAmountError, NotFoundError, ValidationError
from moneyflow.domain.models import TransactionKind
from moneyflow.domain.views import TransactionFilter
from moneyflow.services import TransactionCoordinator, TransactionCreate, TransactionUpdate
from tests.conftest import OTHER_OWNER, OWNER, assert_balances_consistent, stored_balance


# =============================================================================
# CREATE
# =============================================================================


class TestCreateTransaction:
    """Tests for recording new transactions."""

    def test_expense_reduces_balance(self, coordinator, store, checking, groceries):
        """
        GIVEN account "Checking" with balance 100
        WHEN I record an expense of 30 against it
        THEN the transaction exists and the balance is 70
        """
        txn = coordinator.create(
            OWNER,
            TransactionCreate(
                kind=TransactionKind.EXPENSE,
                amount=Decimal("30"),
                category_id=groceries.category_id,
                account_id=checking.account_id,
            ),
        )

        assert txn.txn_id
        assert txn.amount == Decimal("30.00")
        assert txn.txn_date is not None
        assert stored_balance(store, checking.account_id) == Decimal("70.00")
        assert coordinator.get(OWNER, txn.txn_id).txn_id == txn.txn_id

    def test_income_increases_balance(self, coordinator, store, checking, salary):
        coordinator.create(
            OWNER,
            TransactionCreate(
                kind=TransactionKind.INCOME,
                amount="250.25",
                category_id=salary.category_id,
                account_id=checking.account_id,
                txn_date=date(2024, 3, 1),
                description="  March pay  ",
            ),
        )

        assert stored_balance(store, checking.account_id) == Decimal("350.25")
        [txn] = coordinator.query(OWNER)
        assert txn.description == "March pay"
        assert txn.txn_date == date(2024, 3, 1)

    @pytest.mark.parametrize("amount", ["0", "-5", "abc"])
    def test_non_positive_or_invalid_amount_rejected(
        self, coordinator, store, checking, groceries, amount
    ):
        """
        GIVEN an amount that is zero, negative or not a number
        WHEN I record a transaction
        THEN a ValidationError is raised and the balance is unchanged
        """
        with pytest.raises(ValidationError):
            coordinator.create(
                OWNER,
                TransactionCreate(
                    kind=TransactionKind.EXPENSE,
                    amount=amount,
                    category_id=groceries.category_id,
                    account_id=checking.account_id,
                ),
            )

        assert stored_balance(store, checking.account_id) == Decimal("100.00")
        assert coordinator.query(OWNER) == []

    @pytest.mark.parametrize("amount", [Decimal("1e30"), Decimal("1e20")])
    def test_oversized_amount_rejected(self, coordinator, store, checking, groceries, amount):
        """
        GIVEN an amount too large to store as cents
        WHEN I record or edit a transaction with it
        THEN InvalidAmountError is raised and the ledger is unchanged
        """
        with pytest.raises(InvalidAmountError):
            coordinator.create(
                OWNER,
                TransactionCreate(
                    kind=TransactionKind.EXPENSE,
                    amount=amount,
                    category_id=groceries.category_id,
                    account_id=checking.account_id,
                ),
            )
        txn = coordinator.create(
            OWNER,
            TransactionCreate(
                kind=TransactionKind.EXPENSE,
                amount="10",
                category_id=groceries.category_id,
                account_id=checking.account_id,
            ),
        )
        with pytest.raises(InvalidAmountError):
            coordinator.update(OWNER, txn.txn_id, TransactionUpdate(amount=amount))

        assert stored_balance(store, checking.account_id) == Decimal("90.00")
        assert coordinator.get(OWNER, txn.txn_id).amount == Decimal("10.00")

    def test_missing_category_id_rejected(self, coordinator, checking):
        with pytest.raises(ValidationError, match="Category is required"):
            coordinator.create(
                OWNER,
                TransactionCreate(
                    kind=TransactionKind.EXPENSE,
                    amount="1",
                    category_id="",
                    account_id=checking.account_id,
                ),
            )

    def test_invalid_kind_rejected(self, coordinator, checking, groceries):
        with pytest.raises(ValidationError, match="Invalid transaction type"):
            coordinator.create(
                OWNER,
                TransactionCreate(
                    kind="transfer",
                    amount="1",
                    category_id=groceries.category_id,
                    account_id=checking.account_id,
                ),
            )

    def test_category_kind_must_match(self, coordinator, store, checking, salary):
        """
        GIVEN an income category
        WHEN I record an expense against it
        THEN a ValidationError is raised and nothing is written
        """
        with pytest.raises(ValidationError, match="Salary"):
            coordinator.create(
                OWNER,
                TransactionCreate(
                    kind=TransactionKind.EXPENSE,
                    amount="10",
                    category_id=salary.category_id,
                    account_id=checking.account_id,
                ),
            )

        assert stored_balance(store, checking.account_id) == Decimal("100.00")

    def test_unknown_account_not_found(self, coordinator, groceries):
        with pytest.raises(NotFoundError) as exc_info:
            coordinator.create(
                OWNER,
                TransactionCreate(
                    kind=TransactionKind.EXPENSE,
                    amount="10",
                    category_id=groceries.category_id,
                    account_id="missing",
                ),
            )
        assert exc_info.value.resource == "Account"

    def test_foreign_account_not_found(self, coordinator, account_factory, groceries, store):
        """
        GIVEN an account that belongs to another owner
        WHEN I record a transaction against it
        THEN NotFoundError is raised and the other owner's balance is unchanged
        """
        foreign = account_factory(name="Bob's", balance="50", owner_id=OTHER_OWNER)

        with pytest.raises(NotFoundError):
            coordinator.create(
                OWNER,
                TransactionCreate(
                    kind=TransactionKind.EXPENSE,
                    amount="10",
                    category_id=groceries.category_id,
                    account_id=foreign.account_id,
                ),
            )

        assert stored_balance(store, foreign.account_id, OTHER_OWNER) == Decimal("50.00")

    def test_foreign_category_not_found(self, coordinator, checking, category_factory):
        foreign = category_factory(name="Food", owner_id=OTHER_OWNER)

        with pytest.raises(NotFoundError) as exc_info:
            coordinator.create(
                OWNER,
                TransactionCreate(
                    kind=TransactionKind.EXPENSE,
                    amount="10",
                    category_id=foreign.category_id,
                    account_id=checking.account_id,
                ),
            )
        assert exc_info.value.resource == "Category"


# =============================================================================
# UPDATE
# =============================================================================


class TestUpdateTransaction:
    """Tests for editing transactions."""

    def test_amount_change_applies_net_delta(
        self, coordinator, store, checking, groceries, transaction_factory
    ):
        """
        GIVEN an expense of 30 on an account opened at 100 (balance 70)
        WHEN the amount is edited to 45
        THEN the balance is 55
        """
        txn = transaction_factory(checking, groceries, "30")

        updated = coordinator.update(OWNER, txn.txn_id, TransactionUpdate(amount="45"))

        assert updated.amount == Decimal("45.00")
        assert stored_balance(store, checking.account_id) == Decimal("55.00")

    def test_kind_and_amount_change_together(
        self, coordinator, store, checking, groceries, salary, transaction_factory
    ):
        """
        GIVEN an expense of 30 (balance 70)
        WHEN it becomes an income of 50 in a salary category
        THEN the old effect is reversed once and the new one applied once: 150
        """
        txn = transaction_factory(checking, groceries, "30")

        coordinator.update(
            OWNER,
            txn.txn_id,
            TransactionUpdate(
                kind=TransactionKind.INCOME,
                amount="50",
                category_id=salary.category_id,
            ),
        )

        assert stored_balance(store, checking.account_id) == Decimal("150.00")
        assert_balances_consistent(store)

    def test_account_change_moves_effect(
        self, coordinator, store, checking, savings, groceries, transaction_factory
    ):
        """
        GIVEN an expense of 30 on Checking (100 -> 70)
        WHEN the transaction is moved to Savings (500)
        THEN Checking returns to 100 and Savings drops to 470
        """
        txn = transaction_factory(checking, groceries, "30")

        coordinator.update(
            OWNER, txn.txn_id, TransactionUpdate(account_id=savings.account_id)
        )

        assert stored_balance(store, checking.account_id) == Decimal("100.00")
        assert stored_balance(store, savings.account_id) == Decimal("470.00")

    def test_account_and_amount_change_together(
        self, coordinator, store, checking, savings, groceries, transaction_factory
    ):
        txn = transaction_factory(checking, groceries, "30")

        coordinator.update(
            OWNER,
            txn.txn_id,
            TransactionUpdate(account_id=savings.account_id, amount="10"),
        )

        assert stored_balance(store, checking.account_id) == Decimal("100.00")
        assert stored_balance(store, savings.account_id) == Decimal("490.00")

    def test_kind_change_without_matching_category_rejected(
        self, coordinator, store, checking, groceries, transaction_factory
    ):
        """
        GIVEN an expense in an expense category
        WHEN only the kind is flipped to income
        THEN a ValidationError is raised and the balance is unchanged
        """
        txn = transaction_factory(checking, groceries, "30")

        with pytest.raises(ValidationError):
            coordinator.update(
                OWNER, txn.txn_id, TransactionUpdate(kind=TransactionKind.INCOME)
            )

        assert stored_balance(store, checking.account_id) == Decimal("70.00")
        assert coordinator.get(OWNER, txn.txn_id).kind == TransactionKind.EXPENSE

    def test_move_to_unknown_account_rolls_back(
        self, coordinator, store, checking, groceries, transaction_factory
    ):
        txn = transaction_factory(checking, groceries, "30")

        with pytest.raises(NotFoundError):
            coordinator.update(OWNER, txn.txn_id, TransactionUpdate(account_id="nowhere"))

        assert stored_balance(store, checking.account_id) == Decimal("70.00")
        assert coordinator.get(OWNER, txn.txn_id).account_id == checking.account_id

    def test_date_and_description_only(
        self, coordinator, store, checking, groceries, transaction_factory
    ):
        txn = transaction_factory(checking, groceries, "30", txn_date=date(2024, 1, 1))

        updated = coordinator.update(
            OWNER,
            txn.txn_id,
            TransactionUpdate(txn_date=date(2024, 2, 2), description="weekly shop"),
        )

        assert updated.txn_date == date(2024, 2, 2)
        assert updated.description == "weekly shop"
        assert stored_balance(store, checking.account_id) == Decimal("70.00")

    def test_clearing_account_rejected(self, coordinator, checking, groceries, transaction_factory):
        txn = transaction_factory(checking, groceries, "30")

        with pytest.raises(ValidationError):
            coordinator.update(OWNER, txn.txn_id, TransactionUpdate(account_id=""))

    def test_unknown_transaction_not_found(self, coordinator):
        with pytest.raises(NotFoundError):
            coordinator.update(OWNER, "missing", TransactionUpdate(amount="1"))

    def test_other_owner_cannot_edit(
        self, coordinator, store, checking, groceries, transaction_factory
    ):
        txn = transaction_factory(checking, groceries, "30")

        with pytest.raises(NotFoundError):
            coordinator.update(OTHER_OWNER, txn.txn_id, TransactionUpdate(amount="1"))

        assert stored_balance(store, checking.account_id) == Decimal("70.00")


# =============================================================================
# DELETE
# =============================================================================


class TestDeleteTransaction:
    """Tests for single and bulk deletes."""

    def test_delete_reverses_effect(
        self, coordinator, store, checking, groceries, transaction_factory
    ):
        """
        GIVEN an expense of 30 (balance 70)
        WHEN the transaction is deleted
        THEN the balance is back at 100
        """
        txn = transaction_factory(checking, groceries, "30")

        deleted = coordinator.delete(OWNER, txn.txn_id)

        assert deleted.txn_id == txn.txn_id
        assert stored_balance(store, checking.account_id) == Decimal("100.00")
        with pytest.raises(NotFoundError):
            coordinator.get(OWNER, txn.txn_id)

    def test_repeated_delete_is_not_applied_twice(
        self, coordinator, store, checking, groceries, transaction_factory
    ):
        """
        GIVEN a transaction that was already deleted
        WHEN delete is requested again with the same id
        THEN NotFoundError is raised and the balance is unchanged
        """
        txn = transaction_factory(checking, groceries, "30")
        coordinator.delete(OWNER, txn.txn_id)

        with pytest.raises(NotFoundError):
            coordinator.delete(OWNER, txn.txn_id)

        assert stored_balance(store, checking.account_id) == Decimal("100.00")

    def test_bulk_delete_aggregates_per_account(
        self,
        coordinator,
        store,
        checking,
        savings,
        groceries,
        salary,
        transaction_factory,
    ):
        """
        GIVEN three transactions over two accounts
        WHEN all three are bulk-deleted
        THEN each account receives one aggregated inverse delta
        """
        t1 = transaction_factory(checking, groceries, "30")
        t2 = transaction_factory(checking, salary, "200")
        t3 = transaction_factory(savings, groceries, "50")

        summary = coordinator.bulk_delete(OWNER, [t1.txn_id, t2.txn_id, t3.txn_id])

        assert summary.deleted_count == 3
        assert summary.balance_changes == {
            checking.account_id: Decimal("-170.00"),
            savings.account_id: Decimal("50.00"),
        }
        assert stored_balance(store, checking.account_id) == Decimal("100.00")
        assert stored_balance(store, savings.account_id) == Decimal("500.00")
        assert coordinator.query(OWNER) == []

    def test_bulk_delete_skips_unknown_and_duplicate_ids(
        self, coordinator, store, checking, groceries, transaction_factory
    ):
        txn = transaction_factory(checking, groceries, "30")

        summary = coordinator.bulk_delete(OWNER, [txn.txn_id, txn.txn_id, "ghost"])

        assert summary.deleted_transaction_ids == [txn.txn_id]
        assert stored_balance(store, checking.account_id) == Decimal("100.00")

    def test_bulk_delete_ignores_other_owner(
        self, coordinator, store, checking, groceries, transaction_factory
    ):
        txn = transaction_factory(checking, groceries, "30")

        summary = coordinator.bulk_delete(OTHER_OWNER, [txn.txn_id])

        assert summary.deleted_count == 0
        assert stored_balance(store, checking.account_id) == Decimal("70.00")

    def test_bulk_delete_requires_ids(self, coordinator):
        with pytest.raises(ValidationError):
            coordinator.bulk_delete(OWNER, [])


# =============================================================================
# QUERY
# =============================================================================


class TestQueryTransactions:
    """Tests for filtered listing."""

    @pytest.fixture
    def ledger(self, checking, savings, groceries, salary, transaction_factory):
        return [
            transaction_factory(checking, groceries, "10", txn_date=date(2024, 1, 5), description="Corner shop"),
            transaction_factory(checking, salary, "1000", txn_date=date(2024, 1, 31)),
            transaction_factory(savings, groceries, "20", txn_date=date(2024, 2, 10), description="Market"),
        ]

    def test_newest_first(self, coordinator: TransactionCoordinator, ledger):
        result = coordinator.query(OWNER)
        assert [t.txn_date for t in result] == [
            date(2024, 2, 10),
            date(2024, 1, 31),
            date(2024, 1, 5),
        ]

    def test_filter_by_date_range(self, coordinator, ledger):
        result = coordinator.query(
            OWNER,
            TransactionFilter(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31)),
        )
        assert len(result) == 2

    def test_filter_by_account_and_kind(self, coordinator, ledger, checking):
        result = coordinator.query(
            OWNER,
            TransactionFilter(account_ids=[checking.account_id], kind=TransactionKind.EXPENSE),
        )
        assert [t.amount for t in result] == [Decimal("10.00")]

    def test_search_is_case_insensitive(self, coordinator, ledger):
        result = coordinator.query(OWNER, TransactionFilter(search="market"))
        assert [t.description for t in result] == ["Market"]

    def test_limit(self, coordinator, ledger):
        assert len(coordinator.query(OWNER, TransactionFilter(limit=2))) == 2

    def test_other_owner_sees_nothing(self, coordinator, ledger):
        assert coordinator.query(OTHER_OWNER) == []
