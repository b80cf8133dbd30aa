"""Transaction coordinator: transaction writes together with their balance effects."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from moneyflow.core.exceptions import NotFoundError, ValidationError
from moneyflow.core.timezone import now_utc, today_utc
from moneyflow.domain.balance import Number, ZERO, aggregate_effects, effect, inverse, to_money
from moneyflow.domain.models import Account, Category, Transaction, TransactionKind
from moneyflow.domain.views import DeletionSummary, TransactionFilter
from moneyflow.repositories.sqlalchemy.store import (
    ACCOUNTS,
    TRANSACTIONS,
    LedgerStore,
    LedgerUnit,
)

logger = logging.getLogger(__name__)


@dataclass
class TransactionCreate:
    """Input data for creating a transaction."""

    kind: TransactionKind
    amount: Number
    category_id: str
    account_id: str
    txn_date: Optional[date] = None
    description: Optional[str] = None


@dataclass
class TransactionUpdate:
    """Partial update data for editing a transaction. None = keep current value."""

    kind: Optional[TransactionKind] = None
    amount: Optional[Number] = None
    category_id: Optional[str] = None
    account_id: Optional[str] = None
    txn_date: Optional[date] = None
    description: Optional[str] = None


# -----------------------------------------------------------------------------
# Unit-level helpers shared with the cascade manager
# -----------------------------------------------------------------------------


def lock_accounts(unit: LedgerUnit, owner_id: str, account_ids: Iterable[str]) -> dict[str, Account]:
    """
    Load (and lock, where the backend supports it) the given accounts.

    Locks are taken in id order so two units never wait on each other in a
    cycle. Raises NotFoundError for an account the owner does not have.
    """
    accounts = {}
    for account_id in sorted(set(account_ids)):
        account = unit.accounts.get_by_id(owner_id, account_id, for_update=True)
        if account is None:
            raise NotFoundError("Account", account_id)
        accounts[account_id] = account
    return accounts


def apply_balance_changes(unit: LedgerUnit, owner_id: str, deltas: dict[str, Decimal]) -> None:
    """Apply a signed delta to each account's stored balance."""
    for account_id in sorted(deltas):
        delta = deltas[account_id]
        if delta == ZERO:
            continue
        if not unit.accounts.apply_delta(owner_id, account_id, delta):
            raise NotFoundError("Account", account_id)


def remove_transactions(
    unit: LedgerUnit,
    owner_id: str,
    transactions: list[Transaction],
) -> DeletionSummary:
    """
    Delete transactions and reverse their effects in one pass.

    Effects are aggregated per account first, so each account receives a
    single delta regardless of how many of its transactions go.
    """
    if not transactions:
        return DeletionSummary()

    deltas = inverse(aggregate_effects(transactions))
    lock_accounts(unit, owner_id, deltas.keys())

    txn_ids = [t.txn_id for t in transactions]
    unit.transactions.delete_many(owner_id, txn_ids)
    apply_balance_changes(unit, owner_id, deltas)
    unit.mark_changed(owner_id, TRANSACTIONS, ACCOUNTS)

    return DeletionSummary(deleted_transaction_ids=txn_ids, balance_changes=deltas)


class TransactionCoordinator:
    """
    Creates, edits and deletes transactions.

    Each operation runs as one atomic unit: the transaction row and the
    balance of every account it touches change together or not at all.
    """

    def __init__(self, store: LedgerStore):
        self._store = store

    def create(self, owner_id: str, data: TransactionCreate) -> Transaction:
        """
        Record a new transaction and apply its effect to the account balance.

        Raises:
            ValidationError: amount not > 0, missing ids, category kind mismatch.
            NotFoundError: account or category not owned by the caller.
        """
        kind = self._validate_kind(data.kind)
        amount = self._validate_amount(data.amount)
        self._require_ids(data.category_id, data.account_id)

        def _create(unit: LedgerUnit) -> Transaction:
            lock_accounts(unit, owner_id, [data.account_id])
            category = self._require_category(unit, owner_id, data.category_id)
            self._check_category_kind(category, kind)

            now = now_utc()
            created = unit.transactions.create(
                Transaction(
                    txn_id=str(uuid.uuid4()),
                    owner_id=owner_id,
                    kind=kind,
                    amount=amount,
                    category_id=data.category_id,
                    account_id=data.account_id,
                    txn_date=data.txn_date or today_utc(),
                    description=self._clean_description(data.description),
                    created_at=now,
                    updated_at=now,
                )
            )
            apply_balance_changes(unit, owner_id, {data.account_id: effect(kind, amount)})
            unit.mark_changed(owner_id, TRANSACTIONS, ACCOUNTS)
            return created

        created = self._store.atomic(_create)
        logger.info(
            "Created %s transaction %s (%s) on account %s for owner %s",
            created.kind.value, created.txn_id, created.amount, created.account_id, owner_id,
        )
        return created

    def update(self, owner_id: str, txn_id: str, patch: TransactionUpdate) -> Transaction:
        """
        Edit a transaction, moving its balance effect accordingly.

        The old effect is reversed and the new one applied exactly once, even
        when kind, amount and account all change in the same edit.
        """
        new_kind = self._validate_kind(patch.kind) if patch.kind is not None else None
        new_amount = self._validate_amount(patch.amount) if patch.amount is not None else None
        if patch.category_id == "" or patch.account_id == "":
            raise ValidationError("Category and account cannot be cleared")

        def _update(unit: LedgerUnit) -> Transaction:
            existing = unit.transactions.get_by_id(owner_id, txn_id)
            if existing is None:
                raise NotFoundError("Transaction", txn_id)

            kind = new_kind or existing.kind
            amount = new_amount if new_amount is not None else existing.amount
            category_id = patch.category_id or existing.category_id
            account_id = patch.account_id or existing.account_id

            lock_accounts(unit, owner_id, {existing.account_id, account_id})
            category = self._require_category(unit, owner_id, category_id)
            self._check_category_kind(category, kind)

            old_effect = effect(existing.kind, existing.amount)
            new_effect = effect(kind, amount)
            if account_id == existing.account_id:
                deltas = {account_id: new_effect - old_effect}
            else:
                deltas = {existing.account_id: -old_effect, account_id: new_effect}

            existing.kind = kind
            existing.amount = amount
            existing.category_id = category_id
            existing.account_id = account_id
            if patch.txn_date is not None:
                existing.txn_date = patch.txn_date
            if patch.description is not None:
                existing.description = self._clean_description(patch.description)
            existing.updated_at = now_utc()

            updated = unit.transactions.update(existing)
            apply_balance_changes(unit, owner_id, deltas)
            unit.mark_changed(owner_id, TRANSACTIONS, ACCOUNTS)
            return updated

        updated = self._store.atomic(_update)
        logger.info("Updated transaction %s for owner %s", txn_id, owner_id)
        return updated

    def delete(self, owner_id: str, txn_id: str) -> Transaction:
        """
        Delete a transaction and reverse its effect.

        Deleting an id that no longer exists raises NotFoundError, so a
        repeated delete never reverses the effect twice.
        """

        def _delete(unit: LedgerUnit) -> Transaction:
            existing = unit.transactions.get_by_id(owner_id, txn_id)
            if existing is None:
                raise NotFoundError("Transaction", txn_id)
            remove_transactions(unit, owner_id, [existing])
            return existing

        deleted = self._store.atomic(_delete)
        logger.info("Deleted transaction %s for owner %s", txn_id, owner_id)
        return deleted

    def bulk_delete(self, owner_id: str, txn_ids: list[str]) -> DeletionSummary:
        """
        Delete every listed transaction the caller owns.

        Ids that do not exist or belong to someone else are skipped. Each
        affected account gets one aggregated inverse delta.
        """
        unique_ids = list(dict.fromkeys(i for i in txn_ids if i))
        if not unique_ids:
            raise ValidationError("No transactions selected for deletion")

        def _bulk_delete(unit: LedgerUnit) -> DeletionSummary:
            found = unit.transactions.list_by_ids(owner_id, unique_ids)
            return remove_transactions(unit, owner_id, found)

        summary = self._store.atomic(_bulk_delete)
        logger.info(
            "Bulk-deleted %d of %d transactions for owner %s",
            summary.deleted_count, len(unique_ids), owner_id,
        )
        return summary

    def get(self, owner_id: str, txn_id: str) -> Transaction:
        """Get a transaction by ID."""
        txn = self._store.read(lambda unit: unit.transactions.get_by_id(owner_id, txn_id))
        if txn is None:
            raise NotFoundError("Transaction", txn_id)
        return txn

    def query(
        self,
        owner_id: str,
        filters: Optional[TransactionFilter] = None,
    ) -> list[Transaction]:
        """Query transactions with filters, newest first."""
        return self._store.read(lambda unit: unit.transactions.query(owner_id, filters))

    @staticmethod
    def _validate_kind(kind) -> TransactionKind:
        try:
            return TransactionKind(kind)
        except ValueError:
            raise ValidationError(f"Invalid transaction type: {kind}")

    @staticmethod
    def _validate_amount(amount: Number) -> Decimal:
        money = to_money(amount)
        if money <= ZERO:
            raise ValidationError("Amount must be greater than zero")
        return money

    @staticmethod
    def _require_ids(category_id: Optional[str], account_id: Optional[str]) -> None:
        if not category_id:
            raise ValidationError("Category is required")
        if not account_id:
            raise ValidationError("Account is required")

    @staticmethod
    def _require_category(unit: LedgerUnit, owner_id: str, category_id: str) -> Category:
        category = unit.categories.get_by_id(owner_id, category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    @staticmethod
    def _check_category_kind(category: Category, kind: TransactionKind) -> None:
        if category.kind != kind:
            raise ValidationError(
                f"Category '{category.name}' is for {category.kind.value} "
                f"transactions, not {kind.value}"
            )

    @staticmethod
    def _clean_description(description: Optional[str]) -> Optional[str]:
        if description is None:
            return None
        return description.strip() or None
