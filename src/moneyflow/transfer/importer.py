"""Snapshot import."""

import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Union

from moneyflow.core.exceptions import InvalidAmountError, MalformedSnapshotError
from moneyflow.core.timezone import now_utc
from moneyflow.domain.balance import MAX_BALANCE, net_effect, to_money
from moneyflow.domain.models import Account, Category, Transaction
from moneyflow.domain.views import ImportSummary
from moneyflow.repositories.sqlalchemy.store import (
    ACCOUNTS,
    CATEGORIES,
    TRANSACTIONS,
    LedgerStore,
    LedgerUnit,
)
from moneyflow.transfer.schema import (
    SnapshotCheck,
    SnapshotDocument,
    validate_snapshot,
    validate_snapshot_json,
)

logger = logging.getLogger(__name__)


@dataclass
class _ImportRows:
    accounts: list[Account] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)


class SnapshotImporter:
    """
    Replaces one owner's ledger with the contents of a snapshot.

    The snapshot is validated and converted to rows before anything is
    deleted; the delete and the inserts then run as a single atomic unit, so
    a failure at any point leaves the previous ledger untouched.
    """

    def __init__(self, store: LedgerStore):
        self._store = store

    def validate(self, payload: Any) -> SnapshotCheck:
        """Check a decoded payload without importing it."""
        return validate_snapshot(payload)

    def import_snapshot(
        self,
        owner_id: str,
        payload: Union[SnapshotDocument, dict],
    ) -> ImportSummary:
        """
        Wipe the owner's accounts, categories and transactions and load the snapshot.

        Raises:
            MalformedSnapshotError: payload fails the schema; nothing was deleted.
            StoreError: the replacement could not be committed; nothing changed.
        """
        if isinstance(payload, SnapshotDocument):
            snapshot = payload
        else:
            check = validate_snapshot(payload)
            if not check.is_valid:
                raise MalformedSnapshotError(check.errors)
            snapshot = check.snapshot
        return self._replace(owner_id, snapshot)

    def import_json(self, owner_id: str, text: str) -> ImportSummary:
        """Decode JSON text and import it."""
        check = validate_snapshot_json(text)
        if not check.is_valid:
            raise MalformedSnapshotError(check.errors)
        return self._replace(owner_id, check.snapshot)

    def _replace(self, owner_id: str, snapshot: SnapshotDocument) -> ImportSummary:
        try:
            rows = self._build_rows(owner_id, snapshot)
        except InvalidAmountError as exc:
            raise MalformedSnapshotError([exc.message]) from exc

        def _swap(unit: LedgerUnit) -> ImportSummary:
            summary = ImportSummary()
            # Children first: transactions reference both other tables
            summary.transactions_replaced = unit.transactions.delete_by_owner(owner_id)
            summary.categories_replaced = unit.categories.delete_by_owner(owner_id)
            summary.accounts_replaced = unit.accounts.delete_by_owner(owner_id)

            for account in rows.accounts:
                unit.accounts.create(account)
            for category in rows.categories:
                unit.categories.create(category)
            for txn in rows.transactions:
                unit.transactions.create(txn)

            summary.accounts_imported = len(rows.accounts)
            summary.categories_imported = len(rows.categories)
            summary.transactions_imported = len(rows.transactions)
            unit.mark_changed(owner_id, ACCOUNTS, CATEGORIES, TRANSACTIONS)
            return summary

        summary = self._store.atomic(_swap)
        logger.info(
            "Imported %d accounts, %d categories, %d transactions for owner %s "
            "(replaced %d/%d/%d)",
            summary.accounts_imported, summary.categories_imported,
            summary.transactions_imported, owner_id, summary.accounts_replaced,
            summary.categories_replaced, summary.transactions_replaced,
        )
        return summary

    @staticmethod
    def _build_rows(owner_id: str, snapshot: SnapshotDocument) -> _ImportRows:
        """
        Convert snapshot records to domain rows owned by ``owner_id``.

        Every row gets a fresh id and references are remapped. An account's
        opening balance is derived so that its snapshot balance equals the
        opening balance plus the effect of its snapshot transactions.
        Raises InvalidAmountError for a figure the ledger cannot hold.
        """
        now = now_utc()
        account_ids = {record.id: str(uuid.uuid4()) for record in snapshot.accounts}
        category_ids = {record.id: str(uuid.uuid4()) for record in snapshot.categories}

        by_account = defaultdict(list)
        for record in snapshot.transactions:
            by_account[record.account_id].append(record)

        rows = _ImportRows()
        for record in snapshot.accounts:
            balance = to_money(record.balance, limit=MAX_BALANCE)
            rows.accounts.append(
                Account(
                    account_id=account_ids[record.id],
                    owner_id=owner_id,
                    name=record.name,
                    kind=record.kind,
                    balance=balance,
                    opening_balance=balance - net_effect(by_account[record.id]),
                    goal=to_money(record.goal) if record.goal is not None else None,
                    description=record.description,
                    created_at=now,
                    updated_at=now,
                )
            )
        for record in snapshot.categories:
            rows.categories.append(
                Category(
                    category_id=category_ids[record.id],
                    owner_id=owner_id,
                    name=record.name,
                    kind=record.kind,
                    created_at=now,
                )
            )
        for record in snapshot.transactions:
            amount = to_money(record.amount)
            if amount <= 0:
                # Sub-cent amounts round to zero
                raise InvalidAmountError(record.amount)
            rows.transactions.append(
                Transaction(
                    txn_id=str(uuid.uuid4()),
                    owner_id=owner_id,
                    kind=record.kind,
                    amount=amount,
                    category_id=category_ids[record.category_id],
                    account_id=account_ids[record.account_id],
                    txn_date=record.txn_date,
                    description=record.description,
                    created_at=record.created_at or now,
                    updated_at=now,
                )
            )
        return rows
