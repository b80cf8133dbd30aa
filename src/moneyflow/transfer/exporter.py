"""Snapshot export."""

import logging

from moneyflow.core.timezone import now_utc
from moneyflow.repositories.sqlalchemy.store import LedgerStore, LedgerUnit
from moneyflow.transfer.schema import (
    SNAPSHOT_VERSION,
    AccountRecord,
    CategoryRecord,
    SnapshotDocument,
    TransactionRecord,
)

logger = logging.getLogger(__name__)


class SnapshotExporter:
    """
    Serializes one owner's full ledger to a snapshot document.

    Read-only: all three collections are read in one session, so the
    snapshot reflects a single committed state.
    """

    def __init__(self, store: LedgerStore):
        self._store = store

    def export(self, owner_id: str) -> SnapshotDocument:
        """Build the snapshot of an owner's accounts, categories and transactions."""

        def _collect(unit: LedgerUnit):
            return (
                unit.accounts.list_by_owner(owner_id),
                unit.categories.list_by_owner(owner_id),
                unit.transactions.query(owner_id),
            )

        accounts, categories, transactions = self._store.read(_collect)

        snapshot = SnapshotDocument(
            version=SNAPSHOT_VERSION,
            exported_at=now_utc(),
            accounts=[
                AccountRecord(
                    id=a.account_id,
                    name=a.name,
                    kind=a.kind,
                    balance=a.balance,
                    goal=a.goal,
                    description=a.description,
                )
                for a in accounts
            ],
            categories=[
                CategoryRecord(id=c.category_id, name=c.name, kind=c.kind)
                for c in categories
            ],
            transactions=[
                TransactionRecord(
                    id=t.txn_id,
                    kind=t.kind,
                    amount=t.amount,
                    category_id=t.category_id,
                    account_id=t.account_id,
                    description=t.description,
                    txn_date=t.txn_date,
                    created_at=t.created_at,
                )
                for t in transactions
            ],
        )
        logger.info(
            "Exported %d accounts, %d categories, %d transactions for owner %s",
            len(accounts), len(categories), len(transactions), owner_id,
        )
        return snapshot

    def export_json(self, owner_id: str) -> str:
        """Export as JSON text in the portable format."""
        return self.export(owner_id).to_json()
