"""Cascading deletes of categories and accounts."""

import logging

from moneyflow.core.exceptions import NotFoundError
from moneyflow.domain.views import DeletionSummary
from moneyflow.repositories.sqlalchemy.store import (
    ACCOUNTS,
    CATEGORIES,
    TRANSACTIONS,
    LedgerStore,
    LedgerUnit,
)
from moneyflow.services.transaction_coordinator import remove_transactions

logger = logging.getLogger(__name__)


class CascadeManager:
    """
    Deletes a category or an account together with every transaction that
    references it, as one atomic unit.

    Both operations are destructive and immediate; confirming intent is the
    caller's job.
    """

    def __init__(self, store: LedgerStore):
        self._store = store

    def delete_category(self, owner_id: str, category_id: str) -> DeletionSummary:
        """
        Delete a category and all of its transactions.

        The affected accounts are adjusted by the aggregated inverse effect of
        the removed transactions, one delta per account.
        """

        def _delete(unit: LedgerUnit) -> DeletionSummary:
            if unit.categories.get_by_id(owner_id, category_id) is None:
                raise NotFoundError("Category", category_id)

            transactions = unit.transactions.list_by_category(owner_id, category_id)
            summary = remove_transactions(unit, owner_id, transactions)
            unit.categories.delete(owner_id, category_id)
            unit.mark_changed(owner_id, CATEGORIES)
            summary.deleted_category_id = category_id
            return summary

        summary = self._store.atomic(_delete)
        logger.info(
            "Deleted category %s with %d transactions for owner %s",
            category_id, summary.deleted_count, owner_id,
        )
        return summary

    def delete_account(self, owner_id: str, account_id: str) -> DeletionSummary:
        """
        Delete an account and all of its transactions.

        The account itself disappears, so its balance is not adjusted;
        aggregates computed from it must be re-read by the caller.
        """

        def _delete(unit: LedgerUnit) -> DeletionSummary:
            if unit.accounts.get_by_id(owner_id, account_id, for_update=True) is None:
                raise NotFoundError("Account", account_id)

            transactions = unit.transactions.list_by_account(owner_id, account_id)
            txn_ids = [t.txn_id for t in transactions]
            unit.transactions.delete_many(owner_id, txn_ids)
            unit.accounts.delete(owner_id, account_id)
            unit.mark_changed(owner_id, TRANSACTIONS, ACCOUNTS)
            return DeletionSummary(
                deleted_transaction_ids=txn_ids,
                deleted_account_id=account_id,
            )

        summary = self._store.atomic(_delete)
        logger.info(
            "Deleted account %s with %d transactions for owner %s",
            account_id, summary.deleted_count, owner_id,
        )
        return summary
