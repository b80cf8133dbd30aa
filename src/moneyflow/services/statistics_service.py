"""Statistics service for dashboard and report figures."""

from collections import defaultdict
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from moneyflow.config.settings import get_settings
from moneyflow.core.timezone import month_bounds, today_utc
from moneyflow.domain.balance import ZERO
from moneyflow.domain.models import Transaction, TransactionKind
from moneyflow.domain.views import (
    CategoryTotal,
    DashboardView,
    MonthlyTotals,
    PeriodTotals,
    TransactionFilter,
)
from moneyflow.repositories.sqlalchemy.store import LedgerStore, LedgerUnit


class StatisticsService:
    """
    Read-only aggregates over the ledger.

    Nothing is cached: every figure is computed from the current rows, so
    cascading deletes and imports are reflected on the next call.
    """

    def __init__(self, store: LedgerStore, recent_limit: Optional[int] = None):
        self._store = store
        self._recent_limit = recent_limit

    def total_balance(self, owner_id: str) -> Decimal:
        """Sum of all account balances."""
        return self._store.read(lambda unit: self._total_balance(unit, owner_id))

    def period_totals(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> PeriodTotals:
        """Income, expense and net between two dates (inclusive)."""
        filters = TransactionFilter(start_date=start_date, end_date=end_date)
        transactions = self._store.read(lambda unit: unit.transactions.query(owner_id, filters))
        return self._totals(transactions, start_date, end_date)

    def monthly_totals(
        self,
        owner_id: str,
        filters: Optional[TransactionFilter] = None,
    ) -> list[MonthlyTotals]:
        """Income and expense per calendar month, oldest month first."""
        transactions = self._query_all(owner_id, filters)
        months: dict[str, MonthlyTotals] = {}
        for txn in transactions:
            key = txn.txn_date.strftime("%Y-%m")
            bucket = months.setdefault(key, MonthlyTotals(month=key))
            if txn.is_income:
                bucket.income += txn.amount
            else:
                bucket.expense += txn.amount
        return [months[key] for key in sorted(months)]

    def expenses_by_category(
        self,
        owner_id: str,
        filters: Optional[TransactionFilter] = None,
    ) -> list[CategoryTotal]:
        """Expense sums per category, largest first."""
        filters = replace(filters or TransactionFilter(), kind=TransactionKind.EXPENSE)

        def _load(unit: LedgerUnit):
            return (
                unit.transactions.query(owner_id, replace(filters, limit=None)),
                unit.categories.list_by_owner(owner_id, TransactionKind.EXPENSE),
            )

        transactions, categories = self._store.read(_load)
        names = {c.category_id: c.name for c in categories}
        sums: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for txn in transactions:
            sums[txn.category_id] += txn.amount

        totals = [
            CategoryTotal(category_id=cid, name=names.get(cid, cid), amount=amount)
            for cid, amount in sums.items()
        ]
        totals.sort(key=lambda t: (-t.amount, t.name))
        return totals

    def dashboard(self, owner_id: str, today: Optional[date] = None) -> DashboardView:
        """Total balance, this month's totals and the latest transactions."""
        start, end = month_bounds(today or today_utc())
        limit = self._recent_limit or get_settings().recent_transactions_limit

        def _load(unit: LedgerUnit):
            return (
                self._total_balance(unit, owner_id),
                unit.transactions.query(
                    owner_id, TransactionFilter(start_date=start, end_date=end)
                ),
                unit.transactions.query(owner_id, TransactionFilter(limit=limit)),
            )

        total, month_txns, recent = self._store.read(_load)
        return DashboardView(
            total_balance=total,
            month=self._totals(month_txns, start, end),
            recent_transactions=recent,
        )

    def _query_all(
        self,
        owner_id: str,
        filters: Optional[TransactionFilter],
    ) -> list[Transaction]:
        filters = replace(filters, limit=None) if filters else None
        return self._store.read(lambda unit: unit.transactions.query(owner_id, filters))

    @staticmethod
    def _total_balance(unit: LedgerUnit, owner_id: str) -> Decimal:
        return sum((a.balance for a in unit.accounts.list_by_owner(owner_id)), ZERO)

    @staticmethod
    def _totals(
        transactions: Iterable[Transaction],
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> PeriodTotals:
        totals = PeriodTotals(start_date=start_date, end_date=end_date)
        for txn in transactions:
            if txn.is_income:
                totals.income += txn.amount
            else:
                totals.expense += txn.amount
        return totals
