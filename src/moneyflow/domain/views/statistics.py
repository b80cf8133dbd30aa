"""View models for statistics and dashboard outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from moneyflow.domain.models import Transaction


@dataclass
class PeriodTotals:
    """Income and expense totals over a date range."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    income: Decimal = field(default_factory=lambda: Decimal("0.00"))
    expense: Decimal = field(default_factory=lambda: Decimal("0.00"))

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass
class MonthlyTotals:
    """Income and expense totals of one calendar month (``YYYY-MM``)."""

    month: str
    income: Decimal = field(default_factory=lambda: Decimal("0.00"))
    expense: Decimal = field(default_factory=lambda: Decimal("0.00"))


@dataclass
class CategoryTotal:
    """Expense sum of a single category."""

    category_id: str
    name: str
    amount: Decimal


@dataclass
class DashboardView:
    """Figures shown on the landing page."""

    total_balance: Decimal
    month: PeriodTotals
    recent_transactions: list[Transaction] = field(default_factory=list)
