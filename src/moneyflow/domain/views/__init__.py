"""View models for service outputs."""

from moneyflow.domain.views.ledger import (
    TransactionFilter,
    DeletionSummary,
    BalanceCheck,
    ImportSummary,
)
from moneyflow.domain.views.statistics import (
    PeriodTotals,
    MonthlyTotals,
    CategoryTotal,
    DashboardView,
)

__all__ = [
    "TransactionFilter",
    "DeletionSummary",
    "BalanceCheck",
    "ImportSummary",
    "PeriodTotals",
    "MonthlyTotals",
    "CategoryTotal",
    "DashboardView",
]
