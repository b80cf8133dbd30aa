"""Domain layer - pure business models with no storage dependencies."""

from moneyflow.domain.models import (
    Account,
    Category,
    Transaction,
    AccountKind,
    TransactionKind,
)

__all__ = [
    "Account",
    "Category",
    "Transaction",
    "AccountKind",
    "TransactionKind",
]
