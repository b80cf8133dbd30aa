"""Domain models package."""

from moneyflow.domain.models.enums import TransactionKind, AccountKind
from moneyflow.domain.models.account import Account
from moneyflow.domain.models.category import Category
from moneyflow.domain.models.transaction import Transaction

__all__ = [
    "TransactionKind",
    "AccountKind",
    "Account",
    "Category",
    "Transaction",
]
