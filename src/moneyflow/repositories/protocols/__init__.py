"""Repository protocol definitions (interfaces)."""

from moneyflow.repositories.protocols.account_repo import AccountRepository
from moneyflow.repositories.protocols.category_repo import CategoryRepository
from moneyflow.repositories.protocols.transaction_repo import TransactionRepository

__all__ = [
    "AccountRepository",
    "CategoryRepository",
    "TransactionRepository",
]
