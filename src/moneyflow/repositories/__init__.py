"""Repository layer - data access abstractions and implementations."""

from moneyflow.repositories.protocols import (
    AccountRepository,
    CategoryRepository,
    TransactionRepository,
)

__all__ = [
    "AccountRepository",
    "CategoryRepository",
    "TransactionRepository",
]
