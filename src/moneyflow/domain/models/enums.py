"""Enumerations for domain models."""

from enum import Enum


class TransactionKind(str, Enum):
    """Direction of a transaction; categories carry the same kinds."""

    INCOME = "income"
    EXPENSE = "expense"


class AccountKind(str, Enum):
    """Kinds of money accounts."""

    REGULAR = "regular"
    DEBT = "debt"  # goal = initial debt, progress grows as balance falls
    SAVINGS = "savings"  # goal = target amount
