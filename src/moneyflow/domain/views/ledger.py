"""View models for ledger operations and queries."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from moneyflow.domain.models.enums import TransactionKind


@dataclass
class TransactionFilter:
    """Optional predicates for transaction queries. Empty filter = everything."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category_ids: Optional[list[str]] = None
    account_ids: Optional[list[str]] = None
    kind: Optional[TransactionKind] = None
    search: Optional[str] = None  # case-insensitive match on description
    limit: Optional[int] = None


@dataclass
class DeletionSummary:
    """Outcome of a bulk or cascading delete."""

    deleted_transaction_ids: list[str] = field(default_factory=list)
    # account_id -> delta applied to that account's balance
    balance_changes: dict[str, Decimal] = field(default_factory=dict)
    deleted_category_id: Optional[str] = None
    deleted_account_id: Optional[str] = None

    @property
    def deleted_count(self) -> int:
        return len(self.deleted_transaction_ids)


@dataclass
class BalanceCheck:
    """Stored balance of an account versus the balance replayed from its ledger."""

    account_id: str
    name: str
    stored_balance: Decimal
    expected_balance: Decimal

    @property
    def drift(self) -> Decimal:
        return self.stored_balance - self.expected_balance

    @property
    def is_consistent(self) -> bool:
        return self.drift == Decimal("0")


@dataclass
class ImportSummary:
    """Summary of a dataset import."""

    accounts_imported: int = 0
    categories_imported: int = 0
    transactions_imported: int = 0
    accounts_replaced: int = 0
    categories_replaced: int = 0
    transactions_replaced: int = 0
