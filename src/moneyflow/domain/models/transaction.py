"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from moneyflow.domain.models.enums import TransactionKind


@dataclass
class Transaction:
    """
    Single income or expense entry against one account and one category.

    ``amount`` is never negative; the sign of its balance effect comes from
    ``kind``.
    """

    txn_id: str
    owner_id: str
    kind: TransactionKind
    amount: Decimal
    category_id: str
    account_id: str
    txn_date: date
    description: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.kind, str):
            self.kind = TransactionKind(self.kind)

    @property
    def is_income(self) -> bool:
        """Return True for income transactions."""
        return self.kind == TransactionKind.INCOME
