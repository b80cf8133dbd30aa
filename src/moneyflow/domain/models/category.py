"""Category domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from moneyflow.domain.models.enums import TransactionKind


@dataclass
class Category:
    """Income or expense category; names are unique per owner and kind."""

    category_id: str
    owner_id: str
    name: str
    kind: TransactionKind
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.kind, str):
            self.kind = TransactionKind(self.kind)
