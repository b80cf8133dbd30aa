"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from moneyflow.domain.models.enums import AccountKind


@dataclass
class Account:
    """
    Money account owned by a single user.

    ``balance`` is maintained by the ledger services and always equals
    ``opening_balance`` plus the signed sum of the account's transactions.
    Editing the balance by hand re-bases ``opening_balance`` instead of
    creating a transaction.
    """

    account_id: str
    owner_id: str
    name: str
    kind: AccountKind = AccountKind.REGULAR
    balance: Decimal = field(default_factory=lambda: Decimal("0"))
    opening_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    goal: Optional[Decimal] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.kind, str):
            self.kind = AccountKind(self.kind)
