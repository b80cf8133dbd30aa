"""Balance arithmetic for ledger transactions.

Pure functions only: nothing here touches storage. The services call
``effect`` for the incremental delta of a single write and ``net_effect`` /
``aggregate_effects`` when a whole set of transactions is replayed or removed.
"""

from collections import defaultdict
from decimal import Decimal, InvalidOperation
from typing import Iterable, Protocol, Union

from moneyflow.core.exceptions import InvalidAmountError
from moneyflow.domain.models.enums import TransactionKind

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Largest amount accepted anywhere in the ledger; its cents fit a signed 64-bit
# column with room left for accumulated balances
MAX_MONEY = Decimal("999999999999.99")

# Largest stored account balance, reached only by accumulation
MAX_BALANCE = Decimal("90000000000000000.00")

Number = Union[Decimal, int, float, str]


class HasEffect(Protocol):
    """Anything carrying a transaction kind and amount."""

    kind: TransactionKind
    amount: Decimal


class HasAccountEffect(HasEffect, Protocol):
    account_id: str


def to_money(value: Number, limit: Decimal = MAX_MONEY) -> Decimal:
    """
    Convert a number to a Decimal quantized to cents.

    Floats go through ``str`` so 0.1 stays 0.10 instead of its binary
    expansion. Raises InvalidAmountError for values that are not finite
    numbers or whose magnitude exceeds ``limit``.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        if not amount.is_finite():
            raise InvalidAmountError(value)
        money = amount.quantize(CENT)
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(value)
    if abs(money) > limit:
        raise InvalidAmountError(value)
    return money


def effect(kind: Union[TransactionKind, str], amount: Number) -> Decimal:
    """
    Return the signed balance delta of one transaction.

    +amount for income, -amount for expense. Raises InvalidAmountError when
    the amount is negative or not finite.
    """
    money = to_money(amount)
    if money < 0:
        raise InvalidAmountError(amount)
    if TransactionKind(kind) == TransactionKind.INCOME:
        return money
    return -money


def net_effect(transactions: Iterable[HasEffect]) -> Decimal:
    """Sum of ``effect`` over a sequence of transactions."""
    total = ZERO
    for txn in transactions:
        total += effect(txn.kind, txn.amount)
    return total


def aggregate_effects(transactions: Iterable[HasAccountEffect]) -> dict[str, Decimal]:
    """Net effect per account id."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for txn in transactions:
        totals[txn.account_id] += effect(txn.kind, txn.amount)
    return dict(totals)


def inverse(deltas: dict[str, Decimal]) -> dict[str, Decimal]:
    """Negate every delta; zero entries are dropped."""
    return {account_id: -delta for account_id, delta in deltas.items() if delta != ZERO}
