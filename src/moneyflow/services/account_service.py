"""Account service for account management and balance verification."""

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from moneyflow.core.exceptions import NotFoundError, ValidationError
from moneyflow.core.timezone import now_utc
from moneyflow.domain.balance import Number, ZERO, net_effect, to_money
from moneyflow.domain.models import Account, AccountKind
from moneyflow.domain.views import BalanceCheck
from moneyflow.repositories.sqlalchemy.store import ACCOUNTS, LedgerStore, LedgerUnit
from moneyflow.services.transaction_coordinator import lock_accounts

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


@dataclass
class AccountCreate:
    """Input data for creating an account."""

    name: str
    kind: AccountKind = AccountKind.REGULAR
    balance: Number = ZERO
    goal: Optional[Number] = None
    description: Optional[str] = None


@dataclass
class AccountUpdate:
    """Partial update data for editing an account. None = keep current value."""

    name: Optional[str] = None
    kind: Optional[AccountKind] = None
    balance: Optional[Number] = None
    goal: Optional[Number] = None
    description: Optional[str] = None
    clear_goal: bool = False


class AccountService:
    """
    Service for managing money accounts.

    Balances are only written here on creation and on an explicit re-base;
    every other balance change goes through the transaction coordinator.
    """

    def __init__(self, store: LedgerStore):
        self._store = store

    def create_account(self, owner_id: str, data: AccountCreate) -> Account:
        """
        Create a new account.

        The initial balance becomes the opening balance, so the account starts
        consistent with its (empty) ledger.
        """
        name = self._validate_name(data.name)
        kind = self._validate_kind(data.kind)
        balance = to_money(data.balance)
        goal = self._validate_goal(data.goal)

        def _create(unit: LedgerUnit) -> Account:
            if unit.accounts.get_by_name(owner_id, name) is not None:
                raise ValidationError(f"Account with name '{name}' already exists")
            now = now_utc()
            created = unit.accounts.create(
                Account(
                    account_id=str(uuid.uuid4()),
                    owner_id=owner_id,
                    name=name,
                    kind=kind,
                    balance=balance,
                    opening_balance=balance,
                    goal=goal,
                    description=self._clean(data.description),
                    created_at=now,
                    updated_at=now,
                )
            )
            unit.mark_changed(owner_id, ACCOUNTS)
            return created

        created = self._store.atomic(_create)
        logger.info("Created account %s (%s) for owner %s", created.account_id, name, owner_id)
        return created

    def edit_account(self, owner_id: str, account_id: str, patch: AccountUpdate) -> Account:
        """
        Edit account attributes.

        Setting ``balance`` re-bases the account: the opening balance moves by
        the same amount, so stored and replayed balances stay equal and no
        transaction is created.
        """
        name = self._validate_name(patch.name) if patch.name is not None else None
        kind = self._validate_kind(patch.kind) if patch.kind is not None else None
        balance = to_money(patch.balance) if patch.balance is not None else None
        goal = self._validate_goal(patch.goal)

        def _edit(unit: LedgerUnit) -> Account:
            account = lock_accounts(unit, owner_id, [account_id])[account_id]

            if name is not None and name != account.name:
                clash = unit.accounts.get_by_name(owner_id, name)
                if clash is not None and clash.account_id != account_id:
                    raise ValidationError(f"Account with name '{name}' already exists")
                account.name = name
            if kind is not None:
                account.kind = kind
            if balance is not None:
                account.opening_balance += balance - account.balance
                account.balance = balance
            if patch.clear_goal:
                account.goal = None
            elif goal is not None:
                account.goal = goal
            if patch.description is not None:
                account.description = self._clean(patch.description)

            updated = unit.accounts.update(account)
            unit.mark_changed(owner_id, ACCOUNTS)
            return updated

        updated = self._store.atomic(_edit)
        logger.info("Updated account %s for owner %s", account_id, owner_id)
        return updated

    def get_account(self, owner_id: str, account_id: str) -> Account:
        """Get account by ID."""
        account = self._store.read(lambda unit: unit.accounts.get_by_id(owner_id, account_id))
        if account is None:
            raise NotFoundError("Account", account_id)
        return account

    def list_accounts(self, owner_id: str) -> list[Account]:
        """List the owner's accounts ordered by name."""
        return self._store.read(lambda unit: unit.accounts.list_by_owner(owner_id))

    @staticmethod
    def goal_progress(account: Account) -> Optional[Decimal]:
        """
        Percentage of the account goal reached, clamped to 0-100.

        Debt accounts count down: progress is the share of the goal already
        paid off. Returns None when the account has no positive goal.
        """
        if account.goal is None or account.goal <= ZERO:
            return None
        if account.kind == AccountKind.DEBT:
            ratio = (account.goal - account.balance) / account.goal
        else:
            ratio = account.balance / account.goal
        percent = ratio * HUNDRED
        return min(max(percent, Decimal("0")), HUNDRED).quantize(Decimal("0.01"))

    def verify_balances(self, owner_id: str) -> list[BalanceCheck]:
        """Compare each stored balance with opening balance + ledger effects."""
        return self._store.read(lambda unit: self._check_all(unit, owner_id))

    def repair_balances(self, owner_id: str) -> list[BalanceCheck]:
        """
        Rewrite every drifted balance to its replayed value.

        Returns the checks as they were before the repair; inconsistent
        entries are the ones that were fixed.
        """

        def _repair(unit: LedgerUnit) -> list[BalanceCheck]:
            accounts = unit.accounts.list_by_owner(owner_id)
            lock_accounts(unit, owner_id, [a.account_id for a in accounts])
            checks = self._check_all(unit, owner_id)
            by_id = {a.account_id: a for a in unit.accounts.list_by_owner(owner_id)}
            for check in checks:
                if check.is_consistent:
                    continue
                account = by_id[check.account_id]
                account.balance = check.expected_balance
                unit.accounts.update(account)
                unit.mark_changed(owner_id, ACCOUNTS)
            return checks

        checks = self._store.atomic(_repair)
        repaired = [c for c in checks if not c.is_consistent]
        if repaired:
            logger.warning(
                "Repaired %d drifted balances for owner %s: %s",
                len(repaired), owner_id,
                ", ".join(f"{c.account_id} ({c.drift:+})" for c in repaired),
            )
        return checks

    @staticmethod
    def _check_all(unit: LedgerUnit, owner_id: str) -> list[BalanceCheck]:
        checks = []
        for account in unit.accounts.list_by_owner(owner_id):
            transactions = unit.transactions.list_by_account(owner_id, account.account_id)
            checks.append(
                BalanceCheck(
                    account_id=account.account_id,
                    name=account.name,
                    stored_balance=account.balance,
                    expected_balance=account.opening_balance + net_effect(transactions),
                )
            )
        return checks

    @staticmethod
    def _validate_name(name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Account name is required")
        return cleaned

    @staticmethod
    def _validate_kind(kind) -> AccountKind:
        try:
            return AccountKind(kind)
        except ValueError:
            raise ValidationError(f"Invalid account type: {kind}")

    @staticmethod
    def _validate_goal(goal: Optional[Number]) -> Optional[Decimal]:
        if goal is None:
            return None
        money = to_money(goal)
        if money < ZERO:
            raise ValidationError("Goal cannot be negative")
        return money

    @staticmethod
    def _clean(text: Optional[str]) -> Optional[str]:
        if text is None:
            return None
        return text.strip() or None
