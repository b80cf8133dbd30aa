"""Pydantic schemas for account endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from moneyflow.domain.balance import MAX_MONEY
from moneyflow.domain.models.enums import AccountKind


class AccountCreateRequest(BaseModel):
    """Request schema for creating an account."""

    name: str = Field(..., min_length=1, max_length=255, description="Unique account name")
    kind: AccountKind = Field(default=AccountKind.REGULAR, description="Account type")
    balance: Decimal = Field(
        default=Decimal("0"), ge=-MAX_MONEY, le=MAX_MONEY, description="Initial balance"
    )
    goal: Optional[Decimal] = Field(
        default=None, ge=0, le=MAX_MONEY, description="Savings or payoff goal"
    )
    description: Optional[str] = Field(default=None, max_length=500)


class AccountUpdateRequest(BaseModel):
    """Request schema for updating an account (partial update)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    kind: Optional[AccountKind] = None
    balance: Optional[Decimal] = Field(
        default=None,
        ge=-MAX_MONEY,
        le=MAX_MONEY,
        description="New balance; re-bases the opening balance",
    )
    goal: Optional[Decimal] = Field(default=None, ge=0, le=MAX_MONEY)
    clear_goal: bool = False
    description: Optional[str] = Field(default=None, max_length=500)


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    account_id: str
    name: str
    kind: AccountKind
    balance: Decimal
    opening_balance: Decimal
    goal: Optional[Decimal] = None
    goal_progress: Optional[Decimal] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int
    total_balance: Decimal


class BalanceCheckResponse(BaseModel):
    """Stored versus replayed balance of one account."""

    model_config = {"from_attributes": True}

    account_id: str
    name: str
    stored_balance: Decimal
    expected_balance: Decimal
    drift: Decimal
    is_consistent: bool


class BalanceCheckListResponse(BaseModel):
    checks: list[BalanceCheckResponse]
    consistent: bool
