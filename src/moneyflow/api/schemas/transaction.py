"""Pydantic schemas for transaction endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from moneyflow.domain.balance import MAX_MONEY
from moneyflow.domain.models.enums import TransactionKind


class TransactionCreateRequest(BaseModel):
    """Request schema for creating a transaction."""

    kind: TransactionKind = Field(..., description="income or expense")
    amount: Decimal = Field(..., gt=0, le=MAX_MONEY, description="Positive amount")
    category_id: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)
    txn_date: Optional[date] = Field(default=None, description="Defaults to today (UTC)")
    description: Optional[str] = Field(default=None, max_length=500)


class TransactionUpdateRequest(BaseModel):
    """Request schema for updating a transaction (partial update)."""

    kind: Optional[TransactionKind] = None
    amount: Optional[Decimal] = Field(default=None, gt=0, le=MAX_MONEY)
    category_id: Optional[str] = Field(default=None, min_length=1)
    account_id: Optional[str] = Field(default=None, min_length=1)
    txn_date: Optional[date] = None
    description: Optional[str] = Field(default=None, max_length=500)


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    txn_id: str
    kind: TransactionKind
    amount: Decimal
    category_id: str
    account_id: str
    txn_date: date
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions."""

    transactions: list[TransactionResponse]
    count: int


class BulkDeleteRequest(BaseModel):
    txn_ids: list[str] = Field(..., min_length=1)


class DeletionSummaryResponse(BaseModel):
    """Outcome of a bulk or cascading delete."""

    model_config = {"from_attributes": True}

    deleted_count: int
    deleted_transaction_ids: list[str]
    balance_changes: dict[str, Decimal]
    deleted_category_id: Optional[str] = None
    deleted_account_id: Optional[str] = None
