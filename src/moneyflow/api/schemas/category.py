"""Pydantic schemas for category endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from moneyflow.domain.models.enums import TransactionKind


class CategoryCreateRequest(BaseModel):
    """Request schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=255)
    kind: TransactionKind = Field(..., description="income or expense")


class CategoryUpdateRequest(BaseModel):
    """Request schema for renaming a category or changing its kind."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    kind: Optional[TransactionKind] = None


class CategoryResponse(BaseModel):
    """Response schema for a single category."""

    model_config = {"from_attributes": True}

    category_id: str
    name: str
    kind: TransactionKind
    created_at: Optional[datetime] = None


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]
    count: int
