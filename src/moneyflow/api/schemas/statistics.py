"""Pydantic schemas for statistics endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from moneyflow.api.schemas.transaction import TransactionResponse


class PeriodTotalsResponse(BaseModel):
    model_config = {"from_attributes": True}

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    income: Decimal
    expense: Decimal
    net: Decimal


class MonthlyTotalsResponse(BaseModel):
    model_config = {"from_attributes": True}

    month: str
    income: Decimal
    expense: Decimal


class CategoryTotalResponse(BaseModel):
    model_config = {"from_attributes": True}

    category_id: str
    name: str
    amount: Decimal


class DashboardResponse(BaseModel):
    """Landing-page figures."""

    model_config = {"from_attributes": True}

    total_balance: Decimal
    month: PeriodTotalsResponse
    recent_transactions: list[TransactionResponse]
