"""Statistics and dashboard endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from moneyflow.api.deps import get_owner_id, get_statistics_service
from moneyflow.api.schemas import (
    CategoryTotalResponse,
    DashboardResponse,
    MonthlyTotalsResponse,
    PeriodTotalsResponse,
)
from moneyflow.domain.views import TransactionFilter
from moneyflow.services import StatisticsService

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    owner_id: str = Depends(get_owner_id),
    stats: StatisticsService = Depends(get_statistics_service),
) -> DashboardResponse:
    """Total balance, current month totals and recent transactions."""
    return DashboardResponse.model_validate(stats.dashboard(owner_id))


@router.get("/period", response_model=PeriodTotalsResponse)
def get_period_totals(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    owner_id: str = Depends(get_owner_id),
    stats: StatisticsService = Depends(get_statistics_service),
) -> PeriodTotalsResponse:
    return PeriodTotalsResponse.model_validate(
        stats.period_totals(owner_id, start_date, end_date)
    )


@router.get("/monthly", response_model=list[MonthlyTotalsResponse])
def get_monthly_totals(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    owner_id: str = Depends(get_owner_id),
    stats: StatisticsService = Depends(get_statistics_service),
) -> list[MonthlyTotalsResponse]:
    """Income and expense per month, oldest first."""
    filters = TransactionFilter(start_date=start_date, end_date=end_date)
    return [
        MonthlyTotalsResponse.model_validate(m)
        for m in stats.monthly_totals(owner_id, filters)
    ]


@router.get("/categories", response_model=list[CategoryTotalResponse])
def get_expenses_by_category(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    owner_id: str = Depends(get_owner_id),
    stats: StatisticsService = Depends(get_statistics_service),
) -> list[CategoryTotalResponse]:
    """Expense totals per category, largest first."""
    filters = TransactionFilter(start_date=start_date, end_date=end_date)
    return [
        CategoryTotalResponse.model_validate(c)
        for c in stats.expenses_by_category(owner_id, filters)
    ]
