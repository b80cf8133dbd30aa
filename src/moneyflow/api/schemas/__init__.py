"""Pydantic schemas for API request/response."""

from moneyflow.api.schemas.account import (
    AccountCreateRequest,
    AccountUpdateRequest,
    AccountResponse,
    AccountListResponse,
    BalanceCheckResponse,
    BalanceCheckListResponse,
)
from moneyflow.api.schemas.category import (
    CategoryCreateRequest,
    CategoryUpdateRequest,
    CategoryResponse,
    CategoryListResponse,
)
from moneyflow.api.schemas.transaction import (
    TransactionCreateRequest,
    TransactionUpdateRequest,
    TransactionResponse,
    TransactionListResponse,
    BulkDeleteRequest,
    DeletionSummaryResponse,
)
from moneyflow.api.schemas.dataset import ImportSummaryResponse
from moneyflow.api.schemas.statistics import (
    PeriodTotalsResponse,
    MonthlyTotalsResponse,
    CategoryTotalResponse,
    DashboardResponse,
)

__all__ = [
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "AccountResponse",
    "AccountListResponse",
    "BalanceCheckResponse",
    "BalanceCheckListResponse",
    "CategoryCreateRequest",
    "CategoryUpdateRequest",
    "CategoryResponse",
    "CategoryListResponse",
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "BulkDeleteRequest",
    "DeletionSummaryResponse",
    "ImportSummaryResponse",
    "PeriodTotalsResponse",
    "MonthlyTotalsResponse",
    "CategoryTotalResponse",
    "DashboardResponse",
]
