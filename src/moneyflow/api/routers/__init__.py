"""API routers package."""

from moneyflow.api.routers.accounts import router as accounts_router
from moneyflow.api.routers.categories import router as categories_router
from moneyflow.api.routers.transactions import router as transactions_router
from moneyflow.api.routers.dataset import router as dataset_router
from moneyflow.api.routers.statistics import router as statistics_router

__all__ = [
    "accounts_router",
    "categories_router",
    "transactions_router",
    "dataset_router",
    "statistics_router",
]
