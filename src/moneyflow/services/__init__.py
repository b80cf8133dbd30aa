"""Services package."""

from moneyflow.services.transaction_coordinator import (
    TransactionCoordinator,
    TransactionCreate,
    TransactionUpdate,
)
from moneyflow.services.cascade_manager import CascadeManager
from moneyflow.services.account_service import AccountService, AccountCreate, AccountUpdate
from moneyflow.services.category_service import CategoryService
from moneyflow.services.statistics_service import StatisticsService

__all__ = [
    "TransactionCoordinator",
    "TransactionCreate",
    "TransactionUpdate",
    "CascadeManager",
    "AccountService",
    "AccountCreate",
    "AccountUpdate",
    "CategoryService",
    "StatisticsService",
]
