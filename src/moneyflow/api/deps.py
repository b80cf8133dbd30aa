"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Query

from moneyflow.repositories.sqlalchemy.store import LedgerStore, get_ledger_store
from moneyflow.services import (
    AccountService,
    CascadeManager,
    CategoryService,
    StatisticsService,
    TransactionCoordinator,
)
from moneyflow.transfer import SnapshotExporter, SnapshotImporter


def get_store() -> LedgerStore:
    """Provide the process-wide LedgerStore."""
    return get_ledger_store()


def get_owner_id(x_owner_id: Optional[str] = Header(None)) -> str:
    """Identify the caller from the ``X-Owner-Id`` header."""
    owner_id = (x_owner_id or "").strip()
    if not owner_id:
        raise HTTPException(status_code=401, detail="Missing X-Owner-Id header")
    return owner_id


def require_confirmation(confirm: bool = Query(False, description="Must be true for destructive calls")) -> None:
    """Reject destructive requests that were not explicitly confirmed."""
    if not confirm:
        raise HTTPException(
            status_code=409,
            detail="Destructive operation requires confirm=true",
        )


def get_transaction_coordinator(store: LedgerStore = Depends(get_store)) -> TransactionCoordinator:
    """Provide TransactionCoordinator instance."""
    return TransactionCoordinator(store)


def get_cascade_manager(store: LedgerStore = Depends(get_store)) -> CascadeManager:
    """Provide CascadeManager instance."""
    return CascadeManager(store)


def get_account_service(store: LedgerStore = Depends(get_store)) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(store)


def get_category_service(store: LedgerStore = Depends(get_store)) -> CategoryService:
    """Provide CategoryService instance."""
    return CategoryService(store)


def get_statistics_service(store: LedgerStore = Depends(get_store)) -> StatisticsService:
    """Provide StatisticsService instance."""
    return StatisticsService(store)


def get_snapshot_exporter(store: LedgerStore = Depends(get_store)) -> SnapshotExporter:
    """Provide SnapshotExporter instance."""
    return SnapshotExporter(store)


def get_snapshot_importer(store: LedgerStore = Depends(get_store)) -> SnapshotImporter:
    """Provide SnapshotImporter instance."""
    return SnapshotImporter(store)
