"""Transaction endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from moneyflow.api.deps import get_owner_id, get_transaction_coordinator, require_confirmation
from moneyflow.api.schemas import (
    BulkDeleteRequest,
    DeletionSummaryResponse,
    TransactionCreateRequest,
    TransactionListResponse,
    TransactionResponse,
    TransactionUpdateRequest,
)
from moneyflow.domain.models import TransactionKind
from moneyflow.domain.views import TransactionFilter
from moneyflow.services import TransactionCoordinator, TransactionCreate, TransactionUpdate

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _split(ids: Optional[str]) -> Optional[list[str]]:
    if not ids:
        return None
    return [i.strip() for i in ids.split(",") if i.strip()] or None


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    account_ids: Optional[str] = Query(None, description="Comma-separated account IDs"),
    category_ids: Optional[str] = Query(None, description="Comma-separated category IDs"),
    kind: Optional[TransactionKind] = Query(None),
    search: Optional[str] = Query(None, description="Match on description"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    owner_id: str = Depends(get_owner_id),
    coordinator: TransactionCoordinator = Depends(get_transaction_coordinator),
) -> TransactionListResponse:
    """List transactions, newest first."""
    transactions = coordinator.query(
        owner_id,
        TransactionFilter(
            start_date=start_date,
            end_date=end_date,
            account_ids=_split(account_ids),
            category_ids=_split(category_ids),
            kind=kind,
            search=search,
            limit=limit,
        ),
    )
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionCreateRequest,
    owner_id: str = Depends(get_owner_id),
    coordinator: TransactionCoordinator = Depends(get_transaction_coordinator),
) -> TransactionResponse:
    """Record a transaction and update its account balance."""
    txn = coordinator.create(
        owner_id,
        TransactionCreate(
            kind=data.kind,
            amount=data.amount,
            category_id=data.category_id,
            account_id=data.account_id,
            txn_date=data.txn_date,
            description=data.description,
        ),
    )
    return TransactionResponse.model_validate(txn)


@router.post(
    "/bulk-delete",
    response_model=DeletionSummaryResponse,
    dependencies=[Depends(require_confirmation)],
)
def bulk_delete_transactions(
    data: BulkDeleteRequest,
    owner_id: str = Depends(get_owner_id),
    coordinator: TransactionCoordinator = Depends(get_transaction_coordinator),
) -> DeletionSummaryResponse:
    """Delete several transactions in one unit."""
    return DeletionSummaryResponse.model_validate(coordinator.bulk_delete(owner_id, data.txn_ids))


@router.get("/{txn_id}", response_model=TransactionResponse)
def get_transaction(
    txn_id: str,
    owner_id: str = Depends(get_owner_id),
    coordinator: TransactionCoordinator = Depends(get_transaction_coordinator),
) -> TransactionResponse:
    return TransactionResponse.model_validate(coordinator.get(owner_id, txn_id))


@router.patch("/{txn_id}", response_model=TransactionResponse)
def update_transaction(
    txn_id: str,
    data: TransactionUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    coordinator: TransactionCoordinator = Depends(get_transaction_coordinator),
) -> TransactionResponse:
    """Edit a transaction; balances follow the change."""
    txn = coordinator.update(
        owner_id,
        txn_id,
        TransactionUpdate(
            kind=data.kind,
            amount=data.amount,
            category_id=data.category_id,
            account_id=data.account_id,
            txn_date=data.txn_date,
            description=data.description,
        ),
    )
    return TransactionResponse.model_validate(txn)


@router.delete("/{txn_id}", response_model=TransactionResponse)
def delete_transaction(
    txn_id: str,
    owner_id: str = Depends(get_owner_id),
    coordinator: TransactionCoordinator = Depends(get_transaction_coordinator),
) -> TransactionResponse:
    """Delete a transaction and reverse its balance effect."""
    return TransactionResponse.model_validate(coordinator.delete(owner_id, txn_id))
