"""Category endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from moneyflow.api.deps import (
    get_cascade_manager,
    get_category_service,
    get_owner_id,
    require_confirmation,
)
from moneyflow.api.schemas import (
    CategoryCreateRequest,
    CategoryUpdateRequest,
    CategoryResponse,
    CategoryListResponse,
    DeletionSummaryResponse,
)
from moneyflow.domain.models import TransactionKind
from moneyflow.services import CascadeManager, CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
def list_categories(
    kind: Optional[TransactionKind] = Query(None, description="income or expense"),
    owner_id: str = Depends(get_owner_id),
    service: CategoryService = Depends(get_category_service),
) -> CategoryListResponse:
    """List categories ordered by name."""
    categories = service.list_categories(owner_id, kind)
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories],
        count=len(categories),
    )


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    data: CategoryCreateRequest,
    owner_id: str = Depends(get_owner_id),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Create a category."""
    return CategoryResponse.model_validate(
        service.create_category(owner_id, data.name, data.kind)
    )


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    data: CategoryUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Rename a category or change its kind."""
    return CategoryResponse.model_validate(
        service.rename_category(owner_id, category_id, name=data.name, kind=data.kind)
    )


@router.delete(
    "/{category_id}",
    response_model=DeletionSummaryResponse,
    dependencies=[Depends(require_confirmation)],
)
def delete_category(
    category_id: str,
    owner_id: str = Depends(get_owner_id),
    cascade: CascadeManager = Depends(get_cascade_manager),
) -> DeletionSummaryResponse:
    """Delete a category together with its transactions, reversing their effects."""
    return DeletionSummaryResponse.model_validate(cascade.delete_category(owner_id, category_id))
