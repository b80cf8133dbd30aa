"""Account management endpoints."""

from fastapi import APIRouter, Depends

from moneyflow.api.deps import (
    get_account_service,
    get_cascade_manager,
    get_owner_id,
    require_confirmation,
)
from moneyflow.api.schemas import (
    AccountCreateRequest,
    AccountUpdateRequest,
    AccountResponse,
    AccountListResponse,
    BalanceCheckResponse,
    BalanceCheckListResponse,
    DeletionSummaryResponse,
)
from moneyflow.domain.balance import ZERO
from moneyflow.domain.models import Account
from moneyflow.services import AccountCreate, AccountService, AccountUpdate, CascadeManager

router = APIRouter(prefix="/accounts", tags=["accounts"])


def _to_response(account: Account) -> AccountResponse:
    response = AccountResponse.model_validate(account)
    response.goal_progress = AccountService.goal_progress(account)
    return response


def _checks_response(checks) -> BalanceCheckListResponse:
    return BalanceCheckListResponse(
        checks=[BalanceCheckResponse.model_validate(c) for c in checks],
        consistent=all(c.is_consistent for c in checks),
    )


@router.get("", response_model=AccountListResponse)
def list_accounts(
    owner_id: str = Depends(get_owner_id),
    service: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    """List the caller's accounts ordered by name."""
    accounts = service.list_accounts(owner_id)
    return AccountListResponse(
        accounts=[_to_response(a) for a in accounts],
        count=len(accounts),
        total_balance=sum((a.balance for a in accounts), ZERO),
    )


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    data: AccountCreateRequest,
    owner_id: str = Depends(get_owner_id),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Create a new account."""
    account = service.create_account(
        owner_id,
        AccountCreate(
            name=data.name,
            kind=data.kind,
            balance=data.balance,
            goal=data.goal,
            description=data.description,
        ),
    )
    return _to_response(account)


# Declared before /{account_id} so the literal paths win
@router.get("/balance-check", response_model=BalanceCheckListResponse)
def check_balances(
    owner_id: str = Depends(get_owner_id),
    service: AccountService = Depends(get_account_service),
) -> BalanceCheckListResponse:
    """Compare stored balances with balances replayed from the ledger."""
    return _checks_response(service.verify_balances(owner_id))


@router.post(
    "/balance-repair",
    response_model=BalanceCheckListResponse,
    dependencies=[Depends(require_confirmation)],
)
def repair_balances(
    owner_id: str = Depends(get_owner_id),
    service: AccountService = Depends(get_account_service),
) -> BalanceCheckListResponse:
    """Rewrite drifted balances; returns the checks taken before the repair."""
    return _checks_response(service.repair_balances(owner_id))


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    owner_id: str = Depends(get_owner_id),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get a single account."""
    return _to_response(service.get_account(owner_id, account_id))


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: str,
    data: AccountUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Edit an account. A new balance re-bases the account."""
    account = service.edit_account(
        owner_id,
        account_id,
        AccountUpdate(
            name=data.name,
            kind=data.kind,
            balance=data.balance,
            goal=data.goal,
            description=data.description,
            clear_goal=data.clear_goal,
        ),
    )
    return _to_response(account)


@router.delete(
    "/{account_id}",
    response_model=DeletionSummaryResponse,
    dependencies=[Depends(require_confirmation)],
)
def delete_account(
    account_id: str,
    owner_id: str = Depends(get_owner_id),
    cascade: CascadeManager = Depends(get_cascade_manager),
) -> DeletionSummaryResponse:
    """Delete an account and every transaction recorded against it."""
    return DeletionSummaryResponse.model_validate(cascade.delete_account(owner_id, account_id))
