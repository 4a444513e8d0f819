# ==============================================================================
# USERS ENDPOINTS - Account Routes
# ==============================================================================
# Registration, self lookup and admin account management
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from thinklock.api.dependencies import AccountServiceDep, AdminGuard, SelfGuard
from thinklock.schemas.account import AccountCreate, AccountResponse, AccountUpdate
from thinklock.schemas.base import APIResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=APIResponse[AccountResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register account",
    description="Create a student or instructor account.",
)
async def register(
    schema: AccountCreate,
    service: AccountServiceDep,
) -> APIResponse[AccountResponse]:
    """Register a new account; an identifier already in use gets 409."""
    account = await service.register(schema)
    return APIResponse.ok(data=account, message="Account created")


@router.get(
    "",
    response_model=APIResponse[List[AccountResponse]],
    dependencies=[AdminGuard],
    summary="List accounts",
)
async def list_accounts(
    service: AccountServiceDep,
) -> APIResponse[List[AccountResponse]]:
    return APIResponse.ok(data=await service.list_accounts())


@router.get(
    "/{identifier}",
    response_model=APIResponse[AccountResponse],
    dependencies=[SelfGuard],
    summary="Get own account",
)
async def get_account(
    identifier: str,
    service: AccountServiceDep,
) -> APIResponse[AccountResponse]:
    return APIResponse.ok(data=await service.get_account(identifier))


@router.put(
    "/{id}",
    response_model=APIResponse[AccountResponse],
    dependencies=[AdminGuard],
    summary="Update account",
    description="Change the role or profile of any account.",
)
async def update_account(
    id: str,
    schema: AccountUpdate,
    service: AccountServiceDep,
) -> APIResponse[AccountResponse]:
    account = await service.admin_update(id, schema)
    return APIResponse.ok(data=account, message="Account updated")
