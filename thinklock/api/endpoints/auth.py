# ==============================================================================
# AUTH ENDPOINTS - Token Issuance
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from thinklock.api.dependencies import AccountServiceDep
from thinklock.schemas.account import Credentials, TokenResponse
from thinklock.schemas.base import APIResponse

router = APIRouter(tags=["Authentication"])


@router.post(
    "/jwt",
    response_model=APIResponse[TokenResponse],
    summary="Issue access token",
    description="Exchange an account identifier and password for a signed access token.",
)
async def issue_token(
    credentials: Credentials,
    service: AccountServiceDep,
) -> APIResponse[TokenResponse]:
    """
    Issue a JWT access token.

    The token carries the account identifier and its stored role.
    Unknown identifiers and wrong passwords get 401.
    """
    token = await service.authenticate(credentials)
    return APIResponse.ok(data=token, message="Token issued")
