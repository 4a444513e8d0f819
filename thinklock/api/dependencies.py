# ==============================================================================
# API DEPENDENCIES - Dependency Injection
# ==============================================================================
# FastAPI dependencies for the authorization chain, database access
# and external clients
# ==============================================================================

from __future__ import annotations

from typing import Annotated, Any, Callable, Coroutine, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from thinklock.clients.image_storage import ImageStorage
from thinklock.clients.payment_gateway import PaymentGateway
from thinklock.core.constants import ErrorMessages, Role
from thinklock.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DatabaseError,
    InvalidTokenError,
    TokenExpiredError,
)
from thinklock.core.security import decode_token
from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter
from thinklock.database.repositories.account_repository import AccountRepository
from thinklock.schemas.account import TokenClaims
from thinklock.services.account_service import AccountService
from thinklock.services.basket_service import BasketService
from thinklock.services.checkout_service import CheckoutService
from thinklock.services.course_service import CourseService

# Bearer token scheme; a missing or non-bearer header yields None
bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="JWT access token",
    auto_error=False,
)


# ==============================================================================
# INFRASTRUCTURE DEPENDENCIES
# ==============================================================================

async def get_adapter(request: Request) -> MongoDBAdapter:
    """
    Database adapter created at startup.

    Raises:
        DatabaseError: If the database was never connected
    """
    adapter = getattr(request.app.state, "adapter", None)
    if adapter is None:
        raise DatabaseError("Database is not available")
    return adapter


async def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway


async def get_image_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage


DatabaseDep = Annotated[MongoDBAdapter, Depends(get_adapter)]
PaymentGatewayDep = Annotated[PaymentGateway, Depends(get_payment_gateway)]
ImageStorageDep = Annotated[ImageStorage, Depends(get_image_storage)]


# ==============================================================================
# AUTHORIZATION CHAIN
# ==============================================================================

async def get_current_claims(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> TokenClaims:
    """
    Authenticate the request from its bearer token.

    Args:
        request: Current request (claims are stored on ``request.state``)
        credentials: Bearer credentials from HTTPBearer

    Returns:
        Verified token claims

    Raises:
        AuthenticationError: If the header is missing or not a bearer token (401)
        AuthorizationError: If the token is invalid or expired (403)
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message=ErrorMessages.UNAUTHORIZED)

    try:
        payload = decode_token(credentials.credentials)
    except (TokenExpiredError, InvalidTokenError) as e:
        raise AuthorizationError(
            message=ErrorMessages.FORBIDDEN,
            details={"reason": e.error_code},
        )

    claims = TokenClaims(sub=payload["sub"], role=payload.get("role"))
    request.state.claims = claims
    return claims


CurrentClaims = Annotated[TokenClaims, Depends(get_current_claims)]


def require_role(role: Role) -> Callable[..., Coroutine[Any, Any, TokenClaims]]:
    """
    Build a dependency admitting only accounts whose stored role is ``role``.

    The role claim inside the token is ignored; an account whose role
    changed since issuance is judged by its current role.

    Example:
        >>> @router.get("/users", dependencies=[Depends(require_role(Role.ADMIN))])
    """

    async def has_role(claims: CurrentClaims, adapter: DatabaseDep) -> TokenClaims:
        stored_role = await AccountRepository(adapter).get_role(claims.sub)
        if stored_role != role.value:
            raise AuthorizationError(
                message=ErrorMessages.FORBIDDEN,
                required_permission=role.value,
            )
        return claims

    return has_role


def require_self(param: str = "identifier") -> Callable[..., Coroutine[Any, Any, TokenClaims]]:
    """
    Build a dependency admitting only the account named by path parameter ``param``.
    """

    async def is_self(request: Request, claims: CurrentClaims) -> TokenClaims:
        if claims.sub != request.path_params.get(param):
            raise AuthorizationError(message=ErrorMessages.FORBIDDEN)
        return claims

    return is_self


AdminGuard = Depends(require_role(Role.ADMIN))
InstructorGuard = Depends(require_role(Role.INSTRUCTOR))
StudentGuard = Depends(require_role(Role.STUDENT))
SelfGuard = Depends(require_self("identifier"))


# ==============================================================================
# SERVICE DEPENDENCIES
# ==============================================================================

async def get_account_service(adapter: DatabaseDep) -> AccountService:
    return AccountService(adapter)


async def get_course_service(adapter: DatabaseDep) -> CourseService:
    return CourseService(adapter)


async def get_basket_service(adapter: DatabaseDep) -> BasketService:
    return BasketService(adapter)


async def get_checkout_service(
    adapter: DatabaseDep,
    gateway: PaymentGatewayDep,
) -> CheckoutService:
    return CheckoutService(adapter, gateway)


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
CourseServiceDep = Annotated[CourseService, Depends(get_course_service)]
BasketServiceDep = Annotated[BasketService, Depends(get_basket_service)]
CheckoutServiceDep = Annotated[CheckoutService, Depends(get_checkout_service)]
