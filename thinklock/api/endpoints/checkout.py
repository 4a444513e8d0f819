# ==============================================================================
# CHECKOUT ENDPOINTS - Payment Intents
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from thinklock.api.dependencies import CheckoutServiceDep, CurrentClaims, StudentGuard
from thinklock.schemas.base import APIResponse
from thinklock.schemas.order import PaymentIntentResponse

router = APIRouter(tags=["Checkout"])


@router.post(
    "/create-payment-intent",
    response_model=APIResponse[PaymentIntentResponse],
    dependencies=[StudentGuard],
    summary="Create payment intent",
    description="Start a card payment for the caller's basket. The amount is the basket's paid balance.",
)
async def create_payment_intent(
    claims: CurrentClaims,
    service: CheckoutServiceDep,
) -> APIResponse[PaymentIntentResponse]:
    intent = await service.create_payment_intent(claims.sub)
    return APIResponse.ok(data=intent)
