# ==============================================================================
# BASKET & ORDER SCHEMAS - Checkout Flow
# ==============================================================================
# Enrollment basket, payment intent, orders and enrollment finalization
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from thinklock.schemas.base import BaseSchema


# ==============================================================================
# BASKET
# ==============================================================================

class BasketResponse(BaseSchema):
    """Enrollment basket of a student."""

    student_id: str
    courses: List[str] = Field(default_factory=list)
    updated_at: Optional[datetime] = None


class PaidBalance(BaseSchema):
    """Amount due for the basket, rounded up to a whole unit."""

    paid_balance: int = Field(..., alias="paidBalance", ge=0)


# ==============================================================================
# PAYMENT
# ==============================================================================

class PaymentIntentResponse(BaseSchema):
    """Client-side handle of a created payment intent, serialized in camelCase."""

    client_secret: str = Field(..., alias="clientSecret")
    payment_intent_id: str = Field(..., alias="paymentIntentId")
    amount: int = Field(..., description="Amount in minor currency units")
    currency: str


class PaymentInfo(BaseSchema):
    """Payment recorded on an order."""

    intent_id: str
    amount: int
    currency: str
    status: str


# ==============================================================================
# ORDER
# ==============================================================================

class OrderCreate(BaseSchema):
    """Schema for placing an order after payment."""

    payment_intent_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        pattern=r"^[A-Za-z0-9_]+$",
        description="Identifier of the succeeded payment intent",
    )
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, max_length=255)


class OrderItem(BaseSchema):
    """Course snapshot taken when the order was placed."""

    id: str
    name: Optional[str] = None
    price: float = 0


class OrderResponse(BaseSchema):
    """Placed order."""

    id: str
    student_id: str
    courses: List[str]
    items: List[OrderItem] = Field(default_factory=list)
    payment: PaymentInfo
    email: Optional[str] = None
    name: Optional[str] = None
    date: datetime
    finalized: bool = False
    finalized_courses: List[str] = Field(default_factory=list)
    finalized_at: Optional[datetime] = None


class EnrollmentResponse(BaseSchema):
    """Result of enrollment finalization."""

    order_id: str
    enrolled: List[str] = Field(..., description="Course ids finalized by this call")
    courses: List[str] = Field(..., description="All enrolled course ids of the account")
