# ==============================================================================
# SCHEMAS PACKAGE INITIALIZATION
# ==============================================================================
# Pydantic request/response schemas
# ==============================================================================

from thinklock.schemas.base import APIResponse, BaseSchema, CourseIdList, HealthResponse
from thinklock.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    Credentials,
    InstructorProfile,
    TokenClaims,
    TokenResponse,
)
from thinklock.schemas.course import (
    BasketCourse,
    CourseAdminUpdate,
    CourseCreate,
    CoursePublic,
    CourseResponse,
    CourseUpdate,
)
from thinklock.schemas.order import (
    BasketResponse,
    EnrollmentResponse,
    OrderCreate,
    OrderResponse,
    PaidBalance,
    PaymentIntentResponse,
)

__all__ = [
    "APIResponse",
    "BaseSchema",
    "CourseIdList",
    "HealthResponse",
    "AccountCreate",
    "AccountResponse",
    "AccountUpdate",
    "Credentials",
    "InstructorProfile",
    "TokenClaims",
    "TokenResponse",
    "BasketCourse",
    "CourseAdminUpdate",
    "CourseCreate",
    "CoursePublic",
    "CourseResponse",
    "CourseUpdate",
    "BasketResponse",
    "EnrollmentResponse",
    "OrderCreate",
    "OrderResponse",
    "PaidBalance",
    "PaymentIntentResponse",
]
