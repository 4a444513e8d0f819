# ==============================================================================
# STUDENTS ENDPOINTS - Basket, Orders & Enrollment
# ==============================================================================
# Every route is scoped to the calling student's own identifier
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from thinklock.api.dependencies import (
    BasketServiceDep,
    CheckoutServiceDep,
    CourseServiceDep,
    SelfGuard,
    StudentGuard,
)
from thinklock.core.constants import Projections
from thinklock.schemas.base import APIResponse, CourseIdList
from thinklock.schemas.course import BasketCourse, CoursePublic
from thinklock.schemas.order import (
    BasketResponse,
    EnrollmentResponse,
    OrderCreate,
    OrderResponse,
    PaidBalance,
)

router = APIRouter(
    prefix="/student/{identifier}",
    tags=["Students"],
    dependencies=[StudentGuard, SelfGuard],
)


# ==============================================================================
# BASKET
# ==============================================================================

@router.get(
    "/booked-courses",
    response_model=APIResponse[BasketResponse],
    summary="Get basket",
)
async def get_basket(
    identifier: str,
    service: BasketServiceDep,
) -> APIResponse[BasketResponse]:
    return APIResponse.ok(data=await service.get(identifier))


@router.put(
    "/booked-courses",
    response_model=APIResponse[BasketResponse],
    summary="Save basket",
    description="Replace the basket's courses. Duplicates are dropped; only approved courses are accepted.",
)
async def save_basket(
    identifier: str,
    schema: CourseIdList,
    service: BasketServiceDep,
) -> APIResponse[BasketResponse]:
    basket = await service.save(identifier, schema.courses)
    return APIResponse.ok(data=basket, message="Basket saved")


@router.delete(
    "/booked-courses",
    response_model=APIResponse[dict],
    summary="Delete basket",
)
async def delete_basket(
    identifier: str,
    service: BasketServiceDep,
) -> APIResponse[dict]:
    deleted = await service.clear(identifier)
    return APIResponse.ok(data={"deleted": deleted})


@router.post(
    "/booked-courses",
    response_model=APIResponse[List[BasketCourse]],
    summary="Basket course details",
    description="Details for the given course ids, without purchase counts.",
)
async def basket_course_details(
    schema: CourseIdList,
    service: CourseServiceDep,
) -> APIResponse[List[BasketCourse]]:
    courses = await service.lookup(schema.courses, BasketCourse, Projections.BASKET_COURSE)
    return APIResponse.ok(data=courses)


@router.get(
    "/booked-courses/paid-balance",
    response_model=APIResponse[PaidBalance],
    summary="Basket balance",
)
async def paid_balance(
    identifier: str,
    service: BasketServiceDep,
) -> APIResponse[PaidBalance]:
    balance = await service.paid_balance(identifier)
    return APIResponse.ok(data=PaidBalance(paid_balance=balance))


# ==============================================================================
# ENROLLMENT
# ==============================================================================

@router.post(
    "/enrolled-courses",
    response_model=APIResponse[List[CoursePublic]],
    summary="Enrolled course details",
)
async def enrolled_course_details(
    schema: CourseIdList,
    service: CourseServiceDep,
) -> APIResponse[List[CoursePublic]]:
    courses = await service.lookup(schema.courses, CoursePublic)
    return APIResponse.ok(data=courses)


@router.put(
    "/courses",
    response_model=APIResponse[EnrollmentResponse],
    summary="Finalize enrollment",
    description="Enroll in paid courses. Each paid order can be finalized once.",
)
async def finalize_enrollment(
    identifier: str,
    schema: CourseIdList,
    service: CheckoutServiceDep,
) -> APIResponse[EnrollmentResponse]:
    result = await service.finalize_enrollment(identifier, schema.courses)
    return APIResponse.ok(data=result, message="Enrollment finalized")


# ==============================================================================
# ORDERS
# ==============================================================================

@router.post(
    "/orders",
    response_model=APIResponse[OrderResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Place order",
    description="Record a paid order for the basket and empty the basket.",
)
async def place_order(
    identifier: str,
    schema: OrderCreate,
    service: CheckoutServiceDep,
) -> APIResponse[OrderResponse]:
    order = await service.place_order(identifier, schema)
    return APIResponse.ok(data=order, message="Order placed")


@router.get(
    "/orders",
    response_model=APIResponse[List[OrderResponse]],
    summary="List orders",
)
async def list_orders(
    identifier: str,
    service: CheckoutServiceDep,
) -> APIResponse[List[OrderResponse]]:
    return APIResponse.ok(data=await service.list_orders(identifier))
