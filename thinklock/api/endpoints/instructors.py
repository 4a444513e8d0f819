# ==============================================================================
# INSTRUCTORS ENDPOINTS - Instructor Profiles & Authoring
# ==============================================================================
# Public instructor profiles, admin lookup and instructor course management
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from thinklock.api.dependencies import (
    AccountServiceDep,
    AdminGuard,
    CourseServiceDep,
    CurrentClaims,
    InstructorGuard,
    SelfGuard,
)
from thinklock.schemas.account import AccountResponse, InstructorProfile
from thinklock.schemas.base import APIResponse
from thinklock.schemas.course import CourseCreate, CourseResponse, CourseUpdate

router = APIRouter(tags=["Instructors"])


# ==============================================================================
# PROFILES
# ==============================================================================

@router.get(
    "/instructors",
    response_model=APIResponse[List[InstructorProfile]],
    summary="List instructors",
)
async def list_instructors(
    service: AccountServiceDep,
) -> APIResponse[List[InstructorProfile]]:
    return APIResponse.ok(data=await service.list_instructors())


@router.get(
    "/instructors/{id}",
    response_model=APIResponse[InstructorProfile],
    summary="Get instructor profile",
)
async def get_instructor(
    id: str,
    service: AccountServiceDep,
) -> APIResponse[InstructorProfile]:
    return APIResponse.ok(data=await service.get_instructor(id))


@router.get(
    "/admin/instructors/{id}",
    response_model=APIResponse[AccountResponse],
    dependencies=[AdminGuard],
    summary="Get full instructor record",
)
async def admin_get_instructor(
    id: str,
    service: AccountServiceDep,
) -> APIResponse[AccountResponse]:
    return APIResponse.ok(data=await service.admin_get_instructor(id))


# ==============================================================================
# AUTHORING
# ==============================================================================

@router.post(
    "/new-course",
    response_model=APIResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[InstructorGuard],
    summary="Create course",
    description="Create a course owned by the caller. New courses await admin approval.",
)
async def create_course(
    schema: CourseCreate,
    claims: CurrentClaims,
    service: CourseServiceDep,
) -> APIResponse[CourseResponse]:
    course = await service.create(claims.sub, schema)
    return APIResponse.ok(data=course, message="Course submitted for review")


@router.get(
    "/instructor/{identifier}/courses",
    response_model=APIResponse[List[CourseResponse]],
    dependencies=[InstructorGuard, SelfGuard],
    summary="List own courses",
)
async def list_own_courses(
    identifier: str,
    service: CourseServiceDep,
) -> APIResponse[List[CourseResponse]]:
    return APIResponse.ok(data=await service.list_for_instructor(identifier))


@router.get(
    "/instructor/{identifier}/courses/{id}",
    response_model=APIResponse[CourseResponse],
    dependencies=[InstructorGuard, SelfGuard],
    summary="Get own course",
)
async def get_own_course(
    identifier: str,
    id: str,
    service: CourseServiceDep,
) -> APIResponse[CourseResponse]:
    return APIResponse.ok(data=await service.get_for_instructor(identifier, id))


@router.put(
    "/instructor/{identifier}/courses/{id}",
    response_model=APIResponse[CourseResponse],
    dependencies=[InstructorGuard, SelfGuard],
    summary="Update own course",
    description="Edit name, description, seat, price or image. Seat cannot drop below purchases.",
)
async def update_own_course(
    identifier: str,
    id: str,
    schema: CourseUpdate,
    service: CourseServiceDep,
) -> APIResponse[CourseResponse]:
    course = await service.update_for_instructor(identifier, id, schema)
    return APIResponse.ok(data=course, message="Course updated")
