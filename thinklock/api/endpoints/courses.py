# ==============================================================================
# COURSES ENDPOINTS - Catalogue & Admin Review
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter

from thinklock.api.dependencies import AdminGuard, CourseServiceDep
from thinklock.schemas.base import APIResponse
from thinklock.schemas.course import CourseAdminUpdate, CoursePublic, CourseResponse

router = APIRouter(tags=["Courses"])


@router.get(
    "/courses",
    response_model=APIResponse[List[CoursePublic]],
    summary="List approved courses",
)
async def list_courses(
    service: CourseServiceDep,
) -> APIResponse[List[CoursePublic]]:
    return APIResponse.ok(data=await service.list_approved())


@router.get(
    "/courses/popular",
    response_model=APIResponse[List[CoursePublic]],
    summary="Popular courses",
    description="Up to six approved courses with free seats, most purchased first.",
)
async def popular_courses(
    service: CourseServiceDep,
) -> APIResponse[List[CoursePublic]]:
    return APIResponse.ok(data=await service.popular())


@router.get(
    "/admin/courses",
    response_model=APIResponse[List[CourseResponse]],
    dependencies=[AdminGuard],
    summary="List all courses",
)
async def admin_list_courses(
    service: CourseServiceDep,
) -> APIResponse[List[CourseResponse]]:
    return APIResponse.ok(data=await service.list_all())


@router.put(
    "/admin/courses/{id}",
    response_model=APIResponse[CourseResponse],
    dependencies=[AdminGuard],
    summary="Review course",
    description="Approve or reject a course, leave feedback, or edit its fields.",
)
async def admin_update_course(
    id: str,
    schema: CourseAdminUpdate,
    service: CourseServiceDep,
) -> APIResponse[CourseResponse]:
    course = await service.admin_update(id, schema)
    return APIResponse.ok(data=course, message="Course updated")
