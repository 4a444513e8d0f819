# ==============================================================================
# COURSE SERVICE - Listings, Authoring & Review
# ==============================================================================
# Business logic for course catalogue, instructor authoring and admin review
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type

from thinklock.core.constants import CourseStatus, ErrorMessages, Projections
from thinklock.core.exceptions import BusinessRuleError, NotFoundError
from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter
from thinklock.database.repositories.account_repository import AccountRepository
from thinklock.database.repositories.course_repository import CourseRepository
from thinklock.schemas.course import (
    CourseAdminUpdate,
    CourseCreate,
    CoursePublic,
    CourseResponse,
    CourseUpdate,
)
from thinklock.services.base_service import BaseService, ResponseSchemaType
from thinklock.utils.helpers import unique_in_order, utc_now

logger = logging.getLogger(__name__)


class CourseService(BaseService):
    """
    Course service.

    Courses start as ``pending`` with no purchases. Instructors edit
    their own courses; only admins change the approval status.
    ``purchase`` is only ever changed by enrollment finalization.
    """

    def __init__(self, adapter: MongoDBAdapter) -> None:
        super().__init__(adapter)
        self._courses = CourseRepository(adapter)
        self._accounts = AccountRepository(adapter)

    def _not_found(self, course_id: str) -> NotFoundError:
        return NotFoundError(
            message=ErrorMessages.COURSE_NOT_FOUND,
            resource_type="course",
            resource_id=course_id,
        )

    # ==========================================================================
    # CATALOGUE
    # ==========================================================================

    async def list_approved(self) -> List[CoursePublic]:
        return self._to_responses(CoursePublic, await self._courses.list_approved())

    async def popular(self) -> List[CoursePublic]:
        """Up to six approved courses with free seats, most purchased first."""
        return self._to_responses(CoursePublic, await self._courses.popular())

    async def list_all(self) -> List[CourseResponse]:
        return self._to_responses(CourseResponse, await self._courses.list_all())

    async def lookup(
        self,
        course_ids: List[str],
        schema: Type[ResponseSchemaType],
        projection: Optional[Dict[str, int]] = None,
    ) -> List[ResponseSchemaType]:
        """
        Course details for a list of ids, in request order.

        Unknown or malformed ids are skipped.

        Args:
            course_ids: Requested course identifiers
            schema: Response schema for each course
            projection: Field projection

        Returns:
            One entry per distinct known id
        """
        courses = await self._courses.get_many(
            course_ids, projection=projection or Projections.PUBLIC_COURSE
        )
        by_id = {course["id"]: course for course in courses}
        ordered = [by_id[i] for i in unique_in_order(course_ids) if i in by_id]
        return self._to_responses(schema, ordered)

    # ==========================================================================
    # INSTRUCTOR AUTHORING
    # ==========================================================================

    async def list_for_instructor(self, instructor_id: str) -> List[CourseResponse]:
        return self._to_responses(
            CourseResponse, await self._courses.list_by_instructor(instructor_id)
        )

    async def get_for_instructor(self, instructor_id: str, course_id: str) -> CourseResponse:
        """
        Raises:
            NotFoundError: If the course does not exist or belongs to someone else
        """
        course = await self._courses.get_for_instructor(course_id, instructor_id)
        if course is None:
            raise self._not_found(course_id)
        return self._to_response(CourseResponse, course)

    async def create(self, instructor_id: str, schema: CourseCreate) -> CourseResponse:
        """
        Create a pending course owned by the instructor.

        Instructor name and email are copied from the account.
        """
        instructor = await self._accounts.get_by_id(instructor_id) or {}
        document: Dict[str, Any] = schema.model_dump()
        document.update({
            "instructor_id": instructor_id,
            "instructor_name": instructor.get("name"),
            "instructor_email": instructor.get("email"),
            "purchase": 0,
            "status": CourseStatus.PENDING.value,
            "feedback": None,
            "created_at": utc_now(),
        })

        created = await self._courses.insert(document)
        logger.info(f"Instructor {instructor_id} created course {created['id']}")
        return self._to_response(CourseResponse, created)

    async def update_for_instructor(
        self,
        instructor_id: str,
        course_id: str,
        schema: CourseUpdate,
    ) -> CourseResponse:
        """
        Update editable fields of the instructor's own course.

        Raises:
            NotFoundError: If the instructor owns no such course
            BusinessRuleError: If ``seat`` would drop below ``purchase``
        """
        fields = schema.model_dump(exclude_unset=True, exclude_none=True)
        return await self._apply_update(
            course_id, fields, owner={"instructor_id": instructor_id}
        )

    # ==========================================================================
    # ADMIN REVIEW
    # ==========================================================================

    async def admin_update(self, course_id: str, schema: CourseAdminUpdate) -> CourseResponse:
        """
        Set approval status, feedback or editable fields of any course.

        Raises:
            NotFoundError: If the course does not exist
            BusinessRuleError: If ``seat`` would drop below ``purchase``
        """
        fields = schema.model_dump(exclude_unset=True, exclude_none=True)
        course = await self._apply_update(course_id, fields)
        if "status" in fields:
            logger.info(f"Course {course_id} marked {fields['status']}")
        return course

    async def _apply_update(
        self,
        course_id: str,
        fields: Dict[str, Any],
        owner: Optional[Dict[str, Any]] = None,
    ) -> CourseResponse:
        conditions: Dict[str, Any] = dict(owner or {})
        if "seat" in fields:
            conditions["purchase"] = {"$lte": fields["seat"]}

        if fields:
            updated = await self._courses.update_fields(course_id, fields, conditions)
            if updated is not None:
                return self._to_response(CourseResponse, updated)

        existing = await self._courses.get_by_id(course_id)
        if existing is None or any(existing.get(k) != v for k, v in (owner or {}).items()):
            raise self._not_found(course_id)
        if fields:
            raise BusinessRuleError(
                message="Seat capacity cannot be lower than purchases",
                rule="seat_not_below_purchase",
                details={"purchase": existing.get("purchase", 0)},
            )
        return self._to_response(CourseResponse, existing)
