# ==============================================================================
# BASKET SERVICE - Enrollment Basket
# ==============================================================================
# Per-student list of courses awaiting payment
# ==============================================================================

from __future__ import annotations

import logging
from typing import List

from thinklock.core.constants import CourseStatus
from thinklock.core.exceptions import ValidationError
from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter
from thinklock.database.repositories.basket_repository import BasketRepository
from thinklock.database.repositories.course_repository import CourseRepository
from thinklock.schemas.order import BasketResponse
from thinklock.services.base_service import BaseService
from thinklock.utils.helpers import ceil_amount, unique_in_order

logger = logging.getLogger(__name__)


class BasketService(BaseService):
    """
    Enrollment basket service.

    A student has at most one basket. Its course ids are deduplicated
    on write and must reference approved courses.
    """

    def __init__(self, adapter: MongoDBAdapter) -> None:
        super().__init__(adapter)
        self._baskets = BasketRepository(adapter)
        self._courses = CourseRepository(adapter)

    async def get(self, student_id: str) -> BasketResponse:
        """Return the student's basket, or an empty one when none is stored."""
        basket = await self._baskets.get(student_id)
        if basket is None:
            return BasketResponse(student_id=student_id, courses=[])
        return self._to_response(BasketResponse, basket)

    async def save(self, student_id: str, course_ids: List[str]) -> BasketResponse:
        """
        Replace the basket's courses, creating the basket if needed.

        Args:
            student_id: Basket owner
            course_ids: Course ids; duplicates are dropped, order kept

        Returns:
            Stored basket

        Raises:
            ValidationError: If any id is not an approved course
        """
        unique_ids = unique_in_order(course_ids)

        if unique_ids:
            approved = await self._courses.get_many(unique_ids, projection={"status": 1})
            known = {c["id"] for c in approved if c.get("status") == CourseStatus.APPROVED.value}
            unknown = [i for i in unique_ids if i not in known]
            if unknown:
                raise ValidationError(
                    message="Basket may only hold approved courses",
                    errors={"courses": unknown},
                )

        basket = await self._baskets.upsert(student_id, unique_ids)
        return self._to_response(BasketResponse, basket)

    async def clear(self, student_id: str) -> bool:
        """Delete the basket; True when one existed."""
        return await self._baskets.delete(student_id)

    async def paid_balance(self, student_id: str) -> int:
        """
        Sum of the basket's course prices, rounded up to a whole unit.

        Returns:
            Amount due in major currency units (0 when there is no basket)
        """
        basket = await self._baskets.get(student_id)
        if not basket or not basket.get("courses"):
            return 0

        courses = await self._courses.get_many(basket["courses"], projection={"price": 1})
        total = sum(float(c.get("price") or 0) for c in courses)
        return ceil_amount(total)
