# ==============================================================================
# ORDER REPOSITORY - orders collection
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClientSession
from pymongo import DESCENDING

from thinklock.core.constants import DatabaseConstants
from thinklock.database.repositories.base_repository import ObjectIdRepository
from thinklock.utils.helpers import utc_now


class OrderRepository(ObjectIdRepository):
    """Placed orders; immutable apart from the finalization bookkeeping."""

    collection_name = DatabaseConstants.ORDERS_COLLECTION

    async def create(self, order: Dict[str, Any]) -> Dict[str, Any]:
        return await self.insert(order)

    async def list_for_student(self, student_id: str) -> List[Dict[str, Any]]:
        return await self.find(
            {"student_id": student_id},
            sort=[("date", DESCENDING)],
        )

    async def claim_courses(
        self,
        student_id: str,
        course_ids: List[str],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Atomically record ``course_ids`` as finalized on a paid order.

        The order must contain every id and must not have finalized any
        of them yet, so each paid course can be claimed exactly once even
        when an order is finalized in several steps.

        Args:
            student_id: Owner of the order
            course_ids: Course ids to claim
            session: Optional client session

        Returns:
            The order after the claim, or None when no order covers the ids
        """
        return await self._adapter.find_one_and_update(
            self.collection_name,
            {
                "student_id": student_id,
                "finalized": False,
                "courses": {"$all": course_ids},
                "finalized_courses": {"$nin": course_ids},
            },
            {"$addToSet": {"finalized_courses": {"$each": course_ids}}},
            sort=[("date", DESCENDING)],
            session=session,
        )

    async def complete_if_covered(
        self,
        order: Dict[str, Any],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> bool:
        """Flag the order finalized once every course on it has been claimed."""
        if not set(order.get("courses", [])) <= set(order.get("finalized_courses", [])):
            return False
        return await self.update_by_id(
            order["id"],
            {"$set": {"finalized": True, "finalized_at": utc_now()}},
            session=session,
        )

    async def release_courses(self, order_id: str, course_ids: List[str]) -> None:
        """Undo a ``claim_courses`` whose enrollment could not be completed."""
        await self.update_by_id(
            order_id,
            {
                "$pullAll": {"finalized_courses": course_ids},
                "$set": {"finalized": False, "finalized_at": None},
            },
        )
