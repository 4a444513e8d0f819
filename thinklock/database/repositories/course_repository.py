# ==============================================================================
# COURSE REPOSITORY - courses collection
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClientSession
from pymongo import DESCENDING

from thinklock.core.constants import CourseStatus, DatabaseConstants, Projections
from thinklock.database.repositories.base_repository import ObjectIdRepository


class CourseRepository(ObjectIdRepository):
    """Courses keyed by ObjectId; malformed ids never match."""

    collection_name = DatabaseConstants.COURSES_COLLECTION

    async def list_approved(self) -> List[Dict[str, Any]]:
        return await self.find(
            {"status": CourseStatus.APPROVED.value},
            projection=Projections.PUBLIC_COURSE,
        )

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self.find()

    async def list_by_instructor(self, instructor_id: str) -> List[Dict[str, Any]]:
        return await self.find({"instructor_id": instructor_id})

    async def get_for_instructor(
        self,
        id: str,
        instructor_id: str,
    ) -> Optional[Dict[str, Any]]:
        _id = self._to_id(id)
        if _id is None:
            return None
        return await self.find_one({"_id": _id, "instructor_id": instructor_id})

    async def update_fields(
        self,
        id: str,
        fields: Dict[str, Any],
        conditions: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        ``$set`` fields on a course matching the extra ``conditions``.

        Returns:
            Updated course, or None when no course matched
        """
        _id = self._to_id(id)
        if _id is None:
            return None
        return await self._adapter.find_one_and_update(
            self.collection_name,
            {"_id": _id, **(conditions or {})},
            {"$set": fields},
        )

    async def popular(self, limit: int = DatabaseConstants.POPULAR_COURSES_LIMIT) -> List[Dict[str, Any]]:
        """Approved courses that still have free seats, most purchased first."""
        return await self.find(
            {
                "status": CourseStatus.APPROVED.value,
                "$expr": {"$lt": ["$purchase", "$seat"]},
            },
            projection=Projections.PUBLIC_COURSE,
            sort=[("purchase", DESCENDING)],
            limit=limit,
        )

    async def claim_seat(
        self,
        id: str,
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> bool:
        """
        Count one purchase against the course if a seat is still free.

        The seat check and the increment are a single update, so
        concurrent claims can never push ``purchase`` above ``seat``.

        Returns:
            True when the seat was taken, False when the course is full or absent
        """
        _id = self._to_id(id)
        if _id is None:
            return False
        matched = await self._adapter.update_one(
            self.collection_name,
            {"_id": _id, "$expr": {"$lt": ["$purchase", "$seat"]}},
            {"$inc": {"purchase": 1}},
            session=session,
        )
        return matched > 0

    async def release_seat(self, id: str) -> None:
        """Give back a seat taken by ``claim_seat``."""
        await self.update_by_id(id, {"$inc": {"purchase": -1}})
