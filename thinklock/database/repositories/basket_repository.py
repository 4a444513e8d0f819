# ==============================================================================
# BASKET REPOSITORY - bookedCourses collection
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional

from thinklock.core.constants import DatabaseConstants
from thinklock.database.repositories.base_repository import BaseRepository
from thinklock.utils.helpers import utc_now


class BasketRepository(BaseRepository):
    """Enrollment baskets, one per student (unique ``student_id``)."""

    collection_name = DatabaseConstants.BASKETS_COLLECTION

    async def get(self, student_id: str) -> Optional[Dict[str, Any]]:
        return await self.find_one({"student_id": student_id})

    async def upsert(self, student_id: str, courses: List[str]) -> Dict[str, Any]:
        """Replace the basket's course list, creating the basket when absent."""
        return await self._adapter.find_one_and_update(
            self.collection_name,
            {"student_id": student_id},
            {
                "$set": {
                    "courses": courses,
                    "updated_at": utc_now(),
                },
            },
            upsert=True,
        )

    async def delete(self, student_id: str) -> bool:
        return await self._adapter.delete_one(
            self.collection_name, {"student_id": student_id}
        )
