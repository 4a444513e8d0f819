# ==============================================================================
# ACCOUNT REPOSITORY - users collection
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClientSession

from thinklock.core.constants import DatabaseConstants, Projections, Role
from thinklock.database.repositories.base_repository import BaseRepository


class AccountRepository(BaseRepository):
    """
    Accounts keyed by an externally supplied string identifier.

    The password hash is projected out of every read unless
    ``get_credentials`` is used.
    """

    collection_name = DatabaseConstants.USERS_COLLECTION
    default_projection = Projections.ACCOUNT_PRIVATE

    def _to_id(self, id: Any) -> Optional[Any]:
        return str(id) if id else None

    async def get_credentials(self, id: str) -> Optional[Dict[str, Any]]:
        """Fetch an account including its password hash."""
        return await self._adapter.find_one(self.collection_name, {"_id": id})

    async def get_role(self, id: str) -> Optional[str]:
        account = await self.get_by_id(id, projection={"role": 1})
        return account.get("role") if account else None

    async def list_by_role(
        self,
        role: Role,
        projection: Optional[Dict[str, int]] = None,
    ) -> List[Dict[str, Any]]:
        return await self.find({"role": role.value}, projection=projection)

    async def get_with_role(
        self,
        id: str,
        role: Role,
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self.find_one({"_id": id, "role": role.value}, projection=projection)

    async def add_courses(
        self,
        id: str,
        course_ids: List[str],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> bool:
        """Add course ids to the account's enrolled list without duplicating any."""
        return await self.update_by_id(
            id,
            {"$addToSet": {"courses": {"$each": course_ids}}},
            session=session,
        )
