# ==============================================================================
# BASE REPOSITORY - Generic Data Access Abstraction
# ==============================================================================
# Repository Pattern implementation over the MongoDB adapter
# One subclass per collection
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClientSession

from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter, Sort


class BaseRepository:
    """
    Base repository providing standard document operations.

    Implements the Repository Pattern for data access abstraction,
    decoupling business logic from the document store.

    Subclasses set ``collection_name`` and may override ``_to_id``
    (identifier conversion) and ``default_projection``.

    Attributes:
        _adapter: Database adapter for collection primitives
        collection_name: Collection identifier

    Example:
        >>> class CourseRepository(BaseRepository):
        ...     collection_name = "courses"
        ...
        >>> repo = CourseRepository(adapter)
        >>> course = await repo.get_by_id(course_id)
    """

    collection_name: str = ""
    default_projection: Optional[Dict[str, int]] = None

    def __init__(self, adapter: MongoDBAdapter) -> None:
        """
        Initialize repository.

        Args:
            adapter: Database adapter instance
        """
        self._adapter = adapter

    # ==========================================================================
    # IDENTIFIER CONVERSION
    # ==========================================================================

    def _to_id(self, id: Any) -> Optional[Any]:
        """
        Convert an external identifier to the stored ``_id`` value.

        Returns None when the identifier cannot exist in this collection.
        """
        return id

    def _to_ids(self, ids: List[Any]) -> List[Any]:
        converted = (self._to_id(i) for i in ids)
        return [i for i in converted if i is not None]

    # ==========================================================================
    # READ OPERATIONS
    # ==========================================================================

    async def find(
        self,
        query: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, int]] = None,
        sort: Optional[Sort] = None,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Retrieve documents matching a query.

        Args:
            query: MongoDB filter document
            projection: Field projection (defaults to ``default_projection``)
            sort: List of (field, direction) pairs
            limit: Maximum documents to return (0 for all)

        Returns:
            List of matching documents
        """
        return await self._adapter.find(
            self.collection_name,
            query,
            projection=projection or self.default_projection,
            sort=sort,
            limit=limit,
        )

    async def find_one(
        self,
        query: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Retrieve the first document matching a query."""
        return await self._adapter.find_one(
            self.collection_name,
            query,
            projection=projection or self.default_projection,
        )

    async def get_by_id(
        self,
        id: Any,
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Retrieve a document by identifier.

        Args:
            id: External identifier
            projection: Field projection

        Returns:
            Document if found, None otherwise
        """
        _id = self._to_id(id)
        if _id is None:
            return None
        return await self.find_one({"_id": _id}, projection=projection)

    async def get_many(
        self,
        ids: List[Any],
        projection: Optional[Dict[str, int]] = None,
    ) -> List[Dict[str, Any]]:
        """Retrieve every document whose identifier is in ``ids``."""
        _ids = self._to_ids(ids)
        if not _ids:
            return []
        return await self.find({"_id": {"$in": _ids}}, projection=projection)

    # ==========================================================================
    # WRITE OPERATIONS
    # ==========================================================================

    async def insert(
        self,
        document: Dict[str, Any],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> Dict[str, Any]:
        """
        Insert a new document.

        Args:
            document: Document to store
            session: Optional client session

        Returns:
            Stored document with string id
        """
        return await self._adapter.insert_one(
            self.collection_name, document, session=session
        )

    async def update_by_id(
        self,
        id: Any,
        update: Dict[str, Any],
        upsert: bool = False,
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> bool:
        """
        Apply an update document (``$set``, ``$inc``, ``$addToSet``...) to one document.

        Returns:
            True when a document matched or was upserted
        """
        _id = self._to_id(id)
        if _id is None:
            return False
        matched = await self._adapter.update_one(
            self.collection_name, {"_id": _id}, update, upsert=upsert, session=session
        )
        return matched > 0

    async def update_many(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> int:
        """Apply an update document to every match; returns the matched count."""
        return await self._adapter.update_many(
            self.collection_name, query, update, session=session
        )



class ObjectIdRepository(BaseRepository):
    """Repository for collections keyed by ObjectId; malformed ids never match."""

    def _to_id(self, id: Any) -> Optional[Any]:
        if isinstance(id, ObjectId):
            return id
        try:
            return ObjectId(str(id))
        except (InvalidId, TypeError):
            return None
