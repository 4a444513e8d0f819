# ==============================================================================
# MONGODB ADAPTER - Motor Async Driver Implementation
# ==============================================================================
# Document store adapter with async collection primitives
# Uses Motor for non-blocking MongoDB operations
# ==============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncIterator, Dict, Iterator, List, Optional, Tuple

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorClientSession,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from thinklock.core.constants import DatabaseConstants
from thinklock.core.exceptions import AlreadyExistsError, DatabaseError
from thinklock.core.settings import settings

logger = logging.getLogger(__name__)

Sort = List[Tuple[str, int]]

# (collection, keys, options)
INDEXES: List[Tuple[str, Sort, Dict[str, Any]]] = [
    (DatabaseConstants.BASKETS_COLLECTION, [("student_id", ASCENDING)], {"unique": True}),
    (DatabaseConstants.ORDERS_COLLECTION, [("payment.intent_id", ASCENDING)], {"unique": True}),
    (DatabaseConstants.ORDERS_COLLECTION, [("student_id", ASCENDING), ("date", DESCENDING)], {}),
    (DatabaseConstants.COURSES_COLLECTION, [("status", ASCENDING), ("purchase", DESCENDING)], {}),
    (DatabaseConstants.COURSES_COLLECTION, [("instructor_id", ASCENDING)], {}),
    (DatabaseConstants.USERS_COLLECTION, [("role", ASCENDING)], {}),
]


def _session_kwargs(session: Optional[AsyncIOMotorClientSession]) -> Dict[str, Any]:
    return {"session": session} if session is not None else {}


@contextmanager
def _translate_errors(collection: str) -> Iterator[None]:
    """Map driver errors onto application exceptions."""
    try:
        yield
    except DuplicateKeyError as e:
        raise AlreadyExistsError(
            message=f"Duplicate document in {collection}",
            resource_type=collection,
            details={"key": e.details.get("keyValue") if e.details else None},
        )
    except PyMongoError as e:
        logger.error(f"MongoDB operation on {collection} failed: {e}")
        raise DatabaseError(f"MongoDB operation failed: {e}")


class MongoDBAdapter:
    """
    MongoDB database adapter using Motor async driver.

    Exposes thin collection primitives to the repositories. Every
    primitive accepts an optional client session so that callers can
    group writes in a transaction.

    Features:
        - Async MongoDB operations using Motor
        - ``_id`` rendered as string ``id`` on the way out
        - Transaction scope via ``transaction()``
        - Duplicate keys surfaced as ``AlreadyExistsError``

    Example:
        >>> adapter = MongoDBAdapter()
        >>> await adapter.connect()
        >>> doc = await adapter.find_one("users", {"_id": "student-1"})
        >>> print(doc["id"])
    """

    def __init__(
        self,
        connection_url: Optional[str] = None,
        database_name: Optional[str] = None,
        use_transactions: Optional[bool] = None,
    ) -> None:
        """
        Initialize MongoDB adapter.

        Args:
            connection_url: MongoDB connection URI (defaults to settings)
            database_name: Database name (defaults to settings)
            use_transactions: Enable multi-document transactions (defaults to settings)
        """
        self._connection_url = connection_url or settings.MONGODB_URL
        self._database_name = database_name or settings.MONGODB_DB
        self._use_transactions = (
            settings.MONGODB_TRANSACTIONS if use_transactions is None else use_transactions
        )
        self._client: Optional[AsyncIOMotorClient] = None
        self._database: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    def from_client(
        cls,
        client: Any,
        database_name: str,
        use_transactions: bool = False,
    ) -> "MongoDBAdapter":
        """
        Build an adapter around an existing client without pinging it.

        Args:
            client: Motor-compatible async client
            database_name: Database to select
            use_transactions: Enable multi-document transactions

        Returns:
            Ready-to-use adapter
        """
        adapter = cls(database_name=database_name, use_transactions=use_transactions)
        adapter._client = client
        adapter._database = client[database_name]
        return adapter

    # ==========================================================================
    # ID SERIALIZATION HELPERS
    # ==========================================================================

    @staticmethod
    def _serialize_id(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Transform ``_id`` into a string ``id`` field.

        Args:
            document: MongoDB document with _id

        Returns:
            Document with string id field
        """
        if document and "_id" in document:
            document["id"] = str(document.pop("_id"))
        return document

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self._database is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._database

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """
        Initialize MongoDB connection.

        Creates Motor client, selects target database and verifies
        the server answers a ping.

        Raises:
            DatabaseError: If the server cannot be reached
        """
        try:
            self._client = AsyncIOMotorClient(
                self._connection_url,
                maxPoolSize=settings.DB_POOL_SIZE,
                minPoolSize=1,
                maxIdleTimeMS=settings.DB_POOL_TIMEOUT * 1000,
            )
            self._database = self._client[self._database_name]

            # Verify connection
            await self._client.admin.command("ping")

            logger.info(f"MongoDB adapter connected to {self._database_name}")

        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise DatabaseError(f"MongoDB connection failed: {e}")

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._database = None
            logger.info("MongoDB adapter disconnected")

    async def health_check(self) -> bool:
        """
        Verify database connectivity.

        Returns:
            True if connection is healthy
        """
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning(f"MongoDB health check failed: {e}")
            return False

    async def ensure_indexes(self) -> None:
        """Create the indexes the collections rely on."""
        for collection, keys, options in INDEXES:
            with _translate_errors(collection):
                await self.database[collection].create_index(keys, **options)
        logger.info(f"Ensured {len(INDEXES)} MongoDB indexes")

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Optional[AsyncIOMotorClientSession]]:
        """
        Provide transactional session scope.

        MongoDB transactions need a replica set. When transactions are
        disabled the scope yields ``None`` and writes run unsessioned.

        Yields:
            AsyncIOMotorClientSession instance or None
        """
        if not self._use_transactions:
            yield None
            return

        if self._client is None:
            raise RuntimeError("Database not connected. Call connect() first.")

        async with await self._client.start_session() as session:
            async with session.start_transaction():
                yield session

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def find(
        self,
        collection: str,
        query: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, int]] = None,
        sort: Optional[Sort] = None,
        limit: int = 0,
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find documents matching a query.

        Args:
            collection: Collection name
            query: MongoDB filter document
            projection: Fields to include or exclude
            sort: List of (field, direction) pairs
            limit: Maximum documents (0 for no limit)
            session: Optional client session

        Returns:
            Matching documents with string ids
        """
        with _translate_errors(collection):
            cursor = self.database[collection].find(
                query or {}, projection, **_session_kwargs(session)
            )
            if sort:
                cursor = cursor.sort(sort)
            if limit:
                cursor = cursor.limit(limit)
            documents = await cursor.to_list(length=None)
        return [self._serialize_id(doc) for doc in documents]

    async def find_one(
        self,
        collection: str,
        query: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> Optional[Dict[str, Any]]:
        """Find a single document matching a query."""
        with _translate_errors(collection):
            document = await self.database[collection].find_one(
                query, projection, **_session_kwargs(session)
            )
        return self._serialize_id(document)

    # ==========================================================================
    # WRITE OPERATIONS
    # ==========================================================================

    async def insert_one(
        self,
        collection: str,
        document: Dict[str, Any],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> Dict[str, Any]:
        """
        Insert a document.

        Args:
            collection: Collection name
            document: Document to insert (may carry its own ``_id``)
            session: Optional client session

        Returns:
            Inserted document with string id

        Raises:
            AlreadyExistsError: If a unique key is already taken
        """
        data = dict(document)
        with _translate_errors(collection):
            result = await self.database[collection].insert_one(
                data, **_session_kwargs(session)
            )
        data["_id"] = result.inserted_id
        return self._serialize_id(data)

    async def update_one(
        self,
        collection: str,
        query: Dict[str, Any],
        update: Dict[str, Any],
        upsert: bool = False,
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> int:
        """
        Apply an update document to the first match.

        Returns:
            Number of matched (or upserted) documents
        """
        with _translate_errors(collection):
            result = await self.database[collection].update_one(
                query, update, upsert=upsert, **_session_kwargs(session)
            )
        return result.matched_count + (1 if result.upserted_id is not None else 0)

    async def update_many(
        self,
        collection: str,
        query: Dict[str, Any],
        update: Dict[str, Any],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> int:
        """Apply an update document to every match and return the matched count."""
        with _translate_errors(collection):
            result = await self.database[collection].update_many(
                query, update, **_session_kwargs(session)
            )
        return result.matched_count

    async def find_one_and_update(
        self,
        collection: str,
        query: Dict[str, Any],
        update: Dict[str, Any],
        sort: Optional[Sort] = None,
        projection: Optional[Dict[str, int]] = None,
        upsert: bool = False,
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Atomically update the first match and return it after the update.

        Returns:
            Updated document, or None when nothing matched
        """
        with _translate_errors(collection):
            document = await self.database[collection].find_one_and_update(
                query,
                update,
                projection=projection,
                sort=sort,
                upsert=upsert,
                return_document=ReturnDocument.AFTER,
                **_session_kwargs(session),
            )
        return self._serialize_id(document)

    async def delete_one(
        self,
        collection: str,
        query: Dict[str, Any],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> bool:
        """Delete the first match; True when a document was removed."""
        with _translate_errors(collection):
            result = await self.database[collection].delete_one(
                query, **_session_kwargs(session)
            )
        return result.deleted_count > 0
