# ==============================================================================
# DATABASE FACTORY - Adapter Instantiation & Lifecycle Management
# ==============================================================================
# Factory Pattern for creating and managing the MongoDB adapter
# Singleton caching for efficient resource utilization
# ==============================================================================

from __future__ import annotations

import logging
from typing import Optional

from thinklock.core.exceptions import DatabaseError
from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter

logger = logging.getLogger(__name__)


class DatabaseFactory:
    """
    Factory class for creating and managing the database adapter.

    Keeps a single cached adapter for the process and drives its
    lifecycle from the application lifespan.

    Example:
        >>> # Initialize at application startup
        >>> adapter = await DatabaseFactory.initialize()
        >>>
        >>> # Shutdown at application exit
        >>> await DatabaseFactory.shutdown()
    """

    _instance: Optional[MongoDBAdapter] = None

    @classmethod
    def create_adapter(
        cls,
        connection_url: Optional[str] = None,
        database_name: Optional[str] = None,
    ) -> MongoDBAdapter:
        """
        Create the adapter, or return the cached one.

        Args:
            connection_url: MongoDB connection URL (defaults to settings)
            database_name: MongoDB database name (defaults to settings)

        Returns:
            Database adapter instance
        """
        if cls._instance is None:
            cls._instance = MongoDBAdapter(
                connection_url=connection_url,
                database_name=database_name,
            )
            logger.info("Created MongoDB adapter")
        return cls._instance

    @classmethod
    async def initialize(cls) -> MongoDBAdapter:
        """
        Connect the adapter and ensure collection indexes.

        Should be called at application startup.

        Returns:
            Initialized database adapter

        Raises:
            DatabaseError: If connection fails
        """
        adapter = cls.create_adapter()

        try:
            await adapter.connect()
            await adapter.ensure_indexes()
        except DatabaseError:
            cls._instance = None
            raise

        logger.info("Database initialized")
        return adapter

    @classmethod
    async def shutdown(cls) -> None:
        """
        Close the database connection and clear the cache.

        Should be called at application shutdown.
        """
        if cls._instance is not None:
            await cls._instance.disconnect()
            cls._instance = None
        logger.info("All database connections closed")

