# ==============================================================================
# MONGODB CONNECTION - Motor Client Lifecycle Management
# ==============================================================================
# Creates, caches and closes the async MongoDB client
# Uses Motor for non-blocking MongoDB operations
# ==============================================================================

from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)

from crud_template.core.settings import settings
from crud_template.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class MongoDB:
    """
    Holder of the process-wide Motor client.

    Class Attributes:
        _client: Motor async client
        _database: Target database instance

    Example:
        >>> # Initialize at application startup
        >>> await MongoDB.initialize()
        >>>
        >>> collection = MongoDB.get_collection("crud_templates")
        >>>
        >>> # Shutdown at application exit
        >>> await MongoDB.shutdown()
    """

    _client: Optional[AsyncIOMotorClient] = None
    _database: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def initialize(
        cls,
        connection_url: Optional[str] = None,
        database_name: Optional[str] = None,
    ) -> AsyncIOMotorDatabase:
        """
        Initialize MongoDB connection.

        Creates the Motor client, selects the target database and
        verifies the connection with a ping.

        Args:
            connection_url: MongoDB connection URI (defaults to settings)
            database_name: Database name (defaults to settings)

        Returns:
            Connected database handle

        Raises:
            DatabaseError: If connection fails
        """
        if cls._database is not None:
            return cls._database

        connection_url = connection_url or settings.mongodb_url
        database_name = database_name or settings.MONGO_DATABASE

        try:
            client: AsyncIOMotorClient = AsyncIOMotorClient(
                connection_url,
                maxPoolSize=settings.MONGO_POOL_SIZE,
                serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT,
                connectTimeoutMS=settings.MONGO_CONNECT_TIMEOUT,
            )
            await client.admin.command("ping")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise DatabaseError(f"MongoDB connection failed: {e}", error=e) from e

        cls._client = client
        cls._database = client[database_name]
        logger.info(f"MongoDB connected to {database_name}")
        return cls._database

    @classmethod
    async def shutdown(cls) -> None:
        """Close the MongoDB client and clear the cached handles."""
        if cls._client is not None:
            cls._client.close()
            logger.info("MongoDB disconnected")
        cls.reset()

    @classmethod
    def get_database(cls) -> AsyncIOMotorDatabase:
        """
        Get the connected database.

        Raises:
            RuntimeError: If the client is not initialized
        """
        if cls._database is None:
            raise RuntimeError(
                "MongoDB not initialized. Call MongoDB.initialize() first."
            )
        return cls._database

    @classmethod
    def get_collection(cls, name: str) -> AsyncIOMotorCollection:
        """Get a collection of the connected database."""
        return cls.get_database()[name]

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._database is not None

    @classmethod
    async def health_check(cls) -> bool:
        """
        Verify database connectivity.

        Returns:
            True if the server answers a ping
        """
        if cls._client is None:
            return False
        try:
            await cls._client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning(f"MongoDB health check failed: {e}")
            return False

    @classmethod
    def reset(cls) -> None:
        """
        Reset cached handles without closing the client.

        Primarily for testing purposes.
        """
        cls._client = None
        cls._database = None
