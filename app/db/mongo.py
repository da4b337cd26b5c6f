"""
app/db/mongo.py

Purpose: MongoDB connection setup

- Wraps one Motor client and database per process
- Built once at startup and injected into request handlers
- Exposes the users and payments collections
- Health checks and connection lifecycle
"""

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from typing import Optional

from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)

USERS_COLLECTION = "users"
PAYMENTS_COLLECTION = "payments"


class MongoStore:
    """
    Process-wide handle on the document store.

    Motor connects lazily and pools connections itself; this object only
    owns the client so it can be pinged and closed.
    """

    def __init__(self, client: AsyncIOMotorClient, database_name: str):
        self.client = client
        self.database: AsyncIOMotorDatabase = client[database_name]

    @classmethod
    def from_settings(cls, config: Settings) -> "MongoStore":
        client = AsyncIOMotorClient(
            config.MONGO_URL,
            tz_aware=True,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=10000,
        )
        return cls(client, config.MONGODB_DB_NAME)

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self.database[USERS_COLLECTION]

    @property
    def payments(self) -> AsyncIOMotorCollection:
        return self.database[PAYMENTS_COLLECTION]

    async def connect(self):
        """
        Verifies the server is reachable. Called during application startup.

        Raises:
            ConnectionError: If the server cannot be reached
        """
        logger.info(f"Connecting to MongoDB database: {self.database.name}")
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.critical(f"Failed to connect to MongoDB: {e}")
            raise ConnectionError("Could not establish MongoDB connection") from e
        logger.info(f"✅ Connected to MongoDB: {self.database.name}")

    async def check_health(self) -> bool:
        """
        Checks if the database connection is healthy.

        Returns:
            True if the server answers a ping, False otherwise
        """
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False

    def close(self):
        logger.info("Closing MongoDB connection")
        self.client.close()


def get_store(request: Request) -> MongoStore:
    """
    FastAPI dependency returning the store attached at startup.

    Raises:
        RuntimeError: If the application was started without a store
    """
    store: Optional[MongoStore] = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Database not initialized. The application lifespan has not run.")
    return store
