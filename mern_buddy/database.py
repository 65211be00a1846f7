"""MongoDB database connection using Motor (async driver)."""
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from mern_buddy.config import settings

logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB and make sure the indexes exist."""
        self.client = AsyncIOMotorClient(settings.mongodb_url)
        self.db = self.client[settings.mongodb_db_name]
        logger.info("Connected to MongoDB: %s", settings.mongodb_db_name)
        await ensure_indexes(self.db)

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client is not None:
            self.client.close()
            logger.info("Disconnected from MongoDB")


async def ensure_indexes(db) -> None:
    """Create the indexes the owner-scoped queries rely on."""
    await db["users"].create_index("email", unique=True)
    await db["topics"].create_index([("user_id", ASCENDING), ("category", ASCENDING)])
    await db["topics"].create_index([("user_id", ASCENDING), ("status", ASCENDING)])
    await db["goals"].create_index([("user_id", ASCENDING), ("completed", ASCENDING)])
    await db["goals"].create_index([("user_id", ASCENDING), ("target_date", ASCENDING)])
    logger.info("MongoDB indexes ensured")


# Global database instance
database = Database()


async def get_database() -> AsyncIOMotorDatabase:
    """Dependency to get database instance."""
    if database.db is None:
        raise RuntimeError("Database not connected")
    return database.db
