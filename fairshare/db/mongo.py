import logging
from contextlib import asynccontextmanager

from pymongo.read_concern import ReadConcern
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from fairshare.core.config import settings

logger = logging.getLogger(__name__)


class MongoDatabase:
    """MongoDB connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URI)
    mongodb.db = mongodb.client[settings.MONGODB_DB]

    # Create indexes
    await create_indexes()
    logger.info("Connected to MongoDB: %s", settings.MONGODB_DB)

async def disconnect_from_mongo():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
    logger.info("Disconnected from MongoDB")

async def create_indexes():
    """Create database indexes."""
    # User email unique index
    await mongodb.db["users"].create_index("email", unique=True)

    # Group membership lookups
    await mongodb.db["groups"].create_index("members.user_id")
    await mongodb.db["groups"].create_index("members.member_id", unique=True, sparse=True)

    # Group ledger rows
    await mongodb.db["group_expenses"].create_index([("group_id", 1), ("status", 1)])
    await mongodb.db["group_settlements"].create_index("group_id")
    await mongodb.db["activity_logs"].create_index([("group_id", 1), ("created_at", -1)])

    # Personal spending
    await mongodb.db["personal_expenses"].create_index([("user_id", 1), ("date", 1)])
    await mongodb.db["incomes"].create_index([("user_id", 1), ("date", -1)])

def get_db() -> AsyncIOMotorDatabase:
    """Get database instance."""
    return mongodb.db

@asynccontextmanager
async def transaction(db: AsyncIOMotorDatabase, snapshot: bool = False):
    """
    Yield a session inside a transaction, or None when transactions are
    disabled (standalone mongod in development).
    """
    if not settings.MONGODB_TRANSACTIONS:
        yield None
        return

    read_concern = ReadConcern("snapshot") if snapshot else None
    async with await db.client.start_session() as session:
        async with session.start_transaction(read_concern=read_concern):
            yield session
