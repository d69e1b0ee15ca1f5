import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from products_api.config import Settings

logger = logging.getLogger(__name__)


def connect(settings: Settings) -> AsyncIOMotorClient:
    client = AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True)
    logger.info("MongoDB client created for database %s", settings.MONGO_DB)
    return client


def get_collection(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorCollection:
    return client[settings.MONGO_DB][settings.MONGO_COLLECTION]
