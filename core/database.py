# core/database.py

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from .config import Settings
from .logging_config import get_logger

logger = get_logger(__name__)


def create_client(settings: Settings) -> AsyncMongoClient:
    """Creates the single Mongo client shared by all stores."""
    # UUIDs are stored as BSON binary subtype 4, matching the identity service
    client = AsyncMongoClient(settings.final_mongo_uri, uuidRepresentation="standard")
    host = settings.final_mongo_uri.split('@')[-1] if '@' in settings.final_mongo_uri else '...local...'
    logger.info("---DATABASE: Mongo client created for %s---", host)
    return client


def get_database(client: AsyncMongoClient, settings: Settings) -> AsyncDatabase:
    return client[settings.mongo_db_name]


async def ping(client: AsyncMongoClient) -> bool:
    """Returns True if the server answers a ping."""
    try:
        # The ping command is cheap and does not require auth.
        await client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("---DATABASE: Ping failed: %s---", e)
        return False
