# core/property_store.py

from typing import List, Optional
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from .logging_config import get_logger
from .mappings import property_from_document, property_to_document
from .models import Property

logger = get_logger(__name__)

class MongoPropertyStore:
    """Handles all database operations for properties and their fields."""

    def __init__(self, database: AsyncDatabase):
        self.properties_collection = database["properties"]

    async def create(self, property: Property) -> None:
        await self.properties_collection.insert_one(property_to_document(property))
        logger.debug("---PROPERTY STORE: Inserted property %s---", property.id)

    async def list_by_owner(self, owner_id: UUID) -> List[Property]:
        cursor = self.properties_collection.find({"OwnerId": owner_id})
        return [property_from_document(doc) async for doc in cursor]

    async def get_by_id(self, property_id: UUID) -> Optional[Property]:
        data = await self.properties_collection.find_one({"_id": property_id})
        if data:
            return property_from_document(data)
        return None

    async def replace(self, property: Property) -> None:
        # Whole-document overwrite. A $push on Fields would make field
        # additions atomic without changing this signature.
        await self.properties_collection.replace_one(
            {"_id": property.id},
            property_to_document(property),
        )
        logger.debug("---PROPERTY STORE: Replaced property %s---", property.id)
