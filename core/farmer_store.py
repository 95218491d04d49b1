# core/farmer_store.py

from typing import Optional
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from .mappings import farmer_from_document
from .models import Farmer

class MongoFarmerStore:
    """Reads farmer identity records from MongoDB."""

    def __init__(self, database: AsyncDatabase):
        self.farmers_collection = database["farmers"]

    async def get_by_id(self, farmer_id: UUID) -> Optional[Farmer]:
        data = await self.farmers_collection.find_one({"_id": farmer_id})
        if data:
            return farmer_from_document(data)
        return None
