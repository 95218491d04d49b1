# core/sensor_store.py

from typing import List, Optional
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from .logging_config import get_logger
from .mappings import sensor_from_document
from .models import Sensor

logger = get_logger(__name__)

class MongoSensorStore:
    """Reads and deletes sensors registered by the device service."""

    def __init__(self, database: AsyncDatabase):
        self.sensors_collection = database["sensors"]

    async def get_by_id(self, sensor_id: UUID) -> Optional[Sensor]:
        data = await self.sensors_collection.find_one({"_id": sensor_id})
        if data:
            return sensor_from_document(data)
        return None

    async def list_by_owner(self, owner_id: UUID) -> List[Sensor]:
        cursor = self.sensors_collection.find({"OwnerId": owner_id})
        return [sensor_from_document(doc) async for doc in cursor]

    async def delete_by_id(self, sensor_id: UUID) -> None:
        await self.sensors_collection.delete_one({"_id": sensor_id})
        logger.debug("---SENSOR STORE: Deleted sensor %s---", sensor_id)
