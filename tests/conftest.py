from datetime import datetime, timezone
from typing import Dict, List
from uuid import UUID, uuid4

import pytest

from core.models import Farmer, Property, Sensor, SensorType
from core.ownership import OwnershipValidator
from core.property_service import PropertyService
from core.sensor_service import SensorService


class InMemoryFarmers:
    def __init__(self):
        self.farmers: Dict[UUID, Farmer] = {}
        self.calls = 0

    async def get_by_id(self, farmer_id):
        self.calls += 1
        return self.farmers.get(farmer_id)


class InMemoryProperties:
    """Stores copies so callers can't mutate what is 'on disk'."""

    def __init__(self):
        self.docs: Dict[UUID, Property] = {}
        self.calls: List[str] = []

    async def create(self, property):
        self.calls.append("create")
        self.docs[property.id] = property.model_copy(deep=True)

    async def list_by_owner(self, owner_id):
        self.calls.append("list_by_owner")
        return [p.model_copy(deep=True) for p in self.docs.values() if p.owner_id == owner_id]

    async def get_by_id(self, property_id):
        self.calls.append("get_by_id")
        doc = self.docs.get(property_id)
        return doc.model_copy(deep=True) if doc else None

    async def replace(self, property):
        self.calls.append("replace")
        self.docs[property.id] = property.model_copy(deep=True)


class InMemorySensors:
    def __init__(self):
        self.docs: Dict[UUID, Sensor] = {}
        self.calls: List[str] = []

    async def get_by_id(self, sensor_id):
        self.calls.append("get_by_id")
        return self.docs.get(sensor_id)

    async def list_by_owner(self, owner_id):
        self.calls.append("list_by_owner")
        return [s for s in self.docs.values() if s.owner_id == owner_id]

    async def delete_by_id(self, sensor_id):
        self.calls.append("delete_by_id")
        self.docs.pop(sensor_id, None)


def make_farmer(name="Ana Souza") -> Farmer:
    return Farmer(id=uuid4(), name=name, email=f"{name.split()[0].lower()}@farm.test", password_hash="x")


def make_sensor(owner_id, serial="SENSOR001", sensor_type=SensorType.TEMPERATURE) -> Sensor:
    return Sensor(
        id=uuid4(),
        serial=serial,
        sensor_type=sensor_type,
        owner_id=owner_id,
        field_id=uuid4(),
        created_at=datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def farmer():
    return make_farmer()


@pytest.fixture
def other_farmer():
    return make_farmer("Bruno Lima")


@pytest.fixture
def farmers(farmer, other_farmer):
    store = InMemoryFarmers()
    store.farmers[farmer.id] = farmer
    store.farmers[other_farmer.id] = other_farmer
    return store


@pytest.fixture
def properties():
    return InMemoryProperties()


@pytest.fixture
def sensors():
    return InMemorySensors()


@pytest.fixture
def property_service(farmers, properties):
    return PropertyService(OwnershipValidator(farmers), properties)


@pytest.fixture
def sensor_service(farmers, sensors):
    return SensorService(OwnershipValidator(farmers), sensors)
