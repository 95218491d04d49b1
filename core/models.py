# core/models.py

from datetime import datetime, timezone
from enum import Enum
from typing import List
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field as ModelField
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for everything crossing the API: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SensorType(str, Enum):
    # Declaration order matches the ordinals stored by the device service
    TEMPERATURE = "Temperature"
    HUMIDITY = "Humidity"
    PRESSURE = "Pressure"
    SOIL_MOISTURE = "SoilMoisture"
    LUMINOSITY = "Luminosity"


# ---------- Domain ----------

class Farmer(ApiModel):
    """Identity record owned by the identity service. Read only here."""
    id: UUID
    name: str
    email: str
    password_hash: str


class Field(ApiModel):
    """A cultivated plot. Exists only inside its parent Property."""
    field_id: UUID = ModelField(default_factory=uuid4)
    name: str
    crop_type: str
    area: float


class Property(ApiModel):
    """Aggregate root: a farm property and the fields it owns, in insertion order."""
    id: UUID = ModelField(default_factory=uuid4)
    name: str
    location: str
    total_area: float
    owner_id: UUID
    fields: List[Field] = ModelField(default_factory=list)


class Sensor(ApiModel):
    id: UUID = ModelField(default_factory=uuid4)
    serial: str
    sensor_type: SensorType
    owner_id: UUID
    field_id: UUID
    created_at: datetime = ModelField(default_factory=lambda: datetime.now(timezone.utc))


# ---------- Requests ----------

class CreatePropertyRequest(ApiModel):
    name: str = ModelField(min_length=1, max_length=100)
    location: str = ModelField(min_length=1, max_length=150)
    total_area: float = ModelField(gt=0)


class CreateFieldRequest(ApiModel):
    name: str = ModelField(min_length=1, max_length=100)
    crop_type: str = ModelField(min_length=1, max_length=100)
    area: float = ModelField(ge=0.01)


# ---------- Responses ----------

class FieldResponse(ApiModel):
    field_id: UUID
    name: str
    crop_type: str
    area: float


class PropertyResponse(ApiModel):
    id: UUID
    name: str
    location: str
    total_area: float
    owner_id: UUID
    fields: List[FieldResponse] = ModelField(default_factory=list)


class SensorResponse(ApiModel):
    id: UUID
    serial: str
    sensor_type: SensorType
    owner_id: UUID
    field_id: UUID
    created_at: datetime


class ErrorResponse(BaseModel):
    """Body of every failed request."""
    error: str
    message: str
