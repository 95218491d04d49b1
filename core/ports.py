"""
Persistence contracts used by the domain services.

The services only know these protocols; the MongoDB stores in this package
are one implementation. Every method may raise whatever the backing driver
raises. Callers are responsible for classifying those failures.
"""

from abc import abstractmethod
from typing import List, Optional, Protocol
from uuid import UUID

from .models import Farmer, Property, Sensor


class FarmerReader(Protocol):
    """Read-only access to farmer identity records."""

    @abstractmethod
    async def get_by_id(self, farmer_id: UUID) -> Optional[Farmer]:
        """Returns the farmer, or None if no such farmer exists."""
        ...


class PropertyStore(Protocol):
    """Persistence for Property aggregates (fields included)."""

    @abstractmethod
    async def create(self, property: Property) -> None:
        ...

    @abstractmethod
    async def list_by_owner(self, owner_id: UUID) -> List[Property]:
        """Returns every property owned by owner_id, empty if none."""
        ...

    @abstractmethod
    async def get_by_id(self, property_id: UUID) -> Optional[Property]:
        ...

    @abstractmethod
    async def replace(self, property: Property) -> None:
        """
        Overwrites the stored document with the same id as property.

        This is the only way an aggregate is mutated: adding a field means
        replacing the whole property.
        """
        ...


class SensorStore(Protocol):
    """Persistence for sensors. Creation happens elsewhere."""

    @abstractmethod
    async def get_by_id(self, sensor_id: UUID) -> Optional[Sensor]:
        ...

    @abstractmethod
    async def list_by_owner(self, owner_id: UUID) -> List[Sensor]:
        ...

    @abstractmethod
    async def delete_by_id(self, sensor_id: UUID) -> None:
        ...
