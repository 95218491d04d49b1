# core/property_service.py

from typing import List
from uuid import UUID, uuid4

from .exceptions import HttpError, ModifyDatabaseError, NotFoundError, UnexpectedError
from .logging_config import get_logger
from .models import Field, FieldResponse, Property, PropertyResponse
from .ownership import OwnershipValidator
from .ports import PropertyStore

logger = get_logger(__name__)

class PropertyService:
    """
    Farmer-scoped operations on properties and the fields they contain.
    Every operation confirms the farmer exists before touching the store.
    """
    def __init__(self, ownership: OwnershipValidator, property_store: PropertyStore):
        self.ownership = ownership
        self.property_store = property_store

    async def list_properties(self, farmer_id: UUID) -> List[PropertyResponse]:
        await self.ownership.ensure_farmer_exists(farmer_id)

        try:
            properties = await self.property_store.list_by_owner(farmer_id)
        except Exception as e:
            raise UnexpectedError(e) from e

        return [to_property_response(p) for p in properties]

    async def get_property(self, farmer_id: UUID, property_id: UUID) -> PropertyResponse:
        await self.ownership.ensure_farmer_exists(farmer_id)

        property = await self._get_owned_property(farmer_id, property_id)
        return to_property_response(property)

    async def create_property(self, farmer_id: UUID, name: str, location: str, total_area: float) -> PropertyResponse:
        await self.ownership.ensure_farmer_exists(farmer_id)

        property = Property(
            id=uuid4(),
            name=name,
            location=location,
            total_area=total_area,
            owner_id=farmer_id,
            fields=[],
        )

        try:
            await self.property_store.create(property)
        except Exception as e:
            logger.error("Failed to create property '%s' for farmer %s", name, farmer_id, exc_info=True)
            raise ModifyDatabaseError(e) from e

        logger.info("Property '%s' created for farmer %s", name, farmer_id)
        return to_property_response(property)

    async def add_field(self, farmer_id: UUID, property_id: UUID, name: str, crop_type: str, area: float) -> PropertyResponse:
        """
        Appends a new field and writes the whole property back.

        This is read-modify-write with no version check: two concurrent
        additions to the same property race and the last replace wins.
        """
        try:
            await self.ownership.ensure_farmer_exists(farmer_id)

            property = await self._get_owned_property(farmer_id, property_id)
            property.fields.append(Field(field_id=uuid4(), name=name, crop_type=crop_type, area=area))

            try:
                await self.property_store.replace(property)
            except Exception as e:
                logger.error("Failed to add field '%s' to property '%s'", name, property.name, exc_info=True)
                raise ModifyDatabaseError(e) from e

            logger.info("Field '%s' added to property '%s'", name, property.name)
            return to_property_response(property)
        except HttpError:
            raise
        except Exception as e:
            raise UnexpectedError(e) from e

    async def _get_owned_property(self, farmer_id: UUID, property_id: UUID) -> Property:
        try:
            property = await self.property_store.get_by_id(property_id)
        except Exception as e:
            raise UnexpectedError(e) from e


        # Someone else's property looks exactly like a missing one
        if property is None or property.owner_id != farmer_id:
            raise NotFoundError("Property not found")
        return property


def to_property_response(property: Property) -> PropertyResponse:
    return PropertyResponse(
        id=property.id,
        name=property.name,
        location=property.location,
        total_area=property.total_area,
        owner_id=property.owner_id,
        fields=[
            FieldResponse(field_id=f.field_id, name=f.name, crop_type=f.crop_type, area=f.area)
            for f in property.fields
        ],
    )
