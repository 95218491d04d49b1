"""
Translation between domain models and stored documents.

Documents share their collections with the identity and device services, so
they keep the PascalCase keys those services write and store the entity id
under ``_id``.
"""

from typing import Any, Dict, Union

from .models import Farmer, Field, Property, Sensor, SensorType


def farmer_from_document(doc: Dict[str, Any]) -> Farmer:
    return Farmer(
        id=doc["_id"],
        name=doc["Name"],
        email=doc["Email"],
        password_hash=doc["PasswordHash"],
    )


def field_to_document(field: Field) -> Dict[str, Any]:
    return {
        "FieldId": field.field_id,
        "Name": field.name,
        "CropType": field.crop_type,
        "Area": field.area,
    }


def field_from_document(doc: Dict[str, Any]) -> Field:
    return Field(
        field_id=doc["FieldId"],
        name=doc["Name"],
        crop_type=doc["CropType"],
        area=doc["Area"],
    )


def property_to_document(property: Property) -> Dict[str, Any]:
    return {
        "_id": property.id,
        "Name": property.name,
        "Location": property.location,
        "TotalArea": property.total_area,
        "OwnerId": property.owner_id,
        "Fields": [field_to_document(f) for f in property.fields],
    }


def property_from_document(doc: Dict[str, Any]) -> Property:
    return Property(
        id=doc["_id"],
        name=doc["Name"],
        location=doc["Location"],
        total_area=doc["TotalArea"],
        owner_id=doc["OwnerId"],
        fields=[field_from_document(f) for f in doc.get("Fields") or []],
    )


def sensor_from_document(doc: Dict[str, Any]) -> Sensor:
    return Sensor(
        id=doc["_id"],
        serial=doc["Serial"],
        sensor_type=sensor_type_from_document(doc["SensorType"]),
        owner_id=doc["OwnerId"],
        field_id=doc["FieldId"],
        created_at=doc["CreatedAt"],
    )


def sensor_type_from_document(value: Union[int, str]) -> SensorType:
    # The device service's driver writes enums as their ordinal by default
    if isinstance(value, int):
        members = list(SensorType)
        if not 0 <= value < len(members):
            raise ValueError(f"Unknown sensor type ordinal: {value}")
        return members[value]
    return SensorType(value)
