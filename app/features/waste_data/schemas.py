"""
Waste entry schemas.
"""

from datetime import date, datetime

from pydantic import Field, field_validator

from app.models.waste import WasteStatus, WasteUnit
from app.schemas.common import BaseSchema

_OPTIONAL_FIELDS = (
    "recycling_technology_id",
    "facility_id",
    "pickup_location_id",
    "vehicle_type_id",
    "pickup_address",
    "facility_address",
    "vehicle_type",
    "distance_km",
    "pickup_date",
)


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class WasteDataCreate(BaseSchema):
    """Fields of the multipart create form. Quantity is in ``unit``, not yet kilograms."""

    client_id: str = Field(..., min_length=1)
    waste_type_id: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0)
    unit: WasteUnit
    recycled_date: date
    pickup_date: date | None = None
    recycling_technology_id: str | None = None
    facility_id: str | None = None
    pickup_location_id: str | None = None
    vehicle_type_id: str | None = None
    pickup_address: str | None = None
    facility_address: str | None = None
    vehicle_type: str | None = None
    distance_km: float | None = Field(None, ge=0)

    @field_validator(*_OPTIONAL_FIELDS, mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        """Multipart forms send empty strings for untouched inputs."""
        return _blank_to_none(v)

    @field_validator("unit", mode="before")
    @classmethod
    def upper_unit(cls, v):
        return v.upper() if isinstance(v, str) else v


class WasteDataUpdate(BaseSchema):
    """Partial update. ``quantity`` is expressed in ``unit`` (or the stored unit)."""

    waste_type_id: str | None = None
    quantity: float | None = Field(None, gt=0)
    unit: WasteUnit | None = None
    recycled_date: date | None = None
    pickup_date: date | None = None
    recycling_technology_id: str | None = None
    facility_id: str | None = None
    pickup_location_id: str | None = None
    vehicle_type_id: str | None = None
    pickup_address: str | None = None
    facility_address: str | None = None
    vehicle_type: str | None = None
    distance_km: float | None = Field(None, ge=0)

    @field_validator(*_OPTIONAL_FIELDS, mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)


class RecyclingProcessRead(BaseSchema):
    id: str
    waste_data_id: str
    quantity_recycled: float
    recycled_date: date
    created_at: datetime


class WasteDataRead(BaseSchema):
    id: str
    client_id: str
    tenant_id: str
    waste_type_id: str
    recycling_technology_id: str | None = None
    facility_id: str | None = None
    pickup_location_id: str | None = None
    vehicle_type_id: str | None = None
    quantity: float = Field(..., description="Kilograms")
    unit: WasteUnit
    recycled_quantity: float
    status: WasteStatus
    pickup_date: date | None = None
    recycled_date: date
    distance_km: float | None = None
    pickup_address: str | None = None
    facility_address: str | None = None
    vehicle_type: str | None = None
    image_urls: list[str] = []
    created_at: datetime


class WasteDataDetail(WasteDataRead):
    """List row with names resolved for display."""

    waste_type_name: str
    waste_category_name: str
    recycling_technology_name: str | None = None
    recycling_processes: list[RecyclingProcessRead] = []
