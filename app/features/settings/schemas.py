"""
Settings schemas: profile and tenant logistics lookups.
"""

from datetime import datetime

from pydantic import Field

from app.schemas.common import BaseSchema
from app.schemas.tenant import TenantRead
from app.schemas.user import UserRead


class ProfileRead(BaseSchema):
    user: UserRead
    tenant: TenantRead | None = None


class AddressedItemCreate(BaseSchema):
    """Facility or pickup location."""

    name: str = Field(..., min_length=2, max_length=255)
    full_address: str = Field(..., min_length=1)


class AddressedItemUpdate(BaseSchema):
    name: str | None = Field(None, min_length=2, max_length=255)
    full_address: str | None = Field(None, min_length=1)


class AddressedItemRead(BaseSchema):
    id: str
    name: str
    full_address: str
    tenant_id: str
    created_at: datetime


class VehicleTypeCreate(BaseSchema):
    name: str = Field(..., min_length=2, max_length=255)


class VehicleTypeUpdate(BaseSchema):
    name: str | None = Field(None, min_length=2, max_length=255)


class VehicleTypeRead(BaseSchema):
    id: str
    name: str
    tenant_id: str
    created_at: datetime
