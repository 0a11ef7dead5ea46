"""
Client schemas.
"""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import BaseSchema


def _blank_to_none(v):
    # The client form submits an empty string when no email is given
    if isinstance(v, str) and not v.strip():
        return None
    return v


class ClientCreate(BaseSchema):
    company_name: str = Field(..., min_length=2, max_length=255, description="Client company name")
    contact_person: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        return _blank_to_none(v)


class ClientUpdate(BaseSchema):
    company_name: str | None = Field(None, min_length=2, max_length=255)
    contact_person: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        return _blank_to_none(v)


class ClientRead(BaseSchema):
    id: str
    company_name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    tenant_id: str
    created_by_id: str | None = None
    created_at: datetime
    updated_at: datetime
