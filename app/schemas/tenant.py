"""
Pydantic schemas for Tenant.
"""

from datetime import datetime

from app.schemas.common import BaseSchema


class TenantRead(BaseSchema):
    """Schema for reading tenant data."""

    id: str
    company_name: str
    is_active: bool
    created_at: datetime
