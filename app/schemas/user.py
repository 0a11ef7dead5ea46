"""
Pydantic schemas for User.
"""

from datetime import datetime

from pydantic import EmailStr, Field, model_validator

from app.models.role import UserRole
from app.schemas.common import BaseSchema


class UserRead(BaseSchema):
    """Safe user fields; never includes the password hash."""

    id: str
    email: EmailStr
    name: str
    role: UserRole
    tenant_id: str | None = None
    created_at: datetime


class UserCreate(BaseSchema):
    """Admin creates a user in their own tenant."""

    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    role: UserRole


class UserUpdate(BaseSchema):
    """Partial update by a tenant admin; tenant is fixed."""

    name: str | None = Field(None, min_length=2, max_length=255)
    email: EmailStr | None = None
    role: UserRole | None = None
    password: str | None = Field(None, min_length=8, max_length=100)


class ProfileUpdate(BaseSchema):
    name: str = Field(..., min_length=2, max_length=255)


class PasswordChange(BaseSchema):
    """Self-service password change."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=100)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordChange":
        if self.new_password != self.confirm_password:
            raise ValueError("New passwords do not match")
        return self
