"""
Authentication-specific schemas.
"""

from pydantic import EmailStr, Field

from app.models.role import Permission
from app.schemas.common import BaseSchema
from app.schemas.user import UserRead


class LoginRequest(BaseSchema):
    email: EmailStr = Field(..., description="User email")
    password: str = Field(..., min_length=1, description="User password")


class TokenResponse(BaseSchema):
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    user: UserRead


class RegisterRequest(BaseSchema):
    """Seed/admin registration of a member into an existing tenant."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    name: str = Field(..., min_length=2, max_length=255)
    tenant_id: str


class RegisterResponse(BaseSchema):
    message: str = "User registered successfully"
    user_id: str


class MeResponse(UserRead):
    """Current user with role-derived navigation and permissions."""

    home_path: str
    permissions: list[Permission]
    tenant_company_name: str | None = None
