"""
Pydantic schemas package.
"""

from app.schemas.common import BaseSchema, ErrorResponse, MessageResponse, NamedRef
from app.schemas.tenant import TenantRead
from app.schemas.user import PasswordChange, ProfileUpdate, UserCreate, UserRead, UserUpdate

__all__ = [
    # Common
    "BaseSchema",
    "MessageResponse",
    "ErrorResponse",
    "NamedRef",
    # Tenant
    "TenantRead",
    # User
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "ProfileUpdate",
    "PasswordChange",
]
