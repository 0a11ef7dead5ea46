"""
Authentication dependencies for dependency injection.
"""

from dataclasses import dataclass
from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import forbidden, unauthorized
from app.core.security import decode_token
from app.models.role import Permission, UserRole
from app.models.user import User

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Resolve the bearer token to a user.

    Missing, malformed, expired or orphaned tokens all answer 401.
    """
    if not credentials:
        raise unauthorized("Authentication required")

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise unauthorized("Invalid or expired token")

    if payload.get("type") != "access":
        raise unauthorized("Invalid token type")

    user_id: str | None = payload.get("sub")
    if not user_id:
        raise unauthorized("Invalid token payload")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        logger.warning("token_user_missing", user_id=user_id)
        raise unauthorized("User not found")

    request.state.user_id = user.id
    request.state.tenant_id = user.tenant_id
    structlog.contextvars.bind_contextvars(
        user_id=user.id,
        tenant_id=user.tenant_id,
        role=user.role,
    )

    return user


@dataclass(frozen=True)
class TenantContext:
    """Authenticated tenant user plus the tenant id every query filters on."""

    user: User
    tenant_id: str

    @property
    def user_id(self) -> str:
        return self.user.id


async def get_tenant_context(
    current_user: Annotated[User, Depends(get_current_user)],
) -> TenantContext:
    """Tenant-scoped routes are closed to accounts without a tenant."""
    if current_user.tenant_id is None:
        raise forbidden("This resource requires a tenant account")
    return TenantContext(user=current_user, tenant_id=current_user.tenant_id)


async def require_super_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    if current_user.role_enum is not UserRole.SUPER_ADMIN:
        raise forbidden("Super admin access required")
    return current_user


def require_permission(permission: Permission):
    """
    Dependency factory for permission checks on tenant routes.

    Usage:
        @router.get("/users")
        async def list_users(ctx: TenantContext = Depends(require_permission(Permission.USERS_MANAGE))):
            ...
    """
    async def permission_checker(
        ctx: Annotated[TenantContext, Depends(get_tenant_context)],
    ) -> TenantContext:
        if not ctx.user.has_permission(permission):
            raise forbidden("Forbidden: Admin access required.")
        return ctx

    return permission_checker


# Type aliases for cleaner code
CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentTenant = Annotated[TenantContext, Depends(get_tenant_context)]
SuperAdmin = Annotated[User, Depends(require_super_admin)]
TenantAdmin = Annotated[TenantContext, Depends(require_permission(Permission.USERS_MANAGE))]
