"""
User management endpoints. ADMIN role only.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.auth.dependencies import TenantAdmin
from app.features.users.service import user_service
from app.schemas.common import MessageResponse
from app.schemas.user import UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[UserRead])
async def list_users(
    ctx: TenantAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[UserRead]:
    users = await user_service.list_users(db, ctx.tenant_id)
    return [UserRead.model_validate(u) for u in users]


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    ctx: TenantAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRead:
    """
    Add a user to the caller's tenant.

    At most five users per tenant; SUPER_ADMIN cannot be assigned.
    """
    user = await user_service.create_user(db, data, ctx.tenant_id)
    return UserRead.model_validate(user)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    data: UserUpdate,
    ctx: TenantAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRead:
    user = await user_service.update_user(db, user_id, data, ctx.tenant_id)
    return UserRead.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    ctx: TenantAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    await user_service.delete_user(db, user_id, ctx.tenant_id, ctx.user_id)
    return MessageResponse(message="User deleted successfully.")
