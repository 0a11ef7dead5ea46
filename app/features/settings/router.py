"""
Settings endpoints: profile, password and tenant logistics lookups.
"""

from typing import Annotated, Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel as PydanticModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.auth.dependencies import CurrentTenant, CurrentUser
from app.features.settings.schemas import (
    AddressedItemCreate,
    AddressedItemRead,
    AddressedItemUpdate,
    ProfileRead,
    VehicleTypeCreate,
    VehicleTypeRead,
    VehicleTypeUpdate,
)
from app.features.settings.service import (
    LookupService,
    facility_service,
    pickup_location_service,
    profile_service,
    vehicle_type_service,
)
from app.schemas.common import MessageResponse
from app.schemas.tenant import TenantRead
from app.schemas.user import PasswordChange, ProfileUpdate, UserRead

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/profile", response_model=ProfileRead)
async def get_profile(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileRead:
    user, tenant = await profile_service.get_profile(db, current_user)
    return ProfileRead(
        user=UserRead.model_validate(user),
        tenant=TenantRead.model_validate(tenant) if tenant else None,
    )


@router.put("/profile", response_model=UserRead)
async def update_profile(
    data: ProfileUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRead:
    """Change the display name. Email is fixed."""
    user = await profile_service.update_name(db, current_user, data.name)
    return UserRead.model_validate(user)


@router.put("/password", response_model=MessageResponse)
async def change_password(
    data: PasswordChange,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    await profile_service.change_password(db, current_user, data)
    return MessageResponse(message="Password updated successfully")


def _mount_lookup(
    path: str,
    service: LookupService,
    create_schema: Type[PydanticModel],
    update_schema: Type[PydanticModel],
    read_schema: Type[PydanticModel],
) -> None:
    """Register list/create/update/delete routes for one lookup under ``/settings/{path}``."""

    @router.get(f"/{path}", response_model=list[read_schema], name=f"list_{path}")
    async def list_items(ctx: CurrentTenant, db: Annotated[AsyncSession, Depends(get_db)]):
        return [read_schema.model_validate(i) for i in await service.list_items(db, ctx.tenant_id)]

    @router.post(
        f"/{path}",
        response_model=read_schema,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{path}",
    )
    async def create_item(
        data: create_schema,
        ctx: CurrentTenant,
        db: Annotated[AsyncSession, Depends(get_db)],
    ):
        return read_schema.model_validate(await service.create(db, data, ctx.tenant_id))

    @router.put(f"/{path}/{{item_id}}", response_model=read_schema, name=f"update_{path}")
    async def update_item(
        item_id: str,
        data: update_schema,
        ctx: CurrentTenant,
        db: Annotated[AsyncSession, Depends(get_db)],
    ):
        return read_schema.model_validate(await service.update(db, item_id, data, ctx.tenant_id))

    @router.delete(f"/{path}/{{item_id}}", response_model=MessageResponse, name=f"delete_{path}")
    async def delete_item(
        item_id: str,
        ctx: CurrentTenant,
        db: Annotated[AsyncSession, Depends(get_db)],
    ):
        await service.delete(db, item_id, ctx.tenant_id)
        return MessageResponse(message=f"{service.label} deleted successfully")


_mount_lookup("facilities", facility_service, AddressedItemCreate, AddressedItemUpdate, AddressedItemRead)
_mount_lookup("pickup-locations", pickup_location_service, AddressedItemCreate, AddressedItemUpdate, AddressedItemRead)
_mount_lookup("vehicle-types", vehicle_type_service, VehicleTypeCreate, VehicleTypeUpdate, VehicleTypeRead)
