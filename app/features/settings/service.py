"""
Settings business logic.

Profile and password for the signed-in user, plus one generic CRUD helper
reused for each tenant-owned logistics lookup (facilities, pickup
locations, vehicle types).
"""

from typing import Generic, Type, TypeVar

import structlog
from pydantic import BaseModel as PydanticModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationError
from app.core.security import hash_password, verify_password
from app.core.tenant import delete_owned, get_owned_or_404, tenant_scoped_query, update_owned
from app.models.logistics import Facility, PickupLocation, VehicleType
from app.models.tenant import Tenant
from app.models.user import User
from app.schemas.user import PasswordChange

logger = structlog.get_logger(__name__)

M = TypeVar("M", Facility, PickupLocation, VehicleType)


class LookupService(Generic[M]):
    """Tenant-scoped CRUD for a named lookup model."""

    def __init__(self, model: Type[M], label: str):
        self.model = model
        self.label = label

    async def list_items(self, db: AsyncSession, tenant_id: str) -> list[M]:
        result = await db.execute(
            tenant_scoped_query(self.model, tenant_id).order_by(self.model.name)
        )
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, data: PydanticModel, tenant_id: str) -> M:
        item = self.model(**data.model_dump(), tenant_id=tenant_id)
        db.add(item)
        await db.commit()
        await db.refresh(item)
        logger.info("lookup_created", kind=self.label, item_id=item.id)
        return item

    async def update(self, db: AsyncSession, item_id: str, data: PydanticModel, tenant_id: str) -> M:
        values = data.model_dump(exclude_unset=True)
        if values:
            await update_owned(db, self.model, item_id, tenant_id, values, label=self.label)
            await db.commit()
        item = await get_owned_or_404(db, self.model, item_id, tenant_id, label=self.label)
        await db.refresh(item)
        return item

    async def delete(self, db: AsyncSession, item_id: str, tenant_id: str) -> None:
        await delete_owned(db, self.model, item_id, tenant_id, label=self.label)
        await db.commit()
        logger.info("lookup_deleted", kind=self.label, item_id=item_id)


facility_service = LookupService(Facility, "Facility")
pickup_location_service = LookupService(PickupLocation, "Pickup location")
vehicle_type_service = LookupService(VehicleType, "Vehicle type")


class ProfileService:
    """The signed-in user's own account."""

    @staticmethod
    async def get_profile(db: AsyncSession, user: User) -> tuple[User, Tenant | None]:
        tenant = await db.get(Tenant, user.tenant_id) if user.tenant_id else None
        return user, tenant

    @staticmethod
    async def update_name(db: AsyncSession, user: User, name: str) -> User:
        """Email is not editable here."""
        user.name = name
        await db.commit()
        await db.refresh(user)
        return user

    @staticmethod
    async def change_password(db: AsyncSession, user: User, data: PasswordChange) -> None:
        """
        Raises:
            ValidationError: current password is wrong
        """
        if not verify_password(data.current_password, user.hashed_password):
            raise ValidationError("Current password is incorrect")

        user.hashed_password = hash_password(data.new_password)
        await db.commit()
        logger.info("password_changed", user_id=user.id)


profile_service = ProfileService()
