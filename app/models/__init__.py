"""
Database models package.
"""

from app.core.database import Base
from app.models.base import BaseModel
from app.models.catalog import MasterReportQuestion, RecyclingTechnology, WasteCategory, WasteType
from app.models.client import Client
from app.models.logistics import Facility, PickupLocation, VehicleType
from app.models.report import Report, ReportQuestion
from app.models.role import Permission, UserRole
from app.models.tenant import Tenant
from app.models.user import User
from app.models.waste import RecyclingProcess, WasteData, WasteStatus, WasteUnit

__all__ = [
    "Base",
    "BaseModel",
    "Tenant",
    "User",
    "UserRole",
    "Permission",
    "Client",
    "WasteCategory",
    "WasteType",
    "RecyclingTechnology",
    "MasterReportQuestion",
    "Facility",
    "PickupLocation",
    "VehicleType",
    "WasteData",
    "WasteStatus",
    "WasteUnit",
    "RecyclingProcess",
    "Report",
    "ReportQuestion",
]
