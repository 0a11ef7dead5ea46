"""
Recycling process schemas.
"""

from datetime import date

from pydantic import Field

from app.features.waste_data.schemas import RecyclingProcessRead
from app.models.waste import WasteStatus
from app.schemas.common import BaseSchema


class RecyclingProcessCreate(BaseSchema):
    waste_data_id: str = Field(..., min_length=1)
    quantity_recycled: float = Field(..., gt=0, description="Kilograms")
    recycled_date: date


class RecyclingProcessResult(BaseSchema):
    """The recorded process plus the parent entry's new totals."""

    process: RecyclingProcessRead
    recycled_quantity: float
    quantity: float
    status: WasteStatus
