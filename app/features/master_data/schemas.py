"""
Master data schemas: everything the entry and report forms need to populate
their dropdowns in one response.
"""

from app.features.settings.schemas import AddressedItemRead, VehicleTypeRead
from app.schemas.common import BaseSchema, NamedRef


class WasteTypeRead(NamedRef):
    category_id: str


class WasteCategoryRead(NamedRef):
    waste_types: list[WasteTypeRead] = []


class RecyclingTechnologyRead(NamedRef):
    description: str | None = None


class MasterQuestionRead(BaseSchema):
    id: str
    text: str
    display_order: int


class MasterDataResponse(BaseSchema):
    waste_categories: list[WasteCategoryRead]
    recycling_technologies: list[RecyclingTechnologyRead]
    report_questions: list[MasterQuestionRead]
    facilities: list[AddressedItemRead]
    pickup_locations: list[AddressedItemRead]
    vehicle_types: list[VehicleTypeRead]
