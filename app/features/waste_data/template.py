"""
Bulk-entry spreadsheet template.

The first sheet holds the entry columns; the remaining sheets list the ids
and names a user can reference when filling it in.
"""

import io

import openpyxl
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from app.models.catalog import RecyclingTechnology, WasteCategory
from app.models.logistics import Facility, PickupLocation, VehicleType
from app.models.waste import WasteUnit

ENTRY_COLUMNS = (
    "client_id",
    "waste_type_id",
    "quantity",
    "unit",
    "recycled_date",
    "pickup_date",
    "recycling_technology_id",
    "facility_id",
    "pickup_location_id",
    "vehicle_type_id",
    "pickup_address",
    "facility_address",
    "distance_km",
)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill("solid", fgColor="2E7D32")


def _write_table(sheet, headers: tuple[str, ...], rows: list[tuple]) -> None:
    for col, header in enumerate(headers, start=1):
        cell = sheet.cell(row=1, column=col, value=header)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        sheet.column_dimensions[get_column_letter(col)].width = max(14, len(header) + 4)

    for row_idx, record in enumerate(rows, start=2):
        for col, value in enumerate(record, start=1):
            sheet.cell(row=row_idx, column=col, value=value)

    sheet.freeze_panes = "A2"


def build_template(
    categories: list[WasteCategory],
    technologies: list[RecyclingTechnology],
    facilities: list[Facility],
    pickup_locations: list[PickupLocation],
    vehicle_types: list[VehicleType],
) -> bytes:
    """Render the workbook and return the ``.xlsx`` bytes."""
    workbook = openpyxl.Workbook()

    entries = workbook.active
    entries.title = "Waste Entries"
    _write_table(entries, ENTRY_COLUMNS, [])
    entries.cell(row=2, column=ENTRY_COLUMNS.index("unit") + 1, value=WasteUnit.KG.value)

    _write_table(
        workbook.create_sheet("Waste Types"),
        ("id", "name", "category"),
        [(t.id, t.name, c.name) for c in categories for t in c.waste_types],
    )
    _write_table(
        workbook.create_sheet("Technologies"),
        ("id", "name"),
        [(t.id, t.name) for t in technologies],
    )
    _write_table(
        workbook.create_sheet("Facilities"),
        ("id", "name", "full_address"),
        [(f.id, f.name, f.full_address) for f in facilities],
    )
    _write_table(
        workbook.create_sheet("Pickup Locations"),
        ("id", "name", "full_address"),
        [(p.id, p.name, p.full_address) for p in pickup_locations],
    )
    _write_table(
        workbook.create_sheet("Vehicle Types"),
        ("id", "name"),
        [(v.id, v.name) for v in vehicle_types],
    )
    _write_table(
        workbook.create_sheet("Units"),
        ("unit",),
        [(u.value,) for u in WasteUnit],
    )

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
