"""
Unit tests for unit conversion and recycling status.
"""

import pytest

from app.models.waste import (
    QUANTITY_EPSILON,
    WasteStatus,
    WasteUnit,
    status_for,
    to_kilograms,
)


@pytest.mark.unit
class TestUnitConversion:
    """Quantities are stored in kilograms."""

    @pytest.mark.parametrize(
        "quantity,unit,expected",
        [
            (12.5, WasteUnit.KG, 12.5),
            (500, WasteUnit.G, 0.5),
            (2, WasteUnit.T, 2000.0),
            (100, WasteUnit.LB, 45.3592),
        ],
    )
    def test_to_kilograms(self, quantity, unit, expected):
        assert to_kilograms(quantity, unit) == pytest.approx(expected)

    def test_accepts_unit_string(self):
        assert to_kilograms(3, "T") == pytest.approx(3000.0)

    def test_unknown_unit_rejected(self):
        with pytest.raises(ValueError):
            to_kilograms(1, "OZ")


@pytest.mark.unit
class TestStatusFor:
    """Status derives from how much of the quantity has been recycled."""

    def test_nothing_recycled(self):
        assert status_for(100.0, 0.0) is WasteStatus.PARTIALLY_RECYCLED

    def test_partially_recycled(self):
        assert status_for(100.0, 60.0) is WasteStatus.PARTIALLY_RECYCLED

    def test_fully_recycled(self):
        assert status_for(100.0, 100.0) is WasteStatus.FULLY_RECYCLED

    def test_within_tolerance_counts_as_full(self):
        assert status_for(100.0, 100.0 - QUANTITY_EPSILON / 2) is WasteStatus.FULLY_RECYCLED

    def test_just_outside_tolerance(self):
        assert status_for(100.0, 100.0 - QUANTITY_EPSILON * 10) is WasteStatus.PARTIALLY_RECYCLED
