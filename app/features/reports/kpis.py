"""
Carbon KPI formulas.

All factors are kilograms of CO2e per kilogram recycled (or per km driven).
"""

from dataclasses import asdict, dataclass
from typing import Iterable

EMISSIONS_AVOIDED_PER_KG = 2.5
LOGISTICS_EMISSIONS_PER_KM = 0.1
RECYCLING_EMISSIONS_PER_KG = 0.5
# Placeholder until waste generated is tracked separately from waste recycled
DIVERSION_RATE = 85.0
CARS_PER_TONNE_NET = 0.22
TREES_PER_TONNE = 17
LANDFILL_M3_PER_TONNE = 3


@dataclass(frozen=True)
class KPIs:
    total_weight_recycled: float
    total_waste_generated: float
    emissions_avoided: float
    logistics_emissions: float
    recycling_emissions: float
    net_impact: float
    diversion_rate: float
    cars_off_road_equivalent: float
    trees_saved: float
    landfill_space_saved: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def compute_kpis(total_recycled_kg: float, distances_km: Iterable[float | None]) -> KPIs:
    """
    Derive every stored KPI from recycled kilograms and entry distances.

    ``distances_km`` holds one value per waste entry with activity in the
    window; None counts as zero. Results are rounded to 2 decimals.
    """
    kg = total_recycled_kg
    emissions_avoided = kg * EMISSIONS_AVOIDED_PER_KG
    logistics = sum((d or 0.0) * LOGISTICS_EMISSIONS_PER_KM for d in distances_km)
    recycling = kg * RECYCLING_EMISSIONS_PER_KG
    net = emissions_avoided - (logistics + recycling)

    return KPIs(
        total_weight_recycled=round(kg, 2),
        total_waste_generated=round(kg / (DIVERSION_RATE / 100), 2),
        emissions_avoided=round(emissions_avoided, 2),
        logistics_emissions=round(logistics, 2),
        recycling_emissions=round(recycling, 2),
        net_impact=round(net, 2),
        diversion_rate=round(DIVERSION_RATE, 2),
        cars_off_road_equivalent=round((net / 1000) * CARS_PER_TONNE_NET, 2),
        trees_saved=round((kg / 1000) * TREES_PER_TONNE, 2),
        landfill_space_saved=round((kg / 1000) * LANDFILL_M3_PER_TONNE, 2),
    )
