"""Side-by-side baseline table for every catalog region.

Read-only view over the catalog plus the resolver's derived indices; the
same starting conditions every simulation uses.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from ghis.catalog.regions import REGIONS
from ghis.simulation.baseline_resolver import resolve_baseline

SortKey = Literal["mortality", "gdp"]


class RegionBaselineRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    region_id: str
    name: str
    population: int
    mortality: float
    gdp_per_capita: float
    life_expectancy: float
    disease_prevalence: float
    healthcare_access: float
    economic_index: float


def compare_regional_baselines(
    sort_by: SortKey = "mortality",
    include_global: bool = False,
) -> list[RegionBaselineRow]:
    """Return one row per catalog region, highest value of *sort_by* first.

    The global aggregate is excluded by default so regions compare directly.
    """
    if sort_by not in ("mortality", "gdp"):
        raise ValueError(f"Unknown sort key '{sort_by}'")

    rows = []
    for region in REGIONS:
        if region.id == "global" and not include_global:
            continue
        snapshot = resolve_baseline(region)
        rows.append(RegionBaselineRow(
            region_id=region.id,
            name=region.name,
            population=snapshot.population,
            mortality=snapshot.mortality,
            gdp_per_capita=snapshot.gdp_per_capita,
            life_expectancy=round(snapshot.life_expectancy, 1),
            disease_prevalence=round(snapshot.disease_prevalence, 1),
            healthcare_access=round(snapshot.healthcare_access, 1),
            economic_index=round(snapshot.economic_index, 1),
        ))

    key = (lambda r: r.mortality) if sort_by == "mortality" else (lambda r: r.gdp_per_capita)
    return sorted(rows, key=key, reverse=True)
