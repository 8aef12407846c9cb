"""Static region catalog.

Reference values are 2024 regional aggregates. The catalog is built once at
import time and never mutated; concurrent readers need no locking.
"""

from __future__ import annotations

from ghis.simulation.models import Region

REGIONS: tuple[Region, ...] = (
    Region(
        id="global",
        name="Global Average",
        population=8_000_000_000,
        baseline_mortality=45,
        baseline_gdp=12_000,
        description="Worldwide aggregate health and economic simulation.",
    ),
    Region(
        id="sub_saharan_africa",
        name="Sub-Saharan Africa",
        population=1_100_000_000,
        baseline_mortality=76,
        baseline_gdp=1_600,
        description="High burden of infectious diseases, developing infrastructure.",
        countries=(
            "Nigeria", "Ethiopia", "DR Congo", "South Africa", "Kenya",
            "Uganda", "Sudan", "Angola", "Ghana", "Mozambique",
        ),
    ),
    Region(
        id="southeast_asia",
        name="Southeast Asia",
        population=675_000_000,
        baseline_mortality=60,
        baseline_gdp=4_500,
        description="Rapidly industrializing, mixed healthcare access.",
        countries=(
            "Indonesia", "Vietnam", "Thailand", "Philippines", "Malaysia",
            "Myanmar", "Cambodia", "Laos", "Singapore",
        ),
    ),
    Region(
        id="south_america",
        name="South America",
        population=430_000_000,
        baseline_mortality=55,
        baseline_gdp=8_500,
        description="Urbanized population, challenges with inequality and vector-borne diseases.",
        countries=(
            "Brazil", "Colombia", "Argentina", "Peru", "Venezuela",
            "Chile", "Ecuador", "Bolivia", "Paraguay", "Uruguay",
        ),
    ),
    Region(
        id="south_asia",
        name="South Asia",
        population=1_900_000_000,
        baseline_mortality=62,
        baseline_gdp=2_200,
        description="High population density, dual burden of communicable and lifestyle diseases.",
        countries=(
            "India", "Pakistan", "Bangladesh", "Sri Lanka", "Nepal",
            "Afghanistan", "Bhutan", "Maldives",
        ),
    ),
    Region(
        id="western_europe",
        name="Western Europe",
        population=196_000_000,
        baseline_mortality=12,
        baseline_gdp=45_000,
        description="Aging population, advanced healthcare, focus on chronic diseases.",
        countries=(
            "Germany", "United Kingdom", "France", "Italy", "Spain",
            "Netherlands", "Belgium", "Sweden", "Switzerland", "Portugal",
        ),
    ),
)

_BY_ID: dict[str, Region] = {r.id: r for r in REGIONS}
_BY_NAME: dict[str, Region] = {r.name.lower(): r for r in REGIONS}


def _key(name: str) -> str:
    return " ".join(name.lower().split())


def list_regions() -> list[Region]:
    """Return catalog regions in catalog order."""
    return list(REGIONS)


def get_region(identifier: str) -> Region | None:
    """Look a region up by id or display name (case-insensitive)."""
    key = _key(identifier)
    return _BY_ID.get(key) or _BY_ID.get(key.replace(" ", "_")) or _BY_NAME.get(key)


def find_parent_region(country: str) -> Region | None:
    """Return the catalog region listing *country* as a constituent."""
    key = _key(country)
    for region in REGIONS:
        if any(_key(c) == key for c in region.countries):
            return region
    return None


def all_country_names() -> list[str]:
    """Every constituent country across the catalog, in catalog order."""
    return [c for r in REGIONS for c in r.countries]


def make_custom_region(name: str, parent: Region | None = None) -> Region:
    """Build an estimated region for a user-entered name or country drill-down.

    Population, mortality and GDP are zero placeholders for the resolver.
    """
    slug = _key(name).replace(" ", "_")
    if parent is not None:
        return Region(
            id=f"specific_{slug}",
            name=name,
            description=f"Specific analysis for {name} within {parent.name}.",
            is_estimated=True,
        )
    return Region(
        id=f"custom_{slug}",
        name=name,
        description="Custom selected region. Baseline data will be estimated.",
        is_estimated=True,
    )
