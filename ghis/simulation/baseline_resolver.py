"""Baseline resolver.

Turns a Region into a fully populated year-0 BaselineSnapshot. Catalog
regions use their authoritative population, mortality and GDP; estimated
regions are matched against the catalog in a fixed order and degrade to a
global default when nothing matches. Resolution never fails.

Derived indices (all total for non-negative inputs):
    life expectancy    = 40 + 50 * exp(-mortality / 90)          in (40, 90]
    healthcare access  = 100 * gdp / (gdp + 8000)                in [0, 100)
    economic index     = 100 * gdp / (gdp + 15000)               in [0, 100)
    disease prevalence = 0.3 * mortality + 25 * exp(-gdp / 10000), capped at 100
"""

from __future__ import annotations

import difflib
import logging
import math

from ghis.catalog.regions import REGIONS, all_country_names, find_parent_region, get_region
from ghis.simulation.constants import (
    COUNTRY_MATCH_CUTOFF,
    DISEASE_GDP_SCALE,
    DISEASE_MORTALITY_WEIGHT,
    DISEASE_POVERTY_WEIGHT,
    ECONOMIC_GDP_HALF_SATURATION,
    GLOBAL_DEFAULT_BASELINE,
    HEALTHCARE_GDP_HALF_SATURATION,
    LIFE_EXPECTANCY_FLOOR,
    LIFE_EXPECTANCY_MORTALITY_SCALE,
    LIFE_EXPECTANCY_SPAN,
    METRIC_BOUNDS,
    NAME_SIMILARITY_CUTOFF,
)
from ghis.simulation.models import BaselineSnapshot, BaselineSource, Region

logger = logging.getLogger(__name__)


def _clamp(value: float, metric: str) -> float:
    low, high = METRIC_BOUNDS[metric]
    return min(max(value, low), high)


# ---------------------------------------------------------------------------
# Derived indices
# ---------------------------------------------------------------------------

def derive_life_expectancy(mortality: float) -> float:
    """Inverse of mortality, bounded to [40, 90]."""
    m = max(mortality, 0.0)
    return LIFE_EXPECTANCY_FLOOR + LIFE_EXPECTANCY_SPAN * math.exp(-m / LIFE_EXPECTANCY_MORTALITY_SCALE)


def derive_healthcare_access(gdp_per_capita: float) -> float:
    g = max(gdp_per_capita, 0.0)
    return 100.0 * g / (g + HEALTHCARE_GDP_HALF_SATURATION)


def derive_economic_index(gdp_per_capita: float) -> float:
    g = max(gdp_per_capita, 0.0)
    return 100.0 * g / (g + ECONOMIC_GDP_HALF_SATURATION)


def derive_disease_prevalence(mortality: float, gdp_per_capita: float) -> float:
    m = max(mortality, 0.0)
    g = max(gdp_per_capita, 0.0)
    raw = DISEASE_MORTALITY_WEIGHT * m + DISEASE_POVERTY_WEIGHT * math.exp(-g / DISEASE_GDP_SCALE)
    return min(raw, 100.0)


def build_snapshot(
    region_name: str,
    population: int,
    mortality: float,
    gdp_per_capita: float,
    *,
    is_estimated: bool = False,
    source: BaselineSource = "catalog",
    matched_region: str | None = None,
    description: str = "",
) -> BaselineSnapshot:
    """Derive the four missing indices and assemble a snapshot."""
    mortality = _clamp(mortality, "mortality")
    return BaselineSnapshot(
        region_name=region_name,
        population=population,
        gdp_per_capita=gdp_per_capita,
        mortality=mortality,
        life_expectancy=_clamp(derive_life_expectancy(mortality), "life_expectancy"),
        disease_prevalence=_clamp(derive_disease_prevalence(mortality, gdp_per_capita), "disease_prevalence"),
        healthcare_access=_clamp(derive_healthcare_access(gdp_per_capita), "healthcare_access"),
        economic_index=_clamp(derive_economic_index(gdp_per_capita), "economic_index"),
        is_estimated=is_estimated,
        source=source,
        matched_region=matched_region,
        description=description,
    )


# ---------------------------------------------------------------------------
# Estimation fallback
# ---------------------------------------------------------------------------

def _has_authoritative_values(region: Region) -> bool:
    return (
        not region.is_estimated
        and region.population > 0
        and region.baseline_mortality > 0
        and region.baseline_gdp > 0
    )


def _from_catalog_region(region: Region, catalog_region: Region, source: BaselineSource) -> BaselineSnapshot:
    return build_snapshot(
        region.name,
        catalog_region.population,
        catalog_region.baseline_mortality,
        catalog_region.baseline_gdp,
        is_estimated=True,
        source=source,
        matched_region=catalog_region.name,
        description=(
            f"Estimated from catalog region '{catalog_region.name}': "
            f"{catalog_region.description}"
        ),
    )


def _from_parent_region(region: Region, country: str, parent: Region, source: BaselineSource) -> BaselineSnapshot:
    # Population is apportioned equally among the parent's listed countries
    share = parent.population // max(len(parent.countries), 1)
    return build_snapshot(
        region.name,
        share,
        parent.baseline_mortality,
        parent.baseline_gdp,
        is_estimated=True,
        source=source,
        matched_region=parent.name,
        description=(
            f"Estimated for {country} from {parent.name} regional averages "
            f"(mortality {parent.baseline_mortality:g} per 1,000, GDP per capita "
            f"${parent.baseline_gdp:,.0f}); population apportioned equally across "
            f"{len(parent.countries)} listed countries."
        ),
    )


def _global_default(region: Region) -> BaselineSnapshot:
    logger.warning(
        "No catalog match for region '%s'; using global default baseline",
        region.name,
    )
    return build_snapshot(
        region.name,
        int(GLOBAL_DEFAULT_BASELINE["population"]),
        GLOBAL_DEFAULT_BASELINE["mortality"],
        GLOBAL_DEFAULT_BASELINE["gdp_per_capita"],
        is_estimated=True,
        source="global_default",
        matched_region=None,
        description=(
            f"No reference data matched '{region.name}'. Using the global average "
            f"baseline (mortality {GLOBAL_DEFAULT_BASELINE['mortality']:g} per 1,000, "
            f"GDP per capita ${GLOBAL_DEFAULT_BASELINE['gdp_per_capita']:,.0f}) with a "
            f"nominal population of {int(GLOBAL_DEFAULT_BASELINE['population']):,}."
        ),
    )


def estimate_baseline(region: Region) -> BaselineSnapshot:
    """Resolve an estimated region against the catalog.

    Order: exact region name/id -> exact constituent country -> close
    constituent country -> similar region or country name -> global default.
    """
    name = region.name

    catalog_region = get_region(name)
    if catalog_region is not None:
        logger.debug("Region '%s' matched catalog region '%s'", name, catalog_region.name)
        return _from_catalog_region(region, catalog_region, "catalog_name_match")

    parent = find_parent_region(name)
    if parent is not None:
        logger.debug("Region '%s' is a constituent of '%s'", name, parent.name)
        return _from_parent_region(region, name, parent, "country_membership")

    countries = all_country_names()
    lower_countries = [c.lower() for c in countries]
    close = difflib.get_close_matches(name.lower(), lower_countries, n=1, cutoff=COUNTRY_MATCH_CUTOFF)
    if close:
        country = countries[lower_countries.index(close[0])]
        parent = find_parent_region(country)
        if parent is not None:
            logger.debug("Region '%s' closely matches country '%s'", name, country)
            return _from_parent_region(region, country, parent, "country_membership")

    region_names = [r.name for r in REGIONS]
    candidates = region_names + countries
    lower_candidates = [c.lower() for c in candidates]
    similar = difflib.get_close_matches(name.lower(), lower_candidates, n=1, cutoff=NAME_SIMILARITY_CUTOFF)
    if similar:
        matched = candidates[lower_candidates.index(similar[0])]
        logger.debug("Region '%s' resembles '%s'", name, matched)
        catalog_region = get_region(matched)
        if catalog_region is not None:
            return _from_catalog_region(region, catalog_region, "name_similarity")
        parent = find_parent_region(matched)
        if parent is not None:
            return _from_parent_region(region, matched, parent, "name_similarity")

    return _global_default(region)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve_baseline(region: Region) -> BaselineSnapshot:
    """Return a fully populated baseline snapshot for *region*.

    Pure function of the region and the static catalog.
    """
    if _has_authoritative_values(region):
        return build_snapshot(
            region.name,
            region.population,
            region.baseline_mortality,
            region.baseline_gdp,
            description=region.description,
        )
    if not region.is_estimated:
        logger.info(
            "Region '%s' is missing catalog values; estimating its baseline",
            region.name,
        )
    return estimate_baseline(region)
