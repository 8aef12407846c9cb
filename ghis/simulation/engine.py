"""Simulation engine.

Validates a request, resolves the region baseline, builds intervention
effects, integrates the 5-year trajectory and summarizes it. Pure and
synchronous: no I/O, no shared mutable state beyond the optional cache.

Invalid input raises InvalidInputError before any computation starts.
An output that fails its range checks raises SimulationIntegrityError;
no partial result is ever returned.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from ghis.catalog.interventions import resolve_selections
from ghis.catalog.regions import find_parent_region, get_region, make_custom_region
from ghis.config import get_config
from ghis.simulation.baseline_resolver import resolve_baseline
from ghis.simulation.cache import SimulationCache, get_default_cache
from ghis.simulation.constants import STRICTNESS_MULTIPLIERS
from ghis.simulation.impact_summarizer import summarize
from ghis.simulation.intervention_effects import compute_intervention_effects
from ghis.simulation.models import Intervention, InterventionSelection, Region, SimulationResult
from ghis.simulation.trajectory import integrate
from ghis.utils import InvalidInputError, SimulationIntegrityError

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _coerce(model_cls: type[_M], value: Any, label: str) -> _M:
    """Validate *value* as *model_cls*, re-checking instances as well."""
    raw = value.model_dump() if isinstance(value, BaseModel) else value
    try:
        return model_cls.model_validate(raw)
    except ValidationError as exc:
        reasons = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or label}: {err['msg']}"
            for err in exc.errors()
        )
        raise InvalidInputError(f"Invalid {label}: {reasons}") from exc


def validate_region(region: Region | Mapping[str, Any]) -> Region:
    if region is None:
        raise InvalidInputError("Missing region")
    return _coerce(Region, region, "region")


def validate_interventions(
    interventions: Sequence[Intervention | Mapping[str, Any]],
) -> tuple[Intervention, ...]:
    """Validate every intervention and reject duplicate active ids."""
    validated = tuple(_coerce(Intervention, i, "intervention") for i in interventions)
    seen: set[str] = set()
    for intervention in validated:
        if not intervention.active:
            continue
        if intervention.id in seen:
            raise InvalidInputError(f"Intervention '{intervention.id}' is active more than once")
        seen.add(intervention.id)
    return validated


def validate_strictness(strictness: str | None) -> str:
    value = strictness if strictness is not None else get_config().effect_strictness
    if value not in STRICTNESS_MULTIPLIERS:
        raise InvalidInputError(
            f"Unknown effect strictness '{value}'. Expected one of {sorted(STRICTNESS_MULTIPLIERS)}"
        )
    return value


# ---------------------------------------------------------------------------
# Computation
# ---------------------------------------------------------------------------

def _compute(region: Region, interventions: Sequence[Intervention], strictness: str) -> SimulationResult:
    effects = compute_intervention_effects(interventions, strictness)
    try:
        snapshot = resolve_baseline(region)
        trajectory = integrate(snapshot, effects)
        return summarize(snapshot, effects, trajectory)
    except ValidationError as exc:
        raise SimulationIntegrityError(f"Result for '{region.name}' failed validation: {exc}") from exc


def run_simulation(
    region: Region | Mapping[str, Any],
    interventions: Sequence[Intervention | Mapping[str, Any]] = (),
    *,
    strictness: str | None = None,
    cache: SimulationCache | None = None,
) -> SimulationResult:
    """Run one simulation for a region and a set of interventions.

    Args:
        region: Catalog or estimated region (model or mapping).
        interventions: Intervention definitions with intensity and active
            flag; inactive entries are ignored.
        strictness: Effect strictness override; defaults to config.
        cache: Optional memoizing layer.

    Returns:
        A frozen SimulationResult covering years 1..5.
    """
    region = validate_region(region)
    interventions = validate_interventions(interventions)
    strictness = validate_strictness(strictness)

    n_active = sum(1 for i in interventions if i.active)
    logger.info(
        "Simulating %s with %d active intervention(s), strictness=%s",
        region.name, n_active, strictness,
    )

    try:
        if cache is not None:
            return cache.get_or_compute(region, interventions, strictness, _compute)
        return _compute(region, interventions, strictness)
    except SimulationIntegrityError:
        logger.error("Simulation for %s produced invalid output", region.name)
        raise


def region_from_name(name: str) -> Region:
    """Catalog region for *name*, or an estimated region for anything else.

    A constituent country of a catalog region becomes a country drill-down.
    """
    if not name or not name.strip():
        raise InvalidInputError("Missing region identifier")
    catalog_region = get_region(name)
    if catalog_region is not None:
        return catalog_region
    name = name.strip()
    return make_custom_region(name, find_parent_region(name))


def simulate(
    region: str | Region | Mapping[str, Any],
    selections: Sequence[InterventionSelection | Mapping[str, Any]] = (),
    *,
    strictness: str | None = None,
    use_cache: bool = True,
) -> SimulationResult:
    """Convenience entry point taking a region name and catalog selections."""
    if isinstance(region, str):
        region = region_from_name(region)
    interventions = resolve_selections(selections)
    cache = get_default_cache() if use_cache else None
    return run_simulation(region, interventions, strictness=strictness, cache=cache)
