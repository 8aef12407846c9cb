"""Trajectory integrator.

Composes business-as-usual drift with intervention effects into the
ordered 5-year series of YearlyMetrics.

Business-as-usual drift from the year-0 snapshot, year y in 1..5:
    mortality           m0 * (1 - 0.01) ** y
    life expectancy     le0 + 0.15 * y
    disease prevalence  d0 * (1 - 0.005) ** y
    healthcare access   closes 1% of its gap to 100 per year
    economic index      re-derived from GDP per capita grown 2.5% per year

Projected values apply the combined improvement fraction for that year and
are clamped to each metric's declared range. With no active interventions
the fractions are all zero and projected equals baseline exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ghis.simulation.constants import (
    ECONOMIC_GDP_HALF_SATURATION,
    HORIZON_YEARS,
    LOWER_IS_BETTER,
    METRIC_BOUNDS,
    METRIC_CEILINGS,
    METRICS,
    SECULAR_TRENDS,
)
from ghis.simulation.intervention_effects import InterventionEffects
from ghis.simulation.models import BaselineSnapshot, YearlyMetrics
from ghis.utils import SimulationIntegrityError

logger = logging.getLogger(__name__)

_YEARS = np.arange(1, HORIZON_YEARS + 1, dtype=float)
_LOWER = np.array([b[0] for b in (METRIC_BOUNDS[m] for m in METRICS)])
_UPPER = np.array([b[1] for b in (METRIC_BOUNDS[m] for m in METRICS)])

# Output precision for YearlyMetrics values
OUTPUT_DECIMALS = 3


@dataclass(frozen=True)
class Trajectory:
    """Baseline and projected paths, each shaped (n_metrics, n_years)."""

    baseline: np.ndarray
    projected: np.ndarray

    def series(self, metric: str) -> tuple[np.ndarray, np.ndarray]:
        idx = METRICS.index(metric)
        return self.baseline[idx], self.projected[idx]

    def to_yearly_metrics(self) -> tuple[YearlyMetrics, ...]:
        rows = []
        for y in range(HORIZON_YEARS):
            b = [round(float(v), OUTPUT_DECIMALS) for v in self.baseline[:, y]]
            p = [round(float(v), OUTPUT_DECIMALS) for v in self.projected[:, y]]
            rows.append(YearlyMetrics(
                year=y + 1,
                mortality_rate=p[0],
                life_expectancy=p[1],
                disease_prevalence=p[2],
                healthcare_access=p[3],
                economic_index=p[4],
                mortality_baseline=b[0],
                life_expectancy_baseline=b[1],
                disease_baseline=b[2],
                healthcare_baseline=b[3],
                economic_baseline=b[4],
            ))
        return tuple(rows)


def clamp_to_bounds(values: np.ndarray) -> np.ndarray:
    """Clamp a (n_metrics, n_years) array to each metric's valid range."""
    return np.clip(values, _LOWER[:, None], _UPPER[:, None])


def baseline_path(snapshot: BaselineSnapshot) -> np.ndarray:
    """Business-as-usual drift for every metric across the horizon."""
    if not isinstance(snapshot, BaselineSnapshot):
        raise TypeError("baseline_path requires a resolved BaselineSnapshot")

    gdp = snapshot.gdp_per_capita * (1.0 + SECULAR_TRENDS["gdp_growth"]) ** _YEARS
    path = np.vstack([
        snapshot.mortality * (1.0 - SECULAR_TRENDS["mortality_decline"]) ** _YEARS,
        snapshot.life_expectancy + SECULAR_TRENDS["life_expectancy_gain"] * _YEARS,
        snapshot.disease_prevalence * (1.0 - SECULAR_TRENDS["disease_decline"]) ** _YEARS,
        100.0 - (100.0 - snapshot.healthcare_access)
        * (1.0 - SECULAR_TRENDS["healthcare_gap_closure"]) ** _YEARS,
        100.0 * gdp / (gdp + ECONOMIC_GDP_HALF_SATURATION),
    ])
    return clamp_to_bounds(path)


def apply_effects(baseline: np.ndarray, combined: np.ndarray) -> np.ndarray:
    """Apply combined improvement fractions to a baseline path, then clamp."""
    projected = np.empty_like(baseline)
    for idx, metric in enumerate(METRICS):
        b = baseline[idx]
        e = combined[idx]
        if metric in LOWER_IS_BETTER:
            projected[idx] = b * (1.0 - e)
        else:
            gap = np.maximum(METRIC_CEILINGS[metric] - b, 0.0)
            projected[idx] = b + e * gap
    return clamp_to_bounds(projected)


def validate_trajectory(trajectory: Trajectory) -> None:
    """Refuse non-finite or out-of-range values. Indicates a defect upstream."""
    for label, values in (("baseline", trajectory.baseline), ("projected", trajectory.projected)):
        if values.shape != (len(METRICS), HORIZON_YEARS):
            raise SimulationIntegrityError(f"{label} path has shape {values.shape}")
        if not np.all(np.isfinite(values)):
            raise SimulationIntegrityError(f"{label} path contains non-finite values")
        low = values < _LOWER[:, None]
        high = values > _UPPER[:, None]
        if np.any(low | high):
            idx, year = np.argwhere(low | high)[0]
            raise SimulationIntegrityError(
                f"{label} {METRICS[idx]} out of range in year {year + 1}: "
                f"{values[idx, year]}"
            )


def integrate(snapshot: BaselineSnapshot, effects: InterventionEffects) -> Trajectory:
    """Produce baseline and projected paths for one simulation."""
    baseline = baseline_path(snapshot)
    projected = apply_effects(baseline, effects.combined)
    trajectory = Trajectory(baseline=baseline, projected=projected)
    validate_trajectory(trajectory)
    logger.debug(
        "Integrated trajectory for %s: year-5 mortality %.3f -> %.3f",
        snapshot.region_name, baseline[0, -1], projected[0, -1],
    )
    return trajectory
