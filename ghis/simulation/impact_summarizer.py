"""Impact summarizer.

Derives headline figures and templated narrative from a trajectory:

- lives saved: sum over years of (baseline - projected mortality) / 1000 *
  population, population held fixed over the horizon;
- economic ROI: cumulative economic-index gain (index point-years) divided
  by ROI_COST_SCALE * sum(intensity / 100); 0 with no active spend;
- impact score: 100 * sum_m w_m * min(1, improvement_m / 0.5), where
  improvement_m is the year-5 relative reduction (mortality, disease) or
  gap closure (life expectancy, healthcare access, economic index);
- contribution shares: each intervention's weighted year-5 improvement,
  normalized to 100.

Narrative strings are built from the computed numbers only.
"""

from __future__ import annotations

import logging

import numpy as np

from ghis.simulation.constants import (
    HORIZON_YEARS,
    IMPACT_FULL_CREDIT_IMPROVEMENT,
    IMPACT_WEIGHTS,
    LOWER_IS_BETTER,
    METRIC_CEILINGS,
    METRICS,
    ROI_COST_SCALE,
)
from ghis.simulation.intervention_effects import InterventionEffects
from ghis.simulation.models import (
    BaselineSnapshot,
    EstimatedBaseline,
    InterventionCategory,
    InterventionContribution,
    SimulationResult,
)
from ghis.simulation.trajectory import Trajectory

logger = logging.getLogger(__name__)

_WEIGHTS = np.array([IMPACT_WEIGHTS[m] for m in METRICS], dtype=float)


# ---------------------------------------------------------------------------
# Headline figures
# ---------------------------------------------------------------------------

def compute_lives_saved(trajectory: Trajectory, population: int) -> int:
    baseline, projected = trajectory.series("mortality")
    averted = float(np.sum(baseline - projected)) / 1000.0 * population
    return int(round(averted))


def compute_economic_roi(trajectory: Trajectory, effects: InterventionEffects) -> float:
    cost_units = sum(i.intensity for i in effects.interventions) / 100.0
    if cost_units == 0:
        return 0.0
    baseline, projected = trajectory.series("economic_index")
    gain = float(np.sum(projected - baseline))
    return max(0.0, round(gain / (ROI_COST_SCALE * cost_units), 2))


def metric_improvements(trajectory: Trajectory) -> dict[str, float]:
    """Year-5 improvement per metric as a fraction in [0, 1]."""
    improvements: dict[str, float] = {}
    for idx, metric in enumerate(METRICS):
        b = float(trajectory.baseline[idx, -1])
        p = float(trajectory.projected[idx, -1])
        if metric in LOWER_IS_BETTER:
            value = (b - p) / b if b > 0 else 0.0
        else:
            gap = METRIC_CEILINGS[metric] - b
            value = (p - b) / gap if gap > 0 else 0.0
        improvements[metric] = min(max(value, 0.0), 1.0)
    return improvements


def compute_impact_score(trajectory: Trajectory) -> float:
    improvements = metric_improvements(trajectory)
    score = sum(
        IMPACT_WEIGHTS[m] * min(1.0, improvements[m] / IMPACT_FULL_CREDIT_IMPROVEMENT)
        for m in METRICS
    )
    return round(min(max(score * 100.0, 0.0), 100.0), 1)


def _normalize_shares(raw: list[float]) -> list[float]:
    """Scale to 100, round to one decimal, fold the residual into the largest share."""
    total = sum(raw)
    if total > 0:
        shares = [100.0 * x / total for x in raw]
    else:
        shares = [100.0 / len(raw)] * len(raw)
    rounded = [round(s, 1) for s in shares]
    residual = 100.0 - sum(rounded)
    largest = max(range(len(rounded)), key=lambda i: rounded[i])
    rounded[largest] = round(rounded[largest] + residual, 1)
    return rounded


def compute_contributions(effects: InterventionEffects) -> tuple[InterventionContribution, ...]:
    if effects.is_empty:
        return ()
    raw = [
        float(np.dot(_WEIGHTS, effects.final_year(idx)))
        for idx in range(len(effects.interventions))
    ]
    shares = _normalize_shares(raw)
    return tuple(
        InterventionContribution(
            intervention_id=intervention.id,
            name=intervention.name,
            category=intervention.category,
            score=min(max(share, 0.0), 100.0),
        )
        for intervention, share in zip(effects.interventions, shares)
    )


# ---------------------------------------------------------------------------
# Narrative
# ---------------------------------------------------------------------------

def _pct_change(baseline: float, projected: float) -> float:
    return (projected - baseline) / baseline * 100.0 if baseline else 0.0


def _category_shares(
    contributions: tuple[InterventionContribution, ...],
) -> dict[InterventionCategory, float]:
    shares: dict[InterventionCategory, float] = {}
    for c in contributions:
        shares[c.category] = shares.get(c.category, 0.0) + c.score
    return shares


def build_summary(
    snapshot: BaselineSnapshot,
    trajectory: Trajectory,
    effects: InterventionEffects,
    lives_saved: int,
    economic_roi: float,
    impact_score: float,
) -> str:
    base_mort, proj_mort = trajectory.series("mortality")
    if effects.is_empty:
        text = (
            f"No new interventions selected: {snapshot.region_name} follows the "
            f"business-as-usual path, with mortality drifting from "
            f"{snapshot.mortality:.1f} to {base_mort[-1]:.1f} per 1,000 over "
            f"{HORIZON_YEARS} years as background progress continues."
        )
    else:
        pct = _pct_change(float(base_mort[-1]), float(proj_mort[-1]))
        n = len(effects.interventions)
        text = (
            f"Under the selected strategy of {n} intervention{'s' if n != 1 else ''}, "
            f"{snapshot.region_name} mortality reaches {proj_mort[-1]:.1f} per 1,000 by "
            f"year {HORIZON_YEARS} versus {base_mort[-1]:.1f} on the business-as-usual "
            f"path ({pct:+.1f}%). An estimated {lives_saved:,} lives are saved over "
            f"{HORIZON_YEARS} years, with an economic ROI of {economic_roi:.2f}x and an "
            f"impact score of {impact_score:.0f}/100."
        )
    if snapshot.is_estimated:
        text += " Baseline values are estimated, so projections are indicative."
    return text


def build_key_insights(
    snapshot: BaselineSnapshot,
    trajectory: Trajectory,
    contributions: tuple[InterventionContribution, ...],
) -> tuple[str, ...]:
    base_mort, proj_mort = trajectory.series("mortality")
    base_le, proj_le = trajectory.series("life_expectancy")
    base_hc, proj_hc = trajectory.series("healthcare_access")
    base_econ, proj_econ = trajectory.series("economic_index")

    if not contributions:
        drift = -_pct_change(snapshot.mortality, float(base_mort[-1]))
        return (
            f"Business-as-usual mortality declines {drift:.1f}% over {HORIZON_YEARS} "
            f"years from background progress alone.",
            f"Healthcare access stays near {base_hc[-1]:.0f}% and the economic index "
            f"near {base_econ[-1]:.0f} without new investment.",
            f"Life expectancy reaches {base_le[-1]:.1f} years by year {HORIZON_YEARS} "
            f"on the current path.",
        )

    shares = _category_shares(contributions)
    dominant = max(shares, key=lambda c: shares[c])
    top = max(contributions, key=lambda c: c.score)
    fall = -_pct_change(float(base_mort[-1]), float(proj_mort[-1]))
    return (
        f"Mortality falls by {fall:.1f}% over {HORIZON_YEARS} years, driven mainly by "
        f"{dominant.value} interventions ({shares[dominant]:.0f}% of improvement).",
        f"{top.name} ({top.category.value}) accounts for {top.score:.0f}% of projected "
        f"improvement.",
        f"By year {HORIZON_YEARS}, healthcare access is {proj_hc[-1] - base_hc[-1]:+.1f} "
        f"points, the economic index {proj_econ[-1] - base_econ[-1]:+.1f} points and life "
        f"expectancy {proj_le[-1] - base_le[-1]:+.1f} years relative to baseline.",
    )


def build_recommendations(
    snapshot: BaselineSnapshot,
    effects: InterventionEffects,
    contributions: tuple[InterventionContribution, ...],
) -> tuple[str, ...]:
    recs: list[str] = []

    if effects.is_empty:
        if snapshot.healthcare_access < 50:
            recs.append(
                f"Prioritise Infrastructure investment: healthcare access is only "
                f"{snapshot.healthcare_access:.0f}%."
            )
        recs.extend([
            "Activate at least one intervention to compare against the business-as-usual path.",
            "Medical interventions deliver the largest direct mortality reductions.",
            "Infrastructure interventions lift healthcare access and the economic index together.",
        ])
        return tuple(recs[:3])

    active_categories = {i.category for i in effects.interventions}

    if InterventionCategory.medical not in active_categories and snapshot.mortality > 30:
        recs.append(
            f"Add a Medical intervention: mortality of {snapshot.mortality:.0f} per 1,000 "
            f"leaves large room for direct reduction."
        )
    if InterventionCategory.infrastructure not in active_categories and snapshot.healthcare_access < 60:
        recs.append(
            f"Add Infrastructure investment: healthcare access is only "
            f"{snapshot.healthcare_access:.0f}%."
        )

    by_id = {c.intervention_id: c for c in contributions}
    for intervention in sorted(effects.interventions, key=lambda i: -by_id[i.id].score):
        if intervention.intensity < 50:
            recs.append(
                f"Scale up {intervention.name} from {intervention.intensity}% intensity; "
                f"returns are steepest at low intensity."
            )
            break

    per_category: dict[InterventionCategory, int] = {}
    for i in effects.interventions:
        if i.intensity >= 75:
            per_category[i.category] = per_category.get(i.category, 0) + 1
    for category in InterventionCategory:
        if per_category.get(category, 0) >= 2:
            recs.append(
                f"High-intensity {category.value} interventions overlap; diminishing returns "
                f"mean diversifying into other categories adds more."
            )
            break

    recs.append(
        f"Sustain current intensities through year {HORIZON_YEARS}; effects ramp in and "
        f"reach full strength only in the final year."
    )
    return tuple(recs[:3])


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def summarize(
    snapshot: BaselineSnapshot,
    effects: InterventionEffects,
    trajectory: Trajectory,
) -> SimulationResult:
    """Assemble the SimulationResult for one request."""
    lives_saved = compute_lives_saved(trajectory, snapshot.population)
    economic_roi = compute_economic_roi(trajectory, effects)
    impact_score = compute_impact_score(trajectory)
    contributions = compute_contributions(effects)

    estimated = None
    if snapshot.is_estimated:
        estimated = EstimatedBaseline(
            population=snapshot.population,
            gdp=snapshot.gdp_per_capita,
            mortality=snapshot.mortality,
            description=snapshot.description,
        )

    logger.debug(
        "Summary for %s: lives_saved=%d roi=%.2f score=%.1f",
        snapshot.region_name, lives_saved, economic_roi, impact_score,
    )

    return SimulationResult(
        region_name=snapshot.region_name,
        summary=build_summary(snapshot, trajectory, effects, lives_saved, economic_roi, impact_score),
        yearly=trajectory.to_yearly_metrics(),
        intervention_impact=contributions,
        impact_score=impact_score,
        lives_saved=lives_saved,
        economic_roi=economic_roi,
        key_insights=build_key_insights(snapshot, trajectory, contributions),
        recommendations=build_recommendations(snapshot, effects, contributions),
        estimated_baseline=estimated,
    )
