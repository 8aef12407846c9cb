"""Invariant tests for the simulation engine.

Each test drives the real pipeline end to end with catalog data; nothing
is mocked.
"""

from __future__ import annotations

import pytest

from ghis.catalog import DEFAULT_INTERVENTIONS, REGIONS, get_intervention
from ghis.simulation.constants import LOWER_IS_BETTER, METRIC_BOUNDS, METRICS
from ghis.simulation.engine import run_simulation
from ghis.simulation.models import InterventionCategory, Region


def _active(intervention, intensity):
    return intervention.model_copy(update={"intensity": intensity, "active": True})


def _one_per_category():
    seen = {}
    for intervention in DEFAULT_INTERVENTIONS:
        seen.setdefault(intervention.category, intervention)
    return [seen[c] for c in InterventionCategory]


# -----------------------------------------------------------------------
# 1. Zero-effect identity
# -----------------------------------------------------------------------

@pytest.mark.parametrize("region", REGIONS, ids=lambda r: r.id)
def test_no_active_interventions_projects_baseline(region):
    inactive = [i.model_copy(update={"intensity": 100}) for i in DEFAULT_INTERVENTIONS]
    result = run_simulation(region, inactive)
    for row in result.yearly:
        for metric in METRICS:
            assert row.projected(metric) == row.baseline(metric)


def test_zero_intensity_projects_baseline(sub_saharan_africa):
    result = run_simulation(sub_saharan_africa, [_active(i, 0) for i in DEFAULT_INTERVENTIONS])
    for row in result.yearly:
        for metric in METRICS:
            assert row.projected(metric) == row.baseline(metric)


# -----------------------------------------------------------------------
# 2. Monotonicity in intensity
# -----------------------------------------------------------------------

@pytest.mark.parametrize("intervention", _one_per_category(), ids=lambda i: i.category.value)
def test_more_intensity_never_worsens(intervention, sub_saharan_africa):
    previous = None
    for intensity in range(0, 101, 10):
        result = run_simulation(sub_saharan_africa, [_active(intervention, intensity)])
        if previous is not None:
            for before, after in zip(previous.yearly, result.yearly):
                for metric in METRICS:
                    if metric in LOWER_IS_BETTER:
                        assert after.projected(metric) <= before.projected(metric)
                    else:
                        assert after.projected(metric) >= before.projected(metric)
        previous = result


# -----------------------------------------------------------------------
# 3. Range invariants
# -----------------------------------------------------------------------

@pytest.mark.parametrize("strictness", ["conservative", "standard", "aggressive"])
@pytest.mark.parametrize("region", REGIONS, ids=lambda r: r.id)
def test_values_stay_in_declared_ranges(region, strictness):
    interventions = [_active(i, 100) for i in DEFAULT_INTERVENTIONS]
    result = run_simulation(region, interventions, strictness=strictness)
    for row in result.yearly:
        for metric in METRICS:
            low, high = METRIC_BOUNDS[metric]
            assert low <= row.projected(metric) <= high
            assert low <= row.baseline(metric) <= high


def test_extreme_region_stays_in_range():
    region = Region(
        id="extreme", name="Extreme", population=1_000,
        baseline_mortality=99, baseline_gdp=1,
    )
    result = run_simulation(region, [_active(i, 100) for i in DEFAULT_INTERVENTIONS], strictness="aggressive")
    for row in result.yearly:
        assert 0 <= row.mortality_rate <= 100
        assert 0 <= row.disease_prevalence <= 100
        assert 0 <= row.life_expectancy <= 120


# -----------------------------------------------------------------------
# 4. Contribution normalization
# -----------------------------------------------------------------------

@pytest.mark.parametrize("count", [1, 2, 4, 7])
def test_contributions_sum_to_hundred(count, south_asia_region):
    interventions = [_active(i, 25 + 10 * n) for n, i in enumerate(DEFAULT_INTERVENTIONS[:count])]
    result = run_simulation(south_asia_region, interventions)
    assert len(result.intervention_impact) == count
    assert sum(c.score for c in result.intervention_impact) == pytest.approx(100.0, abs=0.05)


def test_contributions_empty_without_interventions(south_asia_region):
    assert run_simulation(south_asia_region).intervention_impact == ()


@pytest.fixture
def south_asia_region():
    return next(r for r in REGIONS if r.id == "south_asia")


# -----------------------------------------------------------------------
# 5. Determinism
# -----------------------------------------------------------------------

def test_identical_inputs_identical_results(mixed_portfolio):
    region = Region(id="custom_atlantis", name="Atlantis", is_estimated=True)
    first = run_simulation(region, mixed_portfolio, strictness="aggressive")
    second = run_simulation(region, mixed_portfolio, strictness="aggressive")
    assert first is not second
    assert first == second
    assert first.to_payload() == second.to_payload()


# -----------------------------------------------------------------------
# 6. Global Average, no interventions
# -----------------------------------------------------------------------

def test_global_average_business_as_usual(global_region):
    result = run_simulation(global_region, [])
    assert len(result.yearly) == 5
    for row in result.yearly:
        for metric in METRICS:
            assert row.projected(metric) == row.baseline(metric)
    assert result.lives_saved == 0
    assert result.economic_roi == 0
    assert result.intervention_impact == ()


# -----------------------------------------------------------------------
# 7. Single maxed Medical intervention
# -----------------------------------------------------------------------

def test_single_maxed_medical_intervention(western_europe):
    vax = _active(get_intervention("vax_expanded"), 100)
    result = run_simulation(western_europe, [vax], strictness="standard")
    final = result.final_year()
    assert final.mortality_rate < final.mortality_baseline
    assert result.lives_saved > 0
    assert len(result.intervention_impact) == 1
    assert result.intervention_impact[0].intervention_id == "vax_expanded"
    assert result.intervention_impact[0].score == 100.0


# -----------------------------------------------------------------------
# 8. Estimated / custom region
# -----------------------------------------------------------------------

def test_estimated_region_gets_fallback_baseline():
    region = Region(id="custom_atlantis", name="Atlantis", is_estimated=True)
    result = run_simulation(region, [])
    assert result.estimated_baseline is not None
    assert result.estimated_baseline.population > 0
    assert result.estimated_baseline.gdp > 0
    assert result.estimated_baseline.mortality > 0
    assert result.estimated_baseline.description
