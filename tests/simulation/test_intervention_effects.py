"""Tests for the intervention effect model."""

import math

import numpy as np
import pytest

from ghis.simulation.constants import CATEGORY_EFFECT_PROFILES, METRICS, RAMP_SCHEDULE
from ghis.simulation.intervention_effects import (
    compose_effects,
    compute_intervention_effects,
    intensity_response,
    profile_vector,
    single_intervention_effect,
    strictness_multiplier,
)
from ghis.simulation.models import InterventionCategory


class TestIntensityResponse:
    def test_endpoints(self):
        assert intensity_response(0) == 0.0
        assert intensity_response(100) == pytest.approx(1.0)

    def test_midpoint_is_concave(self):
        expected = (1 - math.exp(-1)) / (1 - math.exp(-2))
        assert intensity_response(50) == pytest.approx(expected)
        assert intensity_response(50) > 0.5

    def test_monotone(self):
        values = [intensity_response(i) for i in range(0, 101)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("intensity", [-1, 100.5, 250])
    def test_out_of_range(self, intensity):
        with pytest.raises(ValueError):
            intensity_response(intensity)


class TestStrictness:
    def test_multipliers(self):
        assert strictness_multiplier("conservative") == 0.75
        assert strictness_multiplier("standard") == 1.0
        assert strictness_multiplier("aggressive") == 1.25

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown effect strictness"):
            strictness_multiplier("reckless")


class TestSingleIntervention:
    def test_shape(self):
        effect = single_intervention_effect(InterventionCategory.policy, 60)
        assert effect.shape == (len(METRICS), len(RAMP_SCHEDULE))

    def test_zero_intensity_is_zero(self):
        for category in InterventionCategory:
            assert not np.any(single_intervention_effect(category, 0))

    def test_full_intensity_reaches_profile_in_final_year(self):
        for category in InterventionCategory:
            effect = single_intervention_effect(category, 100)
            np.testing.assert_allclose(effect[:, -1], profile_vector(category))

    def test_ramp_follows_schedule(self):
        effect = single_intervention_effect(InterventionCategory.medical, 100)
        mortality = CATEGORY_EFFECT_PROFILES["Medical"]["mortality"]
        np.testing.assert_allclose(effect[0], [mortality * r for r in RAMP_SCHEDULE])

    def test_strictness_scales_effects(self):
        standard = single_intervention_effect(InterventionCategory.environment, 70, "standard")
        conservative = single_intervention_effect(InterventionCategory.environment, 70, "conservative")
        np.testing.assert_allclose(conservative, standard * 0.75)

    def test_category_profile(self):
        assert InterventionCategory.medical.effect_profile["mortality"] == 0.30
        assert InterventionCategory.infrastructure.effect_profile["healthcare_access"] == 0.30


class TestComposition:
    def test_empty_composition_is_zero(self):
        combined = compose_effects(np.zeros((0, len(METRICS), len(RAMP_SCHEDULE))))
        assert combined.shape == (len(METRICS), len(RAMP_SCHEDULE))
        assert not np.any(combined)

    def test_diminishing_returns(self):
        one = single_intervention_effect(InterventionCategory.medical, 100)
        combined = compose_effects(np.stack([one, one]))
        assert combined[0, -1] == pytest.approx(1 - 0.7 ** 2)
        assert np.all(combined <= 2 * one + 1e-12)

    def test_composition_stays_below_one(self):
        stack = np.stack([
            single_intervention_effect(c, 100, "aggressive")
            for c in InterventionCategory
            for _ in range(3)
        ])
        combined = compose_effects(stack)
        assert np.all(combined < 1.0)
        assert np.all(combined >= 0.0)


class TestComputeInterventionEffects:
    def test_inactive_interventions_ignored(self, make_active):
        active = make_active("vax_expanded", 80)
        inactive = make_active("wash_infra", 80).model_copy(update={"active": False})
        effects = compute_intervention_effects([active, inactive])
        assert [i.id for i in effects.interventions] == ["vax_expanded"]
        assert effects.per_intervention.shape == (1, len(METRICS), len(RAMP_SCHEDULE))

    def test_empty(self):
        effects = compute_intervention_effects([])
        assert effects.is_empty
        assert not np.any(effects.combined)

    def test_combined_for(self, make_active):
        effects = compute_intervention_effects([make_active("telehealth", 100)])
        np.testing.assert_allclose(
            effects.combined_for("healthcare_access"),
            [0.25 * r for r in RAMP_SCHEDULE],
        )

    def test_final_year(self, mixed_portfolio):
        effects = compute_intervention_effects(mixed_portfolio)
        assert effects.final_year(0).shape == (len(METRICS),)

    def test_deterministic(self, mixed_portfolio):
        a = compute_intervention_effects(mixed_portfolio, "aggressive")
        b = compute_intervention_effects(mixed_portfolio, "aggressive")
        assert np.array_equal(a.combined, b.combined)
