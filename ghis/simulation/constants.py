"""
Simulation engine constants.
Every coefficient the engine uses lives here so the model stays explainable.
"""

# Projection horizon in years (year 1..HORIZON_YEARS)
HORIZON_YEARS = 5

# Canonical metric order used by every effect tensor and trajectory array
METRICS: tuple[str, ...] = (
    "mortality",
    "life_expectancy",
    "disease_prevalence",
    "healthcare_access",
    "economic_index",
)

# Metrics where a lower value is an improvement
LOWER_IS_BETTER: frozenset[str] = frozenset({"mortality", "disease_prevalence"})

# Declared valid ranges for every projected and baseline value
METRIC_BOUNDS: dict[str, tuple[float, float]] = {
    "mortality": (0.0, 100.0),
    "life_expectancy": (0.0, 120.0),
    "disease_prevalence": (0.0, 100.0),
    "healthcare_access": (0.0, 100.0),
    "economic_index": (0.0, 100.0),
}

# Ceiling that higher-is-better metrics close their gap towards
METRIC_CEILINGS: dict[str, float] = {
    "life_expectancy": 90.0,
    "healthcare_access": 100.0,
    "economic_index": 100.0,
}

# ---------------------------------------------------------------------------
# Baseline derivation (year 0 snapshot)
# ---------------------------------------------------------------------------

# life expectancy = floor + span * exp(-mortality / scale), bounded to [40, 90]
LIFE_EXPECTANCY_FLOOR = 40.0
LIFE_EXPECTANCY_SPAN = 50.0
LIFE_EXPECTANCY_MORTALITY_SCALE = 90.0

# index = 100 * gdp / (gdp + half_saturation)
HEALTHCARE_GDP_HALF_SATURATION = 8_000.0
ECONOMIC_GDP_HALF_SATURATION = 15_000.0

# disease prevalence = mortality_weight * mortality + poverty_weight * exp(-gdp / scale)
DISEASE_MORTALITY_WEIGHT = 0.3
DISEASE_POVERTY_WEIGHT = 25.0
DISEASE_GDP_SCALE = 10_000.0

# Fallback when an estimated region cannot be matched to the catalog
GLOBAL_DEFAULT_BASELINE: dict[str, float] = {
    "population": 50_000_000,
    "mortality": 45.0,
    "gdp_per_capita": 12_000.0,
}

# Upper bound accepted for a region's GDP per capita (USD)
MAX_GDP_PER_CAPITA = 1_000_000.0

# Close-match cutoff for name similarity (difflib ratio)
NAME_SIMILARITY_CUTOFF = 0.6
COUNTRY_MATCH_CUTOFF = 0.85

# ---------------------------------------------------------------------------
# Business-as-usual secular trends (per year)
# ---------------------------------------------------------------------------

SECULAR_TRENDS: dict[str, float] = {
    "mortality_decline": 0.01,          # multiplicative
    "disease_decline": 0.005,           # multiplicative
    "life_expectancy_gain": 0.15,       # additive years
    "healthcare_gap_closure": 0.01,     # fraction of gap to 100
    "gdp_growth": 0.025,                # multiplicative on GDP per capita
}

# ---------------------------------------------------------------------------
# Intervention effect model
# ---------------------------------------------------------------------------

# Maximum improvement fraction per metric at intensity 100, fully ramped,
# standard strictness. Lower-is-better metrics are reduced by the fraction;
# higher-is-better metrics close that fraction of their gap to the ceiling.
CATEGORY_EFFECT_PROFILES: dict[str, dict[str, float]] = {
    "Medical": {
        "mortality": 0.30,
        "life_expectancy": 0.20,
        "disease_prevalence": 0.35,
        "healthcare_access": 0.05,
        "economic_index": 0.02,
    },
    "Infrastructure": {
        "mortality": 0.10,
        "life_expectancy": 0.08,
        "disease_prevalence": 0.15,
        "healthcare_access": 0.30,
        "economic_index": 0.20,
    },
    "Policy": {
        "mortality": 0.06,
        "life_expectancy": 0.05,
        "disease_prevalence": 0.12,
        "healthcare_access": 0.25,
        "economic_index": 0.04,
    },
    "Environment": {
        "mortality": 0.08,
        "life_expectancy": 0.06,
        "disease_prevalence": 0.25,
        "healthcare_access": 0.03,
        "economic_index": 0.08,
    },
}

# Adoption lag: share of the full effect realised by year 1..5
RAMP_SCHEDULE: tuple[float, ...] = (0.25, 0.55, 0.80, 0.95, 1.00)

# Curvature of the saturating intensity response
INTENSITY_SATURATION_K = 2.0

STRICTNESS_MULTIPLIERS: dict[str, float] = {
    "conservative": 0.75,
    "standard": 1.00,
    "aggressive": 1.25,
}

# ---------------------------------------------------------------------------
# Impact summary
# ---------------------------------------------------------------------------

IMPACT_WEIGHTS: dict[str, float] = {
    "mortality": 0.30,
    "life_expectancy": 0.20,
    "disease_prevalence": 0.20,
    "healthcare_access": 0.15,
    "economic_index": 0.15,
}

# Relative improvement on one metric that earns full marks in the impact score
IMPACT_FULL_CREDIT_IMPROVEMENT = 0.5

# Economic index point-years returned per full-intensity intervention for ROI 1.0
ROI_COST_SCALE = 10.0
