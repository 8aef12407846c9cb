"""Pydantic v2 models for simulation inputs and results.

Importable without any running service. Inputs and outputs are frozen:
a result is built once per request and never mutated afterwards.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ghis.simulation.constants import CATEGORY_EFFECT_PROFILES, HORIZON_YEARS, MAX_GDP_PER_CAPITA


class InterventionCategory(str, Enum):
    """Closed set of intervention kinds.

    Each member carries its fixed effect profile; see
    ``constants.CATEGORY_EFFECT_PROFILES``.
    """
    medical = "Medical"
    infrastructure = "Infrastructure"
    policy = "Policy"
    environment = "Environment"

    @property
    def effect_profile(self) -> dict[str, float]:
        return CATEGORY_EFFECT_PROFILES[self.value]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class _Payload(BaseModel):
    """Base for output models serialized to the camelCase presentation shape."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class Region(_Frozen):
    """A geographic region.

    Catalog regions carry authoritative population, mortality (per 1,000)
    and GDP per capita (USD). Estimated regions are user-entered and carry
    zero placeholders until the baseline resolver fills them in.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    population: int = Field(default=0, ge=0)
    baseline_mortality: float = Field(default=0.0, ge=0, le=100, allow_inf_nan=False)
    baseline_gdp: float = Field(default=0.0, ge=0, le=MAX_GDP_PER_CAPITA, allow_inf_nan=False)
    description: str = ""
    is_estimated: bool = False
    countries: tuple[str, ...] = ()

    @field_validator("id", "name", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class Intervention(_Frozen):
    id: str = Field(..., min_length=1)
    name: str
    category: InterventionCategory
    description: str = ""
    intensity: int = Field(default=50, ge=0, le=100)
    active: bool = False


class InterventionSelection(_Frozen):
    """Caller's choice for one catalog intervention."""

    id: str = Field(..., min_length=1)
    intensity: int = Field(..., ge=0, le=100)
    active: bool = True


# ---------------------------------------------------------------------------
# Resolved baseline
# ---------------------------------------------------------------------------

BaselineSource = Literal[
    "catalog",
    "catalog_name_match",
    "country_membership",
    "name_similarity",
    "global_default",
]


class BaselineSnapshot(_Frozen):
    """Fully populated year-0 starting condition for one region."""

    region_name: str
    population: int = Field(..., ge=0)
    gdp_per_capita: float = Field(..., ge=0)
    mortality: float = Field(..., ge=0, le=100)
    life_expectancy: float = Field(..., ge=0, le=120)
    disease_prevalence: float = Field(..., ge=0, le=100)
    healthcare_access: float = Field(..., ge=0, le=100)
    economic_index: float = Field(..., ge=0, le=100)
    is_estimated: bool = False
    source: BaselineSource = "catalog"
    matched_region: str | None = None
    description: str = ""

    def metric_values(self) -> dict[str, float]:
        return {
            "mortality": self.mortality,
            "life_expectancy": self.life_expectancy,
            "disease_prevalence": self.disease_prevalence,
            "healthcare_access": self.healthcare_access,
            "economic_index": self.economic_index,
        }


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

class EstimatedBaseline(_Payload):
    population: int
    gdp: float
    mortality: float
    description: str = Field(..., min_length=1)


# metric -> (projected field, baseline field)
_YEARLY_FIELDS: dict[str, tuple[str, str]] = {
    "mortality": ("mortality_rate", "mortality_baseline"),
    "life_expectancy": ("life_expectancy", "life_expectancy_baseline"),
    "disease_prevalence": ("disease_prevalence", "disease_baseline"),
    "healthcare_access": ("healthcare_access", "healthcare_baseline"),
    "economic_index": ("economic_index", "economic_baseline"),
}


class YearlyMetrics(_Payload):
    year: int = Field(..., ge=1, le=HORIZON_YEARS)

    # Projections (with interventions)
    mortality_rate: float = Field(..., ge=0, le=100)
    life_expectancy: float = Field(..., ge=0, le=120)
    disease_prevalence: float = Field(..., ge=0, le=100)
    healthcare_access: float = Field(..., ge=0, le=100)
    economic_index: float = Field(..., ge=0, le=100)

    # Baselines (business as usual)
    mortality_baseline: float = Field(..., ge=0, le=100)
    life_expectancy_baseline: float = Field(..., ge=0, le=120)
    disease_baseline: float = Field(..., ge=0, le=100)
    healthcare_baseline: float = Field(..., ge=0, le=100)
    economic_baseline: float = Field(..., ge=0, le=100)

    def projected(self, metric: str) -> float:
        return getattr(self, _YEARLY_FIELDS[metric][0])

    def baseline(self, metric: str) -> float:
        return getattr(self, _YEARLY_FIELDS[metric][1])


class InterventionContribution(_Payload):
    intervention_id: str
    name: str
    category: InterventionCategory
    score: float = Field(..., ge=0, le=100)


class SimulationResult(_Payload):
    region_name: str
    summary: str
    yearly: tuple[YearlyMetrics, ...] = Field(..., alias="data")
    intervention_impact: tuple[InterventionContribution, ...] = ()
    impact_score: float = Field(..., ge=0, le=100)
    lives_saved: int
    economic_roi: float = Field(..., ge=0, alias="economicROI")
    key_insights: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    estimated_baseline: EstimatedBaseline | None = None

    @field_validator("yearly")
    @classmethod
    def years_in_order(cls, v: tuple[YearlyMetrics, ...]) -> tuple[YearlyMetrics, ...]:
        expected = list(range(1, HORIZON_YEARS + 1))
        if [m.year for m in v] != expected:
            raise ValueError(f"Yearly metrics must cover years {expected} in order")
        return v

    def final_year(self) -> YearlyMetrics:
        return self.yearly[-1]

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape consumed by the dashboard."""
        return self.model_dump(mode="json", by_alias=True)
