"""Static intervention catalog and selection resolution."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from ghis.simulation.models import Intervention, InterventionCategory, InterventionSelection
from ghis.utils import InvalidInputError

DEFAULT_INTERVENTIONS: tuple[Intervention, ...] = (
    Intervention(
        id="vax_expanded",
        name="Expanded Immunization",
        category=InterventionCategory.medical,
        description="Universal coverage for measles, polio, and new malaria vaccines.",
    ),
    Intervention(
        id="wash_infra",
        name="WASH Infrastructure",
        category=InterventionCategory.infrastructure,
        description="Investment in clean water access and modern sanitation facilities.",
    ),
    Intervention(
        id="telehealth",
        name="Telemedicine & AI",
        category=InterventionCategory.policy,
        description="Digital health platforms to reach remote rural areas.",
    ),
    Intervention(
        id="vector_control",
        name="Advanced Vector Control",
        category=InterventionCategory.environment,
        description="Genetically modified mosquito release and widespread bed net usage.",
    ),
    Intervention(
        id="nutri_supp",
        name="Maternal Nutrition",
        category=InterventionCategory.medical,
        description="Supplements and food security programs for mothers and infants.",
    ),
    Intervention(
        id="climate_res",
        name="Climate Resilience",
        category=InterventionCategory.environment,
        description="Infrastructure hardening against extreme weather and heat.",
    ),
    Intervention(
        id="education",
        name="Health Education",
        category=InterventionCategory.policy,
        description="Community-led programs for hygiene and preventive care.",
    ),
)

_BY_ID: dict[str, Intervention] = {i.id: i for i in DEFAULT_INTERVENTIONS}


def list_interventions() -> list[Intervention]:
    return list(DEFAULT_INTERVENTIONS)


def get_intervention(intervention_id: str) -> Intervention | None:
    return _BY_ID.get(intervention_id.strip().lower())


def resolve_selections(
    selections: Iterable[InterventionSelection | Mapping[str, Any]],
) -> list[Intervention]:
    """Turn (id, intensity, active) selections into catalog interventions.

    Raises InvalidInputError for unknown ids, out-of-range intensities, or
    an id selected more than once.
    """
    resolved: list[Intervention] = []
    seen: set[str] = set()
    for raw in selections:
        try:
            selection = (
                raw if isinstance(raw, InterventionSelection)
                else InterventionSelection.model_validate(raw)
            )
        except ValidationError as exc:
            raise InvalidInputError(f"Invalid intervention selection {raw!r}: {exc}") from exc

        definition = get_intervention(selection.id)
        if definition is None:
            raise InvalidInputError(f"Unknown intervention id: {selection.id}")
        if definition.id in seen:
            raise InvalidInputError(f"Intervention selected more than once: {definition.id}")
        seen.add(definition.id)

        resolved.append(definition.model_copy(
            update={"intensity": selection.intensity, "active": selection.active},
        ))
    return resolved
