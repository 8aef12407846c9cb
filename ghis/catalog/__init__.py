"""Static reference data: regions and intervention definitions."""

from ghis.catalog.interventions import (
    DEFAULT_INTERVENTIONS,
    get_intervention,
    list_interventions,
    resolve_selections,
)
from ghis.catalog.regions import (
    REGIONS,
    find_parent_region,
    get_region,
    list_regions,
    make_custom_region,
)

__all__ = [
    "DEFAULT_INTERVENTIONS",
    "REGIONS",
    "find_parent_region",
    "get_intervention",
    "get_region",
    "list_interventions",
    "list_regions",
    "make_custom_region",
    "resolve_selections",
]
