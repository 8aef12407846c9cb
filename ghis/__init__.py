"""
GHIS (Global Health Impact Simulator)
Deterministic 5-year projections of health and economic outcomes under
policy interventions, contrasted against a business-as-usual baseline.
"""

__version__ = "0.1.0"

from ghis.config import Config, get_config
from ghis.simulation.engine import run_simulation, simulate
from ghis.simulation.models import (
    Intervention,
    InterventionCategory,
    InterventionSelection,
    Region,
    SimulationResult,
)
from ghis.utils import GHISError, InvalidInputError, SimulationIntegrityError

__all__ = [
    "Config",
    "get_config",
    "run_simulation",
    "simulate",
    "Intervention",
    "InterventionCategory",
    "InterventionSelection",
    "Region",
    "SimulationResult",
    "GHISError",
    "InvalidInputError",
    "SimulationIntegrityError",
]
