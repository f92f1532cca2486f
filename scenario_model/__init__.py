"""Monthly population, employment and migration scenario model."""

from scenario_model.config import ScenarioParameters, merge_overlay
from scenario_model.engines.simulation import SimulationSnapshot, simulate
from scenario_model.projections.locations import (
    DEFAULT_LOCATIONS,
    LocationDisplayAttributes,
    NamedLocation,
    project,
)

__all__ = [
    'DEFAULT_LOCATIONS',
    'LocationDisplayAttributes',
    'NamedLocation',
    'ScenarioParameters',
    'SimulationSnapshot',
    'merge_overlay',
    'project',
    'simulate',
]
