# scenario_model/session.py
"""
Interactive session state.

A front end holds exactly one current parameter value. Every edit builds a
new ScenarioParameters and replaces the slot; the previous value is never
mutated. Results are recomputed synchronously from scratch on each change.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence, Tuple

from scenario_model.config.loaders import load_policy_overlay
from scenario_model.config.merge import merge_overlay
from scenario_model.config.models import PARAMETER_GROUPS, ScenarioParameters
from scenario_model.engines.simulation import SimulationSnapshot, simulate
from scenario_model.projections.locations import (
    DEFAULT_LOCATIONS,
    LocationDisplayAttributes,
    NamedLocation,
    project,
)
from scenario_model.storage import ParameterStore

logger = logging.getLogger(__name__)

_GROUP_FIELDS = {key: name for name, (key, _) in PARAMETER_GROUPS.items()}
_GROUP_FIELDS.update({name: name for name in PARAMETER_GROUPS})


class ScenarioSession:
    """Owns the current parameters and the results derived from them."""

    def __init__(
        self,
        params: Optional[ScenarioParameters] = None,
        locations: Sequence[NamedLocation] = DEFAULT_LOCATIONS,
        store: Optional[ParameterStore] = None,
        engine: Callable[[ScenarioParameters], Tuple[SimulationSnapshot, ...]] = simulate,
    ):
        self.locations = tuple(locations)
        self.store = store
        self._engine = engine
        self._params = params if params is not None else ScenarioParameters()
        self._snapshots = self._engine(self._params)

    @property
    def params(self) -> ScenarioParameters:
        return self._params

    @property
    def snapshots(self) -> Tuple[SimulationSnapshot, ...]:
        return self._snapshots

    def location_view(self) -> List[LocationDisplayAttributes]:
        """Per-location attributes for the latest month; empty when nothing was simulated."""
        if not self._snapshots:
            return []
        return project(self._snapshots, self.locations)

    def replace(self, params: ScenarioParameters) -> ScenarioParameters:
        """Swap in a new parameter value and recompute."""
        self._params = params
        self._snapshots = self._engine(params)
        return params

    def update(self, **changes: Any) -> ScenarioParameters:
        """
        Replace top-level fields, e.g. ``update(horizon_months=60)`` or
        ``update(months=60)``.

        Raises:
            pydantic.ValidationError: If a value has the wrong type. The
                current parameters are kept.
        """
        return self.replace(merge_overlay(self._params, changes))

    def update_group(self, group: str, **changes: Any) -> ScenarioParameters:
        """
        Replace fields inside one parameter group.

        ``group`` may be the Python field name (``behavior_rates``) or the
        persisted key (``peopleActions``).
        """
        field_name = _GROUP_FIELDS.get(group)
        if field_name is None:
            raise KeyError(f"Unknown parameter group '{group}'")
        return self.replace(merge_overlay(self._params, {field_name: changes}))

    def load_policy(self, policy_path) -> ScenarioParameters:
        """Overlay a policy file; a missing or broken file leaves the session as is."""
        merged = load_policy_overlay(policy_path, self._params, store=self.store)
        if merged is self._params:
            return merged
        return self.replace(merged)

    def save(self) -> None:
        """Persist the current parameters to the store."""
        if self.store is None:
            raise RuntimeError("Session has no parameter store")
        self.store.save_parameters(self._params)

    def restore(self) -> ScenarioParameters:
        """Overlay the stored parameters, if any, onto the current ones."""
        if self.store is None:
            raise RuntimeError("Session has no parameter store")
        restored = self.store.load_parameters(self._params)
        if restored is self._params:
            return restored
        return self.replace(restored)
