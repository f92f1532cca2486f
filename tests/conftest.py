import pytest

from scenario_model.config.models import ScenarioParameters
from scenario_model.engines.simulation import SimulationSnapshot


@pytest.fixture
def default_params():
    """The explorer's default parameter set."""
    return ScenarioParameters()


@pytest.fixture
def make_snapshot():
    """Build a snapshot with only the fields a test cares about."""
    def _make(t=0, population=0, employed=0, unemployed=0, migration=0):
        return SimulationSnapshot(
            t=t,
            population=population,
            employed=employed,
            unemployed=unemployed,
            migration=migration,
        )
    return _make
