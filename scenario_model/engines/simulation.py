# scenario_model/engines/simulation.py
"""
Monthly population and employment recurrence.

The engine is a first-order recurrence over two state variables, the total
population and the employed share of it. Each month adds births, deaths and
net migration to the population, nudges the employed share by the behaviour
and organisation parameters plus an annual sinusoidal shock, clamps the share,
and emits a rounded snapshot. Snapshots are for display; the next month always
starts from the unrounded state.

The functions here are pure: identical parameters give identical output, with
no randomness and no clock.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple, Union

from scenario_model.config.models import ScenarioParameters

logger = logging.getLogger("scenario_model.projection")

INITIAL_POPULATION = 146_000_000.0
INITIAL_EMPLOYED_SHARE = 0.60

MIN_EMPLOYED_SHARE = 0.45
MAX_EMPLOYED_SHARE = 0.70
# Fixed labour-force participation ceiling used for unemployment.
LABOR_FORCE_CEILING = 0.68

MONTHS_PER_YEAR = 12
FULL_RETIREMENT_AGE = 65


@dataclass(frozen=True)
class SimulationState:
    """Unrounded state carried from one month to the next."""
    population: float
    employed_share: float


@dataclass(frozen=True)
class SimulationSnapshot:
    """One month of output, rounded to whole units."""
    t: int
    population: int
    employed: int
    unemployed: int
    migration: int


INITIAL_STATE = SimulationState(INITIAL_POPULATION, INITIAL_EMPLOYED_SHARE)


def round_half_up(value: float) -> Union[int, float]:
    """Round to the nearest integer, halves towards positive infinity.

    Non-finite values (reachable only with extreme parameters) pass through
    unchanged.
    """
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def effective_rates(params: ScenarioParameters) -> Tuple[float, float]:
    """Annual birth and death rates after behavioural adjustments."""
    actions = params.behavior_rates
    birth_rate = params.annual_birth_rate * (
        1
        + actions.birth_rate_adj
        + 0.1 * (actions.pair_create_rate + actions.marry_rate)
        - 0.05 * actions.divorce_rate
    )
    death_rate = params.annual_death_rate * (
        1 + actions.death_rate_adj + 0.5 * params.person_attributes.illness
    )
    return birth_rate, death_rate


def monthly_migration(params: ScenarioParameters) -> float:
    """Net migrants per month; constant over the horizon."""
    factor = (
        1
        + (params.behavior_rates.migrate_prob - 0.5) * 0.5
        + (params.organization_actions.wage_index - 1) * 0.3
    )
    return params.annual_net_migration / MONTHS_PER_YEAR * factor


def employment_shock(params: ScenarioParameters, t: int) -> float:
    """Annual-period disturbance of the employed share, zero at t=0."""
    return params.employment_shock_amplitude * math.sin(2 * math.pi * t / MONTHS_PER_YEAR)


def employed_share_terms(params: ScenarioParameters) -> Tuple[float, ...]:
    """Additive monthly contributions to the employed share, in application order."""
    props = params.person_attributes
    actions = params.behavior_rates
    org = params.organization_actions
    return (
        0.02 * (props.skills - 0.5),
        0.01 * (actions.job_search_prob - 0.5),
        -0.01 * (actions.quit_prob - 0.5),
        0.01 * (org.hire_rate - org.fire_rate),
        0.003 * ((org.wage_index - 1) + (org.hours_index - 1)),
        -0.02 * (props.fatigue + props.illness - 1.0),
    )


def retirement_penalty(params: ScenarioParameters) -> float:
    """Share lost each month for every year the retirement age is below 65."""
    return max(0, FULL_RETIREMENT_AGE - params.behavior_rates.retire_age) * 0.002


def clamp_share(share: float) -> float:
    return max(MIN_EMPLOYED_SHARE, min(MAX_EMPLOYED_SHARE, share))


def step(
    state: SimulationState, params: ScenarioParameters, t: int
) -> Tuple[SimulationState, SimulationSnapshot]:
    """
    Advance the recurrence by one month.

    Args:
        state: Unrounded state at the end of month ``t - 1``.
        params: Scenario parameters.
        t: Zero-based index of the month being simulated.

    Returns:
        The new unrounded state and the rounded snapshot for month ``t``.
    """
    birth_rate, death_rate = effective_rates(params)
    births = birth_rate / MONTHS_PER_YEAR * state.population
    deaths = death_rate / MONTHS_PER_YEAR * state.population
    migration = monthly_migration(params)

    # No floor on population; see DESIGN.md.
    population = state.population + births - deaths + migration

    employed_share = state.employed_share + employment_shock(params, t)
    for term in employed_share_terms(params):
        employed_share += term
    employed_share -= retirement_penalty(params)
    employed_share = clamp_share(employed_share)

    employed = population * employed_share
    unemployed = max(0.0, population * LABOR_FORCE_CEILING - employed)

    new_state = SimulationState(population, employed_share)
    snapshot = SimulationSnapshot(
        t=t,
        population=round_half_up(population),
        employed=round_half_up(employed),
        unemployed=round_half_up(unemployed),
        migration=round_half_up(migration),
    )
    return new_state, snapshot


def _run(params: ScenarioParameters) -> Tuple[List[SimulationState], List[SimulationSnapshot]]:
    states: List[SimulationState] = []
    snapshots: List[SimulationSnapshot] = []
    state = INITIAL_STATE
    # A zero or negative horizon produces no months.
    for t in range(max(0, params.horizon_months)):
        state, snapshot = step(state, params, t)
        logger.debug(
            f"t={t} population={state.population:.1f} "
            f"employed_share={state.employed_share:.4f}"
        )
        states.append(state)
        snapshots.append(snapshot)
    return states, snapshots


def simulate(params: ScenarioParameters) -> Tuple[SimulationSnapshot, ...]:
    """
    Run the monthly recurrence for ``params.horizon_months`` months.

    Returns:
        An immutable, t-ordered sequence of snapshots. Its length is
        ``max(0, params.horizon_months)``; a horizon of zero or less gives an
        empty tuple.
    """
    _, snapshots = _run(params)
    if snapshots:
        logger.info(
            f"Simulated {len(snapshots)} months; final population "
            f"{snapshots[-1].population:,}, employed {snapshots[-1].employed:,}"
        )
    else:
        logger.info(f"Horizon {params.horizon_months} months: nothing to simulate")
    return tuple(snapshots)


def simulate_states(params: ScenarioParameters) -> Tuple[SimulationState, ...]:
    """Unrounded state after each month, aligned with :func:`simulate`."""
    states, _ = _run(params)
    return tuple(states)
