"""
Tests for the monthly simulation engine.
"""
import math

import pytest

from scenario_model.config.models import ScenarioParameters
from scenario_model.engines.simulation import (
    INITIAL_POPULATION,
    INITIAL_STATE,
    LABOR_FORCE_CEILING,
    MAX_EMPLOYED_SHARE,
    MIN_EMPLOYED_SHARE,
    SimulationSnapshot,
    round_half_up,
    simulate,
    simulate_states,
    step,
)


def _with_groups(params, **groups):
    """Copy params replacing fields inside the named groups."""
    updates = {
        name: getattr(params, name).model_copy(update=changes)
        for name, changes in groups.items()
    }
    return params.model_copy(update=updates)


def test_first_month_matches_closed_form(default_params):
    params = default_params.model_copy(update={"horizon_months": 1})

    birth_rate = 0.011 * (1 + 0.0 + 0.1 * (0.15 + 0.12) - 0.05 * 0.05)
    death_rate = 0.013 * (1 + 0.0 + 0.5 * 0.2)
    births = birth_rate / 12 * INITIAL_POPULATION
    deaths = death_rate / 12 * INITIAL_POPULATION
    migration = 150_000 / 12 * (1 + (0.2 - 0.5) * 0.5)
    expected_population = INITIAL_POPULATION + births - deaths + migration

    (snapshot,) = simulate(params)
    assert snapshot.population == round_half_up(expected_population)
    # Pinned regression values for the default parameter set.
    assert snapshot == SimulationSnapshot(
        t=0,
        population=145_973_754,
        employed=89_627_885,
        unemployed=9_634_268,
        migration=10_625,
    )


def test_first_month_employed_share(default_params):
    params = default_params.model_copy(update={"horizon_months": 1})
    (state,) = simulate_states(params)
    # 0.60 + skills 0.002 + quit 0.003 + hire/fire 0.001 + fatigue/illness 0.01 - retirement 0.002
    assert state.employed_share == pytest.approx(0.614)
    assert state.population == pytest.approx(145_973_753.9167, abs=1e-3)


@pytest.mark.parametrize("months", [-5, 0, 1, 12, 37, 120])
def test_length_matches_horizon(default_params, months):
    params = default_params.model_copy(update={"horizon_months": months})
    assert len(simulate(params)) == max(0, months)
    assert len(simulate_states(params)) == max(0, months)


def test_zero_horizon_is_empty(default_params):
    params = default_params.model_copy(update={"horizon_months": 0})
    assert simulate(params) == ()


def test_snapshots_are_ordered_by_month(default_params):
    snapshots = simulate(default_params)
    assert [s.t for s in snapshots] == list(range(default_params.horizon_months))


def test_simulation_is_deterministic(default_params):
    params = _with_groups(
        default_params.model_copy(update={"horizon_months": 48, "employment_shock_amplitude": 0.004}),
        behavior_rates={"migrate_prob": 0.7},
    )
    assert simulate(params) == simulate(params)
    assert simulate_states(params) == simulate_states(params)


def test_snapshots_are_immutable(default_params):
    snapshot = simulate(default_params)[0]
    with pytest.raises(AttributeError):
        snapshot.population = 0


def test_employed_share_saturates_at_upper_bound(default_params):
    params = _with_groups(
        default_params.model_copy(update={"horizon_months": 60}),
        person_attributes={"skills": 1.0, "fatigue": 0.0, "illness": 0.0},
        organization_actions={"hire_rate": 1.0, "fire_rate": 0.0},
        behavior_rates={"retire_age": 68},
    )
    states = simulate_states(params)
    assert all(MIN_EMPLOYED_SHARE <= s.employed_share <= MAX_EMPLOYED_SHARE for s in states)
    assert states[-1].employed_share == MAX_EMPLOYED_SHARE
    # Above the participation ceiling nobody is counted unemployed.
    assert all(s.unemployed == 0 for s in simulate(params)[-12:])


def test_employed_share_saturates_at_lower_bound(default_params):
    params = _with_groups(
        default_params.model_copy(update={"horizon_months": 60}),
        person_attributes={"skills": 0.0, "fatigue": 1.0, "illness": 1.0},
        organization_actions={"hire_rate": 0.0, "fire_rate": 1.0},
        behavior_rates={"retire_age": 55, "quit_prob": 1.0, "job_search_prob": 0.0},
    )
    states = simulate_states(params)
    assert all(MIN_EMPLOYED_SHARE <= s.employed_share <= MAX_EMPLOYED_SHARE for s in states)
    assert states[-1].employed_share == MIN_EMPLOYED_SHARE

    last_state, last = states[-1], simulate(params)[-1]
    expected_unemployed = last_state.population * (LABOR_FORCE_CEILING - MIN_EMPLOYED_SHARE)
    assert last.unemployed == pytest.approx(expected_unemployed, abs=1)


def test_unemployed_never_negative(default_params):
    for skills in (0.0, 0.5, 1.0):
        params = _with_groups(
            default_params.model_copy(update={"horizon_months": 120}),
            person_attributes={"skills": skills},
        )
        assert all(s.unemployed >= 0 for s in simulate(params))


def test_shock_is_annual_and_zero_at_start(default_params):
    base = default_params.model_copy(update={"horizon_months": 13, "employment_shock_amplitude": 0.0})
    shocked = base.model_copy(update={"employment_shock_amplitude": 0.001})
    base_states = simulate_states(base)
    shocked_states = simulate_states(shocked)
    # sin(0) = 0: month 0 is unaffected.
    assert shocked_states[0].employed_share == pytest.approx(base_states[0].employed_share)
    # Month 3 sits at the peak of the cycle.
    diff = [s.employed_share - b.employed_share for s, b in zip(shocked_states, base_states)]
    assert diff[3] - diff[2] == pytest.approx(0.001 * math.sin(2 * math.pi * 3 / 12))


def test_each_step_depends_only_on_previous_state(default_params):
    states = simulate_states(default_params)
    snapshots = simulate(default_params)
    state, snapshot = step(INITIAL_STATE, default_params, 0)
    assert state == states[0]
    assert snapshot == snapshots[0]
    for t in range(1, len(states)):
        state, snapshot = step(states[t - 1], default_params, t)
        assert state == states[t]
        assert snapshot == snapshots[t]


def test_carried_state_is_unrounded(default_params):
    states = simulate_states(default_params.model_copy(update={"horizon_months": 3}))
    assert any(s.population != round(s.population) for s in states)


def test_population_is_not_floored(default_params):
    params = default_params.model_copy(
        update={"horizon_months": 6, "annual_net_migration": -1e12}
    )
    snapshots = simulate(params)
    assert len(snapshots) == 6
    assert snapshots[-1].population < 0


def test_out_of_range_values_do_not_raise():
    params = ScenarioParameters.model_validate({
        "months": 24,
        "birthRate": 5.0,
        "deathRate": -1.0,
        "peopleActions": {"retireAge": 20, "migrateProb": 3.0},
        "orgActions": {"wageIndex": 10.0},
    })
    assert len(simulate(params)) == 24


def test_retirement_below_65_lowers_employment(default_params):
    early = _with_groups(default_params, behavior_rates={"retire_age": 58})
    late = _with_groups(default_params, behavior_rates={"retire_age": 66})
    assert simulate(early)[5].employed < simulate(late)[5].employed


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.4999, 1), (2.5, 3), (-2.5, -2), (-2.6, -3), (10_625.0, 10_625)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_round_half_up_passes_non_finite_through():
    assert math.isinf(round_half_up(float("inf")))
