import pytest
from pydantic import ValidationError

from scenario_model.config.merge import merge_overlay
from scenario_model.config.models import ScenarioParameters


def test_none_overlay_returns_defaults(default_params):
    assert merge_overlay(default_params, None) is default_params


def test_top_level_values_replace_defaults(default_params):
    merged = merge_overlay(default_params, {"months": 60, "migrationNet": -50_000})
    assert merged.horizon_months == 60
    assert merged.annual_net_migration == -50_000
    assert merged.annual_birth_rate == default_params.annual_birth_rate
    assert merged.behavior_rates == default_params.behavior_rates


def test_groups_merge_one_level_deep(default_params):
    merged = merge_overlay(default_params, {"peopleActions": {"retireAge": 58}})
    assert merged.behavior_rates.retire_age == 58
    assert merged.behavior_rates.quit_prob == default_params.behavior_rates.quit_prob
    assert merged.person_attributes == default_params.person_attributes


def test_partial_group_falls_back_to_current_not_defaults():
    current = ScenarioParameters.model_validate({"orgActions": {"hireRate": 0.9, "wageIndex": 1.3}})
    merged = merge_overlay(current, {"orgActions": {"wageIndex": 0.8}})
    assert merged.organization_actions.hire_rate == 0.9
    assert merged.organization_actions.wage_index == 0.8


def test_field_names_accepted_as_keys(default_params):
    merged = merge_overlay(
        default_params,
        {"horizon_months": 12, "behavior_rates": {"quit_prob": 0.4}},
    )
    assert merged.horizon_months == 12
    assert merged.behavior_rates.quit_prob == 0.4


def test_unknown_keys_and_nulls_ignored(default_params):
    merged = merge_overlay(
        default_params,
        {"colour": "blue", "months": None, "peopleProps": {"height": 2, "skills": None}},
    )
    assert merged == default_params


def test_merge_does_not_modify_inputs(default_params):
    overlay = {"peopleProps": {"skills": 0.9}}
    merge_overlay(default_params, overlay)
    assert default_params.person_attributes.skills == 0.6
    assert overlay == {"peopleProps": {"skills": 0.9}}


def test_non_mapping_overlay_rejected(default_params):
    with pytest.raises(TypeError):
        merge_overlay(default_params, ["months", 12])


def test_non_mapping_group_rejected(default_params):
    with pytest.raises(TypeError):
        merge_overlay(default_params, {"orgActions": 1.2})


def test_invalid_value_rejected(default_params):
    with pytest.raises(ValidationError):
        merge_overlay(default_params, {"peopleActions": {"retireAge": "sixty"}})
