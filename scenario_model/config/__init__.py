"""Scenario parameter models, overlay merging and loaders."""

from .loaders import ConfigLoadError, load_policy_overlay, load_yaml_config
from .merge import merge_overlay
from .models import (
    OrganizationActions,
    PersonAttributes,
    PersonBehaviorRates,
    ScenarioParameters,
)

__all__ = [
    "ConfigLoadError",
    "OrganizationActions",
    "PersonAttributes",
    "PersonBehaviorRates",
    "ScenarioParameters",
    "load_policy_overlay",
    "load_yaml_config",
    "merge_overlay",
]
