# scenario_model/config/merge.py
"""
Overlay merging for scenario parameters.

Every source of parameters (policy files, the parameter store, YAML scenario
files with ``extends``) goes through :func:`merge_overlay`. The merge is
shallow at the top level and one level deep for each parameter group: a key
present in the overlay wins, anything it leaves out falls back to the base.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from .models import PARAMETER_GROUPS, ScenarioParameters

logger = logging.getLogger(__name__)


def _alias_map(model_cls) -> Dict[str, str]:
    """Map both field names and aliases of ``model_cls`` to the alias."""
    mapping = {}
    for name, info in model_cls.model_fields.items():
        alias = info.alias or name
        mapping[name] = alias
        mapping[alias] = alias
    return mapping


_TOP_LEVEL_KEYS = _alias_map(ScenarioParameters)
_GROUP_KEYS = {
    key: _alias_map(group_cls) for key, group_cls in PARAMETER_GROUPS.values()
}


def _normalize_keys(overlay: Mapping[str, Any], key_map: Dict[str, str], where: str) -> Dict[str, Any]:
    normalized = {}
    for key, value in overlay.items():
        alias = key_map.get(str(key))
        if alias is None:
            logger.debug(f"Ignoring unknown key '{key}' in {where}")
            continue
        normalized[alias] = value
    return normalized


def merge_overlay(
    defaults: ScenarioParameters, overlay: Optional[Mapping[str, Any]]
) -> ScenarioParameters:
    """
    Merge a parameter document over ``defaults`` and return new parameters.

    Args:
        defaults: The parameters currently in effect. Never modified.
        overlay: A full or partial document, keyed either by the persisted
            camelCase names or by the Python field names. ``None`` values and
            unknown keys are ignored.

    Returns:
        A new, validated ScenarioParameters.

    Raises:
        TypeError: If ``overlay`` or one of its groups is not a mapping.
        pydantic.ValidationError: If a merged value has the wrong type.
    """
    if overlay is None:
        return defaults
    if not isinstance(overlay, Mapping):
        raise TypeError(f"Parameter overlay must be a mapping, got {type(overlay).__name__}")

    merged = defaults.model_dump(by_alias=True)
    for key, value in _normalize_keys(overlay, _TOP_LEVEL_KEYS, "overlay").items():
        if value is None:
            continue
        if key in _GROUP_KEYS:
            if not isinstance(value, Mapping):
                raise TypeError(
                    f"Parameter group '{key}' must be a mapping, got {type(value).__name__}"
                )
            group = _normalize_keys(value, _GROUP_KEYS[key], f"group '{key}'")
            merged[key] = {
                **merged[key],
                **{k: v for k, v in group.items() if v is not None},
            }
        else:
            merged[key] = value

    return ScenarioParameters.model_validate(merged)
