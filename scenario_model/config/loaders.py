import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from cerberus import Validator

from .merge import merge_overlay
from .models import PARAMETER_GROUPS, ScenarioParameters

# Configure logger for this module
logger = logging.getLogger(__name__)


class ConfigLoadError(Exception):
    """Custom exception for errors during config loading."""

    pass


def _group_schema(group_cls) -> Dict[str, Any]:
    fields = {}
    for name, info in group_cls.model_fields.items():
        rule = {"type": "number", "nullable": True}
        fields[info.alias or name] = rule
        fields[name] = rule
    return {"type": "dict", "nullable": True, "allow_unknown": True, "schema": fields}


def _document_schema() -> Dict[str, Any]:
    schema: Dict[str, Any] = {}
    for name, info in ScenarioParameters.model_fields.items():
        if name in PARAMETER_GROUPS:
            _, group_cls = PARAMETER_GROUPS[name]
            rule = _group_schema(group_cls)
        else:
            rule = {"type": "number", "nullable": True}
        schema[info.alias or name] = rule
        schema[name] = rule
    schema["extends"] = {"type": "string"}
    schema["name"] = {"type": "string"}
    schema["description"] = {"type": "string"}
    return schema


PARAMETER_DOCUMENT_SCHEMA = _document_schema()


def validate_parameter_document(document: Any, source: str = "<document>") -> Dict[str, Any]:
    """
    Check that ``document`` has the shape of a parameter document.

    Unknown keys are allowed (they are ignored by the merge), but known keys
    must hold numbers, and parameter groups must be mappings.

    Raises:
        ConfigLoadError: If the document is not a mapping or fails the schema.
    """
    if not isinstance(document, dict):
        raise ConfigLoadError(
            f"Invalid parameter document in {source}: Expected a dictionary."
        )
    v = Validator(PARAMETER_DOCUMENT_SCHEMA, allow_unknown=True)
    if not v.validate(document):
        raise ConfigLoadError(f"Parameter document validation failed for {source}: {v.errors}")
    return document


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Loads a parameter document from a YAML (or JSON) file.

    Args:
        config_path: Path to the file. ``.json`` files are parsed as JSON,
            everything else as YAML.

    Returns:
        The validated document as a dictionary.

    Raises:
        ConfigLoadError: If the file cannot be found, parsed or validated.
    """
    if not isinstance(config_path, Path):
        config_path = Path(config_path)

    logger.info(f"Attempting to load configuration from: {config_path}")

    if not config_path.is_file():
        raise ConfigLoadError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.suffix.lower() == ".json":
                config_data = json.load(f)
            else:
                config_data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"Error parsing file {config_path}") from e
    except OSError as e:
        raise ConfigLoadError(f"Could not read {config_path}") from e

    if config_data is None:
        config_data = {}
    validate_parameter_document(config_data, str(config_path))
    logger.info(f"Successfully loaded configuration from {config_path}")
    return config_data


def load_policy_overlay(
    policy_path: Union[str, Path],
    current: ScenarioParameters,
    store=None,
) -> ScenarioParameters:
    """
    Overlay a policy JSON file onto the current parameters.

    The policy file is optional: any failure to read, parse, validate or
    merge it is logged and ``current`` is returned unchanged. On success the
    raw policy document is also saved to ``store`` (when given) so the next
    session starts from it.

    Args:
        policy_path: Path to the policy document.
        current: The parameters in effect.
        store: Optional ParameterStore receiving the raw document.

    Returns:
        The merged parameters, or ``current`` if the policy could not be used.
    """
    try:
        document = load_yaml_config(policy_path)
        merged = merge_overlay(current, document)
    except (ConfigLoadError, TypeError, ValueError) as e:
        logger.info(f"Ignoring policy overlay {policy_path}: {e}")
        return current

    for message in merged.range_warnings():
        logger.warning(f"Policy {policy_path}: {message}")

    if store is not None:
        store.save_document(document)
    logger.info(f"Applied policy overlay from {policy_path}")
    return merged


# Expose for import
__all__ = [
    "ConfigLoadError",
    "PARAMETER_DOCUMENT_SCHEMA",
    "load_policy_overlay",
    "load_yaml_config",
    "validate_parameter_document",
]
