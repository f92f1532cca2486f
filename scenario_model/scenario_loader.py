from typing import Dict, Optional, Set, Union
import os
import glob

from scenario_model.config.loaders import ConfigLoadError, load_yaml_config
from scenario_model.config.merge import merge_overlay
from scenario_model.config.models import ScenarioParameters

__all__ = ['load']

SCENARIO_PATTERNS = ('*.yaml', '*.yml', '*.json')


def _apply(base: ScenarioParameters, cfg: dict, source: str) -> ScenarioParameters:
    overrides = {k: v for k, v in cfg.items() if k != 'extends'}
    try:
        return merge_overlay(base, overrides)
    except (TypeError, ValueError) as e:
        raise ConfigLoadError(f"Invalid parameters in {source}: {e}") from e


def _load_file(path: str, seen: Optional[Set[str]] = None) -> ScenarioParameters:
    path = os.path.abspath(path)
    if seen is None:
        seen = set()
    if path in seen:
        raise ValueError(f"Circular extends detected in '{path}'")
    seen.add(path)

    cfg = load_yaml_config(path)
    parent = cfg.get('extends')
    if not parent:
        return _apply(ScenarioParameters(), cfg, path)
    parent_fp = os.path.join(os.path.dirname(path), parent)
    if not os.path.exists(parent_fp):
        raise FileNotFoundError(f"Parent config '{parent}' not found for {path}")
    return _apply(_load_file(parent_fp, seen), cfg, path)


def load(path: str) -> Union[ScenarioParameters, Dict[str, ScenarioParameters]]:
    """
    Load a scenario from a YAML/JSON file or a directory of them.
    If path is a directory, returns Dict[str, ScenarioParameters] keyed by file stem.
    If path is a file, returns its ScenarioParameters, resolving 'extends'.
    Each level of an 'extends' chain is merged over its parent with merge_overlay.
    """
    if os.path.isdir(path):
        files = {}
        for ext in SCENARIO_PATTERNS:
            for fp in sorted(glob.glob(os.path.join(path, ext))):
                files[os.path.splitext(os.path.basename(fp))[0]] = fp
        return {name: _load_file(fp) for name, fp in sorted(files.items())}
    return _load_file(path)
