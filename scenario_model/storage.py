# scenario_model/storage.py
"""
File-backed key-value store for the last-used parameter set.

The store file holds a single JSON object mapping keys to JSON-encoded
strings, the same layout a browser's local storage exposes. Only one key is
used in practice (``policy``), holding the serialized ScenarioParameters.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from scenario_model.config.merge import merge_overlay
from scenario_model.config.models import ScenarioParameters

logger = logging.getLogger(__name__)

POLICY_KEY = "policy"
DEFAULT_STORE_PATH = Path("output_dev/local_storage.json")


class StorageError(Exception):
    """Raised when the store file cannot be written."""

    pass


class ParameterStore:
    """Single-file key-value store of JSON strings."""

    def __init__(self, path: Union[str, Path] = DEFAULT_STORE_PATH):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.is_file():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.info(f"Store {self.path} is unreadable, treating as empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.info(f"Store {self.path} does not hold an object, treating as empty")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, sort_keys=True)
        except OSError as e:
            raise StorageError(f"Could not write store {self.path}") from e
        logger.debug(f"Stored key '{key}' in {self.path}")

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            try:
                with open(self.path, "w", encoding="utf-8") as f:
                    json.dump(items, f, indent=2, sort_keys=True)
            except OSError as e:
                raise StorageError(f"Could not write store {self.path}") from e

    def save_document(self, document: Dict[str, Any], key: str = POLICY_KEY) -> None:
        """Store a raw parameter document under ``key``."""
        self.set_item(key, json.dumps(document))

    def save_parameters(self, params: ScenarioParameters, key: str = POLICY_KEY) -> None:
        """Store ``params`` in the persisted camelCase layout."""
        self.save_document(params.to_document(), key)
        logger.info(f"Saved parameters to {self.path} under '{key}'")

    def load_document(self, key: str = POLICY_KEY) -> Optional[Dict[str, Any]]:
        """Return the stored document, or None if it is missing or not valid JSON."""
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.info(f"Stored value under '{key}' is not valid JSON: {e}")
            return None
        if not isinstance(document, dict):
            logger.info(f"Stored value under '{key}' is not a parameter document")
            return None
        return document

    def load_parameters(self, current: ScenarioParameters, key: str = POLICY_KEY) -> ScenarioParameters:
        """
        Merge the stored document over ``current``.

        Returns ``current`` unchanged when nothing usable is stored.
        """
        document = self.load_document(key)
        if document is None:
            return current
        try:
            merged = merge_overlay(current, document)
        except (TypeError, ValueError) as e:
            logger.info(f"Ignoring stored parameters under '{key}': {e}")
            return current
        logger.info(f"Loaded parameters from {self.path} under '{key}'")
        return merged
