# scenario_model/reporting/export.py
"""
Functions for writing simulation outputs (CSV table, GeoJSON overlay).
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

from scenario_model.engines.simulation import SimulationSnapshot

logger = logging.getLogger(__name__)

SNAPSHOT_COLUMNS: List[str] = ["t", "population", "employed", "unemployed", "migration"]


class DataWriteError(Exception):
    """Custom exception for errors during data writing."""

    pass


def snapshots_to_frame(snapshots: Sequence[SimulationSnapshot]) -> pd.DataFrame:
    """One row per snapshot, columns in export order."""
    if not snapshots:
        return pd.DataFrame({col: pd.Series(dtype="int64") for col in SNAPSHOT_COLUMNS})
    return pd.DataFrame([asdict(s) for s in snapshots], columns=SNAPSHOT_COLUMNS)


def to_csv_text(snapshots: Sequence[SimulationSnapshot]) -> str:
    """
    Render snapshots as delimited text.

    The first line is ``t,population,employed,unemployed,migration``; each
    following line is one snapshot in sequence order.
    """
    return snapshots_to_frame(snapshots).to_csv(index=False, lineterminator="\n")


def write_csv(snapshots: Sequence[SimulationSnapshot], out_path: Union[str, Path]) -> Path:
    """
    Write snapshots to a CSV file.

    Raises:
        DataWriteError: If writing fails.
    """
    out_path = Path(out_path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(to_csv_text(snapshots), encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to write CSV to {out_path}: {e}")
        raise DataWriteError(f"Failed to write CSV to {out_path}") from e
    logger.info(f"Wrote {len(snapshots)} snapshots to {out_path}")
    return out_path


def write_geojson(collection: Dict[str, Any], out_path: Union[str, Path]) -> Path:
    """
    Write a GeoJSON FeatureCollection.

    Raises:
        DataWriteError: If writing fails.
    """
    out_path = Path(out_path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump(collection, f, ensure_ascii=False, indent=2)
    except OSError as e:
        logger.error(f"Failed to write GeoJSON to {out_path}: {e}")
        raise DataWriteError(f"Failed to write GeoJSON to {out_path}") from e
    logger.info(f"Wrote {len(collection.get('features', []))} features to {out_path}")
    return out_path
