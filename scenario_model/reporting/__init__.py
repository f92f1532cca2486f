"""Exports and charts for simulation results."""

from .export import (
    DataWriteError,
    SNAPSHOT_COLUMNS,
    snapshots_to_frame,
    to_csv_text,
    write_csv,
    write_geojson,
)
from .plots import plot_trajectories

__all__ = [
    "DataWriteError",
    "SNAPSHOT_COLUMNS",
    "plot_trajectories",
    "snapshots_to_frame",
    "to_csv_text",
    "write_csv",
    "write_geojson",
]
