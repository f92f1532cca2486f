# scenario_model/reporting/plots.py
"""
Static charts of a simulation run.

Two figures, matching the explorer's chart panels: population with employed
and unemployed counts, and monthly net migration.
"""

import logging
from pathlib import Path
from typing import List, Sequence

# To prevent GUI errors on headless servers, and for consistency:
import matplotlib
matplotlib.use('Agg')  # Use a non-interactive backend
import matplotlib.pyplot as plt
import matplotlib.ticker as mtick

from scenario_model.engines.simulation import SimulationSnapshot
from .export import snapshots_to_frame

logger = logging.getLogger(__name__)

POPULATION_PLOT = "population_employment.png"
MIGRATION_PLOT = "net_migration.png"


def _millions(value, _pos):
    return f"{value / 1_000_000:.0f}M"


def plot_trajectories(snapshots: Sequence[SimulationSnapshot], output_dir: Path) -> List[Path]:
    """
    Plot the snapshot sequence to PNG files in ``output_dir``.

    Returns:
        Paths of the files written; empty if there was nothing to plot.
    """
    if not snapshots:
        logger.warning("No snapshots to plot. Skipping plotting.")
        return []

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    df = snapshots_to_frame(snapshots)
    written = []

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.fill_between(df["t"], df["population"], color="#6366f1", alpha=0.3)
    ax.plot(df["t"], df["population"], color="#6366f1", label="population")
    ax.plot(df["t"], df["employed"], color="#16a34a", label="employed")
    ax.plot(df["t"], df["unemployed"], color="#ef4444", label="unemployed")
    ax.set_xlabel("Month")
    ax.yaxis.set_major_formatter(mtick.FuncFormatter(_millions))
    ax.grid(color="#eeeeee")
    ax.legend()
    plt.title("Population and employment")
    fig.tight_layout()
    path = output_dir / POPULATION_PLOT
    plt.savefig(path)
    plt.close(fig)
    logger.info(f"Saved population plot to {path}")
    written.append(path)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(df["t"], df["migration"], color="#0ea5e9", label="migration")
    ax.set_xlabel("Month")
    ax.yaxis.set_major_formatter(mtick.StrMethodFormatter('{x:,.0f}'))
    ax.grid(color="#eeeeee")
    ax.legend()
    plt.title("Net migration (monthly)")
    fig.tight_layout()
    path = output_dir / MIGRATION_PLOT
    plt.savefig(path)
    plt.close(fig)
    logger.info(f"Saved migration plot to {path}")
    written.append(path)

    return written
