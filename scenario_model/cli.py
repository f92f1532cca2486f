# scenario_model/cli.py
# Command-line interface entry point
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np
import pandas as pd

from scenario_model.config.loaders import ConfigLoadError
from scenario_model.config.models import ScenarioParameters
from scenario_model.projections.locations import to_feature_collection
from scenario_model.projections.styling import style_features
from scenario_model.reporting.export import DataWriteError, write_csv, write_geojson
from scenario_model.reporting.plots import plot_trajectories
from scenario_model.scenario_loader import load as load_scenario
from scenario_model.session import ScenarioSession
from scenario_model.storage import DEFAULT_STORE_PATH, ParameterStore, StorageError

# Import logging configuration
from logging_config import setup_logging, get_logger, PROJECTION_LOGGER, ERROR_LOGGER, DEBUG_LOGGER

# Get logger for this module
logger = logging.getLogger(__name__)

# Directory for log files
LOG_DIR = Path("output_dev/projection_logs")
DEFAULT_OUTPUT_DIR = Path("output_dev/scenario_results")

CSV_NAME = "simulation.csv"
GEOJSON_NAME = "locations.geojson"


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Project population, employment and migration month by month."
    )

    parser.add_argument(
        "--scenario",
        type=str,
        default=None,
        help="Path to a YAML/JSON scenario file ('extends' is supported)."
    )
    parser.add_argument(
        "--policy",
        type=str,
        default=None,
        help="Optional policy JSON overlaid on the parameters. Ignored if unreadable."
    )
    parser.add_argument(
        "--months",
        type=int,
        default=None,
        help="Override the number of months to simulate."
    )
    parser.add_argument(
        "--store",
        type=str,
        default=str(DEFAULT_STORE_PATH),
        help=f"Parameter store file (default: {DEFAULT_STORE_PATH})"
    )
    parser.add_argument(
        "--load-saved",
        action="store_true",
        help="Start from the parameters saved in the store"
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save the final parameters to the store"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=str(DEFAULT_OUTPUT_DIR),
        help=f"Directory to save output files (default: {DEFAULT_OUTPUT_DIR})"
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip writing PNG charts"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=str(LOG_DIR),
        help=f"Directory to store log files (default: {LOG_DIR})"
    )

    return parser.parse_args(argv)


def initialize_logging(debug: bool = False, log_dir: Path = LOG_DIR) -> None:
    """Initialize the logging configuration and record the run environment."""
    setup_logging(log_dir=log_dir, debug=debug)

    logger.info("Starting scenario projection")
    logger.info(f"Command line arguments: {sys.argv}")
    logger.info(f"Python version: {sys.version}")
    logger.info(f"Pandas version: {pd.__version__}")
    logger.info(f"NumPy version: {np.__version__}")

    if debug:
        logging.getLogger(DEBUG_LOGGER).debug("Debug logging enabled")


def resolve_parameters(args: argparse.Namespace, session: ScenarioSession) -> ScenarioParameters:
    """Apply scenario file, stored parameters, policy and overrides, in that order."""
    if args.scenario:
        logger.info(f"Loading scenario from: {args.scenario}")
        scenario = load_scenario(args.scenario)
        if not isinstance(scenario, ScenarioParameters):
            raise ConfigLoadError(f"--scenario must name a file, got directory {args.scenario}")
        session.replace(scenario)

    if args.load_saved:
        session.restore()

    if args.policy:
        session.load_policy(args.policy)

    if args.months is not None:
        session.update(horizon_months=args.months)

    for message in session.params.range_warnings():
        logger.warning(f"Parameter {message}")
    return session.params


def run_projection(args: argparse.Namespace, output_path: Path) -> ScenarioSession:
    """
    Resolve parameters, run the engine and write the outputs.

    Raises:
        ConfigLoadError: If the scenario file is invalid.
        FileNotFoundError: If a scenario's parent file is missing.
        DataWriteError: If an output cannot be written.
    """
    proj_logger = logging.getLogger(PROJECTION_LOGGER)
    session = ScenarioSession(store=ParameterStore(args.store))
    params = resolve_parameters(args, session)
    proj_logger.info(f"Running {params.horizon_months} months")

    snapshots = session.snapshots
    write_csv(snapshots, output_path / CSV_NAME)

    view = session.location_view()
    if view:
        write_geojson(style_features(to_feature_collection(view)), output_path / GEOJSON_NAME)
    else:
        logger.warning("No months simulated; skipping location overlay")

    if not args.no_plots:
        plot_trajectories(snapshots, output_path)

    if args.save:
        session.save()
    return session


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the scenario projection CLI."""
    err_logger = get_logger(ERROR_LOGGER)

    args = parse_arguments(argv)
    try:
        initialize_logging(debug=args.debug, log_dir=Path(args.log_dir))
    except OSError as e:
        print(f"Error initializing logging: {e}", file=sys.stderr)
        return 1

    output_path = Path(args.output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    logger.info(f"Output will be saved to: {output_path}")

    try:
        session = run_projection(args, output_path)
    except (ConfigLoadError, FileNotFoundError, ValueError) as e:
        err_logger.error(f"Invalid scenario configuration: {e}", exc_info=True)
        return 1
    except (DataWriteError, StorageError) as e:
        err_logger.error(f"Could not write results: {e}", exc_info=True)
        return 1

    if session.snapshots:
        last = session.snapshots[-1]
        print(
            f"Month {last.t}: population {last.population:,}, employed {last.employed:,}, "
            f"unemployed {last.unemployed:,}"
        )
    print(f"Results written to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
