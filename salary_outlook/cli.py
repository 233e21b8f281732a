# salary_outlook/cli.py
# Command-line interface entry point (argparse)
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np
import pandas as pd

from salary_outlook.config.loaders import ConfigLoadError, load_report_config
from salary_outlook.data.readers import DataReadError
from salary_outlook.data.writers import DataWriteError
from salary_outlook.pipeline import ReportResult, run_report, save_report
from salary_outlook.schema import columns as cols

# Import logging configuration
from logging_config import setup_logging, DEBUG_LOGGER, ERROR_LOGGER, REPORT_LOGGER

# Get logger for this module
logger = logging.getLogger(__name__)

# Default directories
LOG_DIR = Path("output/report_logs")
OUTPUT_DIR = Path("output/salary_outlook")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Forecast salaries per role and rank the skills each role uses."
    )

    # Required arguments
    parser.add_argument(
        "--salaries",
        type=str,
        required=True,
        help="Path to the salary records file (.csv or .parquet)."
    )
    parser.add_argument(
        "--survey",
        type=str,
        required=True,
        help="Path to the skill survey file (.csv or .parquet)."
    )

    # Optional arguments
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file merged over the packaged default configuration."
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=str(OUTPUT_DIR),
        help=f"Directory to save report tables and plots (default: {OUTPUT_DIR})"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=str(LOG_DIR),
        help=f"Directory to store log files (default: {LOG_DIR})"
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Write the tables only."
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def initialize_logging(debug: bool = False, log_dir: Path = LOG_DIR) -> None:
    """Initialize the logging configuration and record run details."""
    setup_logging(log_dir=log_dir, debug=debug)

    logger.info("Starting salary outlook report")
    logger.info(f"Command line arguments: {sys.argv}")
    logger.info(f"Python version: {sys.version}")
    logger.info(f"Pandas version: {pd.__version__}")
    logger.info(f"NumPy version: {np.__version__}")

    if debug:
        debug_logger = logging.getLogger(DEBUG_LOGGER)
        debug_logger.debug("Debug logging enabled")
        debug_logger.debug(f"Log directory: {Path(log_dir).resolve()}")


def print_summary(result: ReportResult) -> None:
    """Short console summary separating trusted forecasts from degraded ones."""
    tables = result.tables()
    status = tables["forecast_status"]
    forecasts = tables["forecasts"]

    print(f"Forecast years: {result.forecast_years}")
    for row in status.itertuples(index=False):
        role = getattr(row, cols.ROLE)
        state = getattr(row, cols.STATUS)
        print(f"\n{role} [{state}]")
        if state == cols.STATUS_INSUFFICIENT_DATA:
            print(f"  no forecast: {getattr(row, cols.MESSAGE)}")
            continue
        for point in forecasts[forecasts[cols.ROLE] == role].itertuples(index=False):
            print(
                f"  {getattr(point, cols.FORECAST_YEAR)}: {getattr(point, cols.POINT_ESTIMATE):,.0f} "
                f"({getattr(point, cols.LOWER_BOUND):,.0f} .. {getattr(point, cols.UPPER_BOUND):,.0f})"
            )
        skills = result.skill_counts[result.skill_counts[cols.ROLE] == role][cols.SKILL].tolist()
        print(f"  top skills: {', '.join(skills)}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the salary outlook CLI."""
    args = parse_arguments(argv)
    err_logger = logging.getLogger(ERROR_LOGGER)

    try:
        initialize_logging(debug=args.debug, log_dir=Path(args.log_dir))
    except OSError as e:
        print(f"Error initializing logging: {e}", file=sys.stderr)
        return 1

    report_logger = logging.getLogger(REPORT_LOGGER)
    report_logger.info(f"Starting report run with arguments: {vars(args)}")
    debug_logger = logging.getLogger(DEBUG_LOGGER)
    debug_logger.debug(f"Parsed arguments: {vars(args)}")

    try:
        config = load_report_config(args.config)
        debug_logger.debug(f"Resolved report configuration: {config.model_dump()}")
        result = run_report(args.salaries, args.survey, config)
        output_path = Path(args.output_dir)
        save_report(result, output_path, make_plots=not args.no_plots)
    except ConfigLoadError as e:
        err_logger.error(f"Invalid configuration: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except DataReadError as e:
        err_logger.error(f"Could not load input data: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except DataWriteError as e:
        err_logger.error(f"Could not save report: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print_summary(result)
    report_logger.info(f"Report completed successfully. All outputs saved in: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
