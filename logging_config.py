"""
Structured logging configuration for the salary-outlook project.

This module provides a centralized way to configure logging across the report
with different log levels and output files for different concerns.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional, Tuple

# Define logger names for different concerns
REPORT_LOGGER = "salary_outlook.report"
PERFORMANCE_LOGGER = "salary_outlook.performance"
ERROR_LOGGER = "salary_outlook.errors"
DEBUG_LOGGER = "salary_outlook.debug"

# Standard log format with module name and line number
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILES = (
    "report_events.log",
    "performance_metrics.log",
    "warnings_errors.log",
    "debug_detail.log",
    "combined.log",
)

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

# Track if logging is already configured and the handlers it installed
_LOGGING_CONFIGURED = False
_installed_handlers: List[Tuple[Optional[str], logging.Handler]] = []


def clear_logs(log_dir: Path) -> None:
    """
    Clear all log files in the specified directory.

    Args:
        log_dir: Directory containing log files to clear
    """
    for name in LOG_FILES:
        log_file = log_dir / name
        if log_file.exists():
            try:
                log_file.unlink()
            except OSError as e:
                logging.getLogger(__name__).warning(f"Could not delete {log_file}: {e}")


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding='utf-8',
        mode='a'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _install(logger_name: Optional[str], handler: logging.Handler) -> None:
    logging.getLogger(logger_name).addHandler(handler)
    _installed_handlers.append((logger_name, handler))


def _attach(logger_name: str, handler: logging.Handler, level: int) -> None:
    named = logging.getLogger(logger_name)
    for h in named.handlers[:]:
        named.removeHandler(h)
    named.setLevel(level)
    _install(logger_name, handler)
    named.propagate = True  # Allow to bubble up to root


def setup_logging(log_dir: Path, debug: bool = False, clear_existing: bool = True) -> None:
    """
    Configure structured logging for the report.

    Creates separate log files for different concerns:
    - report_events.log: Main report workflow events (INFO+)
    - performance_metrics.log: Stage timings (INFO+)
    - warnings_errors.log: Warnings and errors (WARNING+)
    - debug_detail.log: Detailed debug information (DEBUG, only if debug=True)
    - combined.log: Combined log of all messages (INFO+)

    Args:
        log_dir: Directory where log files will be stored
        debug: If True, enables debug logging and creates debug_detail.log
        clear_existing: If True, clears existing log files before starting
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    if clear_existing:
        clear_logs(log_dir)

    # Remove all handlers from the root logger before setup
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Formatters
    file_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    console_formatter = logging.Formatter("%(levelname)-8s %(message)s")

    # Console handler (for warnings and above)
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(console_formatter)
    _install(None, console)

    _install(None, _file_handler(log_dir / "combined.log", logging.INFO, file_formatter))
    _install(None, _file_handler(log_dir / "warnings_errors.log", logging.WARNING, file_formatter))

    _attach(REPORT_LOGGER,
            _file_handler(log_dir / "report_events.log", logging.INFO, file_formatter),
            logging.INFO)
    _attach(PERFORMANCE_LOGGER,
            _file_handler(log_dir / "performance_metrics.log", logging.INFO, file_formatter),
            logging.INFO)

    if debug:
        _attach(DEBUG_LOGGER,
                _file_handler(log_dir / "debug_detail.log", logging.DEBUG, file_formatter),
                logging.DEBUG)

    _LOGGING_CONFIGURED = True


def reset_logging() -> None:
    """Detach every handler installed by setup_logging so it can run again."""
    global _LOGGING_CONFIGURED

    for logger_name, handler in _installed_handlers:
        logging.getLogger(logger_name).removeHandler(handler)
        handler.close()
    _installed_handlers.clear()
    logging.getLogger().setLevel(logging.WARNING)
    _LOGGING_CONFIGURED = False
