# salary_outlook/data/writers.py
"""
Functions for writing report tables to disk.
"""

import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

logger = logging.getLogger(__name__)


# Define a custom exception for data writing errors
class DataWriteError(Exception):
    """Custom exception for errors during data writing."""

    pass


def write_table(df: pd.DataFrame, output_dir: Path, name: str) -> Path:
    """
    Writes a single report table to ``<output_dir>/<name>.csv``.

    Args:
        df: Table to write.
        output_dir: Directory to save the file in (created if missing).
        name: File stem.

    Returns:
        Path of the written file.

    Raises:
        DataWriteError: If writing fails.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / f"{name}.csv"

    try:
        df.to_csv(out_path, index=False, float_format="%.4f")
    except OSError as e:
        logger.exception(f"Failed to write table {out_path}")
        raise DataWriteError(f"Failed to write table {out_path}") from e

    logger.info(f"Wrote {name} ({len(df)} rows): {out_path}")
    return out_path


def write_report_tables(tables: Dict[str, pd.DataFrame], output_dir: Path) -> List[Path]:
    """
    Writes every report table as CSV, skipping ``None`` entries.

    Raises:
        DataWriteError: If any table fails to write.
    """
    if not tables:
        logger.warning("No report tables provided to write.")
        return []

    logger.info(f"Writing {len(tables)} report tables to {output_dir}...")
    written = []
    for name, df in tables.items():
        if df is None:
            logger.warning(f"Table '{name}' is missing; skipping.")
            continue
        written.append(write_table(df, output_dir, name))
    return written
