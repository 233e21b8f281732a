# salary_outlook/data/readers.py
"""
Functions for reading the input datasets (salary records, survey records).
"""

import io
import logging
from pathlib import Path
from typing import List, Tuple, Union

import numpy as np
import pandas as pd

from ..schema import columns as cols

logger = logging.getLogger(__name__)

DataSource = Union[str, Path, bytes, io.IOBase]


# Define a custom exception for data reading errors
class DataReadError(Exception):
    """Custom exception for errors during data reading."""
    pass


def read_table(source: DataSource, label: str = "input") -> pd.DataFrame:
    """
    Reads a delimited tabular file (or in-memory buffer) into a DataFrame.

    Paths ending in ``.parquet`` are read with the pyarrow engine; ``.csv`` paths
    and raw bytes or file-like buffers are parsed as CSV with a header row.

    Args:
        source: Path, raw bytes, or an open binary/text buffer.
        label: Name of the dataset, used in log and error messages.

    Returns:
        The loaded DataFrame.

    Raises:
        DataReadError: If the file cannot be found, has an unsupported format,
            or cannot be parsed as tabular data.
    """
    if isinstance(source, bytes):
        source = io.BytesIO(source)

    if isinstance(source, io.IOBase):
        logger.info(f"Reading {label} data from in-memory buffer")
        try:
            df = pd.read_csv(source)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            logger.error(f"Could not parse {label} buffer: {e}")
            raise DataReadError(f"Could not parse {label} data from buffer") from e
        logger.info(f"Loaded {len(df)} {label} records from buffer")
        return df

    file_path = Path(source)
    logger.info(f"Attempting to read {label} data from: {file_path}")

    if not file_path.is_file():
        logger.error(f"{label.capitalize()} file not found: {file_path}")
        raise DataReadError(f"{label.capitalize()} file not found: {file_path}")

    file_suffix = file_path.suffix.lower()
    try:
        if file_suffix == '.parquet':
            df = pd.read_parquet(file_path)
        elif file_suffix in ('.csv', '.txt'):
            with open(file_path, 'rb') as fh:
                df = pd.read_csv(fh)
        else:
            logger.error(f"Unsupported {label} file format: {file_path}. Please use .csv or .parquet.")
            raise DataReadError(f"Unsupported {label} file format: {file_path.suffix}")
    except DataReadError:
        raise
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as e:
        logger.error(f"Error reading {label} file {file_path}: {e}")
        raise DataReadError(f"Error reading {label} file {file_path}") from e
    except Exception as e:
        logger.exception(f"An unexpected error occurred while reading {label} data from {file_path}")
        raise DataReadError(f"Unexpected error reading data from {file_path}") from e

    logger.info(f"Loaded {len(df)} {label} records from {file_path}")
    logger.debug(f"Columns loaded: {df.columns.tolist()}")
    return df


def require_columns(df: pd.DataFrame, required: List[str], label: str) -> None:
    """Raise DataReadError if any required column is absent."""
    missing = [c for c in required if c not in df.columns]
    if missing:
        logger.error(f"{label.capitalize()} data is missing required columns: {missing}")
        raise DataReadError(f"Missing required {label} columns: {missing}")


def clean_salary_records(df: pd.DataFrame) -> Tuple[pd.DataFrame, int]:
    """
    Coerces the salary-critical fields and drops rows that are null in any of them.

    ``work_year`` and ``salary_in_usd`` are parsed as numbers (unparsable values
    become NaN, as do infinite values); blank job titles become null. Other
    columns are left as-is.

    Returns:
        Tuple of (cleaned copy, number of dropped rows).
    """
    df = df.copy()
    df[cols.WORK_YEAR] = pd.to_numeric(df[cols.WORK_YEAR], errors='coerce').astype('float64')
    df[cols.SALARY_USD] = pd.to_numeric(df[cols.SALARY_USD], errors='coerce').astype('float64')
    # Overflowing or literal inf values cannot be averaged or fitted
    numeric = [cols.WORK_YEAR, cols.SALARY_USD]
    df[numeric] = df[numeric].replace([np.inf, -np.inf], np.nan)

    raw_titles = df[cols.JOB_TITLE]
    titles = raw_titles.astype(str).str.strip()
    df[cols.JOB_TITLE] = titles.where(raw_titles.notna() & (titles != ""))

    # Fractional years are malformed rather than truncated
    fractional_year = df[cols.WORK_YEAR].notna() & (df[cols.WORK_YEAR] % 1 != 0)
    df.loc[fractional_year, cols.WORK_YEAR] = float('nan')

    before = len(df)
    df = df.dropna(subset=cols.SALARY_REQUIRED_COLUMNS)
    dropped = before - len(df)
    if dropped:
        logger.warning(
            f"Dropped {dropped} of {before} salary rows with missing or non-numeric "
            f"{cols.SALARY_REQUIRED_COLUMNS} values."
        )

    df[cols.WORK_YEAR] = df[cols.WORK_YEAR].astype('int64')
    return df.reset_index(drop=True), dropped


def read_salary_data(
    source: DataSource, return_dropped: bool = False
) -> Union[pd.DataFrame, Tuple[pd.DataFrame, int]]:
    """
    Reads salary records and drops rows with null year, title or salary.

    Args:
        source: Salary records file or buffer.
        return_dropped: Also return how many rows were dropped.

    Returns:
        The cleaned DataFrame, or (DataFrame, dropped rows) when
        ``return_dropped`` is set.

    Raises:
        DataReadError: If the file cannot be read or lacks a required column.
    """
    df = read_table(source, label="salary")
    require_columns(df, cols.SALARY_REQUIRED_COLUMNS, "salary")
    df, dropped = clean_salary_records(df)
    logger.info(f"Salary data read and prepared successfully ({len(df)} usable rows).")
    if return_dropped:
        return df, dropped
    return df


def read_survey_data(source: DataSource) -> pd.DataFrame:
    """
    Reads survey records. Only ``current_role`` is required; skill columns are
    kept as loaded and interpreted later by the skill aggregator.

    Raises:
        DataReadError: If the file cannot be read or lacks ``current_role``.
    """
    df = read_table(source, label="survey")
    require_columns(df, cols.SURVEY_REQUIRED_COLUMNS, "survey")
    logger.info(f"Survey data read successfully ({len(df)} respondents).")
    return df
