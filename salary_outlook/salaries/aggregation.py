# salary_outlook/salaries/aggregation.py
"""
Mean salary per (work_year, job_title).
"""

import logging
from typing import Optional, Sequence

import pandas as pd

from ..schema import columns as cols

logger = logging.getLogger(__name__)


def average_salary_by_year_role(
    salary_df: pd.DataFrame,
    roles: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Averages ``salary_in_usd`` for every observed (work_year, job_title) pair.

    Nulls are skipped by the mean. Pairs without any rows are not emitted,
    so a role's series only contains the years it was actually observed in.

    Args:
        salary_df: Cleaned salary records.
        roles: Optional job titles to keep; all titles when omitted.

    Returns:
        DataFrame with columns ``work_year, job_title, avg_salary`` sorted by
        title then year, unique on (work_year, job_title).
    """
    df = salary_df
    if roles is not None:
        df = df[df[cols.JOB_TITLE].isin(list(roles))]

    df = df.dropna(subset=[cols.WORK_YEAR, cols.JOB_TITLE, cols.SALARY_USD])
    if df.empty:
        logger.warning("No salary records to aggregate.")
        return pd.DataFrame(
            {
                cols.WORK_YEAR: pd.Series(dtype="int64"),
                cols.JOB_TITLE: pd.Series(dtype=object),
                cols.AVG_SALARY: pd.Series(dtype="float64"),
            }
        )

    series = (
        df.groupby([cols.WORK_YEAR, cols.JOB_TITLE], sort=False)[cols.SALARY_USD]
        .mean()
        .reset_index(name=cols.AVG_SALARY)
        .sort_values([cols.JOB_TITLE, cols.WORK_YEAR], kind="mergesort")
        .reset_index(drop=True)
    )
    series[cols.WORK_YEAR] = series[cols.WORK_YEAR].astype("int64")

    logger.info(
        f"Aggregated {len(df)} salary records into {len(series)} (year, role) groups "
        f"covering {series[cols.JOB_TITLE].nunique()} roles."
    )
    return series[cols.SALARY_SERIES_COLUMNS]


def role_series(series: pd.DataFrame, role: str) -> pd.DataFrame:
    """Returns one role's rows of the aggregated series, ordered by year."""
    return (
        series.loc[series[cols.JOB_TITLE] == role, [cols.WORK_YEAR, cols.AVG_SALARY]]
        .sort_values(cols.WORK_YEAR)
        .reset_index(drop=True)
    )
