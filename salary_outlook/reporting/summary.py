# salary_outlook/reporting/summary.py
"""
Functions to assemble the report tables from forecast results and skill counts.
"""

import logging
from typing import Dict, Mapping, Sequence

import pandas as pd

from ..forecasting.trend import ForecastResult
from ..schema import columns as cols
from ..skills.aggregation import add_skill_rank

logger = logging.getLogger(__name__)


def forecast_table(results: Mapping[str, ForecastResult]) -> pd.DataFrame:
    """One row per (role, forecast_year) with the estimate and its bounds."""
    rows = [
        {
            cols.ROLE: role,
            cols.FORECAST_YEAR: point.forecast_year,
            cols.POINT_ESTIMATE: point.point_estimate,
            cols.LOWER_BOUND: point.lower_bound,
            cols.UPPER_BOUND: point.upper_bound,
            cols.CONFIDENCE_LEVEL: result.confidence_level,
            cols.LOW_CONFIDENCE: result.low_confidence,
        }
        for role, result in results.items()
        for point in result.points
    ]
    return pd.DataFrame(
        rows,
        columns=cols.FORECAST_COLUMNS + [cols.CONFIDENCE_LEVEL, cols.LOW_CONFIDENCE],
    )


def fit_statistics_table(results: Mapping[str, ForecastResult]) -> pd.DataFrame:
    """One row per fitted role with coefficients and fit-quality statistics."""
    rows = []
    for role, result in results.items():
        stats = result.fit_statistics
        rows.append(
            {
                cols.ROLE: role,
                cols.INTERCEPT: result.intercept,
                cols.SLOPE: result.slope,
                cols.N_OBSERVATIONS: result.n_observations,
                "first_year": min(result.observed_years),
                "last_year": max(result.observed_years),
                "r_squared": stats.r_squared,
                "adj_r_squared": stats.adj_r_squared,
                "residual_std_error": stats.residual_std_error,
                "f_statistic": stats.f_statistic,
                "f_pvalue": stats.f_pvalue,
                "aic": stats.aic,
                "bic": stats.bic,
                "df_resid": stats.df_resid,
            }
        )
    return pd.DataFrame(rows)


def forecast_status_table(
    roles: Sequence[str],
    results: Mapping[str, ForecastResult],
    failures: Mapping[str, str],
) -> pd.DataFrame:
    """
    Lists every target role with whether its forecast can be trusted.

    ``ok`` roles have a full fit, ``low_confidence`` roles were fitted through
    exactly two points, ``insufficient_data`` roles have no forecast.
    """
    rows = []
    for role in roles:
        if role in results:
            result = results[role]
            if result.low_confidence:
                status = cols.STATUS_LOW_CONFIDENCE
                message = (
                    f"Fitted through {result.n_observations} points; "
                    "no residual degrees of freedom, interval is unbounded"
                )
            else:
                status = cols.STATUS_OK
                message = f"Fitted on {result.n_observations} observed years"
        else:
            status = cols.STATUS_INSUFFICIENT_DATA
            message = failures.get(role, "No salary observations")
        rows.append({cols.ROLE: role, cols.STATUS: status, cols.MESSAGE: message})

    table = pd.DataFrame(rows, columns=[cols.ROLE, cols.STATUS, cols.MESSAGE])
    degraded = table[table[cols.STATUS] != cols.STATUS_OK]
    if not degraded.empty:
        logger.warning(
            f"Degraded forecasts: {dict(zip(degraded[cols.ROLE], degraded[cols.STATUS]))}"
        )
    return table


def skills_wide_table(skill_counts: pd.DataFrame) -> pd.DataFrame:
    """Pivot of skill names with one row per rank and one column per role."""
    if skill_counts.empty:
        return pd.DataFrame(columns=[cols.SKILL_RANK])
    ranked = add_skill_rank(skill_counts)
    role_order = list(dict.fromkeys(ranked[cols.ROLE]))
    wide = ranked.pivot(index=cols.SKILL_RANK, columns=cols.ROLE, values=cols.SKILL)
    wide = wide.reindex(columns=role_order)
    wide.columns.name = None
    return wide.reset_index()


def audit_table(audit: Dict[str, object]) -> pd.DataFrame:
    """Two-column (metric, value) view of the run's audit counters."""
    return pd.DataFrame(
        [{"metric": key, "value": str(value)} for key, value in audit.items()],
        columns=["metric", "value"],
    )
