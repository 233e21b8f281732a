# salary_outlook/forecasting/trend.py
"""
Per-role linear salary trends.

Each role's aggregated series is fitted on its own with ordinary least squares,
``avg_salary = intercept + slope * work_year``, and projected to the requested
years with a confidence interval for the fitted mean. Intervals widen with the
distance between a projected year and the centre of the observed years.

A role needs at least two distinct observed years. With exactly two the line
passes through both points and has no residual degrees of freedom: the fit is
returned with ``low_confidence=True`` and unbounded intervals.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import statsmodels.api as sm

from ..salaries.aggregation import role_series
from ..schema import columns as cols

logger = logging.getLogger(__name__)


class InsufficientDataError(Exception):
    """Raised when a role has too few observed years to fit a trend line."""

    def __init__(self, message: str, role: Optional[str] = None, n_years: int = 0):
        super().__init__(message)
        self.role = role
        self.n_years = n_years


@dataclass(frozen=True)
class ForecastPoint:
    forecast_year: int
    point_estimate: float
    lower_bound: float
    upper_bound: float


@dataclass(frozen=True)
class FitStatistics:
    r_squared: float
    adj_r_squared: float
    residual_std_error: float
    f_statistic: float
    f_pvalue: float
    aic: float
    bic: float
    df_resid: int


@dataclass(frozen=True)
class ForecastResult:
    """Fitted trend and projections for a single role."""

    role: str
    intercept: float
    slope: float
    n_observations: int
    observed_years: Tuple[int, ...]
    points: Tuple[ForecastPoint, ...]
    fit_statistics: FitStatistics
    confidence_level: float
    low_confidence: bool = False

    def predict(self, year: float) -> float:
        return self.intercept + self.slope * year

    def point_for(self, year: int) -> ForecastPoint:
        for point in self.points:
            if point.forecast_year == year:
                return point
        raise KeyError(f"No forecast for {self.role} in {year}")


def resolve_forecast_years(
    series: pd.DataFrame,
    horizon: int = 2,
    explicit: Optional[Sequence[int]] = None,
) -> List[int]:
    """
    Returns the projection years: ``explicit`` when given, otherwise the
    ``horizon`` years following the latest observed ``work_year`` in ``series``.

    Raises:
        InsufficientDataError: If no explicit years are given and the series is empty.
    """
    if explicit:
        return sorted({int(year) for year in explicit})
    if series.empty:
        raise InsufficientDataError("No salary observations to anchor forecast years")
    latest = int(series[cols.WORK_YEAR].max())
    return list(range(latest + 1, latest + horizon + 1))


def _fit_statistics(model, degenerate: bool) -> FitStatistics:
    nan = float("nan")
    with np.errstate(divide="ignore", invalid="ignore"):
        if degenerate:
            return FitStatistics(
                r_squared=float(model.rsquared),
                adj_r_squared=nan,
                residual_std_error=nan,
                f_statistic=nan,
                f_pvalue=nan,
                aic=nan,
                bic=nan,
                df_resid=0,
            )
        return FitStatistics(
            r_squared=float(model.rsquared),
            adj_r_squared=float(model.rsquared_adj),
            residual_std_error=float(np.sqrt(model.mse_resid)),
            f_statistic=float(model.fvalue),
            f_pvalue=float(model.f_pvalue),
            aic=float(model.aic),
            bic=float(model.bic),
            df_resid=int(model.df_resid),
        )


def fit_role_trend(
    series: pd.DataFrame,
    role: str,
    forecast_years: Sequence[int],
    confidence_level: float = 0.95,
    min_years: int = 2,
) -> ForecastResult:
    """
    Fits one role's salary trend and projects it to ``forecast_years``.

    Args:
        series: Aggregated (work_year, job_title, avg_salary) rows for any roles.
        role: Role to fit; only its rows are used.
        forecast_years: Years to project.
        confidence_level: Coverage of the interval around each projection.
        min_years: Minimum distinct observed years (never below 2).

    Returns:
        The role's ForecastResult.

    Raises:
        InsufficientDataError: If the role has fewer than ``min_years`` observed years.
    """
    data = role_series(series, role)
    n_years = int(data[cols.WORK_YEAR].nunique())
    required = max(int(min_years), 2)
    if n_years < required:
        raise InsufficientDataError(
            f"{role}: {n_years} observed year(s), at least {required} needed to fit a trend",
            role=role,
            n_years=n_years,
        )

    years = data[cols.WORK_YEAR].to_numpy(dtype=float)
    salaries = data[cols.AVG_SALARY].to_numpy(dtype=float)

    X = sm.add_constant(years, has_constant="add")
    model = sm.OLS(salaries, X).fit()
    intercept, slope = (float(p) for p in model.params)
    degenerate = model.df_resid < 1

    future = np.asarray(list(forecast_years), dtype=float)
    points = []
    if degenerate:
        logger.warning(
            f"{role}: only {n_years} observed years; the trend passes through both points "
            f"and its confidence interval is unbounded."
        )
        for year in future:
            estimate = intercept + slope * year
            points.append(ForecastPoint(int(year), float(estimate), -math.inf, math.inf))
    elif len(future):
        X_future = sm.add_constant(future, has_constant="add")
        with np.errstate(divide="ignore", invalid="ignore"):
            frame = model.get_prediction(X_future).summary_frame(alpha=1.0 - confidence_level)
        for year, row in zip(future, frame.itertuples(index=False)):
            estimate = float(row.mean)
            # fmin/fmax keep the estimate inside its bounds when the standard error is 0 or NaN
            lower = float(np.fmin(row.mean_ci_lower, estimate))
            upper = float(np.fmax(row.mean_ci_upper, estimate))
            points.append(ForecastPoint(int(year), estimate, lower, upper))

    result = ForecastResult(
        role=role,
        intercept=intercept,
        slope=slope,
        n_observations=int(len(data)),
        observed_years=tuple(int(y) for y in data[cols.WORK_YEAR]),
        points=tuple(points),
        fit_statistics=_fit_statistics(model, degenerate),
        confidence_level=float(confidence_level),
        low_confidence=bool(degenerate),
    )
    logger.info(
        f"{role}: slope {slope:,.2f}/year over {n_years} years "
        f"(R^2={result.fit_statistics.r_squared:.3f}); "
        + ", ".join(f"{p.forecast_year}: {p.point_estimate:,.0f}" for p in points)
    )
    return result


def forecast_roles(
    series: pd.DataFrame,
    roles: Sequence[str],
    forecast_years: Sequence[int],
    confidence_level: float = 0.95,
    min_years: int = 2,
    max_workers: int = 1,
) -> Tuple[Dict[str, ForecastResult], Dict[str, str]]:
    """
    Fits every role independently.

    A role without enough data is recorded as a failure and the other roles
    still run. With ``max_workers > 1`` the fits run on a thread pool; results
    are collected in ``roles`` order either way.

    Returns:
        Tuple of (role -> ForecastResult, role -> failure message).
    """
    kwargs = dict(
        forecast_years=list(forecast_years),
        confidence_level=confidence_level,
        min_years=min_years,
    )
    results: Dict[str, ForecastResult] = {}
    failures: Dict[str, str] = {}

    def collect(role: str, fit) -> None:
        try:
            results[role] = fit()
        except InsufficientDataError as e:
            logger.warning(f"Forecast skipped for {role}: {e}")
            failures[role] = str(e)

    if max_workers > 1 and len(roles) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(roles))) as pool:
            futures = {role: pool.submit(fit_role_trend, series, role, **kwargs) for role in roles}
            for role in roles:
                collect(role, futures[role].result)
    else:
        for role in roles:
            collect(role, lambda role=role: fit_role_trend(series, role, **kwargs))

    logger.info(f"Forecast {len(results)} of {len(roles)} roles; {len(failures)} skipped.")
    return results, failures
