from .trend import (
    FitStatistics,
    ForecastPoint,
    ForecastResult,
    InsufficientDataError,
    fit_role_trend,
    forecast_roles,
    resolve_forecast_years,
)

__all__ = [
    "FitStatistics",
    "ForecastPoint",
    "ForecastResult",
    "InsufficientDataError",
    "fit_role_trend",
    "forecast_roles",
    "resolve_forecast_years",
]
