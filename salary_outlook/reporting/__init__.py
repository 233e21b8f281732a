from .summary import (
    audit_table,
    fit_statistics_table,
    forecast_status_table,
    forecast_table,
    skills_wide_table,
)

__all__ = [
    "audit_table",
    "fit_statistics_table",
    "forecast_status_table",
    "forecast_table",
    "skills_wide_table",
]
