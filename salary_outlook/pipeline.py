# salary_outlook/pipeline.py
"""
Report orchestration.

``run_report`` loads both datasets and runs the two independent pipelines
(survey -> role mapping -> skill ranking, and salaries -> yearly averages ->
per-role trend forecasts), then assembles the report tables. It does no
rendering. ``save_report`` writes the tables and, optionally, the charts.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .config.loaders import load_report_config
from .config.models import ReportConfig
from .data.readers import DataSource, read_salary_data, read_survey_data
from .data.writers import write_report_tables
from .forecasting.trend import ForecastResult, forecast_roles, resolve_forecast_years
from .reporting.summary import (
    audit_table,
    fit_statistics_table,
    forecast_status_table,
    forecast_table,
    skills_wide_table,
)
from .salaries.aggregation import average_salary_by_year_role
from .skills.aggregation import top_skills_by_role
from .skills.role_mapping import map_survey_roles
from logging_config import PERFORMANCE_LOGGER, REPORT_LOGGER

logger = logging.getLogger(__name__)
perf_logger = logging.getLogger(PERFORMANCE_LOGGER)


@dataclass
class ReportResult:
    """Everything a single report run produces."""

    config: ReportConfig
    skill_counts: pd.DataFrame
    salary_series: pd.DataFrame
    forecast_years: List[int]
    forecasts: Dict[str, ForecastResult]
    failures: Dict[str, str]
    audit: Dict[str, object] = field(default_factory=dict)

    def tables(self) -> Dict[str, pd.DataFrame]:
        """Report tables keyed by output file stem."""
        return {
            "top_skills": self.skill_counts,
            "top_skills_wide": skills_wide_table(self.skill_counts),
            "salary_by_year_role": self.salary_series,
            "forecasts": forecast_table(self.forecasts),
            "fit_statistics": fit_statistics_table(self.forecasts),
            "forecast_status": forecast_status_table(self.config.roles, self.forecasts, self.failures),
            "report_audit": audit_table(self.audit),
        }


def _skill_pipeline(survey_df: pd.DataFrame, config: ReportConfig, audit: Dict[str, object]) -> pd.DataFrame:
    mapped, unmapped = map_survey_roles(survey_df, config.role_mapping)
    audit["survey_rows_mapped"] = len(mapped)
    audit["unmapped_survey_rows"] = unmapped

    candidates = config.skills.candidates
    available = set(survey_df.columns)
    audit["missing_skill_columns"] = [s for s in candidates if s not in available]

    return top_skills_by_role(
        mapped,
        candidates,
        top_n=config.skills.top_n,
        roles=config.roles,
        placeholder=config.skills.placeholder,
    )


def _salary_pipeline(salary_df: pd.DataFrame, config: ReportConfig):
    series = average_salary_by_year_role(salary_df, roles=config.roles)
    settings = config.forecast
    if series.empty and not settings.years:
        logger.error("No salary observations for any target role; no forecasts produced.")
        failures = {role: "No salary observations" for role in config.roles}
        return series, [], {}, failures

    years = resolve_forecast_years(series, horizon=settings.horizon, explicit=settings.years)
    logger.info(f"Forecasting years {years} for roles {config.roles}")
    results, failures = forecast_roles(
        series,
        config.roles,
        years,
        confidence_level=settings.confidence_level,
        min_years=settings.min_years,
        max_workers=settings.max_workers,
    )
    return series, years, results, failures


def run_report(
    salary_source: DataSource,
    survey_source: DataSource,
    config: Optional[ReportConfig] = None,
) -> ReportResult:
    """
    Runs the full analysis against the two input datasets.

    Args:
        salary_source: Salary records file or buffer.
        survey_source: Survey records file or buffer.
        config: Report configuration; the packaged defaults when omitted.

    Returns:
        The ReportResult. Roles without enough salary history appear in
        ``failures`` instead of aborting the run.

    Raises:
        DataReadError: If either dataset cannot be loaded.
    """
    if config is None:
        config = load_report_config()

    audit: Dict[str, object] = {}
    start = time.perf_counter()

    salary_df, dropped = read_salary_data(salary_source, return_dropped=True)
    audit["salary_rows_read"] = len(salary_df) + dropped
    audit["salary_rows_dropped"] = dropped

    survey_df = read_survey_data(survey_source)
    audit["survey_rows_read"] = len(survey_df)
    perf_logger.info(f"Loaded inputs in {time.perf_counter() - start:.2f} seconds")

    stage = time.perf_counter()
    skill_counts = _skill_pipeline(survey_df, config, audit)
    perf_logger.info(f"Skill ranking completed in {time.perf_counter() - stage:.2f} seconds")

    stage = time.perf_counter()
    series, years, results, failures = _salary_pipeline(salary_df, config)
    perf_logger.info(f"Salary forecasts completed in {time.perf_counter() - stage:.2f} seconds")

    audit["roles_forecast"] = len(results)
    audit["roles_without_forecast"] = sorted(failures)

    logging.getLogger(REPORT_LOGGER).info(
        f"Report run finished: {len(results)}/{len(config.roles)} roles forecast, "
        f"{len(skill_counts)} skill rows."
    )
    return ReportResult(
        config=config,
        skill_counts=skill_counts,
        salary_series=series,
        forecast_years=years,
        forecasts=results,
        failures=failures,
        audit=audit,
    )


def save_report(result: ReportResult, output_dir: Path, make_plots: bool = True) -> List[Path]:
    """
    Writes every report table as CSV under ``output_dir`` and, when
    ``make_plots`` is set, the charts under ``output_dir/plots``.

    Raises:
        DataWriteError: If a table cannot be written.
    """
    output_dir = Path(output_dir)
    written = write_report_tables(result.tables(), output_dir)
    if make_plots:
        # Imported here so the analytical path never loads matplotlib
        from .reporting.plots import plot_report

        written.extend(
            plot_report(result.salary_series, result.forecasts, result.skill_counts, output_dir / "plots")
        )
    logger.info(f"Report saved to {output_dir} ({len(written)} files)")
    return written
