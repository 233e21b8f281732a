# salary_outlook/reporting/plots.py
"""
Report charts: one salary trend chart per forecast role and one faceted
top-skills chart. Consumes the pipeline's output tables and ForecastResult
objects; nothing in the analytical core imports this module.
"""

import logging
import math
import re
from pathlib import Path
from typing import List, Mapping

import numpy as np
import pandas as pd

# To prevent GUI errors on headless servers
import matplotlib
matplotlib.use('Agg')  # Use a non-interactive backend
import matplotlib.pyplot as plt
import matplotlib.ticker as mtick

from ..forecasting.trend import ForecastResult
from ..salaries.aggregation import role_series
from ..schema import columns as cols

logger = logging.getLogger(__name__)


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")


def plot_role_trend(
    series: pd.DataFrame,
    result: ForecastResult,
    output_dir: Path,
) -> Path:
    """
    Observed yearly averages, the fitted line across observed and projected
    years, and the projections with their interval bars.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    observed = role_series(series, result.role)
    years_all = sorted(set(result.observed_years) | {p.forecast_year for p in result.points})
    line_x = np.array(years_all, dtype=float)

    fig, ax = plt.subplots(figsize=(9, 5))
    try:
        ax.plot(observed[cols.WORK_YEAR], observed[cols.AVG_SALARY],
                color='tab:blue', marker='o', linestyle='', label='Observed average')
        ax.plot(line_x, result.predict(line_x), color='tab:gray', linestyle='--', label='Linear trend')

        if result.points:
            fx = [p.forecast_year for p in result.points]
            fy = [p.point_estimate for p in result.points]
            finite = all(math.isfinite(p.lower_bound) and math.isfinite(p.upper_bound) for p in result.points)
            if finite:
                yerr = [
                    [p.point_estimate - p.lower_bound for p in result.points],
                    [p.upper_bound - p.point_estimate for p in result.points],
                ]
                ax.errorbar(fx, fy, yerr=yerr, color='tab:red', marker='s', linestyle='',
                            capsize=4, label=f'Forecast ({result.confidence_level:.0%} CI)')
            else:
                ax.plot(fx, fy, color='tab:red', marker='s', linestyle='', label='Forecast (low confidence)')

        ax.set_xlabel('Year')
        ax.set_ylabel('Average salary (USD)')
        ax.xaxis.set_major_locator(mtick.MaxNLocator(integer=True))
        ax.yaxis.set_major_formatter(mtick.StrMethodFormatter('${x:,.0f}'))
        title = f'{result.role}: salary trend'
        if result.low_confidence:
            title += ' (low confidence)'
        ax.set_title(title)
        ax.legend(loc='best')
        fig.tight_layout()

        plot_path = output_dir / f"trend_{_slug(result.role)}.png"
        fig.savefig(plot_path)
        logger.info(f"Saved trend plot to {plot_path}")
        return plot_path
    finally:
        plt.close(fig)  # Close the figure to free memory


def plot_top_skills(skill_counts: pd.DataFrame, output_dir: Path) -> Path:
    """Faceted horizontal bar chart, one panel per role."""
    output_dir.mkdir(parents=True, exist_ok=True)
    roles = list(dict.fromkeys(skill_counts[cols.ROLE]))
    fig, axes = plt.subplots(1, max(len(roles), 1), figsize=(5 * max(len(roles), 1), 4), squeeze=False)
    try:
        for ax, role in zip(axes[0], roles):
            subset = skill_counts[skill_counts[cols.ROLE] == role]
            # Highest count on top
            ax.barh(subset[cols.SKILL].tolist()[::-1], subset[cols.SKILL_COUNT].tolist()[::-1], color='tab:green', alpha=0.8)
            ax.set_title(role)
            ax.set_xlabel('Respondents')
            ax.xaxis.set_major_locator(mtick.MaxNLocator(integer=True))
        fig.suptitle('Top skills by role')
        fig.tight_layout()

        plot_path = output_dir / "top_skills.png"
        fig.savefig(plot_path)
        logger.info(f"Saved skills plot to {plot_path}")
        return plot_path
    finally:
        plt.close(fig)


def plot_report(
    series: pd.DataFrame,
    results: Mapping[str, ForecastResult],
    skill_counts: pd.DataFrame,
    output_dir: Path,
) -> List[Path]:
    """
    Renders every report chart. A chart that fails is logged and skipped.
    """
    logger.info(f"Plotting report charts to {output_dir}...")
    written = []
    for role, result in results.items():
        try:
            written.append(plot_role_trend(series, result, output_dir))
        except Exception as e:
            logger.error(f"Error plotting trend for {role}: {e}", exc_info=True)

    if skill_counts.empty:
        logger.warning("Skill table is empty. Skipping skills plot.")
    else:
        try:
            written.append(plot_top_skills(skill_counts, output_dir))
        except Exception as e:
            logger.error(f"Error plotting top skills: {e}", exc_info=True)
    return written
