"""
Salary outlook report: per-role salary trend forecasts cross-referenced with
survey-reported skill usage.
"""

from salary_outlook.pipeline import ReportResult, run_report, save_report

__all__ = ['ReportResult', 'run_report', 'save_report']

__version__ = "0.1.0"
