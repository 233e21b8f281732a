# salary_outlook/schema/columns.py
"""
Centralized column names for the salary, survey, skill and forecast tables.

Every module reads and writes frames through these constants so the input
datasets and the report tables stay consistent.
"""

from typing import List

# --- Salary records (input) ---
WORK_YEAR = "work_year"
JOB_TITLE = "job_title"
SALARY_USD = "salary_in_usd"

# --- Survey records (input) ---
CURRENT_ROLE = "current_role"
MAPPED_ROLE = "mapped_role"

# --- Aggregates ---
AVG_SALARY = "avg_salary"
ROLE = "role"
SKILL = "skill"
SKILL_USED = "used"
SKILL_COUNT = "count"
SKILL_RANK = "rank"

# --- Forecast tables ---
FORECAST_YEAR = "forecast_year"
POINT_ESTIMATE = "point_estimate"
LOWER_BOUND = "lower_bound"
UPPER_BOUND = "upper_bound"
INTERCEPT = "intercept"
SLOPE = "slope"
N_OBSERVATIONS = "n_observations"
CONFIDENCE_LEVEL = "confidence_level"
LOW_CONFIDENCE = "low_confidence"
STATUS = "status"
MESSAGE = "message"

# Forecast status values
STATUS_OK = "ok"
STATUS_LOW_CONFIDENCE = "low_confidence"
STATUS_INSUFFICIENT_DATA = "insufficient_data"

SALARY_REQUIRED_COLUMNS: List[str] = [WORK_YEAR, JOB_TITLE, SALARY_USD]
SURVEY_REQUIRED_COLUMNS: List[str] = [CURRENT_ROLE]
SALARY_SERIES_COLUMNS: List[str] = [WORK_YEAR, JOB_TITLE, AVG_SALARY]
SKILL_COUNT_COLUMNS: List[str] = [ROLE, SKILL, SKILL_COUNT]
FORECAST_COLUMNS: List[str] = [ROLE, FORECAST_YEAR, POINT_ESTIMATE, LOWER_BOUND, UPPER_BOUND]
