from .readers import DataReadError, read_salary_data, read_survey_data
from .writers import DataWriteError, write_report_tables

__all__ = [
    "DataReadError",
    "read_salary_data",
    "read_survey_data",
    "DataWriteError",
    "write_report_tables",
]
