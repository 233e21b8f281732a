import os
import sys

import pandas as pd
import pytest

# Ensure project root is on sys.path before imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from salary_outlook.config.loaders import load_report_config  # noqa: E402


def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")


@pytest.fixture
def report_config():
    return load_report_config()


@pytest.fixture
def salary_df():
    return pd.DataFrame({
        "work_year": [2021, 2021, 2022, 2022, 2023, 2023, 2021, 2022, 2023, 2023, 2024],
        "job_title": [
            "Data Scientist", "Data Scientist", "Data Scientist", "Data Scientist",
            "Data Scientist", "Data Scientist",
            "Machine Learning Engineer", "Machine Learning Engineer", "Machine Learning Engineer",
            "Data Analyst", "Data Analyst",
        ],
        "salary_in_usd": [
            95000, 105000, 110000, 110000, 118000, 122000,
            130000, 140000, 150000,
            90000, 95000,
        ],
        "experience_level": ["MI"] * 11,
    })


@pytest.fixture
def survey_df():
    return pd.DataFrame({
        "current_role": [
            "Data Scientist", "Data Scientist", "ML Engineer",
            "Machine Learning Engineer", "Data Analyst", "Student", "Product Manager",
        ],
        "python": [True, True, True, True, False, True, False],
        "sql": [True, False, False, True, True, True, True],
        "r_programming": [False, True, False, False, False, False, False],
        "tensorflow": [False, False, True, True, False, False, False],
        "excel": [False, False, False, False, True, False, True],
        "free_text": ["a", "b", "c", "d", "e", "f", "g"],
    })


@pytest.fixture
def salary_csv(tmp_path, salary_df):
    path = tmp_path / "salaries.csv"
    salary_df.to_csv(path, index=False)
    return path


@pytest.fixture
def survey_csv(tmp_path, survey_df):
    path = tmp_path / "survey.csv"
    survey_df.to_csv(path, index=False)
    return path
