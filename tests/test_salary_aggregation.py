import numpy as np
import pandas as pd
import pytest

from salary_outlook.salaries.aggregation import average_salary_by_year_role, role_series


def test_mean_per_year_and_role(salary_df):
    series = average_salary_by_year_role(salary_df)

    ds = series[series["job_title"] == "Data Scientist"]
    assert ds["work_year"].tolist() == [2021, 2022, 2023]
    assert ds["avg_salary"].tolist() == pytest.approx([100000.0, 110000.0, 120000.0])
    assert series.columns.tolist() == ["work_year", "job_title", "avg_salary"]


def test_no_duplicate_year_role_pairs(salary_df):
    doubled = pd.concat([salary_df, salary_df], ignore_index=True)
    series = average_salary_by_year_role(doubled)
    assert not series.duplicated(subset=["work_year", "job_title"]).any()


def test_sparse_years_are_not_filled(salary_df):
    series = average_salary_by_year_role(salary_df)
    da = series[series["job_title"] == "Data Analyst"]
    # Data Analyst has no 2021 or 2022 rows
    assert da["work_year"].tolist() == [2023, 2024]


def test_roles_filter(salary_df):
    series = average_salary_by_year_role(salary_df, roles=["Data Analyst"])
    assert set(series["job_title"]) == {"Data Analyst"}


def test_null_salaries_are_ignored():
    df = pd.DataFrame({
        "work_year": [2022, 2022],
        "job_title": ["Data Analyst", "Data Analyst"],
        "salary_in_usd": [80000.0, np.nan],
    })
    series = average_salary_by_year_role(df)
    assert series["avg_salary"].tolist() == [80000.0]


def test_empty_input_gives_empty_series():
    df = pd.DataFrame({"work_year": [], "job_title": [], "salary_in_usd": []})
    series = average_salary_by_year_role(df)
    assert series.empty
    assert series.columns.tolist() == ["work_year", "job_title", "avg_salary"]


def test_role_series_is_year_ordered(salary_df):
    series = average_salary_by_year_role(salary_df).iloc[::-1]
    ml = role_series(series, "Machine Learning Engineer")
    assert ml["work_year"].tolist() == [2021, 2022, 2023]
    assert ml.columns.tolist() == ["work_year", "avg_salary"]
