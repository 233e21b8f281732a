import logging

import pytest

import logging_config
from salary_outlook import cli

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def fresh_logging():
    logging_config.reset_logging()
    yield
    logging_config.reset_logging()


def _args(tmp_path, salary_csv, survey_csv, *extra):
    return [
        "--salaries", str(salary_csv),
        "--survey", str(survey_csv),
        "--output-dir", str(tmp_path / "out"),
        "--log-dir", str(tmp_path / "logs"),
        *extra,
    ]


def test_cli_success(tmp_path, salary_csv, survey_csv, capsys):
    code = cli.main(_args(tmp_path, salary_csv, survey_csv, "--no-plots"))

    assert code == 0
    assert (tmp_path / "out" / "forecasts.csv").exists()
    assert not (tmp_path / "out" / "plots").exists()
    assert (tmp_path / "logs" / "combined.log").exists()

    printed = capsys.readouterr().out
    assert "Data Scientist [ok]" in printed
    assert "Data Analyst [low_confidence]" in printed


def test_cli_reports_insufficient_data(tmp_path, salary_df, survey_csv, capsys):
    path = tmp_path / "salaries.csv"
    salary_df[salary_df["job_title"] != "Data Analyst"].to_csv(path, index=False)

    code = cli.main(_args(tmp_path, path, survey_csv, "--no-plots"))

    assert code == 0
    printed = capsys.readouterr().out
    assert "Data Analyst [insufficient_data]" in printed
    assert "no forecast" in printed


def test_cli_missing_input(tmp_path, survey_csv, capsys):
    code = cli.main(_args(tmp_path, tmp_path / "missing.csv", survey_csv))
    assert code == 1
    assert "not found" in capsys.readouterr().err


def test_cli_bad_config(tmp_path, salary_csv, survey_csv):
    config = tmp_path / "bad.yaml"
    config.write_text("role_mapping:\n  Analyst: Nobody\n")
    code = cli.main(_args(tmp_path, salary_csv, survey_csv, "--config", str(config)))
    assert code == 1


def test_debug_flag_creates_debug_log(tmp_path, salary_csv, survey_csv):
    cli.main(_args(tmp_path, salary_csv, survey_csv, "--no-plots", "--debug"))
    assert (tmp_path / "logs" / "debug_detail.log").exists()
    assert logging.getLogger().level == logging.DEBUG


def test_debug_log_records_arguments_and_config(tmp_path, salary_csv, survey_csv):
    cli.main(_args(tmp_path, salary_csv, survey_csv, "--no-plots", "--debug"))

    text = (tmp_path / "logs" / "debug_detail.log").read_text()
    assert "Parsed arguments" in text
    assert "Resolved report configuration" in text
    assert "Data Scientist" in text
