import pytest
import yaml

from salary_outlook.config.loaders import (
    ConfigLoadError,
    build_report_config,
    deep_merge,
    load_report_config,
    load_yaml_config,
)


def test_defaults_load():
    config = load_report_config()
    assert config.roles == ["Data Scientist", "Machine Learning Engineer", "Data Analyst"]
    assert len(config.role_mapping) == 4
    assert set(config.role_mapping.values()) == set(config.roles)
    assert config.skills.top_n == 5
    assert config.skills.placeholder == "No top skills reported"
    assert "python" in config.skills.candidates
    assert config.forecast.confidence_level == pytest.approx(0.95)
    assert config.forecast.horizon == 2
    assert config.forecast.years == []


def test_user_file_merges_over_defaults(tmp_path):
    f = tmp_path / "report.yaml"
    f.write_text(yaml.safe_dump({
        "role_mapping": {"Research Scientist": "Data Scientist"},
        "forecast": {"years": [2027, 2026], "max_workers": 3},
    }))
    config = load_report_config(f)

    # nested dicts merge key by key
    assert config.role_mapping["Research Scientist"] == "Data Scientist"
    assert config.role_mapping["ML Engineer"] == "Machine Learning Engineer"
    assert config.forecast.years == [2026, 2027]
    assert config.forecast.max_workers == 3
    assert config.forecast.confidence_level == pytest.approx(0.95)


def test_mapping_target_must_be_canonical(tmp_path):
    f = tmp_path / "bad.yaml"
    f.write_text(yaml.safe_dump({"role_mapping": {"BI Developer": "Business Analyst"}}))
    with pytest.raises(ConfigLoadError, match="Business Analyst"):
        load_report_config(f)


def test_schema_type_errors_are_rejected():
    with pytest.raises(ConfigLoadError, match="validation failed"):
        build_report_config({"roles": "Data Scientist", "role_mapping": {}})


@pytest.mark.parametrize("forecast", [
    {"confidence_level": 1.5},
    {"min_years": 1},
    {"horizon": 0},
])
def test_out_of_range_forecast_settings(forecast):
    data = {
        "roles": ["Data Analyst"],
        "role_mapping": {"Data Analyst": "Data Analyst"},
        "forecast": forecast,
    }
    with pytest.raises(ConfigLoadError):
        build_report_config(data)


def test_missing_user_file(tmp_path):
    with pytest.raises(ConfigLoadError, match="not found"):
        load_report_config(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path):
    f = tmp_path / "broken.yaml"
    f.write_text("roles: [unclosed\n")
    with pytest.raises(ConfigLoadError):
        load_yaml_config(f)


def test_non_mapping_yaml(tmp_path):
    f = tmp_path / "list.yaml"
    f.write_text(yaml.safe_dump(["a", "b"]))
    with pytest.raises(ConfigLoadError, match="Expected a dictionary"):
        load_yaml_config(f)


def test_empty_user_file_keeps_defaults(tmp_path):
    f = tmp_path / "empty.yaml"
    f.write_text("")
    assert load_report_config(f) == load_report_config()


def test_deep_merge_does_not_modify_inputs():
    base = {"a": 1, "nested": {"k": 10}}
    override = {"nested": {"k": 20, "new": 30}, "b": 2}
    merged = deep_merge(base, override)
    assert merged == {"a": 1, "nested": {"k": 20, "new": 30}, "b": 2}
    assert base == {"a": 1, "nested": {"k": 10}}


def test_duplicate_skill_candidates_are_collapsed():
    config = build_report_config({
        "roles": ["Data Analyst"],
        "role_mapping": {"Data Analyst": "Data Analyst"},
        "skills": {"candidates": ["sql", "excel", "sql"]},
    })
    assert config.skills.candidates == ["sql", "excel"]
