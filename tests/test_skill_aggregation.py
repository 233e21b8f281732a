import pandas as pd
import pytest

from salary_outlook.skills.aggregation import (
    normalize_skill_flags,
    resolve_skill_columns,
    top_skills_by_role,
)
from salary_outlook.skills.role_mapping import map_survey_roles

ROLES = ["Data Scientist", "Machine Learning Engineer", "Data Analyst"]
PLACEHOLDER = "No top skills reported"


def _mapped(rows):
    return pd.DataFrame(rows)


def test_resolve_skill_columns_keeps_candidate_order():
    columns = ["current_role", "sql", "python", "excel"]
    assert resolve_skill_columns(["python", "tensorflow", "sql"], columns) == ["python", "sql"]


def test_normalize_skill_flags_understands_boolean_like_values():
    frame = pd.DataFrame({"python": [True, "yes", "No", 1, 0, None, "TRUE", "maybe", 1.0, "1"]})
    flags = normalize_skill_flags(frame, ["python"])
    assert flags["python"].tolist() == [True, True, False, True, False, False, True, False, True, True]
    assert flags["python"].dtype == bool


def test_top_skills_counts_and_ordering(survey_df, report_config):
    mapped, _ = map_survey_roles(survey_df, report_config.role_mapping)
    top = top_skills_by_role(mapped, report_config.skills.candidates, roles=ROLES)

    ds = top[top["role"] == "Data Scientist"]
    assert ds["skill"].tolist() == ["python", "r_programming", "sql"]
    assert ds["count"].tolist() == [2, 1, 1]

    mle = top[top["role"] == "Machine Learning Engineer"]
    assert mle["skill"].tolist() == ["python", "tensorflow", "sql"]
    assert mle["count"].tolist() == [2, 2, 1]

    da = top[top["role"] == "Data Analyst"]
    assert da["skill"].tolist() == ["excel", "sql"]

    # roles follow the configured order
    assert list(dict.fromkeys(top["role"])) == ROLES
    assert top.columns.tolist() == ["role", "skill", "count"]


def test_top_n_cutoff_breaks_ties_alphabetically():
    skills = ["zeta", "alpha", "mu", "beta", "omega", "gamma", "delta"]
    row = {"mapped_role": "Data Scientist", **{s: True for s in skills}}
    mapped = _mapped([row])

    top = top_skills_by_role(mapped, skills, top_n=5)

    assert len(top) == 5
    assert top["skill"].tolist() == ["alpha", "beta", "delta", "gamma", "mu"]
    assert (top["count"] == 1).all()


def test_higher_count_beats_alphabetical_order():
    mapped = _mapped([
        {"mapped_role": "Data Analyst", "sql": True, "excel": True},
        {"mapped_role": "Data Analyst", "sql": True, "excel": False},
    ])
    top = top_skills_by_role(mapped, ["excel", "sql"])
    assert top["skill"].tolist() == ["sql", "excel"]
    assert top["count"].tolist() == [2, 1]


def test_role_with_all_flags_false_gets_single_placeholder():
    mapped = _mapped([
        {"mapped_role": "Data Analyst", "python": False, "sql": False},
        {"mapped_role": "Data Scientist", "python": True, "sql": False},
    ])
    top = top_skills_by_role(mapped, ["python", "sql"])

    da = top[top["role"] == "Data Analyst"]
    assert da[["skill", "count"]].values.tolist() == [[PLACEHOLDER, 0]]
    ds = top[top["role"] == "Data Scientist"]
    assert ds["skill"].tolist() == ["python"]
    assert PLACEHOLDER not in ds["skill"].tolist()


def test_respondent_with_no_used_skills_contributes_nothing():
    mapped = _mapped([
        {"mapped_role": "Data Scientist", "python": True, "sql": False},
        {"mapped_role": "Data Scientist", "python": False, "sql": False},
    ])
    top = top_skills_by_role(mapped, ["python", "sql"])
    assert top[["skill", "count"]].values.tolist() == [["python", 1]]


def test_configured_role_without_respondents_gets_placeholder():
    mapped = _mapped([{"mapped_role": "Data Scientist", "python": True}])
    top = top_skills_by_role(mapped, ["python"], roles=ROLES)
    assert top["role"].tolist() == ROLES
    assert top["skill"].tolist() == ["python", PLACEHOLDER, PLACEHOLDER]


def test_no_candidate_columns_present():
    mapped = _mapped([{"mapped_role": "Data Analyst", "unrelated": True}])
    top = top_skills_by_role(mapped, ["python", "sql"])
    assert top.values.tolist() == [["Data Analyst", PLACEHOLDER, 0]]


def test_input_is_not_mutated(survey_df, report_config):
    mapped, _ = map_survey_roles(survey_df, report_config.role_mapping)
    before = mapped.copy()
    top_skills_by_role(mapped, report_config.skills.candidates)
    pd.testing.assert_frame_equal(mapped, before)


@pytest.mark.parametrize("top_n", [1, 2, 5])
def test_every_role_respects_the_limit(survey_df, report_config, top_n):
    mapped, _ = map_survey_roles(survey_df, report_config.role_mapping)
    top = top_skills_by_role(mapped, report_config.skills.candidates, top_n=top_n, roles=ROLES)
    for _, group in top.groupby("role"):
        placeholder_rows = group[group["skill"] == PLACEHOLDER]
        if len(placeholder_rows):
            assert len(group) == 1
            assert group["count"].tolist() == [0]
        else:
            assert len(group) <= top_n
            assert (group["count"] >= 1).all()
