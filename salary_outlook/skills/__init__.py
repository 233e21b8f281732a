from .aggregation import add_skill_rank, resolve_skill_columns, top_skills_by_role
from .role_mapping import map_role, map_survey_roles

__all__ = [
    "add_skill_rank",
    "resolve_skill_columns",
    "top_skills_by_role",
    "map_role",
    "map_survey_roles",
]
