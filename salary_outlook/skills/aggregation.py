# salary_outlook/skills/aggregation.py
"""
Per-role skill usage ranking.

Wide survey skill flags are melted into long (role, skill, used) observations,
used observations are counted per (role, skill), and the top N skills per role
are kept. Ties at the cut-off are broken alphabetically by skill name so
repeated runs produce the same table.
"""

import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..config.models import DEFAULT_PLACEHOLDER_SKILL
from ..schema import columns as cols

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "t", "yes", "y", "1", "1.0"}


def resolve_skill_columns(candidates: Sequence[str], columns: Iterable[str]) -> List[str]:
    """
    Returns the candidate skills that exist as dataset columns, in candidate order.

    Candidates without a column are skipped with a warning.
    """
    available = set(columns)
    existing = [skill for skill in candidates if skill in available]
    missing = [skill for skill in candidates if skill not in available]
    if missing:
        logger.warning(
            f"{len(missing)} candidate skills have no survey column and are excluded: {missing}"
        )
    logger.debug(f"Skill columns considered: {existing}")
    return existing


def _as_flag(value) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, float, np.integer, np.floating)):
        return not pd.isna(value) and value != 0
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return False


def normalize_skill_flags(frame: pd.DataFrame, skills: Sequence[str]) -> pd.DataFrame:
    """
    Converts boolean-like skill columns to real booleans.

    True/False, non-zero/zero numbers and the strings in ``TRUE_VALUES``
    (case-insensitive) are understood; nulls and anything else count as not used.
    """
    flags = frame.copy()
    for skill in skills:
        flags[skill] = flags[skill].map(_as_flag).astype(bool)
    return flags


def _role_order(roles_seen: Iterable[str], roles: Optional[Sequence[str]]) -> List[str]:
    ordered = list(roles) if roles else []
    extras = sorted(set(roles_seen) - set(ordered))
    return ordered + extras


def top_skills_by_role(
    mapped_df: pd.DataFrame,
    candidates: Sequence[str],
    top_n: int = 5,
    roles: Optional[Sequence[str]] = None,
    placeholder: str = DEFAULT_PLACEHOLDER_SKILL,
) -> pd.DataFrame:
    """
    Ranks the most-used skills for each mapped role.

    Args:
        mapped_df: Survey records with a ``mapped_role`` column.
        candidates: Candidate skill vocabulary.
        top_n: Maximum number of skills kept per role.
        roles: Canonical roles that must appear in the output even without
            respondents; also fixes the output role order.
        placeholder: Skill label of the zero-count row for a role with no used skills.

    Returns:
        DataFrame with columns ``role, skill, count``: at most ``top_n`` rows per
        role sorted by count descending then skill name, or a single
        ``(role, placeholder, 0)`` row for a role with no used skills.
    """
    skills = resolve_skill_columns(candidates, mapped_df.columns)

    if skills and not mapped_df.empty:
        flags = normalize_skill_flags(mapped_df[[cols.MAPPED_ROLE] + skills], skills)
        long = flags.melt(
            id_vars=[cols.MAPPED_ROLE],
            value_vars=skills,
            var_name=cols.SKILL,
            value_name=cols.SKILL_USED,
        )
        used = long.loc[long[cols.SKILL_USED].astype(bool)]
        counts = (
            used.groupby([cols.MAPPED_ROLE, cols.SKILL])
            .size()
            .reset_index(name=cols.SKILL_COUNT)
            .rename(columns={cols.MAPPED_ROLE: cols.ROLE})
        )
    else:
        counts = pd.DataFrame(columns=cols.SKILL_COUNT_COLUMNS)

    counts = counts.sort_values(
        [cols.ROLE, cols.SKILL_COUNT, cols.SKILL],
        ascending=[True, False, True],
        kind="mergesort",
    )
    top = counts.groupby(cols.ROLE, sort=False).head(top_n)

    role_order = _role_order(mapped_df[cols.MAPPED_ROLE].dropna().unique(), roles)
    ranked_roles = set(top[cols.ROLE])
    empty_roles = [role for role in role_order if role not in ranked_roles]
    if empty_roles:
        logger.info(f"No used skills reported for roles {empty_roles}; inserting placeholder rows.")
        placeholders = pd.DataFrame(
            {cols.ROLE: empty_roles, cols.SKILL: placeholder, cols.SKILL_COUNT: 0}
        )
        top = pd.concat([top, placeholders], ignore_index=True) if not top.empty else placeholders

    # Stable sort by role position keeps the per-role ranking intact
    position = {role: i for i, role in enumerate(role_order)}
    top = top.assign(_order=top[cols.ROLE].map(position))
    top = top.sort_values("_order", kind="mergesort").drop(columns="_order")
    top[cols.SKILL_COUNT] = top[cols.SKILL_COUNT].astype("int64")

    logger.info(f"Ranked top {top_n} skills for {len(role_order)} roles ({len(top)} rows).")
    return top[cols.SKILL_COUNT_COLUMNS].reset_index(drop=True)


def add_skill_rank(skill_counts: pd.DataFrame) -> pd.DataFrame:
    """Adds a 1-based ``rank`` column within each role, following row order."""
    ranked = skill_counts.copy()
    ranked[cols.SKILL_RANK] = ranked.groupby(cols.ROLE, sort=False).cumcount() + 1
    return ranked
