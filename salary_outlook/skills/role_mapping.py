# salary_outlook/skills/role_mapping.py
"""
Maps raw survey role labels onto canonical target roles.

The lookup table comes from configuration (``role_mapping``), so a new survey
taxonomy only needs a config change. Matching is exact and case-sensitive;
respondents whose label has no entry are dropped, not kept with a null role.
"""

import logging
from typing import Mapping, Optional, Tuple

import pandas as pd

from ..schema import columns as cols

logger = logging.getLogger(__name__)


def map_role(label: object, role_mapping: Mapping[str, str]) -> Optional[str]:
    """Return the canonical role for a raw label, or None if it is unmapped."""
    if not isinstance(label, str):
        return None
    return role_mapping.get(label)


def map_survey_roles(
    survey_df: pd.DataFrame,
    role_mapping: Mapping[str, str],
) -> Tuple[pd.DataFrame, int]:
    """
    Adds a ``mapped_role`` column and drops respondents with no mapping entry.

    Args:
        survey_df: Survey records with a ``current_role`` column.
        role_mapping: Raw label -> canonical role.

    Returns:
        Tuple of (mapped copy of the survey frame, number of dropped rows).
    """
    mapped = survey_df.copy()
    mapped[cols.MAPPED_ROLE] = mapped[cols.CURRENT_ROLE].map(
        lambda label: map_role(label, role_mapping)
    )

    unmapped = mapped[cols.MAPPED_ROLE].isna()
    dropped = int(unmapped.sum())
    if dropped:
        labels = sorted(mapped.loc[unmapped, cols.CURRENT_ROLE].dropna().astype(str).unique())
        logger.warning(
            f"Dropped {dropped} of {len(mapped)} survey rows with unmapped roles "
            f"({len(labels)} distinct labels)."
        )
        logger.debug(f"Unmapped role labels: {labels}")

    mapped = mapped.loc[~unmapped].reset_index(drop=True)
    logger.info(
        f"Mapped {len(mapped)} survey rows onto roles: "
        f"{mapped[cols.MAPPED_ROLE].value_counts().sort_index().to_dict()}"
    )
    return mapped, dropped
