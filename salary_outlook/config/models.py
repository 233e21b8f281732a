# salary_outlook/config/models.py
"""
Pydantic models for validating the structure and types of the report
configuration loaded from YAML (defaults.yaml merged with a user file).
"""

import logging
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_SKILL = "No top skills reported"


class SkillSettings(BaseModel):
    """Controls the per-role skill ranking."""

    top_n: int = Field(5, ge=1, description="Maximum number of skills kept per role")
    placeholder: str = Field(
        DEFAULT_PLACEHOLDER_SKILL,
        min_length=1,
        description="Skill label used for the zero-count row of a role with no used skills",
    )
    candidates: List[str] = Field(
        default_factory=list,
        description="Candidate skill vocabulary; only those present as survey columns are ranked",
    )

    @field_validator("candidates")
    @classmethod
    def drop_duplicate_candidates(cls, value: List[str]) -> List[str]:
        """Keep the first occurrence of each candidate, preserving order."""
        seen = set()
        unique = []
        for skill in value:
            if skill not in seen:
                seen.add(skill)
                unique.append(skill)
        if len(unique) != len(value):
            logger.warning(f"Dropped {len(value) - len(unique)} duplicate skill candidates")
        return unique


class ForecastSettings(BaseModel):
    """Controls the per-role salary trend fits."""

    horizon: int = Field(2, ge=1, description="Years projected past the latest observed year")
    years: List[int] = Field(
        default_factory=list,
        description="Explicit projection years; overrides horizon when non-empty",
    )
    confidence_level: float = Field(0.95, gt=0.0, lt=1.0)
    min_years: int = Field(
        2, ge=2, description="Minimum distinct observed years required to fit a role"
    )
    max_workers: int = Field(1, ge=1, description="Thread pool size for the per-role fits")

    @field_validator("years")
    @classmethod
    def sort_years(cls, value: List[int]) -> List[int]:
        return sorted(set(value))


class ReportConfig(BaseModel):
    """Top-level report configuration."""

    roles: List[str] = Field(..., min_length=1, description="Canonical target roles")
    role_mapping: Dict[str, str] = Field(
        ..., min_length=1, description="Raw survey role label -> canonical role"
    )
    skills: SkillSettings = Field(default_factory=SkillSettings)
    forecast: ForecastSettings = Field(default_factory=ForecastSettings)

    @model_validator(mode='after')
    def check_mapping_targets(self) -> 'ReportConfig':
        """Every mapping target must be one of the canonical roles."""
        if len(set(self.roles)) != len(self.roles):
            raise ValueError(f"Canonical roles must be unique, got {self.roles}")
        unknown = sorted({target for target in self.role_mapping.values() if target not in self.roles})
        if unknown:
            raise ValueError(
                f"role_mapping targets {unknown} are not canonical roles {self.roles}"
            )
        return self
