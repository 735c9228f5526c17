from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from app.core.config.scoring import get_scoring_value
from app.features.skill_matcher import split_by_overlap
from app.schemas.profile import UserProfile
from app.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .rounding import round_half_up

logger = logging.getLogger(__name__)

_DEFAULT_FALLBACK_ROLE = "full stack developer"


class RoleReadiness(BaseModel):
    role: str
    score: int = Field(ge=0, le=100)
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    recognized: bool = True


def fallback_role() -> str:
    return str(get_scoring_value("role_readiness.fallback_role", _DEFAULT_FALLBACK_ROLE)).lower()


def resolve_role_skills(role: str, taxonomy: TaxonomyProvider) -> tuple[tuple[str, ...], bool]:
    """Exact case-insensitive lookup; unknown roles use the fallback role's catalog."""
    skills = taxonomy.role_skills(role)
    if skills:
        return skills, True
    logger.info("role_catalog_fallback role=%r fallback=%r", role, fallback_role())
    return taxonomy.role_skills(fallback_role()) or (), False


def _bonus(key: str, count: int, per_item: int, cap: int) -> int:
    per = int(get_scoring_value(f"role_readiness.bonuses.{key}.per_item", per_item))
    limit = int(get_scoring_value(f"role_readiness.bonuses.{key}.cap", cap))
    return min(limit, count * per)


def role_readiness(
    profile: UserProfile,
    role: str,
    taxonomy: TaxonomyProvider | None = None,
) -> RoleReadiness:
    provider = taxonomy or get_default_taxonomy_provider()
    required, recognized = resolve_role_skills(role, provider)
    matched, missing = split_by_overlap(required, profile.skills)

    skill_weight = float(get_scoring_value("role_readiness.skill_weight", 75))
    base = (len(matched) / len(required)) * skill_weight if required else 0.0
    bonuses = (
        _bonus("projects", len(profile.projects), 3, 10)
        + _bonus("internships", len(profile.internships), 5, 10)
        + _bonus("certifications", len(profile.certifications), 2, 5)
    )
    score = round_half_up(min(100.0, base + bonuses))
    return RoleReadiness(
        role=role,
        score=max(0, score),
        matched_skills=matched,
        missing_skills=missing,
        recognized=recognized,
    )


def readiness_for_profile(profile: UserProfile, taxonomy: TaxonomyProvider | None = None) -> int:
    """Readiness against the stored target role; 0 when no role is set."""
    if not profile.target_role:
        return 0
    return role_readiness(profile, profile.target_role, taxonomy).score
