from __future__ import annotations

from pydantic import BaseModel, Field

from app.core.config.scoring import get_scoring_value
from app.features.skill_matcher import skills_overlap, split_by_overlap
from app.schemas.profile import UserProfile
from app.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .role_readiness import fallback_role, resolve_role_skills
from .rounding import round_half_up


class ATSScore(BaseModel):
    role: str
    ats_score: int = Field(ge=0, le=100)
    format_score: int = Field(ge=0, le=100)
    skill_match_score: int = Field(ge=0, le=100)
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    suggested_keywords: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)


def _format(key: str, default: int) -> int:
    return int(get_scoring_value(f"ats.format.{key}", default))


def format_score(profile: UserProfile) -> int:
    score = 0
    if profile.name.strip():
        score += _format("name", 10)
    if profile.email:
        score += _format("email", 10)
    if len(profile.skills) >= _format("skills.min", 5):
        score += _format("skills.points", 15)
    if len(profile.projects) >= _format("projects.min", 2):
        score += _format("projects.points", 15)
    if len(profile.internships) >= _format("internships.min", 1):
        score += _format("internships.points", 15)
    if len(profile.bio or "") > _format("bio.min_chars", 30):
        score += _format("bio.points", 10)
    if len(profile.certifications) >= _format("certifications.min", 1):
        score += _format("certifications.points", 10)
    if profile.linkedin:
        score += _format("linkedin", 5)
    if profile.location:
        score += _format("location", 5)
    if profile.course:
        score += _format("course", 5)
    return min(100, score)


def _role_keywords(role: str, taxonomy: TaxonomyProvider) -> tuple[str, ...]:
    return taxonomy.ats_keywords(role) or taxonomy.ats_keywords(fallback_role()) or ()


def _improvements(
    profile: UserProfile,
    missing_skills: list[str],
    suggested_keywords: list[str],
) -> list[str]:
    top = int(get_scoring_value("ats.limits.improvement_items", 3))
    bio_min = _format("bio.min_chars", 30)
    items: list[str] = []
    if missing_skills:
        items.append(f"Add missing skills: {', '.join(missing_skills[:top])}")
    if len(profile.bio or "") < bio_min:
        items.append("Write a detailed professional summary")
    if len(profile.projects) < _format("projects.min", 2):
        items.append("Add more project experiences")
    if not profile.linkedin:
        items.append("Add your LinkedIn profile link")
    if suggested_keywords:
        items.append(f"Include ATS keywords: {', '.join(suggested_keywords[:top])}")
    return items


def ats_score(
    profile: UserProfile,
    role: str,
    taxonomy: TaxonomyProvider | None = None,
) -> ATSScore:
    provider = taxonomy or get_default_taxonomy_provider()
    required, _ = resolve_role_skills(role, provider)
    matched, missing = split_by_overlap(required, profile.skills)
    skill_score = (len(matched) / len(required)) * 100 if required else 0.0

    keywords = [
        keyword
        for keyword in _role_keywords(role, provider)
        if not any(skills_overlap(skill, keyword) for skill in profile.skills)
    ]
    keyword_limit = int(get_scoring_value("ats.limits.suggested_keywords", 6))
    suggested = keywords[:keyword_limit]

    fmt = format_score(profile)
    format_weight = float(get_scoring_value("ats.blend.format", 0.4))
    skill_weight = float(get_scoring_value("ats.blend.skill_match", 0.6))
    final = min(100, round_half_up(fmt * format_weight + skill_score * skill_weight))

    missing_limit = int(get_scoring_value("ats.limits.missing_skills", 8))
    return ATSScore(
        role=role,
        ats_score=max(0, final),
        format_score=fmt,
        skill_match_score=round_half_up(skill_score),
        matched_skills=matched,
        missing_skills=missing[:missing_limit],
        suggested_keywords=suggested,
        improvements=_improvements(profile, missing, suggested),
    )
