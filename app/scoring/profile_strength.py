from __future__ import annotations

from app.core.config.scoring import get_scoring_value
from app.schemas.profile import UserProfile

from .rounding import round_half_up


def _points(key: str, default: int) -> int:
    return int(get_scoring_value(f"profile_strength.{key}", default))


def _capped(count: int, key: str, per_item: int, cap: int) -> int:
    if count <= 0:
        return 0
    return min(_points(f"{key}.cap", cap), count * _points(f"{key}.per_item", per_item))


def profile_strength(profile: UserProfile) -> int:
    """Weighted presence/quantity score over the public profile fields, 0-100."""
    score = 0
    if profile.name.strip():
        score += _points("name", 5)
    if len(profile.bio or "") > _points("bio.min_chars", 20):
        score += _points("bio.points", 10)
    if profile.profile_pic:
        score += _points("profile_pic", 5)
    score += _capped(len(profile.skills), "skills", 4, 20)
    score += _capped(len(profile.projects), "projects", 7, 20)
    score += _capped(len(profile.internships), "internships", 8, 15)
    score += _capped(len(profile.certifications), "certifications", 5, 10)
    if profile.course:
        score += _points("course", 5)
    if profile.linkedin:
        score += _points("linkedin", 5)
    if profile.target_role:
        score += _points("target_role", 5)
    return min(100, round_half_up(score))
