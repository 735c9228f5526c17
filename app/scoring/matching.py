from __future__ import annotations

import re

from pydantic import BaseModel, Field

from app.core.config.scoring import get_scoring_value
from app.features.skill_matcher import skills_overlap, split_by_overlap
from app.schemas.profile import UserProfile
from app.schemas.referral import Referral
from app.schemas.session import MentoringSession

from .rounding import clamp_score, round_half_up

_DOMAIN_SPLIT_RE = re.compile(r"[\s,]+")


class ReferralMatch(BaseModel):
    score: int = Field(ge=0, le=100)
    skill_score: float
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)


def referral_match(profile: UserProfile, referral: Referral) -> ReferralMatch:
    required = [skill.strip().lower() for skill in referral.required_skills if skill and skill.strip()]
    matched, missing = split_by_overlap(required, profile.skills)
    if required:
        skill_score = (len(matched) / len(required)) * 100
    else:
        skill_score = float(get_scoring_value("referral_match.default_skill_score", 50))

    # A growth score of 0 is treated as "not yet tracked", like an unset one.
    growth = profile.skill_growth_score or int(get_scoring_value("referral_match.default_growth_score", 50))
    weights = {
        "skills": float(get_scoring_value("referral_match.weights.skills", 0.6)),
        "profile_strength": float(get_scoring_value("referral_match.weights.profile_strength", 0.25)),
        "skill_growth": float(get_scoring_value("referral_match.weights.skill_growth", 0.15)),
    }
    total = (
        skill_score * weights["skills"]
        + profile.profile_strength_score * weights["profile_strength"]
        + growth * weights["skill_growth"]
    )
    return ReferralMatch(
        score=min(100, round_half_up(total)),
        skill_score=skill_score,
        matched_skills=matched,
        missing_skills=missing,
    )


def referral_match_score(profile: UserProfile, referral: Referral) -> int:
    return referral_match(profile, referral).score


def session_relevance(profile: UserProfile, session: MentoringSession) -> int:
    domain = (session.domain or "").strip().lower()
    if not domain:
        return 0
    skills = [skill.lower() for skill in profile.skills if skill.strip()]
    target_role = (profile.target_role or "").strip().lower()

    relevance = 0
    if any(skills_overlap(skill, domain) for skill in skills):
        relevance += int(get_scoring_value("session_relevance.skill_domain", 40))
    if target_role and skills_overlap(target_role, domain):
        relevance += int(get_scoring_value("session_relevance.role_domain", 30))

    words = [word for word in _DOMAIN_SPLIT_RE.split(domain) if word]
    token_matches = sum(1 for word in words if any(skills_overlap(skill, word) for skill in skills))
    per_match = int(get_scoring_value("session_relevance.token.per_match", 10))
    token_cap = int(get_scoring_value("session_relevance.token.cap", 30))
    relevance += min(token_cap, token_matches * per_match)
    return clamp_score(relevance)


def composite_score(profile: UserProfile) -> int:
    """Leaderboard/dashboard blend of the four cached scores."""
    weights = get_scoring_value("composite", {}) or {}
    total = (
        profile.profile_strength_score * float(weights.get("profile_strength", 0.3))
        + profile.role_readiness_score * float(weights.get("role_readiness", 0.25))
        + profile.resume_score * float(weights.get("resume_score", 0.25))
        + (profile.skill_growth_score or 0) * float(weights.get("skill_growth", 0.2))
    )
    return clamp_score(total)
