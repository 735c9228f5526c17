from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from pydantic import BaseModel

from app.core.config.scoring import get_scoring_value
from app.schemas.profile import Badge, UserProfile

_METRICS: dict[str, Callable[[UserProfile], int]] = {
    "profile_strength": lambda profile: profile.profile_strength_score,
    "role_readiness": lambda profile: profile.role_readiness_score,
    "resume_score": lambda profile: profile.resume_score,
    "skills": lambda profile: len(profile.skills),
    "projects": lambda profile: len(profile.projects),
    "internships": lambda profile: len(profile.internships),
    "certifications": lambda profile: len(profile.certifications),
    "connections": lambda profile: len(profile.connections),
    "score_history": lambda profile: len(profile.score_history),
    "target_role": lambda profile: 1 if profile.target_role else 0,
}


class BadgeDefinition(BaseModel):
    name: str
    icon: str
    metric: str
    min: int
    description: str

    def is_met(self, profile: UserProfile) -> bool:
        return _METRICS[self.metric](profile) >= self.min


class BadgeStatus(BaseModel):
    name: str
    icon: str
    description: str
    earned: bool
    earned_at: datetime | None = None


def badge_catalog() -> list[BadgeDefinition]:
    raw = get_scoring_value("badges", []) or []
    definitions = [BadgeDefinition.model_validate(item) for item in raw]
    unknown = sorted({item.metric for item in definitions} - set(_METRICS))
    if unknown:
        raise RuntimeError(f"Unknown badge metrics in scoring config: {', '.join(unknown)}")
    return definitions


def evaluate_badges(
    profile: UserProfile,
    earned_names: set[str] | None = None,
    now: datetime | None = None,
) -> list[Badge]:
    """Badges whose predicate holds and that are not yet earned, in catalog order."""
    earned = profile.badge_names() if earned_names is None else set(earned_names)
    moment = now or datetime.now(timezone.utc)
    new_badges: list[Badge] = []
    for definition in badge_catalog():
        if definition.name in earned:
            continue
        if definition.is_met(profile):
            new_badges.append(Badge(name=definition.name, icon=definition.icon, earned_at=moment))
            earned.add(definition.name)
    return new_badges


def badge_catalog_status(profile: UserProfile) -> list[BadgeStatus]:
    earned = {badge.name: badge for badge in profile.badges}
    statuses: list[BadgeStatus] = []
    for definition in badge_catalog():
        badge = earned.get(definition.name)
        statuses.append(
            BadgeStatus(
                name=definition.name,
                icon=definition.icon,
                description=definition.description,
                earned=badge is not None,
                earned_at=badge.earned_at if badge else None,
            )
        )
    return statuses


def badge_summary(new_badges: list[Badge]) -> str:
    if new_badges:
        return f"You earned {len(new_badges)} new badge(s)!"
    return "No new badges earned yet. Keep improving!"
