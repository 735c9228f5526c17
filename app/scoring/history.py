from __future__ import annotations

from datetime import datetime, timezone

from app.core.config.scoring import get_scoring_value
from app.schemas.profile import ScoreHistoryEntry

from .rounding import clamp_score


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _day(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date().isoformat()


def max_history_entries() -> int:
    return int(get_scoring_value("history.max_entries", 30))


def record_scores(
    history: list[ScoreHistoryEntry],
    *,
    profile_strength: int,
    role_readiness: int,
    resume_score: int,
    now: datetime | None = None,
) -> list[ScoreHistoryEntry]:
    """Append today's scores unless today already has an entry; keep the newest N."""
    moment = now or _utc_now()
    updated = list(history)
    if updated and _day(updated[-1].date) == _day(moment):
        return updated

    updated.append(
        ScoreHistoryEntry(
            date=moment,
            profile_strength=profile_strength,
            role_readiness=role_readiness,
            resume_score=resume_score,
        )
    )
    limit = max_history_entries()
    if len(updated) > limit:
        updated = updated[-limit:]
    return updated


def skill_growth(history: list[ScoreHistoryEntry], previous: int | None) -> int | None:
    """Finite difference of oldest vs newest entry, centered on the baseline."""
    if len(history) < 2:
        return previous
    first = history[0]
    last = history[-1]
    delta = (
        (last.profile_strength - first.profile_strength)
        + (last.role_readiness - first.role_readiness)
        + (last.resume_score - first.resume_score)
    ) / 3
    baseline = float(get_scoring_value("history.growth_baseline", 50))
    return clamp_score(baseline + delta)
