from __future__ import annotations

import logging

from app.schemas.gamification import (
    BadgeCheckResponse,
    BadgesResponse,
    BadgeView,
    CurrentScores,
    DashboardResponse,
    LeaderboardEntry,
    ProgressResponse,
)
from app.scoring import badge_catalog_status, badge_summary, composite_score, evaluate_badges
from app.store import documents
from app.store.repositories import list_users, save_user

from .profile_service import refresh_scores, require_user

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 10
RECENT_HISTORY = 7


def leaderboard(limit: int = LEADERBOARD_SIZE) -> list[LeaderboardEntry]:
    students = [user for user in list_users() if user.role == "student"]
    students.sort(key=lambda user: -user.profile_strength_score)
    return [
        LeaderboardEntry(
            rank=index + 1,
            user_id=student.id,
            name=student.name,
            profile_pic=student.profile_pic,
            composite_score=composite_score(student),
            profile_strength=student.profile_strength_score,
            role_readiness=student.role_readiness_score,
            resume_score=student.resume_score,
            skill_growth=student.skill_growth_score or 0,
            badge_count=len(student.badges),
        )
        for index, student in enumerate(students[:limit])
    ]


def badges(user_id: str) -> BadgesResponse:
    statuses = [BadgeView.model_validate(status.model_dump()) for status in badge_catalog_status(require_user(user_id))]
    earned = [status for status in statuses if status.earned]
    return BadgesResponse(
        earned=earned,
        available=[status for status in statuses if not status.earned],
        total=len(statuses),
        earned_count=len(earned),
    )


def progress(user_id: str) -> ProgressResponse:
    user = require_user(user_id)
    return ProgressResponse(
        score_history=user.score_history,
        current_scores=CurrentScores(
            profile_strength=user.profile_strength_score,
            role_readiness=user.role_readiness_score,
            resume_score=user.resume_score,
            skill_growth=user.skill_growth_score or 0,
        ),
        skills=user.skills,
        project_count=len(user.projects),
        cert_count=len(user.certifications),
        internship_count=len(user.internships),
    )


def dashboard(user_id: str) -> DashboardResponse:
    user = require_user(user_id)
    return DashboardResponse(
        profile_strength=user.profile_strength_score,
        role_readiness=user.role_readiness_score,
        resume_score=user.resume_score,
        skill_growth=user.skill_growth_score or 0,
        composite_score=composite_score(user),
        target_role=user.target_role,
        badge_count=len(user.badges),
        credits=user.credits,
        skill_count=len(user.skills),
        project_count=len(user.projects),
        recent_history=user.score_history[-RECENT_HISTORY:],
    )


def check_badges(user_id: str) -> BadgeCheckResponse:
    with documents.transaction():
        user = refresh_scores(require_user(user_id))
        new_badges = evaluate_badges(user)
        user = user.model_copy(update={"badges": user.badges + new_badges})
        save_user(user)

    if new_badges:
        logger.info("badges_awarded user=%s badges=%s", user.id, [badge.name for badge in new_badges])
    return BadgeCheckResponse(
        new_badges=new_badges,
        total_badges=len(user.badges),
        message=badge_summary(new_badges),
    )
