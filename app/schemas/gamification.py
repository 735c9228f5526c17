from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .profile import Badge, ScoreHistoryEntry


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: str
    name: str
    profile_pic: str = ""
    composite_score: int
    profile_strength: int
    role_readiness: int
    resume_score: int
    skill_growth: int
    badge_count: int


class BadgeView(BaseModel):
    name: str
    icon: str
    description: str
    earned: bool
    earned_at: datetime | None = None


class BadgesResponse(BaseModel):
    earned: list[BadgeView] = Field(default_factory=list)
    available: list[BadgeView] = Field(default_factory=list)
    total: int
    earned_count: int


class CurrentScores(BaseModel):
    profile_strength: int
    role_readiness: int
    resume_score: int
    skill_growth: int


class ProgressResponse(BaseModel):
    score_history: list[ScoreHistoryEntry] = Field(default_factory=list)
    current_scores: CurrentScores
    skills: list[str] = Field(default_factory=list)
    project_count: int
    cert_count: int
    internship_count: int


class DashboardResponse(BaseModel):
    profile_strength: int
    role_readiness: int
    resume_score: int
    skill_growth: int
    composite_score: int
    target_role: str
    badge_count: int
    credits: int
    skill_count: int
    project_count: int
    recent_history: list[ScoreHistoryEntry] = Field(default_factory=list)


class BadgeCheckResponse(BaseModel):
    new_badges: list[Badge] = Field(default_factory=list)
    total_badges: int
    message: str
