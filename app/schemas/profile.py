from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

UserRole = Literal["student", "alumni", "admin"]


class Project(BaseModel):
    title: str
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    link: str = ""


class Internship(BaseModel):
    company: str = "Company"
    role: str = ""
    duration: str = ""
    description: str = ""


class Certification(BaseModel):
    name: str
    issuer: str = ""
    date: str = ""
    link: str = ""


class ScoreHistoryEntry(BaseModel):
    date: datetime
    profile_strength: int = 0
    role_readiness: int = 0
    resume_score: int = 0


class Badge(BaseModel):
    name: str
    icon: str = "🏆"
    earned_at: datetime


class UserProfile(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole = "student"
    profile_pic: str = ""
    bio: str = Field(default="", max_length=500)
    course: str = ""
    batch: str = ""
    company: str = ""
    job_role: str = ""
    linkedin: str = ""
    location: str = ""
    cv_filename: str = ""
    connections: list[str] = Field(default_factory=list)

    skills: list[str] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    internships: list[Internship] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    target_role: str = ""

    profile_strength_score: int = Field(default=0, ge=0, le=100)
    role_readiness_score: int = Field(default=0, ge=0, le=100)
    resume_score: int = Field(default=0, ge=0, le=100)
    skill_growth_score: int | None = Field(default=None, ge=0, le=100)
    score_history: list[ScoreHistoryEntry] = Field(default_factory=list)

    badges: list[Badge] = Field(default_factory=list)
    credits: int = 10

    @field_validator("skills")
    @classmethod
    def _strip_skills(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item and item.strip()]

    @field_validator("target_role")
    @classmethod
    def _strip_target_role(cls, value: str) -> str:
        return (value or "").strip()

    def badge_names(self) -> set[str]:
        return {badge.name for badge in self.badges}
