from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ApplicantStatus = Literal["eligible", "applied", "shortlisted", "rejected"]
ReferralStatus = Literal["open", "closed", "filled"]


class Applicant(BaseModel):
    user: str
    match_score: int = 0
    rank: int = 0
    status: ApplicantStatus = "eligible"
    applied_at: datetime | None = None


class Referral(BaseModel):
    id: str
    posted_by: str
    company: str
    role: str
    description: str = ""
    required_skills: list[str] = Field(default_factory=list)
    min_profile_score: int = Field(default=0, ge=0, le=100)
    max_applicants: int = Field(default=10, ge=1)
    applicants: list[Applicant] = Field(default_factory=list)
    status: ReferralStatus = "open"
    deadline: datetime | None = None
    created_at: datetime

    def applied_count(self) -> int:
        return sum(1 for applicant in self.applicants if applicant.status == "applied")

    def find_applicant(self, user_id: str) -> Applicant | None:
        for applicant in self.applicants:
            if applicant.user == user_id:
                return applicant
        return None


class ReferralCreateRequest(BaseModel):
    company: str = Field(min_length=1, max_length=200)
    role: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    required_skills: list[str] = Field(default_factory=list)
    min_profile_score: int = Field(default=0, ge=0, le=100)
    max_applicants: int = Field(default=10, ge=1, le=1000)
    deadline: datetime | None = None


class ReferralMatchView(BaseModel):
    referral: Referral
    match_score: int
    meets_min_score: bool
    has_applied: bool
    application_status: ApplicantStatus | None = None
    applicant_count: int
    rank: int


class ApplicationResult(BaseModel):
    message: str
    match_score: int
    rank: int


class ApplicantSummary(BaseModel):
    user: str
    name: str = ""
    profile_pic: str = ""
    skills: list[str] = Field(default_factory=list)
    profile_strength_score: int = 0
    match_score: int
    rank: int
    status: ApplicantStatus
    applied_at: datetime | None = None


class ReferralDetail(BaseModel):
    referral: Referral
    applicants: list[ApplicantSummary] = Field(default_factory=list)
