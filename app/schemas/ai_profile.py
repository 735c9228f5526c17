from __future__ import annotations

from pydantic import BaseModel, Field

from .profile import Badge, Certification, Internship, Project, ScoreHistoryEntry


class AIProfileView(BaseModel):
    name: str
    email: str
    bio: str = ""
    course: str = ""
    batch: str = ""
    linkedin: str = ""
    location: str = ""
    profile_pic: str = ""
    cv_filename: str = ""
    skills: list[str] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    internships: list[Internship] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    target_role: str = ""
    profile_strength_score: int
    role_readiness_score: int
    resume_score: int
    skill_growth_score: int
    score_history: list[ScoreHistoryEntry] = Field(default_factory=list)
    badges: list[Badge] = Field(default_factory=list)
    credits: int


class ProfileScoreResponse(BaseModel):
    profile_strength_score: int


class TargetRolesResponse(BaseModel):
    roles: list[str]


class ExtractedProfile(BaseModel):
    skills: list[str]
    projects: list[Project]
    internships: list[Internship]
    certifications: list[Certification]
    profile_strength_score: int
    role_readiness_score: int
    cv_filename: str


class CVUploadResponse(BaseModel):
    message: str
    extracted_skills: int
    extracted_projects: int
    extracted_internships: int
    extracted_certifications: int
    parsing_warnings: list[str] = Field(default_factory=list)
    profile: ExtractedProfile


class RoleReadinessRequest(BaseModel):
    target_role: str = Field(min_length=1, max_length=120)


class RoleReadinessResponse(BaseModel):
    target_role: str
    readiness_score: int
    matched_skills: list[str]
    missing_skills: list[str]
    recognized_role: bool


class TargetRoleRequest(BaseModel):
    target_role: str | None = Field(default=None, max_length=120)


class ResumeHeader(BaseModel):
    name: str
    email: str
    location: str
    linkedin: str
    target_role: str


class ResumeEducation(BaseModel):
    course: str
    batch: str


class GeneratedResume(BaseModel):
    header: ResumeHeader
    summary: str
    skills: list[str]
    projects: list[Project]
    internships: list[Internship]
    certifications: list[Certification]
    education: ResumeEducation


class GeneratedResumeResponse(BaseModel):
    resume: GeneratedResume
    readiness_score: int


class AIProfileUpdate(BaseModel):
    skills: list[str] | None = None
    projects: list[Project] | None = None
    internships: list[Internship] | None = None
    certifications: list[Certification] | None = None
    target_role: str | None = Field(default=None, max_length=120)


class AIProfileScores(BaseModel):
    skills: list[str]
    projects: list[Project]
    internships: list[Internship]
    certifications: list[Certification]
    target_role: str
    profile_strength_score: int
    role_readiness_score: int
    resume_score: int
    skill_growth_score: int | None = None


class AIProfileUpdateResponse(BaseModel):
    message: str
    user: AIProfileScores
