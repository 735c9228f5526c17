from __future__ import annotations

from pydantic import BaseModel, Field

from .profile import UserRole


class UserCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    role: UserRole = "student"
    bio: str = Field(default="", max_length=500)
    profile_pic: str = ""
    course: str = ""
    batch: str = ""
    company: str = ""
    job_role: str = ""
    linkedin: str = ""
    location: str = ""
    skills: list[str] = Field(default_factory=list)


class UserUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    role: UserRole | None = None
    bio: str | None = Field(default=None, max_length=500)
    profile_pic: str | None = None
    course: str | None = None
    batch: str | None = None
    company: str | None = None
    job_role: str | None = None
    linkedin: str | None = None
    location: str | None = None
