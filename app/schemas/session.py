from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

SessionType = Literal["group", "1:1"]
SessionStatus = Literal["upcoming", "ongoing", "completed", "cancelled"]


class Participant(BaseModel):
    user: str
    booked_at: datetime


class Rating(BaseModel):
    user: str
    rating: int = Field(ge=1, le=5)
    feedback: str = ""


class MentoringSession(BaseModel):
    id: str
    host: str
    title: str
    description: str = ""
    domain: str
    type: SessionType = "group"
    date_time: datetime
    duration: int = 60
    max_participants: int = Field(default=30, ge=1)
    participants: list[Participant] = Field(default_factory=list)
    ratings: list[Rating] = Field(default_factory=list)
    status: SessionStatus = "upcoming"
    credit_cost: int = Field(default=1, ge=0)

    def has_participant(self, user_id: str) -> bool:
        return any(participant.user == user_id for participant in self.participants)

    def has_rating_from(self, user_id: str) -> bool:
        return any(rating.user == user_id for rating in self.ratings)

    def spots_left(self) -> int:
        return self.max_participants - len(self.participants)


class SessionCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    domain: str = Field(min_length=1, max_length=200)
    type: SessionType = "group"
    date_time: datetime
    duration: int = Field(default=60, ge=1, le=24 * 60)
    max_participants: int = Field(default=30, ge=1, le=10000)
    credit_cost: int = Field(default=1, ge=0, le=1000)


class SessionRecommendation(BaseModel):
    session: MentoringSession
    relevance: int
    is_booked: bool
    spots_left: int


class BookingResult(BaseModel):
    message: str
    remaining_credits: int
    session: MentoringSession


class RatingRequest(BaseModel):
    rating: int
    feedback: str = Field(default="", max_length=2000)


class RatingResult(BaseModel):
    message: str
    rating: int
    session: MentoringSession
