from __future__ import annotations

import logging
from datetime import datetime, timezone

from app.schemas.session import (
    BookingResult,
    MentoringSession,
    Participant,
    Rating,
    RatingRequest,
    RatingResult,
    SessionCreateRequest,
    SessionRecommendation,
)
from app.scoring import session_relevance
from app.store import documents
from app.store.repositories import get_session, list_sessions, save_session, save_user

from .errors import (
    CapacityExceeded,
    DuplicateBooking,
    DuplicateRating,
    Forbidden,
    InsufficientCredits,
    NotAParticipant,
    NotFound,
    SessionUnavailable,
)
from .profile_service import require_user

logger = logging.getLogger(__name__)

HOSTING_ROLES = {"alumni", "admin"}
LISTED_STATUSES = {"upcoming", "ongoing"}


def _require_session(session_id: str) -> MentoringSession:
    session = get_session(session_id)
    if session is None:
        raise NotFound("Session not found", session_id=session_id)
    return session


def create_session(user_id: str, payload: SessionCreateRequest) -> MentoringSession:
    host = require_user(user_id)
    if host.role not in HOSTING_ROLES:
        raise Forbidden("Only alumni and admins can create sessions", role=host.role)

    session = MentoringSession(
        id=documents.new_document_id(),
        host=host.id,
        title=payload.title.strip(),
        description=payload.description,
        domain=payload.domain.strip(),
        type=payload.type,
        date_time=payload.date_time,
        duration=payload.duration,
        max_participants=1 if payload.type == "1:1" else payload.max_participants,
        credit_cost=payload.credit_cost,
    )
    save_session(session)
    logger.info("session_created id=%s host=%s domain=%r type=%s", session.id, host.id, session.domain, session.type)
    return session


def _by_date(sessions: list[MentoringSession]) -> list[MentoringSession]:
    return sorted(sessions, key=lambda session: session.date_time)


def list_available_sessions(domain: str | None = None) -> list[MentoringSession]:
    needle = (domain or "").strip().lower()
    sessions = [
        session
        for session in list_sessions()
        if session.status in LISTED_STATUSES and (not needle or needle in session.domain.lower())
    ]
    return _by_date(sessions)


def recommended_sessions(user_id: str) -> list[SessionRecommendation]:
    user = require_user(user_id)
    recommendations = [
        SessionRecommendation(
            session=session,
            relevance=session_relevance(user, session),
            is_booked=session.has_participant(user.id),
            spots_left=session.spots_left(),
        )
        for session in list_available_sessions()
    ]
    recommendations.sort(key=lambda item: -item.relevance)
    return recommendations


def my_bookings(user_id: str) -> list[MentoringSession]:
    require_user(user_id)
    return _by_date([session for session in list_sessions() if session.has_participant(user_id)])


def book_session(user_id: str, session_id: str) -> BookingResult:
    with documents.transaction():
        session = _require_session(session_id)
        if session.status != "upcoming":
            raise SessionUnavailable("Session is not available for booking", status=session.status)
        if session.has_participant(user_id):
            raise DuplicateBooking("Already booked")
        if session.spots_left() <= 0:
            raise CapacityExceeded("Session is full", max_participants=session.max_participants)

        user = require_user(user_id)
        if user.credits < session.credit_cost:
            raise InsufficientCredits(
                f"Not enough credits. Need {session.credit_cost}, have {user.credits}",
                current=user.credits,
                required=session.credit_cost,
            )

        user = save_user(user.model_copy(update={"credits": user.credits - session.credit_cost}))
        participants = session.participants + [Participant(user=user.id, booked_at=datetime.now(timezone.utc))]
        session = save_session(session.model_copy(update={"participants": participants}))

    logger.info("session_booked id=%s user=%s cost=%d remaining=%d", session.id, user.id, session.credit_cost, user.credits)
    return BookingResult(message="Session booked successfully", remaining_credits=user.credits, session=session)


def rate_session(user_id: str, session_id: str, payload: RatingRequest) -> RatingResult:
    rating = min(5, max(1, payload.rating))
    with documents.transaction():
        session = _require_session(session_id)
        if not session.has_participant(user_id):
            raise NotAParticipant("You did not attend this session")
        if session.has_rating_from(user_id):
            raise DuplicateRating("Already rated")
        ratings = session.ratings + [Rating(user=user_id, rating=rating, feedback=payload.feedback)]
        session = save_session(session.model_copy(update={"ratings": ratings}))

    logger.info("session_rated id=%s user=%s rating=%d", session.id, user_id, rating)
    return RatingResult(message="Rating submitted", rating=rating, session=session)
