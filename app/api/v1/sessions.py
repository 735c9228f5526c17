from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.security import current_user_id
from app.schemas.session import (
    BookingResult,
    MentoringSession,
    RatingRequest,
    RatingResult,
    SessionCreateRequest,
    SessionRecommendation,
)
from app.services import session_service
from app.services.errors import EngineError

router = APIRouter()


def _raise_engine_error(exc: EngineError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=exc.to_detail()) from exc


@router.post("/sessions", response_model=MentoringSession, status_code=status.HTTP_201_CREATED)
async def create_session(payload: SessionCreateRequest, user_id: str = Depends(current_user_id)):
    try:
        return session_service.create_session(user_id, payload)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.get("/sessions", response_model=list[MentoringSession])
async def list_sessions(
    domain: str | None = Query(default=None, max_length=200),
    user_id: str = Depends(current_user_id),
):
    _ = user_id
    return session_service.list_available_sessions(domain)


@router.get("/sessions/recommended", response_model=list[SessionRecommendation])
async def recommended_sessions(user_id: str = Depends(current_user_id)):
    try:
        return session_service.recommended_sessions(user_id)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.get("/sessions/my-bookings", response_model=list[MentoringSession])
async def my_bookings(user_id: str = Depends(current_user_id)):
    try:
        return session_service.my_bookings(user_id)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.post("/sessions/{session_id}/book", response_model=BookingResult)
async def book_session(session_id: str, user_id: str = Depends(current_user_id)):
    try:
        return session_service.book_session(user_id, session_id)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.post("/sessions/{session_id}/rate", response_model=RatingResult)
async def rate_session(session_id: str, payload: RatingRequest, user_id: str = Depends(current_user_id)):
    try:
        return session_service.rate_session(user_id, session_id, payload)
    except EngineError as exc:
        _raise_engine_error(exc)
