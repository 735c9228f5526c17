from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.core.security import current_user_id
from app.schemas.gamification import (
    BadgeCheckResponse,
    BadgesResponse,
    DashboardResponse,
    LeaderboardEntry,
    ProgressResponse,
)
from app.services import gamification_service
from app.services.errors import EngineError

router = APIRouter()


def _raise_engine_error(exc: EngineError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=exc.to_detail()) from exc


@router.get("/gamification/leaderboard", response_model=list[LeaderboardEntry])
async def leaderboard(user_id: str = Depends(current_user_id)):
    _ = user_id
    return gamification_service.leaderboard()


@router.get("/gamification/badges", response_model=BadgesResponse)
async def badges(user_id: str = Depends(current_user_id)):
    try:
        return gamification_service.badges(user_id)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.get("/gamification/progress", response_model=ProgressResponse)
async def progress(user_id: str = Depends(current_user_id)):
    try:
        return gamification_service.progress(user_id)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.get("/gamification/dashboard", response_model=DashboardResponse)
async def dashboard(user_id: str = Depends(current_user_id)):
    try:
        return gamification_service.dashboard(user_id)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.post("/gamification/check-badges", response_model=BadgeCheckResponse)
async def check_badges(user_id: str = Depends(current_user_id)):
    try:
        return gamification_service.check_badges(user_id)
    except EngineError as exc:
        _raise_engine_error(exc)
