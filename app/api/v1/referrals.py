from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.security import current_user_id
from app.schemas.referral import (
    ApplicationResult,
    Referral,
    ReferralCreateRequest,
    ReferralDetail,
    ReferralMatchView,
)
from app.services import referral_service
from app.services.errors import EngineError

router = APIRouter()


def _raise_engine_error(exc: EngineError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=exc.to_detail()) from exc


@router.post("/referrals", response_model=Referral, status_code=status.HTTP_201_CREATED)
async def create_referral(payload: ReferralCreateRequest, user_id: str = Depends(current_user_id)):
    try:
        return referral_service.create_referral(user_id, payload)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.get("/referrals", response_model=list[Referral])
async def list_referrals(user_id: str = Depends(current_user_id)):
    _ = user_id
    return referral_service.list_open_referrals()


@router.get("/referrals/matches", response_model=list[ReferralMatchView])
async def referral_matches(user_id: str = Depends(current_user_id)):
    try:
        return referral_service.referral_matches(user_id)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.get("/referrals/{referral_id}", response_model=ReferralDetail)
async def get_referral(referral_id: str, user_id: str = Depends(current_user_id)):
    _ = user_id
    try:
        return referral_service.get_referral_detail(referral_id)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.post("/referrals/{referral_id}/apply", response_model=ApplicationResult)
async def apply_to_referral(referral_id: str, user_id: str = Depends(current_user_id)):
    try:
        return referral_service.apply_to_referral(user_id, referral_id)
    except EngineError as exc:
        _raise_engine_error(exc)
