from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, status

from app.core.security import check_api_key, current_user_id
from app.schemas.profile import UserProfile
from app.schemas.users import UserCreateRequest, UserUpdateRequest
from app.services import user_service
from app.services.errors import EngineError

router = APIRouter()


def _raise_engine_error(exc: EngineError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=exc.to_detail()) from exc


@router.post("/users", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreateRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    try:
        return user_service.create_user(payload)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.get("/users/{user_id}", response_model=UserProfile)
async def get_user(user_id: str, caller_id: str = Depends(current_user_id)):
    _ = caller_id
    try:
        return user_service.get_user_profile(user_id)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.patch("/users/{user_id}", response_model=UserProfile)
async def update_user(user_id: str, payload: UserUpdateRequest, caller_id: str = Depends(current_user_id)):
    try:
        return user_service.update_user(caller_id, user_id, payload)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.post("/users/{user_id}/connect", response_model=UserProfile)
async def connect(user_id: str, caller_id: str = Depends(current_user_id)):
    try:
        return user_service.connect_users(caller_id, user_id)
    except EngineError as exc:
        _raise_engine_error(exc)
