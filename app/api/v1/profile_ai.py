from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.core.security import current_user_id
from app.schemas.ai_profile import (
    AIProfileUpdate,
    AIProfileUpdateResponse,
    AIProfileView,
    CVUploadResponse,
    GeneratedResumeResponse,
    ProfileScoreResponse,
    RoleReadinessRequest,
    RoleReadinessResponse,
    TargetRoleRequest,
    TargetRolesResponse,
)
from app.scoring import ATSScore
from app.services import profile_service
from app.services.errors import EngineError

router = APIRouter()

_UPLOAD_CHUNK_BYTES = 64 * 1024


def _raise_engine_error(exc: EngineError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=exc.to_detail()) from exc


@router.get("/ai-profile", response_model=AIProfileView)
async def get_ai_profile(user_id: str = Depends(current_user_id)):
    try:
        return profile_service.get_ai_profile(user_id)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.get("/ai-profile/roles", response_model=TargetRolesResponse)
async def get_target_roles():
    return TargetRolesResponse(roles=profile_service.list_target_roles())


@router.get("/ai-profile/profile-score", response_model=ProfileScoreResponse)
async def get_profile_score(user_id: str = Depends(current_user_id)):
    try:
        return ProfileScoreResponse(profile_strength_score=profile_service.get_profile_score(user_id))
    except EngineError as exc:
        _raise_engine_error(exc)


@router.post("/ai-profile/upload-cv", response_model=CVUploadResponse)
@rate_limit()
async def upload_cv(
    request: Request,
    cv: UploadFile = File(...),
    user_id: str = Depends(current_user_id),
):
    _ = request
    filename = cv.filename or "resume.txt"

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await cv.read(_UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)

    try:
        return profile_service.upload_cv(user_id, filename, b"".join(chunks))
    except EngineError as exc:
        _raise_engine_error(exc)


@router.post("/ai-profile/role-readiness", response_model=RoleReadinessResponse)
async def check_role_readiness(payload: RoleReadinessRequest, user_id: str = Depends(current_user_id)):
    try:
        return profile_service.check_role_readiness(user_id, payload.target_role)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.post("/ai-profile/generate-resume", response_model=GeneratedResumeResponse)
async def generate_resume(payload: TargetRoleRequest | None = None, user_id: str = Depends(current_user_id)):
    try:
        return profile_service.generate_resume(user_id, payload.target_role if payload else None)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.post("/ai-profile/ats-score", response_model=ATSScore)
async def compute_ats_score(payload: TargetRoleRequest | None = None, user_id: str = Depends(current_user_id)):
    try:
        return profile_service.compute_ats_score(user_id, payload.target_role if payload else None)
    except EngineError as exc:
        _raise_engine_error(exc)


@router.put("/ai-profile", response_model=AIProfileUpdateResponse)
async def update_ai_profile(payload: AIProfileUpdate, user_id: str = Depends(current_user_id)):
    try:
        return profile_service.update_ai_profile(user_id, payload)
    except EngineError as exc:
        _raise_engine_error(exc)
