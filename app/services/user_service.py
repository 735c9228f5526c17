from __future__ import annotations

import logging

from app.core.config import settings
from app.schemas.profile import UserProfile
from app.schemas.users import UserCreateRequest, UserUpdateRequest
from app.store import documents
from app.store.repositories import find_user_by_email, save_user

from .errors import Conflict, EngineError, Forbidden
from .profile_service import refresh_scores, require_user

logger = logging.getLogger(__name__)


def create_user(payload: UserCreateRequest) -> UserProfile:
    email = payload.email.strip().lower()
    with documents.transaction():
        if find_user_by_email(email) is not None:
            raise Conflict("User already exists", email=email)
        user = UserProfile(
            id=documents.new_document_id(),
            email=email,
            credits=settings.default_credits,
            **payload.model_dump(exclude={"email"}),
        )
        user = save_user(refresh_scores(user))
    logger.info("user_created id=%s role=%s", user.id, user.role)
    return user


def get_user_profile(user_id: str) -> UserProfile:
    return require_user(user_id)


def update_user(caller_id: str, user_id: str, payload: UserUpdateRequest) -> UserProfile:
    changes = payload.model_dump(exclude_none=True)
    with documents.transaction():
        if caller_id != user_id and require_user(caller_id).role != "admin":
            raise Forbidden("You can only update your own profile")
        user = refresh_scores(require_user(user_id).model_copy(update=changes))
        save_user(user)
    logger.info("user_updated id=%s fields=%s", user_id, sorted(changes))
    return user


def connect_users(user_id: str, other_id: str) -> UserProfile:
    """Mutual and idempotent; returns the caller's updated profile."""
    if user_id == other_id:
        raise EngineError("Cannot connect to yourself")
    with documents.transaction():
        user = require_user(user_id)
        other = require_user(other_id)
        if other.id not in user.connections:
            user = save_user(user.model_copy(update={"connections": user.connections + [other.id]}))
        if user.id not in other.connections:
            save_user(other.model_copy(update={"connections": other.connections + [user.id]}))
    logger.info("users_connected user=%s other=%s", user_id, other_id)
    return user
