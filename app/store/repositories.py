from __future__ import annotations

from app.schemas.profile import UserProfile
from app.schemas.referral import Referral
from app.schemas.session import MentoringSession

from .documents import get_document, list_documents, put_document


def get_user(user_id: str) -> UserProfile | None:
    raw = get_document("users", user_id)
    return UserProfile.model_validate(raw) if raw is not None else None


def save_user(user: UserProfile) -> UserProfile:
    put_document("users", user.id, user.model_dump(mode="json"))
    return user


def list_users() -> list[UserProfile]:
    return [UserProfile.model_validate(raw) for raw in list_documents("users")]


def find_user_by_email(email: str) -> UserProfile | None:
    needle = (email or "").strip().lower()
    for user in list_users():
        if user.email.lower() == needle:
            return user
    return None


def get_referral(referral_id: str) -> Referral | None:
    raw = get_document("referrals", referral_id)
    return Referral.model_validate(raw) if raw is not None else None


def save_referral(referral: Referral) -> Referral:
    put_document("referrals", referral.id, referral.model_dump(mode="json"))
    return referral


def list_referrals() -> list[Referral]:
    return [Referral.model_validate(raw) for raw in list_documents("referrals")]


def get_session(session_id: str) -> MentoringSession | None:
    raw = get_document("sessions", session_id)
    return MentoringSession.model_validate(raw) if raw is not None else None


def save_session(session: MentoringSession) -> MentoringSession:
    put_document("sessions", session.id, session.model_dump(mode="json"))
    return session


def list_sessions() -> list[MentoringSession]:
    return [MentoringSession.model_validate(raw) for raw in list_documents("sessions")]
