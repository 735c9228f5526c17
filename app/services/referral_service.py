from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from app.schemas.profile import UserProfile
from app.schemas.referral import (
    Applicant,
    ApplicantSummary,
    ApplicationResult,
    Referral,
    ReferralCreateRequest,
    ReferralDetail,
    ReferralMatchView,
)
from app.scoring import referral_match_score
from app.store import documents
from app.store.repositories import get_referral, get_user, list_referrals, save_referral

from .errors import (
    BelowMinimumScore,
    CapacityExceeded,
    DuplicateApplication,
    Forbidden,
    NotFound,
    ReferralClosed,
)
from .profile_service import refresh_scores, require_user

logger = logging.getLogger(__name__)

DEFAULT_DEADLINE_DAYS = 30
POSTING_ROLES = {"alumni", "admin"}


def _require_referral(referral_id: str) -> Referral:
    referral = get_referral(referral_id)
    if referral is None:
        raise NotFound("Referral not found", referral_id=referral_id)
    return referral


def rank_applicants(applicants: list[Applicant]) -> list[Applicant]:
    """Stable sort by match score, descending; ranks are 1..n positions."""
    ordered = sorted(applicants, key=lambda applicant: -applicant.match_score)
    return [applicant.model_copy(update={"rank": index + 1}) for index, applicant in enumerate(ordered)]


def create_referral(user_id: str, payload: ReferralCreateRequest) -> Referral:
    poster = require_user(user_id)
    if poster.role not in POSTING_ROLES:
        raise Forbidden("Only alumni can post referrals", role=poster.role)

    now = datetime.now(timezone.utc)
    referral = Referral(
        id=documents.new_document_id(),
        posted_by=poster.id,
        company=payload.company.strip(),
        role=payload.role.strip(),
        description=payload.description,
        required_skills=[skill.strip() for skill in payload.required_skills if skill and skill.strip()],
        min_profile_score=payload.min_profile_score,
        max_applicants=payload.max_applicants,
        deadline=payload.deadline or now + timedelta(days=DEFAULT_DEADLINE_DAYS),
        created_at=now,
    )
    save_referral(referral)
    logger.info("referral_created id=%s poster=%s company=%r role=%r", referral.id, poster.id, referral.company, referral.role)
    return referral


def list_open_referrals() -> list[Referral]:
    open_referrals = [referral for referral in list_referrals() if referral.status == "open"]
    return sorted(open_referrals, key=lambda referral: referral.created_at, reverse=True)


def _match_view(user: UserProfile, referral: Referral) -> ReferralMatchView:
    applicant = referral.find_applicant(user.id)
    return ReferralMatchView(
        referral=referral,
        match_score=referral_match_score(user, referral),
        meets_min_score=user.profile_strength_score >= referral.min_profile_score,
        has_applied=applicant is not None,
        application_status=applicant.status if applicant else None,
        applicant_count=referral.applied_count(),
        rank=0,
    )


def referral_matches(user_id: str) -> list[ReferralMatchView]:
    user = refresh_scores(require_user(user_id))
    views = [_match_view(user, referral) for referral in list_open_referrals()]
    views.sort(key=lambda view: -view.match_score)
    return [view.model_copy(update={"rank": index + 1}) for index, view in enumerate(views)]


def get_referral_detail(referral_id: str) -> ReferralDetail:
    referral = _require_referral(referral_id)
    summaries: list[ApplicantSummary] = []
    for applicant in referral.applicants:
        user = get_user(applicant.user)
        summaries.append(
            ApplicantSummary(
                user=applicant.user,
                name=user.name if user else "",
                profile_pic=user.profile_pic if user else "",
                skills=user.skills if user else [],
                profile_strength_score=user.profile_strength_score if user else 0,
                match_score=applicant.match_score,
                rank=applicant.rank,
                status=applicant.status,
                applied_at=applicant.applied_at,
            )
        )
    return ReferralDetail(referral=referral, applicants=summaries)


def apply_to_referral(user_id: str, referral_id: str) -> ApplicationResult:
    with documents.transaction():
        referral = _require_referral(referral_id)
        if referral.status != "open":
            raise ReferralClosed("Referral is no longer open", status=referral.status)

        user = refresh_scores(require_user(user_id))
        if user.profile_strength_score < referral.min_profile_score:
            raise BelowMinimumScore(
                f"Minimum profile score of {referral.min_profile_score} required. "
                f"Your score: {user.profile_strength_score}",
                current=user.profile_strength_score,
                required=referral.min_profile_score,
            )
        if referral.find_applicant(user.id) is not None:
            raise DuplicateApplication("Already applied")
        if referral.applied_count() >= referral.max_applicants:
            raise CapacityExceeded("Maximum applicants reached", max_applicants=referral.max_applicants)

        match_score = referral_match_score(user, referral)
        applicants = referral.applicants + [
            Applicant(
                user=user.id,
                match_score=match_score,
                status="applied",
                applied_at=datetime.now(timezone.utc),
            )
        ]
        referral = referral.model_copy(update={"applicants": rank_applicants(applicants)})
        save_referral(referral)

    rank = next(applicant.rank for applicant in referral.applicants if applicant.user == user.id)
    logger.info("referral_applied id=%s user=%s match=%d rank=%d", referral.id, user.id, match_score, rank)
    return ApplicationResult(message="Application submitted", match_score=match_score, rank=rank)
