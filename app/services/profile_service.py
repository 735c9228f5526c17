from __future__ import annotations

import logging

from app.core.config import settings
from app.features.resume_sections import extract_resume, merge_extraction, union_skills
from app.features.skill_matcher import display_case
from app.parsing.parse import UnsupportedDocumentError, parse_upload
from app.schemas.ai_profile import (
    AIProfileScores,
    AIProfileUpdate,
    AIProfileUpdateResponse,
    AIProfileView,
    CVUploadResponse,
    ExtractedProfile,
    GeneratedResume,
    GeneratedResumeResponse,
    ResumeEducation,
    ResumeHeader,
    RoleReadinessResponse,
)
from app.schemas.profile import UserProfile
from app.scoring import ATSScore, ats_score, profile_strength, readiness_for_profile, record_scores, role_readiness, skill_growth
from app.store import documents
from app.store.repositories import get_user, save_user
from app.taxonomy import get_default_taxonomy_provider

from .errors import DocumentUnreadable, NotFound, UnsupportedDocument

logger = logging.getLogger(__name__)

DEFAULT_TARGET_ROLE = "Full Stack Developer"


def require_user(user_id: str) -> UserProfile:
    user = get_user(user_id)
    if user is None:
        raise NotFound("User not found", user_id=user_id)
    return user


def refresh_scores(user: UserProfile) -> UserProfile:
    """Recompute the cached profile-derived scores; readiness is 0 without a target role."""
    return user.model_copy(
        update={
            "profile_strength_score": profile_strength(user),
            "role_readiness_score": readiness_for_profile(user),
        }
    )


def _view(user: UserProfile) -> AIProfileView:
    return AIProfileView(
        name=user.name,
        email=user.email,
        bio=user.bio,
        course=user.course,
        batch=user.batch,
        linkedin=user.linkedin,
        location=user.location,
        profile_pic=user.profile_pic,
        cv_filename=user.cv_filename,
        skills=user.skills,
        projects=user.projects,
        internships=user.internships,
        certifications=user.certifications,
        target_role=user.target_role,
        profile_strength_score=user.profile_strength_score,
        role_readiness_score=user.role_readiness_score,
        resume_score=user.resume_score,
        skill_growth_score=user.skill_growth_score or 0,
        score_history=user.score_history,
        badges=user.badges,
        credits=user.credits,
    )


def get_ai_profile(user_id: str) -> AIProfileView:
    with documents.transaction():
        user = refresh_scores(require_user(user_id))
        save_user(user)
    return _view(user)


def get_profile_score(user_id: str) -> int:
    with documents.transaction():
        user = refresh_scores(require_user(user_id))
        save_user(user)
    return user.profile_strength_score


def list_target_roles() -> list[str]:
    return [display_case(role) for role in get_default_taxonomy_provider().role_names()]


def upload_cv(user_id: str, filename: str, content: bytes) -> CVUploadResponse:
    require_user(user_id)
    try:
        parsed = parse_upload(filename, content)
    except UnsupportedDocumentError as exc:
        raise UnsupportedDocument(str(exc)) from exc

    if parsed.text_length < settings.min_resume_text_chars:
        logger.info("cv_unreadable user=%s chars=%d warnings=%s", user_id, parsed.text_length, parsed.parsing_warnings)
        raise DocumentUnreadable(
            "Could not extract text from the document. Please ensure the PDF is not image-only.",
            warnings=parsed.parsing_warnings,
        )

    extraction = extract_resume(parsed.text)
    with documents.transaction():
        user = merge_extraction(require_user(user_id), extraction)
        user = refresh_scores(user.model_copy(update={"cv_filename": filename}))
        save_user(user)

    logger.info(
        "cv_uploaded user=%s source=%s skills=%d projects=%d internships=%d certifications=%d",
        user_id,
        parsed.source_type,
        len(extraction.skills),
        len(extraction.projects),
        len(extraction.internships),
        len(extraction.certifications),
    )
    return CVUploadResponse(
        message="CV processed successfully",
        extracted_skills=len(extraction.skills),
        extracted_projects=len(extraction.projects),
        extracted_internships=len(extraction.internships),
        extracted_certifications=len(extraction.certifications),
        parsing_warnings=parsed.parsing_warnings,
        profile=ExtractedProfile(
            skills=user.skills,
            projects=user.projects,
            internships=user.internships,
            certifications=user.certifications,
            profile_strength_score=user.profile_strength_score,
            role_readiness_score=user.role_readiness_score,
            cv_filename=user.cv_filename,
        ),
    )


def check_role_readiness(user_id: str, target_role: str) -> RoleReadinessResponse:
    role = target_role.strip()
    with documents.transaction():
        user = require_user(user_id).model_copy(update={"target_role": role})
        readiness = role_readiness(user, role)
        user = refresh_scores(user)
        save_user(user)
    return RoleReadinessResponse(
        target_role=role,
        readiness_score=readiness.score,
        matched_skills=readiness.matched_skills,
        missing_skills=readiness.missing_skills,
        recognized_role=readiness.recognized,
    )


def _resolve_role(user: UserProfile, target_role: str | None) -> str:
    return (target_role or "").strip() or user.target_role or DEFAULT_TARGET_ROLE


def generate_resume(user_id: str, target_role: str | None = None) -> GeneratedResumeResponse:
    user = require_user(user_id)
    role = _resolve_role(user, target_role)
    readiness = role_readiness(user, role)
    top_skills = ", ".join(user.skills[:4])
    summary = (
        f"Motivated {user.course or 'Computer Science'} student with hands-on experience in {top_skills}. "
        f"Seeking a {role} role to leverage technical expertise and project experience."
    )
    resume = GeneratedResume(
        header=ResumeHeader(
            name=user.name,
            email=user.email,
            location=user.location,
            linkedin=user.linkedin,
            target_role=role,
        ),
        summary=summary,
        skills=user.skills,
        projects=user.projects,
        internships=user.internships,
        certifications=user.certifications,
        education=ResumeEducation(course=user.course, batch=user.batch),
    )
    return GeneratedResumeResponse(resume=resume, readiness_score=readiness.score)


def compute_ats_score(user_id: str, target_role: str | None = None) -> ATSScore:
    with documents.transaction():
        user = require_user(user_id)
        result = ats_score(user, _resolve_role(user, target_role))
        save_user(user.model_copy(update={"resume_score": result.ats_score}))
    logger.info("ats_scored user=%s role=%r score=%d", user_id, result.role, result.ats_score)
    return result


def update_ai_profile(user_id: str, payload: AIProfileUpdate) -> AIProfileUpdateResponse:
    changes: dict[str, object] = {}
    if payload.projects is not None:
        changes["projects"] = payload.projects
    if payload.internships is not None:
        changes["internships"] = payload.internships
    if payload.certifications is not None:
        changes["certifications"] = payload.certifications
    if payload.target_role is not None:
        changes["target_role"] = payload.target_role.strip()
    if payload.skills is not None:
        changes["skills"] = union_skills([], [skill.strip() for skill in payload.skills if skill and skill.strip()])

    with documents.transaction():
        user = refresh_scores(require_user(user_id).model_copy(update=changes))
        history = record_scores(
            user.score_history,
            profile_strength=user.profile_strength_score,
            role_readiness=user.role_readiness_score,
            resume_score=user.resume_score,
        )
        user = user.model_copy(
            update={
                "score_history": history,
                "skill_growth_score": skill_growth(history, user.skill_growth_score),
            }
        )
        save_user(user)

    logger.info(
        "ai_profile_updated user=%s fields=%s strength=%d readiness=%d history=%d",
        user_id,
        sorted(changes),
        user.profile_strength_score,
        user.role_readiness_score,
        len(user.score_history),
    )
    return AIProfileUpdateResponse(
        message="Profile updated successfully",
        user=AIProfileScores(
            skills=user.skills,
            projects=user.projects,
            internships=user.internships,
            certifications=user.certifications,
            target_role=user.target_role,
            profile_strength_score=user.profile_strength_score,
            role_readiness_score=user.role_readiness_score,
            resume_score=user.resume_score,
            skill_growth_score=user.skill_growth_score,
        ),
    )
