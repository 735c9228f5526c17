from .ats import ATSScore, ats_score, format_score
from .badges import BadgeDefinition, BadgeStatus, badge_catalog, badge_catalog_status, badge_summary, evaluate_badges
from .history import record_scores, skill_growth
from .matching import ReferralMatch, composite_score, referral_match, referral_match_score, session_relevance
from .profile_strength import profile_strength
from .role_readiness import RoleReadiness, readiness_for_profile, role_readiness
from .rounding import clamp_score, round_half_up

__all__ = [
    "ATSScore",
    "ats_score",
    "format_score",
    "BadgeDefinition",
    "BadgeStatus",
    "badge_catalog",
    "badge_catalog_status",
    "badge_summary",
    "evaluate_badges",
    "record_scores",
    "skill_growth",
    "ReferralMatch",
    "composite_score",
    "referral_match",
    "referral_match_score",
    "session_relevance",
    "profile_strength",
    "RoleReadiness",
    "readiness_for_profile",
    "role_readiness",
    "clamp_score",
    "round_half_up",
]
