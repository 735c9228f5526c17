from __future__ import annotations

from typing import Any


class EngineError(RuntimeError):
    """Validation outcome surfaced to the caller; never raised by scoring functions."""

    code = "engine_error"
    status_code = 400

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.context = context

    def to_detail(self) -> dict[str, Any]:
        return {"code": self.code, "message": str(self), **self.context}


class NotFound(EngineError):
    code = "not_found"
    status_code = 404


class Forbidden(EngineError):
    code = "forbidden"
    status_code = 403


class Conflict(EngineError):
    code = "conflict"
    status_code = 409


class DocumentUnreadable(EngineError):
    code = "document_unreadable"


class UnsupportedDocument(EngineError):
    code = "unsupported_document"


class DuplicateApplication(EngineError):
    code = "duplicate_application"


class DuplicateBooking(EngineError):
    code = "duplicate_booking"


class DuplicateRating(EngineError):
    code = "duplicate_rating"


class CapacityExceeded(EngineError):
    code = "capacity_exceeded"


class ReferralClosed(EngineError):
    code = "referral_closed"


class SessionUnavailable(EngineError):
    code = "session_unavailable"


class NotAParticipant(EngineError):
    code = "not_a_participant"


class DeficitError(EngineError):
    """Precondition failure that reports how far the caller is from the requirement."""

    def __init__(self, message: str, *, current: int, required: int):
        super().__init__(message, current=current, required=required)
        self.current = current
        self.required = required


class InsufficientCredits(DeficitError):
    code = "insufficient_credits"


class BelowMinimumScore(DeficitError):
    code = "below_minimum_score"
