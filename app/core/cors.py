from __future__ import annotations

import logging
from typing import Any

from app.core.config import settings

logger = logging.getLogger(__name__)


def cors_options() -> dict[str, Any]:
    """Keyword arguments for CORSMiddleware built from settings."""
    origins = list(settings.cors_allowed_origins)
    allow_credentials = settings.cors_allow_credentials
    if "*" in origins and allow_credentials:
        # Browsers reject a wildcard origin on credentialed requests.
        logger.warning("cors_wildcard_with_credentials origins=%s credentials_disabled=true", origins)
        allow_credentials = False

    regex = (settings.cors_allow_origin_regex or "").strip()
    return {
        "allow_origins": origins,
        "allow_origin_regex": regex or None,
        "allow_credentials": allow_credentials,
        "allow_methods": ["GET", "POST", "PUT", "PATCH", "OPTIONS"],
        "allow_headers": ["Content-Type", "X-User-Id", "X-API-Key"],
    }
