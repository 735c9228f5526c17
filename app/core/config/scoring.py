from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

SCORING_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "scoring.yaml"
REQUIRED_SECTIONS = (
    "profile_strength",
    "role_readiness",
    "ats",
    "referral_match",
    "session_relevance",
    "composite",
    "history",
    "badges",
)

_scoring_config: dict[str, Any] | None = None


def load_scoring_config(path: Path | str = SCORING_CONFIG_PATH) -> dict[str, Any]:
    """Read and validate a scoring config file without touching the cache."""
    config_path = Path(path)
    if not config_path.exists():
        raise RuntimeError(f"Scoring config not found at '{config_path}'.")

    try:
        parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{config_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{config_path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring config '{config_path}': expected a top-level mapping.")

    missing = [section for section in REQUIRED_SECTIONS if section not in parsed]
    if missing:
        raise RuntimeError(f"Scoring config '{config_path}' is missing sections: {', '.join(missing)}")
    if not isinstance(parsed["badges"], list):
        raise RuntimeError(f"Scoring config '{config_path}': 'badges' must be a list.")
    return parsed


def get_scoring_config() -> dict[str, Any]:
    global _scoring_config
    if _scoring_config is None:
        _scoring_config = load_scoring_config()
        logger.info("scoring_config_loaded path=%s badges=%d", SCORING_CONFIG_PATH, len(_scoring_config["badges"]))
    return _scoring_config


def reset_scoring_config() -> None:
    global _scoring_config
    _scoring_config = None


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Nested lookup by dot path, e.g. 'ats.blend.format'; `default` when any key is absent."""
    if not path:
        return default

    current: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current
