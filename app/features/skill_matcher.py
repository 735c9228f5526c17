from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Sequence

from app.core.config.scoring import get_scoring_value
from app.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

_DEFAULT_FALLBACK_SKILLS = ("JavaScript", "HTML", "CSS")


@lru_cache(maxsize=8)
def _compile_lexicon(lexicon: tuple[str, ...]) -> tuple[tuple[str, re.Pattern[str]], ...]:
    compiled: list[tuple[str, re.Pattern[str]]] = []
    seen: set[str] = set()
    for token in lexicon:
        key = token.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        # Alphanumeric boundaries so "c++", ".net" and "ci/cd" match as whole tokens.
        pattern = re.compile(rf"(?<![a-z0-9]){re.escape(key)}(?![a-z0-9])")
        compiled.append((key, pattern))
    return tuple(compiled)


def display_case(token: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in token.split(" "))


def match_skills(text: str, taxonomy: TaxonomyProvider | None = None) -> list[str]:
    """Return lexicon skills present in ``text``, in catalog order and display case."""
    provider = taxonomy or get_default_taxonomy_provider()
    lowered = (text or "").lower()
    if not lowered.strip():
        return []
    return [display_case(key) for key, pattern in _compile_lexicon(provider.known_skills()) if pattern.search(lowered)]


def fallback_skills() -> list[str]:
    configured = get_scoring_value("extraction.fallback_skills", list(_DEFAULT_FALLBACK_SKILLS))
    return [str(item) for item in configured]


def extract_skills(text: str, taxonomy: TaxonomyProvider | None = None) -> list[str]:
    found = match_skills(text, taxonomy)
    return found if found else fallback_skills()


def skills_overlap(left: str, right: str) -> bool:
    """Containment in either direction, case-insensitive; blanks never match."""
    a = (left or "").strip().lower()
    b = (right or "").strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def split_by_overlap(required: Sequence[str], user_skills: Iterable[str]) -> tuple[list[str], list[str]]:
    owned = [skill for skill in user_skills if skill and skill.strip()]
    matched: list[str] = []
    missing: list[str] = []
    for skill in required:
        if any(skills_overlap(owned_skill, skill) for owned_skill in owned):
            matched.append(skill)
        else:
            missing.append(skill)
    return matched, missing
