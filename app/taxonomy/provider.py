from __future__ import annotations

from typing import Protocol


class TaxonomyProvider(Protocol):
    def known_skills(self) -> tuple[str, ...]:
        """Return the skill lexicon in catalog order, lowercased."""

    def role_names(self) -> tuple[str, ...]:
        """Return every catalog role key, lowercased."""

    def role_skills(self, role: str) -> tuple[str, ...] | None:
        """Return required skills for an exact (case-insensitive) role, or None."""

    def ats_keywords(self, role: str) -> tuple[str, ...] | None:
        """Return ATS keywords for an exact (case-insensitive) role, or None."""
