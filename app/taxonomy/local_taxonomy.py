from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .provider import TaxonomyProvider


class LocalTaxonomy(TaxonomyProvider):
    def __init__(self, skills_path: str | Path | None = None, roles_path: str | Path | None = None) -> None:
        skills_file = Path(skills_path) if skills_path else Path(__file__).with_name("skills.json")
        roles_file = Path(roles_path) if roles_path else Path(__file__).with_name("roles.json")
        self._skills = self._load_skills(skills_file)
        self._roles = self._load_roles(roles_file)

    @staticmethod
    def _load_skills(path: Path) -> tuple[str, ...]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, list):
            raise RuntimeError(f"Skill lexicon '{path}' must be a JSON list.")
        return tuple(str(item).strip().lower() for item in raw if str(item).strip())

    @staticmethod
    def _load_roles(path: Path) -> dict[str, dict[str, tuple[str, ...]]]:
        with path.open("r", encoding="utf-8") as handle:
            raw: Any = json.load(handle)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Role catalog '{path}' must be a JSON object.")
        roles: dict[str, dict[str, tuple[str, ...]]] = {}
        for name, entry in raw.items():
            skills = tuple(str(item).strip().lower() for item in entry.get("skills", []))
            keywords = tuple(str(item).strip().lower() for item in entry.get("ats_keywords", []))
            roles[str(name).strip().lower()] = {"skills": skills, "ats_keywords": keywords}
        return roles

    def known_skills(self) -> tuple[str, ...]:
        return self._skills

    def role_names(self) -> tuple[str, ...]:
        return tuple(self._roles.keys())

    def role_skills(self, role: str) -> tuple[str, ...] | None:
        entry = self._roles.get((role or "").strip().lower())
        if entry is None:
            return None
        return entry["skills"]

    def ats_keywords(self, role: str) -> tuple[str, ...] | None:
        entry = self._roles.get((role or "").strip().lower())
        if entry is None or not entry["ats_keywords"]:
            return None
        return entry["ats_keywords"]
