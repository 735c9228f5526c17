from __future__ import annotations

import logging
import re
from typing import Iterable, Literal

from pydantic import BaseModel, Field

from app.core.config.scoring import get_scoring_value
from app.schemas.profile import Certification, Internship, Project, UserProfile
from app.taxonomy import TaxonomyProvider

from .skill_matcher import extract_skills, match_skills

logger = logging.getLogger(__name__)

SectionKey = Literal["projects", "internships", "certifications", "other"]

# Heading keyword -> section. Keywords match at a word start, so "project"
# also covers "Projects" and "Academic Projects". "other" sections only end
# the block that precedes them.
SECTION_RULES: tuple[tuple[SectionKey, tuple[str, ...]], ...] = (
    ("projects", ("project",)),
    ("internships", ("experience", "internship", "work history", "employment")),
    ("certifications", ("certification", "certificate", "certified", "licenses")),
    (
        "other",
        (
            "education",
            "skill",
            "achievement",
            "award",
            "reference",
            "hobby",
            "hobbies",
            "language",
            "summary",
            "objective",
            "interests",
            "publication",
            "contact",
        ),
    ),
)

_ITEM_MARKER_RE = re.compile(r"^\s*(?:[-•●▪▸*]|\d+[.)])\s*")
_HEADING_SPLIT_RE = re.compile(r"\s*(?::|[–—|]|\s-\s|-\s*$)\s*")
_HEADING_BLOCKERS_RE = re.compile(r"\d|@|\bat\b", re.IGNORECASE)
_MAX_HEADING_WORDS = 4

_TITLE_RE = re.compile(r"(.*?)(?:\.(?=\s|$)|(?=\n)|$)")
_URL_RE = re.compile(r"https?://\S+|(?:www\.)?github\.com/\S+", re.IGNORECASE)
_COMPANY_RE = re.compile(r"(?:\b[Aa]t\b|@)\s+([A-Z][\w&.'-]*(?:[ \t]+[A-Z&][\w&.'-]*)*)")
_ROLE_RE = re.compile(r"^([^\n|–—]+?)(?:\s+-\s+|\s*[–—|]\s*|\s+at\s+|\s*\n)")
_DURATION_RE = re.compile(
    r"(\d+\s*(?:month|year|week)s?\b"
    r"|\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s*\d{2,4}\s*(?:-|–|—|to)\s*"
    r"(?:present|current|now|[a-z]+\.?\s*\d{2,4}))",
    re.IGNORECASE,
)
_CERT_NAME_SPLIT_RE = re.compile(r"\s+-\s+|\s*[–—|]\s*")
_ISSUER_RE = re.compile(
    r"(?:(?i:\bissued by\b)|(?i:\bby\b)|(?i:\bfrom\b)|–|—|\||\s-\s)\s*([A-Z][A-Za-z&.]*(?:[ \t]+[A-Z&][A-Za-z&.]*)*)"
)
_YEAR_RE = re.compile(r"\b(20\d{2})\b")


class ResumeExtraction(BaseModel):
    skills: list[str] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    internships: list[Internship] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    raw_text_length: int = 0


def _limit(name: str, default: int) -> int:
    return int(get_scoring_value(f"extraction.limits.{name}", default))


def _collapse(text: str) -> str:
    return " ".join((text or "").split())


def _first_link(text: str) -> str:
    match = _URL_RE.search(text)
    return match.group(0).rstrip(").,;") if match else ""


def classify_heading(line: str, *, current: SectionKey | None = None) -> tuple[SectionKey, str] | None:
    """Return ``(section, inline_text)`` when ``line`` is a section heading."""
    stripped = (line or "").strip()
    if not stripped or _ITEM_MARKER_RE.match(line):
        return None

    split = _HEADING_SPLIT_RE.search(stripped)
    head = stripped[: split.start()] if split else stripped
    rest = stripped[split.end():] if split else ""
    words = head.split()
    if not words or len(words) > _MAX_HEADING_WORDS:
        return None
    if _HEADING_BLOCKERS_RE.search(head):
        return None

    lowered = head.lower()
    for section, keywords in SECTION_RULES:
        if any(re.search(rf"\b{re.escape(keyword)}", lowered) for keyword in keywords):
            # Inside an open section its own keyword names an item ("E-commerce Project - ...").
            if section == current:
                return None
            return section, rest.strip()
    return None


def split_sections(text: str) -> dict[SectionKey, list[str]]:
    """Walk lines and capture the first block of each recognized section."""
    blocks: dict[SectionKey, list[str]] = {}
    current: SectionKey | None = None
    for line in (text or "").splitlines():
        heading = classify_heading(line, current=current)
        if heading is not None:
            section, inline = heading
            if section == "other":
                current = None
                continue
            if section in blocks:
                if current is not None and inline:
                    # Item text that happens to name an already captured section.
                    blocks[current].append(line.rstrip())
                else:
                    logger.debug("resume_section_repeated section=%s open=%s", section, current)
                    current = None
                continue
            current = section
            blocks[section] = [inline] if inline else []
            continue
        if current is not None:
            blocks[current].append(line.rstrip())
    return blocks


def split_items(lines: Iterable[str]) -> list[str]:
    items: list[list[str]] = []
    for raw in lines:
        if not raw.strip():
            continue
        marker = _ITEM_MARKER_RE.match(raw)
        if marker:
            items.append([raw[marker.end():].strip()])
            continue
        if raw[:1].isupper() or not items:
            items.append([raw.strip()])
            continue
        items[-1].append(raw.strip())
    output: list[str] = []
    for parts in items:
        joined = "\n".join(part for part in parts if part).strip()
        if joined:
            output.append(joined)
    return output


def parse_project(item: str, taxonomy: TaxonomyProvider | None = None) -> Project | None:
    cleaned = item.strip()
    if not 5 < len(cleaned) < 200:
        return None
    title_match = _TITLE_RE.match(cleaned)
    title = _ITEM_MARKER_RE.sub("", title_match.group(1) if title_match else "").strip()
    if not 3 < len(title) < 100:
        return None

    remainder = cleaned[title_match.end():] if title_match else ""
    description = _collapse(remainder).lstrip(".-–—: ").strip()
    technologies = match_skills(cleaned, taxonomy)[: _limit("project_technologies", 5)]
    if not description:
        named = ", ".join(technologies[:3]) or "various technologies"
        description = f"Project involving {named}"
    return Project(title=title, description=description, technologies=technologies, link=_first_link(cleaned))


def parse_internship(item: str) -> Internship | None:
    cleaned = item.strip()
    if len(cleaned) <= 10:
        return None
    company_match = _COMPANY_RE.search(cleaned)
    role_match = _ROLE_RE.match(cleaned)
    duration_match = _DURATION_RE.search(cleaned)
    return Internship(
        company=company_match.group(1).strip() if company_match else "Company",
        role=role_match.group(1).strip()[:60] if role_match else cleaned[:50],
        duration=_collapse(duration_match.group(1)) if duration_match else "",
        description=_collapse(cleaned)[:200],
    )


def parse_certification(item: str) -> Certification | None:
    cleaned = item.strip()
    if not 5 < len(cleaned) < 150:
        return None
    first_line = cleaned.splitlines()[0]
    name = _CERT_NAME_SPLIT_RE.split(first_line, maxsplit=1)[0].strip()[:80]
    if not name:
        return None
    issuer_match = _ISSUER_RE.search(first_line)
    year_match = _YEAR_RE.search(cleaned)
    return Certification(
        name=name,
        issuer=issuer_match.group(1).strip() if issuer_match else "",
        date=year_match.group(1) if year_match else "",
        link=_first_link(cleaned),
    )


def extract_resume(text: str, taxonomy: TaxonomyProvider | None = None) -> ResumeExtraction:
    blocks = split_sections(text)

    projects: list[Project] = []
    for item in split_items(blocks.get("projects", [])):
        project = parse_project(item, taxonomy)
        if project is not None:
            projects.append(project)

    internships: list[Internship] = []
    for item in split_items(blocks.get("internships", [])):
        internship = parse_internship(item)
        if internship is not None:
            internships.append(internship)

    certifications: list[Certification] = []
    for item in split_items(blocks.get("certifications", [])):
        certification = parse_certification(item)
        if certification is not None:
            certifications.append(certification)

    return ResumeExtraction(
        skills=extract_skills(text, taxonomy),
        projects=projects[: _limit("projects", 5)],
        internships=internships[: _limit("internships", 4)],
        certifications=certifications[: _limit("certifications", 5)],
        raw_text_length=len(text or ""),
    )


def union_skills(existing: list[str], incoming: list[str]) -> list[str]:
    merged = list(existing)
    seen = {skill.lower() for skill in existing}
    for skill in incoming:
        key = skill.lower()
        if key in seen:
            continue
        seen.add(key)
        merged.append(skill)
    return merged


def merge_extraction(profile: UserProfile, extraction: ResumeExtraction) -> UserProfile:
    """Skills are unioned; list sections are replaced only by a non-empty extraction."""
    update: dict[str, object] = {"skills": union_skills(profile.skills, extraction.skills)}
    if extraction.projects:
        update["projects"] = list(extraction.projects)
    if extraction.internships:
        update["internships"] = list(extraction.internships)
    if extraction.certifications:
        update["certifications"] = list(extraction.certifications)
    return profile.model_copy(update=update)
