from .resume_sections import (
    ResumeExtraction,
    classify_heading,
    extract_resume,
    merge_extraction,
    split_items,
    split_sections,
    union_skills,
)
from .skill_matcher import (
    display_case,
    extract_skills,
    fallback_skills,
    match_skills,
    skills_overlap,
    split_by_overlap,
)

__all__ = [
    "ResumeExtraction",
    "classify_heading",
    "extract_resume",
    "merge_extraction",
    "split_items",
    "split_sections",
    "union_skills",
    "display_case",
    "extract_skills",
    "fallback_skills",
    "match_skills",
    "skills_overlap",
    "split_by_overlap",
]
