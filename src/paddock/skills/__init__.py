"""Skill catalog and the prerequisite validator built on it."""

from paddock.skills.catalog import (
    CatalogError,
    get_all_skill_ids,
    get_foundation_skills,
    get_skill,
    get_skills_by_category,
    load_catalog,
)
from paddock.skills.validation import (
    calculate_skill_progress,
    get_next_skills,
    get_skill_mastery_level,
    get_trainable_skills,
    validate_skill_training,
)

__all__ = [
    "CatalogError",
    "calculate_skill_progress",
    "get_all_skill_ids",
    "get_foundation_skills",
    "get_next_skills",
    "get_skill",
    "get_skill_mastery_level",
    "get_skills_by_category",
    "get_trainable_skills",
    "load_catalog",
    "validate_skill_training",
]
