"""Static skill catalog.

The catalog ships as ``catalog.json`` next to this module. It is parsed and
cross-checked once per process; any malformed entry is a programmer error
and raises :class:`CatalogError`.

Only the under-saddle skills (3 years) and jumping (4) declare a minimum age;
every other skill carries no injury risk from age.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from importlib import resources
from types import MappingProxyType

from pydantic import TypeAdapter, ValidationError

from paddock.model.skill import SkillCategory, SkillDefinition

logger = logging.getLogger(__name__)

CATALOG_RESOURCE = "catalog.json"

_ADAPTER = TypeAdapter(list[SkillDefinition])


class CatalogError(Exception):
    """Raised when skill catalog data is malformed."""

    pass


def build_catalog(skills: Iterable[SkillDefinition]) -> Mapping[str, SkillDefinition]:
    """Index skills by id and check prerequisite references.

    Args:
        skills: Parsed skill definitions.

    Returns:
        Read-only mapping preserving declaration order.

    Raises:
        CatalogError: On a duplicate id or a prerequisite naming an unknown skill.
    """
    catalog: dict[str, SkillDefinition] = {}
    for skill in skills:
        if skill.id in catalog:
            raise CatalogError(f"Duplicate skill id '{skill.id}'")
        catalog[skill.id] = skill

    for skill in catalog.values():
        dangling = [ref for ref in skill.referenced_skills() if ref not in catalog]
        if dangling:
            raise CatalogError(
                f"Skill '{skill.id}' requires unknown skills: {', '.join(dangling)}"
            )

    return MappingProxyType(catalog)


def parse_catalog(text: str) -> Mapping[str, SkillDefinition]:
    """Parse catalog JSON text.

    Raises:
        CatalogError: If the JSON or any definition is invalid.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in skill catalog: {e}") from e

    try:
        skills = _ADAPTER.validate_python(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid skill definition: {e}") from e

    return build_catalog(skills)


@lru_cache
def load_catalog() -> Mapping[str, SkillDefinition]:
    """Load the packaged catalog (cached)."""
    text = resources.files("paddock.skills").joinpath(CATALOG_RESOURCE).read_text(
        encoding="utf-8"
    )
    catalog = parse_catalog(text)
    logger.debug("Loaded %d skills from %s", len(catalog), CATALOG_RESOURCE)
    return catalog


def get_skill(skill_id: str) -> SkillDefinition | None:
    return load_catalog().get(skill_id)


def get_all_skill_ids() -> list[str]:
    return list(load_catalog())


def get_skills_by_category(category: SkillCategory | str) -> list[SkillDefinition]:
    wanted = SkillCategory(category)
    return [skill for skill in load_catalog().values() if skill.category is wanted]


def get_foundation_skills() -> list[SkillDefinition]:
    """Skills with no prerequisites, trainable from day one."""
    return [skill for skill in load_catalog().values() if not skill.prerequisites]
