"""Skill definition schema for the static skill catalog.

Catalog entries are parsed from JSON with camelCase keys and are immutable
once loaded.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from paddock.model.genetics import StatName


class SkillCategory(StrEnum):
    FOUNDATION = "foundation"
    GROUND = "ground"
    BASIC_RIDING = "basicRiding"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    DISCIPLINE = "discipline"
    CARE = "care"
    DRIVING = "driving"


class CatalogModel(BaseModel):
    """Base for catalog records: camelCase on the wire, frozen, strict keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class SkillPrerequisite(CatalogModel):
    """One required skill at a minimum level (0-100)."""

    skill: str
    min_level: float = Field(ge=0, le=100)


class AnyOfPrerequisite(CatalogModel):
    """Satisfied when at least one option is met."""

    any_of: tuple[SkillPrerequisite, ...] = Field(min_length=1)


Prerequisite = SkillPrerequisite | AnyOfPrerequisite


class StatRequirement(CatalogModel):
    """Minimum stat training, in percent of potential unlocked."""

    stat: StatName
    min_level: float = Field(ge=0, le=100)


class StatInfluence(CatalogModel):
    stat: StatName
    weight: float = Field(ge=0, le=1)


class StatContribution(CatalogModel):
    """Training-level gain per point of skill gained."""

    stat: StatName
    amount: float = Field(ge=0)


class SkillDefinition(CatalogModel):
    """A trainable skill.

    Attributes:
        id: Catalog key.
        name: Display name used in validation messages.
        category: Grouping; care skills ignore the fatigue gate.
        description: Player-facing text.
        base_training_value: Difficulty 1-10, higher is harder.
        minimum_age: Years below which training risks injury.
        prerequisites: Plain entries are AND-ed; any-of groups are OR-ed inside.
        minimum_stats: Stat requirements feeding the deficiency penalty.
        stat_influences: Informational weights.
        stat_contributions: Stats raised when the skill improves.
        is_physical: Drives fatigue, exercise and mood effects.
    """

    id: str = Field(min_length=1)
    name: str
    category: SkillCategory
    description: str = ""
    base_training_value: int = Field(ge=1, le=10)
    minimum_age: float | None = Field(default=None, ge=0)
    prerequisites: tuple[Prerequisite, ...] = ()
    minimum_stats: tuple[StatRequirement, ...] = ()
    stat_influences: tuple[StatInfluence, ...] = ()
    stat_contributions: tuple[StatContribution, ...] = ()
    is_physical: bool = False

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("skill name cannot be empty")
        return v

    @property
    def is_care(self) -> bool:
        return self.category is SkillCategory.CARE

    def referenced_skills(self) -> list[str]:
        """Every skill id named by a prerequisite, in declaration order."""
        refs: list[str] = []
        for prereq in self.prerequisites:
            if isinstance(prereq, AnyOfPrerequisite):
                refs.extend(option.skill for option in prereq.any_of)
            else:
                refs.append(prereq.skill)
        return refs
