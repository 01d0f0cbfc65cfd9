"""Horse aggregate: identity, genomes, training, skills and wellbeing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from types import MappingProxyType

from paddock.model.conformation import ConformationGenetics
from paddock.model.genetics import ALL_STATS, StatGeneMap, StatName
from paddock.model.mental import Bond, HousingType, MentalState, Satisfaction
from paddock.model.visual import VisualGenetics

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30


class Gender(StrEnum):
    STALLION = "stallion"
    MARE = "mare"
    GELDING = "gelding"


@dataclass(frozen=True)
class ParentInfo:
    """Lineage reference to a parent horse."""

    id: str
    name: str


def initialize_training_levels() -> dict[StatName, float]:
    return {stat: 0.0 for stat in ALL_STATS}


def _freeze(values: Mapping[str, float] | None) -> Mapping[str, float]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class Horse:
    """A single horse.

    Genomes are fixed at birth. Everything else changes by building a new
    Horse with :func:`dataclasses.replace`; the engine never mutates one in
    place.

    Attributes:
        age: Whole years.
        training: Per-stat fraction of potential unlocked (0-1).
        skills: Sparse skill levels (0-100); absent means 0.
        generation: 0 for foundation horses, max(parents) + 1 otherwise.
    """

    # Identity
    id: str
    name: str
    age: int
    gender: Gender

    # Genetics and temperament
    genes: StatGeneMap
    mental_state: MentalState
    visual_genetics: VisualGenetics | None = None
    conformation: ConformationGenetics | None = None

    # Progress
    training: Mapping[StatName, float] = field(default_factory=initialize_training_levels)
    skills: Mapping[str, float] = field(default_factory=dict)

    # Wellbeing
    housing: HousingType = HousingType.PASTURE
    satisfaction: Satisfaction = Satisfaction()
    bonds: tuple[Bond, ...] = ()

    # Lineage
    sire: ParentInfo | None = None
    dam: ParentInfo | None = None
    generation: int = 0
    birth_date: datetime | None = None
    owner_id: str | None = None

    def __post_init__(self) -> None:
        if self.age < 0:
            raise ValueError(f"Age {self.age!r} must not be negative")
        if self.generation < 0:
            raise ValueError(f"Generation {self.generation!r} must not be negative")

        training = {StatName(stat): float(level) for stat, level in self.training.items()}
        for stat in ALL_STATS:
            training.setdefault(stat, 0.0)
        for stat, level in training.items():
            if not 0 <= level <= 1:
                raise ValueError(f"Training level for {stat} outside [0, 1]: {level!r}")
        for skill_id, level in self.skills.items():
            if not 0 <= level <= 100:
                raise ValueError(f"Skill level for {skill_id} outside [0, 100]: {level!r}")

        object.__setattr__(self, "training", MappingProxyType(training))
        object.__setattr__(self, "skills", _freeze(self.skills))
        object.__setattr__(self, "bonds", tuple(self.bonds))

    def skill_level(self, skill_id: str) -> float:
        return self.skills.get(skill_id, 0.0)

    def training_level(self, stat: StatName | str) -> float:
        return self.training.get(StatName(stat), 0.0)

    def bond_level(self, person_id: str) -> float:
        for bond in self.bonds:
            if bond.person_id == person_id:
                return bond.level
        return 0.0


@dataclass(frozen=True)
class AgeBreakdown:
    years: int
    months: int
    days: int
    total_days: int


def get_age_breakdown(total_days: int) -> AgeBreakdown:
    """Split an age in days into years, 30-day months and days."""
    years = total_days // DAYS_PER_YEAR
    remainder = total_days % DAYS_PER_YEAR
    return AgeBreakdown(
        years=years,
        months=remainder // DAYS_PER_MONTH,
        days=remainder % DAYS_PER_MONTH,
        total_days=total_days,
    )


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit if count == 1 else unit + 's'}"


def format_detailed_age(total_days: int) -> str:
    """E.g. ``"1 year, 2 months, 3 days"``; ``"newborn"`` at day zero."""
    if total_days == 0:
        return "newborn"
    age = get_age_breakdown(total_days)
    parts = [
        _plural(count, unit)
        for count, unit in ((age.years, "year"), (age.months, "month"), (age.days, "day"))
        if count > 0
    ]
    return ", ".join(parts)
