"""Boundary records between persistence/API payloads and engine value types.

Records mirror the stored document shape in camelCase and validate every
range when constructed, so the engine only ever sees well-formed horses.
Conversions in both directions are total:

    >>> record = HorseRecord.model_validate(payload)
    >>> horse = record.to_horse()
    >>> HorseRecord.from_horse(horse).model_dump(by_alias=True, mode="json")
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from paddock.engine.breeding import BreedingValidation
from paddock.engine.day import DayAdvanceResult
from paddock.model.conformation import GENE_LAYOUT, ConformationGenetics
from paddock.model.genetics import ALL_STATS, StatGeneMap, StatName
from paddock.model.horse import Gender, Horse, ParentInfo
from paddock.model.mental import (
    Bond,
    HousingType,
    MentalState,
    Mood,
    Personality,
    Satisfaction,
    SatisfactionLevel,
)
from paddock.model.session import TrainingResult
from paddock.model.visual import VisualGenetics

Allele = Annotated[float, Field(ge=0, le=100)]
TrainingFraction = Annotated[float, Field(ge=0, le=1)]
SkillLevel = Annotated[float, Field(ge=0, le=100)]

ExtensionAllele = Literal["E", "e"]
AgoutiAllele = Literal["A+", "A", "At", "a"]
GrayAllele = Literal["G", "g"]


class RecordModel(BaseModel):
    """camelCase on the wire; unknown storage fields are ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ParentRecord(RecordModel):
    id: str
    name: str


class MentalStateRecord(RecordModel):
    personality: Personality
    mood: Mood = Mood.CALM
    fatigue: float = Field(default=0.0, ge=0, le=100)
    previous_mood: Mood | None = None
    previous_skill: str | None = None

    def to_mental_state(self) -> MentalState:
        return MentalState(
            personality=self.personality,
            mood=self.mood,
            fatigue=self.fatigue,
            previous_mood=self.previous_mood,
            previous_skill=self.previous_skill,
        )

    @classmethod
    def from_mental_state(cls, state: MentalState) -> MentalStateRecord:
        return cls(
            personality=state.personality,
            mood=state.mood,
            fatigue=state.fatigue,
            previous_mood=state.previous_mood,
            previous_skill=state.previous_skill,
        )


class SatisfactionLevelRecord(RecordModel):
    current: float = Field(default=0.0, ge=0, le=100)
    required: float = Field(default=0.0, ge=0)


class SatisfactionRecord(RecordModel):
    exercise: SatisfactionLevelRecord = Field(default_factory=SatisfactionLevelRecord)
    stimulation: SatisfactionLevelRecord = Field(default_factory=SatisfactionLevelRecord)
    socialization: SatisfactionLevelRecord = Field(default_factory=SatisfactionLevelRecord)
    nutrition: SatisfactionLevelRecord = Field(
        default_factory=lambda: SatisfactionLevelRecord(current=100, required=80)
    )

    def to_satisfaction(self) -> Satisfaction:
        return Satisfaction(
            exercise=SatisfactionLevel(self.exercise.current, self.exercise.required),
            stimulation=SatisfactionLevel(self.stimulation.current, self.stimulation.required),
            socialization=SatisfactionLevel(
                self.socialization.current, self.socialization.required
            ),
            nutrition=SatisfactionLevel(self.nutrition.current, self.nutrition.required),
        )

    @classmethod
    def from_satisfaction(cls, satisfaction: Satisfaction) -> SatisfactionRecord:
        levels = {
            channel.value: SatisfactionLevelRecord(current=level.current, required=level.required)
            for channel, level in satisfaction.channels()
        }
        return cls(**levels)


class BondRecord(RecordModel):
    person_id: str
    level: float = Field(ge=0, le=100)
    last_interaction: datetime | None = None

    def to_bond(self) -> Bond:
        return Bond(self.person_id, self.level, self.last_interaction)


class VisualGeneticsRecord(RecordModel):
    extension: tuple[ExtensionAllele, ExtensionAllele]
    agouti: tuple[AgoutiAllele, AgoutiAllele]
    gray: tuple[GrayAllele, GrayAllele]

    def to_visual_genetics(self) -> VisualGenetics:
        return VisualGenetics(extension=self.extension, agouti=self.agouti, gray=self.gray)

    @classmethod
    def from_visual_genetics(cls, genetics: VisualGenetics) -> VisualGeneticsRecord:
        return cls.model_validate(
            {"extension": genetics.extension, "agouti": genetics.agouti, "gray": genetics.gray}
        )


class HorseRecord(RecordModel):
    """Stored shape of a horse.

    ``genes`` maps each stat to its two alleles and must cover all 14 stats.
    Missing training levels default to 0.
    """

    id: str
    name: str = Field(min_length=1)
    age: int = Field(ge=0)
    gender: Gender
    genes: dict[StatName, tuple[Allele, Allele]]
    training: dict[StatName, TrainingFraction] = Field(default_factory=dict)
    skills: dict[str, SkillLevel] = Field(default_factory=dict)
    mental_state: MentalStateRecord
    housing: HousingType = HousingType.PASTURE
    satisfaction: SatisfactionRecord = Field(default_factory=SatisfactionRecord)
    bonds: list[BondRecord] = Field(default_factory=list)
    visual_genetics: VisualGeneticsRecord | None = None
    conformation: dict[str, tuple[str, ...]] | None = None
    sire: ParentRecord | None = None
    dam: ParentRecord | None = None
    generation: int = Field(default=0, ge=0)
    birth_date: datetime | None = None
    owner_id: str | None = None

    @field_validator("genes")
    @classmethod
    def genes_complete(
        cls, v: dict[StatName, tuple[float, float]]
    ) -> dict[StatName, tuple[float, float]]:
        """Every stat needs a gene pair."""
        missing = [stat.value for stat in ALL_STATS if stat not in v]
        if missing:
            raise ValueError(f"Missing genes for: {', '.join(missing)}")
        return v

    @model_validator(mode="after")
    def conformation_well_formed(self) -> HorseRecord:
        """Conformation genes must match their layout."""
        if self.conformation is not None:
            unknown = set(self.conformation) ^ set(GENE_LAYOUT)
            if unknown:
                raise ValueError(f"Conformation genes do not match layout: {sorted(unknown)}")
            ConformationGenetics(**self.conformation)
        return self

    def to_horse(self) -> Horse:
        return Horse(
            id=self.id,
            name=self.name,
            age=self.age,
            gender=self.gender,
            genes=StatGeneMap.from_pairs({stat.value: pair for stat, pair in self.genes.items()}),
            mental_state=self.mental_state.to_mental_state(),
            visual_genetics=(
                self.visual_genetics.to_visual_genetics() if self.visual_genetics else None
            ),
            conformation=(
                ConformationGenetics(**self.conformation) if self.conformation else None
            ),
            training=dict(self.training),
            skills=dict(self.skills),
            housing=self.housing,
            satisfaction=self.satisfaction.to_satisfaction(),
            bonds=tuple(bond.to_bond() for bond in self.bonds),
            sire=ParentInfo(self.sire.id, self.sire.name) if self.sire else None,
            dam=ParentInfo(self.dam.id, self.dam.name) if self.dam else None,
            generation=self.generation,
            birth_date=self.birth_date,
            owner_id=self.owner_id,
        )

    @classmethod
    def from_horse(cls, horse: Horse) -> HorseRecord:
        return cls(
            id=horse.id,
            name=horse.name,
            age=horse.age,
            gender=horse.gender,
            genes={stat: pair.as_tuple() for stat, pair in horse.genes.items()},
            training=dict(horse.training),
            skills=dict(horse.skills),
            mental_state=MentalStateRecord.from_mental_state(horse.mental_state),
            housing=horse.housing,
            satisfaction=SatisfactionRecord.from_satisfaction(horse.satisfaction),
            bonds=[
                BondRecord(
                    person_id=bond.person_id,
                    level=bond.level,
                    last_interaction=bond.last_interaction,
                )
                for bond in horse.bonds
            ],
            visual_genetics=(
                VisualGeneticsRecord.from_visual_genetics(horse.visual_genetics)
                if horse.visual_genetics
                else None
            ),
            conformation=horse.conformation.to_dict() if horse.conformation else None,
            sire=ParentRecord(id=horse.sire.id, name=horse.sire.name) if horse.sire else None,
            dam=ParentRecord(id=horse.dam.id, name=horse.dam.name) if horse.dam else None,
            generation=horse.generation,
            birth_date=horse.birth_date,
            owner_id=horse.owner_id,
        )


class TrainingResultRecord(RecordModel):
    """Session outcome as returned to clients."""

    success: bool
    skill_gained: float
    stats_gained: dict[StatName, float] = Field(default_factory=dict)
    fatigue_gained: float = 0.0
    mood_changed: bool = False
    new_mood: Mood | None = None
    message: str = ""
    new_skill_level: float | None = None

    @classmethod
    def from_result(
        cls, result: TrainingResult, new_skill_level: float | None = None
    ) -> TrainingResultRecord:
        return cls(
            success=result.success,
            skill_gained=result.skill_gained,
            stats_gained=dict(result.stats_gained),
            fatigue_gained=result.fatigue_gained,
            mood_changed=result.mood_changed,
            new_mood=result.new_mood,
            message=result.message,
            new_skill_level=new_skill_level,
        )


class BreedingValidationRecord(RecordModel):
    can_breed: bool
    reason: str | None = None

    @classmethod
    def from_validation(cls, validation: BreedingValidation) -> BreedingValidationRecord:
        return cls(can_breed=validation.can_breed, reason=validation.reason)


class HorseUpdateRecord(RecordModel):
    """Per-horse line of a day-advance summary."""

    horse_id: str
    horse_name: str
    new_mood: Mood
    new_fatigue: float

    @classmethod
    def from_day_result(cls, result: DayAdvanceResult) -> HorseUpdateRecord:
        return cls(
            horse_id=result.horse_id,
            horse_name=result.horse_name,
            new_mood=result.new_mood,
            new_fatigue=result.new_fatigue,
        )
