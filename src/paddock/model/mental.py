"""Mental state: personality, mood, fatigue, satisfaction channels and bonds."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from paddock.rng import RandomSource, uniform


class Personality(StrEnum):
    """Fixed at birth. Declaration order is the inheritance ordinal."""

    RECALCITRANT = "Recalcitrant"
    INTRACTABLE = "Intractable"
    STUBBORN = "Stubborn"
    ALOOF = "Aloof"
    TIMID = "Timid"
    INDIFFERENT = "Indifferent"
    CURIOUS = "Curious"
    PERSONABLE = "Personable"
    WILLING = "Willing"
    AMIABLE = "Amiable"
    BOLD = "Bold"


PERSONALITY_ORDER: tuple[Personality, ...] = tuple(Personality)


class Mood(StrEnum):
    SHUT_DOWN = "Shut-down"
    BURNT_OUT = "Burnt Out"
    DEPRESSED = "Depressed"
    TIRED = "Tired"
    WITHDRAWN = "Withdrawn"
    PENT_UP = "Pent-up"
    ANXIOUS = "Anxious"
    GRUMPY = "Grumpy"
    APATHETIC = "Apathetic"
    CALM = "Calm"
    CHEERFUL = "Cheerful"
    SATISFIED = "Satisfied"
    SASSY = "Sassy"
    PERKY = "Perky"
    ENERGETIC = "Energetic"
    CONFUSED = "Confused"
    INTRIGUED = "Intrigued"
    EAGER = "Eager"
    FOCUSED = "Focused"


class HousingType(StrEnum):
    PASTURE = "pasture"
    STALL = "stall"


class SatisfactionChannel(StrEnum):
    EXERCISE = "exercise"
    STIMULATION = "stimulation"
    SOCIALIZATION = "socialization"
    NUTRITION = "nutrition"


# Order used when listing unmet needs.
CHANNEL_ORDER: tuple[SatisfactionChannel, ...] = tuple(SatisfactionChannel)

# Fixed personality values for the training formula. Bold is rolled per session.
PERSONALITY_VALUES: dict[Personality, float] = {
    Personality.RECALCITRANT: -10,
    Personality.INTRACTABLE: -7,
    Personality.STUBBORN: -5,
    Personality.ALOOF: -3,
    Personality.TIMID: -1,
    Personality.INDIFFERENT: 0,
    Personality.CURIOUS: 1,
    Personality.PERSONABLE: 2,
    Personality.WILLING: 4,
    Personality.AMIABLE: 5,
}

BOLD_RANGE = (-3.0, 8.0)
BOLD_BOND_SHIFT = 5.0

# Positive means a Confused horse repeating a skill becomes Intrigued.
PERSONALITY_TRACTABILITY: dict[Personality, int] = {
    Personality.RECALCITRANT: -10,
    Personality.INTRACTABLE: -8,
    Personality.STUBBORN: -6,
    Personality.ALOOF: -3,
    Personality.TIMID: -2,
    Personality.INDIFFERENT: 0,
    Personality.CURIOUS: 3,
    Personality.PERSONABLE: 5,
    Personality.WILLING: 7,
    Personality.AMIABLE: 8,
    Personality.BOLD: 2,
}

MOOD_MODIFIERS: dict[Mood, float] = {
    Mood.SHUT_DOWN: 0.0,
    Mood.BURNT_OUT: 0.3,
    Mood.DEPRESSED: 0.2,
    Mood.TIRED: 0.6,
    Mood.WITHDRAWN: 0.5,
    Mood.ANXIOUS: 0.5,
    Mood.GRUMPY: 0.7,
    Mood.APATHETIC: 1.0,
    Mood.CALM: 1.0,
    Mood.SATISFIED: 1.0,
    Mood.CHEERFUL: 1.1,
    Mood.PERKY: 1.15,
    Mood.EAGER: 1.2,
    Mood.FOCUSED: 1.4,
    # Resolved per session in the training formula
    Mood.PENT_UP: 1.0,
    Mood.ENERGETIC: 1.25,
    Mood.SASSY: 1.0,
    Mood.CONFUSED: 1.0,
    Mood.INTRIGUED: 1.3,
}


@dataclass(frozen=True)
class RequirementModifiers:
    exercise: float
    stimulation: float
    socialization: float


PERSONALITY_REQUIREMENT_MODIFIERS: dict[Personality, RequirementModifiers] = {
    Personality.RECALCITRANT: RequirementModifiers(0.8, 0.8, 0.7),
    Personality.INTRACTABLE: RequirementModifiers(0.8, 0.8, 0.7),
    Personality.STUBBORN: RequirementModifiers(0.9, 0.9, 0.8),
    Personality.ALOOF: RequirementModifiers(1.0, 1.0, 0.6),
    Personality.TIMID: RequirementModifiers(0.9, 1.1, 1.2),
    Personality.INDIFFERENT: RequirementModifiers(1.0, 1.0, 1.0),
    Personality.CURIOUS: RequirementModifiers(1.1, 1.3, 1.1),
    Personality.PERSONABLE: RequirementModifiers(1.0, 1.1, 1.4),
    Personality.WILLING: RequirementModifiers(1.2, 1.1, 1.2),
    Personality.AMIABLE: RequirementModifiers(1.1, 1.0, 1.3),
    Personality.BOLD: RequirementModifiers(1.3, 1.2, 0.9),
}


def get_personality_value(
    personality: Personality,
    bond_level: float = 0.0,
    rng: RandomSource | None = None,
) -> float:
    """Personality term (PV) of the training formula.

    Bold horses roll uniformly in [-3, 8), shifted up by as much as 5 with a
    full bond.
    """
    if personality is Personality.BOLD:
        return uniform(*BOLD_RANGE, rng=rng) + (bond_level / 100) * BOLD_BOND_SHIFT
    return PERSONALITY_VALUES[personality]


def personality_index(personality: Personality) -> int:
    return PERSONALITY_ORDER.index(personality)


@dataclass(frozen=True)
class SatisfactionLevel:
    current: float = 0.0
    required: float = 0.0

    @property
    def is_met(self) -> bool:
        return self.current >= self.required


@dataclass(frozen=True)
class Satisfaction:
    exercise: SatisfactionLevel = SatisfactionLevel()
    stimulation: SatisfactionLevel = SatisfactionLevel()
    socialization: SatisfactionLevel = SatisfactionLevel()
    nutrition: SatisfactionLevel = SatisfactionLevel(current=100, required=80)

    def get(self, channel: SatisfactionChannel | str) -> SatisfactionLevel:
        level: SatisfactionLevel = getattr(self, SatisfactionChannel(channel).value)
        return level

    def with_level(
        self, channel: SatisfactionChannel | str, level: SatisfactionLevel
    ) -> Satisfaction:
        return replace(self, **{SatisfactionChannel(channel).value: level})

    def channels(self) -> Iterator[tuple[SatisfactionChannel, SatisfactionLevel]]:
        for channel in CHANNEL_ORDER:
            yield channel, self.get(channel)


@dataclass(frozen=True)
class Bond:
    """Relationship between a horse and a person."""

    person_id: str
    level: float
    last_interaction: datetime | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.level <= 100:
            raise ValueError(f"Bond level {self.level!r} outside [0, 100]")


@dataclass(frozen=True)
class MentalState:
    """Personality is fixed; mood and fatigue move daily and after training.

    ``previous_mood`` and ``previous_skill`` are recorded when a session leaves
    the horse Confused, so later sessions can revert or resolve the confusion.
    """

    personality: Personality
    mood: Mood = Mood.CALM
    fatigue: float = 0.0
    previous_mood: Mood | None = None
    previous_skill: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.fatigue <= 100:
            raise ValueError(f"Fatigue {self.fatigue!r} outside [0, 100]")
