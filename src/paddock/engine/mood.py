"""Mood state machine and fatigue dynamics."""

from __future__ import annotations

from paddock.engine.numeric import clamp
from paddock.engine.satisfaction import are_satisfaction_needs_met, get_unmet_needs
from paddock.model.horse import Horse
from paddock.model.mental import PERSONALITY_TRACTABILITY, Mood, SatisfactionChannel
from paddock.rng import RandomSource, resolve

GRUMPY_CHANCE = 0.05
SEVERE_HUNGER = 40
DEFAULT_FATIGUE_RECOVERY = 20.0
OVERWORKED_FATIGUE = 80
REST_DAY_FATIGUE = 60
MIN_CONFUSION_CHANCE = 0.001

# Fatigue per minute of training.
PHYSICAL_FATIGUE_RATE = 0.5
MENTAL_FATIGUE_RATE = 0.2
CARE_RECOVERY_RATE = 0.5

# Upper bounds of the cumulative bands for a content horse's daily mood.
POSITIVE_MOOD_BANDS: tuple[tuple[float, Mood], ...] = (
    (0.15, Mood.EAGER),
    (0.30, Mood.PERKY),
    (0.45, Mood.CHEERFUL),
    (0.60, Mood.ENERGETIC),
    (0.75, Mood.SATISFIED),
    (0.85, Mood.SASSY),
)

MOOD_DESCRIPTIONS: dict[Mood, str] = {
    Mood.SHUT_DOWN: "This horse has been pushed too hard and will not make progress.",
    Mood.BURNT_OUT: "This horse has been pushed to its limit. Give it a break.",
    Mood.DEPRESSED: "This horse is severely neglected. Check its nutrition and care.",
    Mood.TIRED: "This horse needs rest or lighter training.",
    Mood.WITHDRAWN: "This horse is being neglected. Check its care requirements.",
    Mood.PENT_UP: "This horse needs more exercise. Physical training recommended.",
    Mood.ANXIOUS: "This horse is stressed. Consider desensitization work or rest.",
    Mood.GRUMPY: "This horse is having an off day. Progress will be slower.",
    Mood.APATHETIC: "This horse is content but not engaged in training.",
    Mood.CALM: "This horse is ready to work.",
    Mood.CHEERFUL: "This horse is happy and ready to learn.",
    Mood.SATISFIED: "This horse is content with its routine.",
    Mood.SASSY: "This horse is feeling spirited! Progress will vary.",
    Mood.PERKY: "This horse is eager and will learn quickly.",
    Mood.ENERGETIC: "This horse is ready for a good workout.",
    Mood.CONFUSED: "This horse is uncertain. Repeat training or switch tasks.",
    Mood.INTRIGUED: "This horse is fascinated! Excellent learning opportunity.",
    Mood.EAGER: "This horse is highly motivated to work.",
    Mood.FOCUSED: "This horse is in the zone! Exceptional learning.",
}


def calculate_daily_mood(horse: Horse, rng: RandomSource | None = None) -> Mood:
    """Mood for a new day, from the satisfaction accrued the day before.

    Severe hunger wins, then neglect. A horse whose only shortfall is
    stimulation or socialization rolls like a content horse.
    """
    satisfaction = horse.satisfaction
    unmet = get_unmet_needs(satisfaction)

    if (
        SatisfactionChannel.NUTRITION in unmet
        and satisfaction.nutrition.current < SEVERE_HUNGER
    ):
        return Mood.DEPRESSED

    if not are_satisfaction_needs_met(satisfaction):
        if len(unmet) >= 2:
            return Mood.WITHDRAWN
        if SatisfactionChannel.EXERCISE in unmet:
            return Mood.PENT_UP
        if SatisfactionChannel.NUTRITION in unmet:
            return Mood.WITHDRAWN

    source = resolve(rng)
    if source.random() < GRUMPY_CHANCE:
        return Mood.GRUMPY

    roll = source.random()
    for upper, mood in POSITIVE_MOOD_BANDS:
        if roll < upper:
            return mood
    return Mood.CALM


def check_mood_transition(horse: Horse, skill_id: str, is_physical: bool) -> Mood | None:
    """Mood change caused by the session just trained, if any."""
    mind = horse.mental_state

    if mind.mood is Mood.ENERGETIC and is_physical:
        return Mood.FOCUSED

    if mind.mood is Mood.ANXIOUS and skill_id == "grooming":
        return Mood.FOCUSED

    if mind.mood is Mood.CONFUSED:
        if skill_id == mind.previous_skill:
            tractable = PERSONALITY_TRACTABILITY[mind.personality] > 0
            return Mood.INTRIGUED if tractable else Mood.ANXIOUS
        return mind.previous_mood or Mood.CALM

    return None


def confusion_chance(skill_level: float) -> float:
    """1% for an untrained skill, falling to a 0.1% floor."""
    return max(MIN_CONFUSION_CHANCE, (100 - skill_level) / 10000)


def check_for_confusion(skill_level: float, rng: RandomSource | None = None) -> bool:
    return resolve(rng).random() < confusion_chance(skill_level)


def update_fatigue(current: float, duration: float, is_physical: bool) -> float:
    """Fatigue after a non-care session, capped at 100."""
    rate = PHYSICAL_FATIGUE_RATE if is_physical else MENTAL_FATIGUE_RATE
    return min(100.0, current + duration * rate)


def care_fatigue_delta(current: float, duration: float) -> float:
    """Care sessions rest the horse; never below zero."""
    return -min(duration * CARE_RECOVERY_RATE, current)


def get_fatigue_modifier(fatigue: float) -> float:
    """FM: 1.0 when fresh down to 0.0 when exhausted."""
    return max(0.0, 1.0 - fatigue / 100)


def reduce_fatigue(current: float, amount: float = DEFAULT_FATIGUE_RECOVERY) -> float:
    return clamp(current - amount, 0.0, 100.0)


def is_overworked(horse: Horse) -> bool:
    return horse.mental_state.fatigue >= OVERWORKED_FATIGUE


def needs_rest_day(horse: Horse) -> bool:
    mind = horse.mental_state
    return mind.fatigue >= REST_DAY_FATIGUE or mind.mood in (Mood.TIRED, Mood.BURNT_OUT)


def get_mood_description(mood: Mood | str) -> str:
    try:
        return MOOD_DESCRIPTIONS[Mood(mood)]
    except ValueError:
        return "Unknown mood."
