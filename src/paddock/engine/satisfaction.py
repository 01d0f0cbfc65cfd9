"""Satisfaction accounting: requirements, unmet needs, gains and daily reset."""

from __future__ import annotations

from paddock.engine.numeric import round_half_up
from paddock.model.horse import Horse
from paddock.model.mental import (
    PERSONALITY_REQUIREMENT_MODIFIERS,
    HousingType,
    Satisfaction,
    SatisfactionChannel,
    SatisfactionLevel,
)
from paddock.model.session import SatisfactionGain, check_duration

MAX_SATISFACTION = 100.0
NUTRITION_REQUIRED = 80

# Daily needs of a stalled horse before age and personality adjustments.
STALL_BASE_REQUIREMENTS: dict[SatisfactionChannel, float] = {
    SatisfactionChannel.EXERCISE: 30,
    SatisfactionChannel.STIMULATION: 25,
    SatisfactionChannel.SOCIALIZATION: 20,
}


def age_exercise_multiplier(age: int) -> float:
    """Young horses need more exercise, seniors less."""
    if age < 5:
        return 1.5
    if age > 15:
        return 0.7
    return 1.0


def calculate_satisfaction_requirements(horse: Horse) -> Satisfaction:
    """Recompute required levels for the horse's housing, age and personality.

    Current levels pass through untouched. Pastured horses meet their own
    exercise, stimulation and socialization needs.
    """
    current = horse.satisfaction
    if horse.housing is HousingType.PASTURE:
        return Satisfaction(
            exercise=SatisfactionLevel(current.exercise.current, 0),
            stimulation=SatisfactionLevel(current.stimulation.current, 0),
            socialization=SatisfactionLevel(current.socialization.current, 0),
            nutrition=SatisfactionLevel(current.nutrition.current, NUTRITION_REQUIRED),
        )

    mods = PERSONALITY_REQUIREMENT_MODIFIERS[horse.mental_state.personality]
    exercise = (
        STALL_BASE_REQUIREMENTS[SatisfactionChannel.EXERCISE]
        * age_exercise_multiplier(horse.age)
        * mods.exercise
    )
    stimulation = STALL_BASE_REQUIREMENTS[SatisfactionChannel.STIMULATION] * mods.stimulation
    socialization = (
        STALL_BASE_REQUIREMENTS[SatisfactionChannel.SOCIALIZATION] * mods.socialization
    )
    return Satisfaction(
        exercise=SatisfactionLevel(current.exercise.current, round_half_up(exercise)),
        stimulation=SatisfactionLevel(current.stimulation.current, round_half_up(stimulation)),
        socialization=SatisfactionLevel(
            current.socialization.current, round_half_up(socialization)
        ),
        nutrition=SatisfactionLevel(current.nutrition.current, NUTRITION_REQUIRED),
    )


def get_unmet_needs(satisfaction: Satisfaction) -> list[SatisfactionChannel]:
    """Channels below requirement: exercise, stimulation, socialization, nutrition."""
    return [channel for channel, level in satisfaction.channels() if not level.is_met]


def are_satisfaction_needs_met(satisfaction: Satisfaction) -> bool:
    return all(level.is_met for _, level in satisfaction.channels())


def add_satisfaction(
    satisfaction: Satisfaction,
    channel: SatisfactionChannel | str,
    amount: float,
) -> Satisfaction:
    """Accumulate into one channel, capped at 100."""
    level = satisfaction.get(channel)
    updated = SatisfactionLevel(min(MAX_SATISFACTION, level.current + amount), level.required)
    return satisfaction.with_level(channel, updated)


def reset_daily_satisfaction(satisfaction: Satisfaction) -> Satisfaction:
    """Zero the daily channels. Nutrition is replenished by feeding, not reset."""
    return Satisfaction(
        exercise=SatisfactionLevel(0, satisfaction.exercise.required),
        stimulation=SatisfactionLevel(0, satisfaction.stimulation.required),
        socialization=SatisfactionLevel(0, satisfaction.socialization.required),
        nutrition=satisfaction.nutrition,
    )


def calculate_training_satisfaction(duration: int, is_physical: bool) -> SatisfactionGain:
    """Per-minute gains from a session: exercise 2 (0.5 if not physical),
    stimulation 1.5, socialization 0.5 with the trainer."""
    check_duration(duration)
    exercise_rate = 2.0 if is_physical else 0.5
    return SatisfactionGain(
        exercise=round_half_up(exercise_rate * duration),
        stimulation=round_half_up(1.5 * duration),
        socialization=round_half_up(0.5 * duration),
    )


def apply_training_satisfaction(satisfaction: Satisfaction, gain: SatisfactionGain) -> Satisfaction:
    updated = add_satisfaction(satisfaction, SatisfactionChannel.EXERCISE, gain.exercise)
    updated = add_satisfaction(updated, SatisfactionChannel.STIMULATION, gain.stimulation)
    return add_satisfaction(updated, SatisfactionChannel.SOCIALIZATION, gain.socialization)
