"""Day-to-day orchestration: applying sessions and advancing the calendar.

These functions produce new :class:`~paddock.model.horse.Horse` values from
engine results. Persisting them, and any money or time bookkeeping, is the
caller's concern (see :mod:`paddock.economy`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from paddock.config import get_settings
from paddock.engine.mood import calculate_daily_mood, reduce_fatigue
from paddock.engine.numeric import clamp
from paddock.engine.satisfaction import (
    apply_training_satisfaction,
    calculate_satisfaction_requirements,
    reset_daily_satisfaction,
)
from paddock.engine.training import apply_training
from paddock.model.horse import DAYS_PER_YEAR, Horse
from paddock.model.mental import HousingType, Mood
from paddock.model.session import Trainer, TrainingResult, check_duration
from paddock.rng import RandomSource
from paddock.skills.validation import validate_skill_training

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayAdvanceResult:
    """Summary of one horse's overnight update."""

    horse_id: str
    horse_name: str
    new_day: int
    new_mood: Mood
    new_fatigue: float
    aged: bool = False


def apply_training_result(horse: Horse, skill_id: str, result: TrainingResult) -> Horse:
    """Fold a session's result into the horse.

    Skill level is clamped to [0, 100], stat training to at most 1.0 and
    fatigue to [0, 100]. When the session left the horse Confused, the mood
    it had and the skill trained are remembered so the next session can
    resolve the confusion.
    """
    skills = dict(horse.skills)
    skills[skill_id] = clamp(horse.skill_level(skill_id) + result.skill_gained, 0.0, 100.0)

    training = dict(horse.training)
    for stat, gain in result.stats_gained.items():
        training[stat] = min(1.0, training.get(stat, 0.0) + gain)

    mind = horse.mental_state
    mind = replace(mind, fatigue=clamp(mind.fatigue + result.fatigue_gained, 0.0, 100.0))
    if result.mood_changed and result.new_mood is not None:
        if result.new_mood is Mood.CONFUSED:
            mind = replace(mind, previous_mood=mind.mood, previous_skill=skill_id)
        mind = replace(mind, mood=result.new_mood)

    return replace(
        horse,
        skills=skills,
        training=training,
        mental_state=mind,
        satisfaction=apply_training_satisfaction(horse.satisfaction, result.satisfaction_gained),
    )


def train_horse(
    horse: Horse,
    skill_id: str,
    duration: int,
    trainer: Trainer,
    rng: RandomSource | None = None,
) -> tuple[Horse, TrainingResult]:
    """Validate, run and apply one training session.

    A rejected session draws no randomness and returns the horse unchanged
    with a failed result whose message is the rejection reason.

    Raises:
        ValueError: If ``duration`` is zero or negative.

    Returns:
        The updated horse and the session result.
    """
    check_duration(duration)
    validation = validate_skill_training(horse, skill_id)
    if not validation.can_train:
        logger.info(
            "Training rejected: %s",
            validation.reason,
            extra={"horse_id": horse.id, "skill_id": skill_id},
        )
        return horse, TrainingResult(
            success=False,
            skill_gained=0.0,
            message=validation.reason or "",
        )

    result = apply_training(horse, skill_id, duration, trainer, rng)
    return apply_training_result(horse, skill_id, result), result


def advance_day(
    horse: Horse,
    current_day: int,
    *,
    fatigue_recovery: float | None = None,
    rng: RandomSource | None = None,
) -> tuple[Horse, DayAdvanceResult]:
    """Move one horse to the next day.

    The new mood is rolled from yesterday's satisfaction before the daily
    channels are reset. Horses age a year whenever the new day completes a
    365-day cycle.

    Args:
        horse: Horse at the end of ``current_day``.
        current_day: Day counter before advancing.
        fatigue_recovery: Overnight fatigue recovery; defaults to the
            configured ``daily_fatigue_recovery``.
        rng: Random source for the mood roll.

    Returns:
        The updated horse and a summary of what changed.
    """
    if fatigue_recovery is None:
        fatigue_recovery = get_settings().daily_fatigue_recovery

    new_mood = calculate_daily_mood(horse, rng)
    new_fatigue = reduce_fatigue(horse.mental_state.fatigue, fatigue_recovery)
    aged = (current_day + 1) % DAYS_PER_YEAR == 0

    updated = replace(
        horse,
        age=horse.age + 1 if aged else horse.age,
        mental_state=replace(horse.mental_state, mood=new_mood, fatigue=new_fatigue),
        satisfaction=reset_daily_satisfaction(horse.satisfaction),
    )
    updated = replace(updated, satisfaction=calculate_satisfaction_requirements(updated))

    logger.debug(
        "Day %d: %s is %s (fatigue %.1f)",
        current_day + 1,
        horse.name,
        new_mood,
        new_fatigue,
        extra={"horse_id": horse.id},
    )
    return updated, DayAdvanceResult(
        horse_id=horse.id,
        horse_name=horse.name,
        new_day=current_day + 1,
        new_mood=new_mood,
        new_fatigue=new_fatigue,
        aged=aged,
    )


def change_housing(horse: Horse, housing: HousingType | str) -> Horse:
    """Move the horse and recompute its satisfaction requirements."""
    moved = replace(horse, housing=HousingType(housing))
    return replace(moved, satisfaction=calculate_satisfaction_requirements(moved))
