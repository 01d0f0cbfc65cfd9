"""Training formula engine.

One session turns (horse, skill, duration, trainer) into a skill delta, stat
gains, a fatigue delta and an optional mood change::

    CTV = (BTV - PTM - SDM) * TSM
    trainability = (max(0, Tr + PV) * MM + BM) / 100
    SV = clamp(FM * CTV * trainability * duration_multiplier
               * (1 - level / 150), -2.5, max_gain)

Nothing here raises for game-rule outcomes; every input yields a
:class:`~paddock.model.session.TrainingResult`. The horse itself is left
untouched; see :mod:`paddock.engine.day` for applying a result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from paddock.engine.mood import (
    care_fatigue_delta,
    check_for_confusion,
    check_mood_transition,
    get_fatigue_modifier,
    update_fatigue,
)
from paddock.engine.numeric import clamp
from paddock.engine.satisfaction import calculate_training_satisfaction
from paddock.model.genetics import StatName
from paddock.model.horse import Horse
from paddock.model.mental import MOOD_MODIFIERS, Mood, Personality, get_personality_value
from paddock.model.session import (
    Trainer,
    TrainingResult,
    check_duration,
    trainer_skill_modifier,
)
from paddock.model.skill import AnyOfPrerequisite, SkillDefinition
from paddock.rng import RandomSource, resolve, uniform
from paddock.skills.catalog import get_skill

logger = logging.getLogger(__name__)

FIXED_BOND_MODIFIER = 1.0
MAX_PREREQUISITE_PENALTY = 5.0
MAX_STAT_DEFICIENCY_PENALTY = 5.0
PREREQUISITE_PENALTY_RATE = 0.1
STAT_DEFICIENCY_RATE = 0.05
SESSION_FLOOR = -2.5
MASTERY_SCALE = 150.0
MAX_INJURY_CHANCE = 0.80
SASSY_RANGE = (0.9, 1.5)

# (duration multiplier, max gain) per offered session length.
DURATION_SCALING: dict[int, tuple[float, float]] = {
    5: (0.5, 1.25),
    15: (1.0, 2.5),
    30: (1.75, 5.0),
    60: (3.0, 10.0),
}
DEFAULT_MAX_GAIN = 2.5

# Injury risk per year under a skill's minimum age.
PHYSICAL_INJURY_RATE = 0.5
MENTAL_INJURY_RATE = 0.25
DAYS_PER_YEAR = 365

DIFFICULT_PERSONALITIES = frozenset(
    {Personality.RECALCITRANT, Personality.INTRACTABLE, Personality.STUBBORN}
)
KEEN_PERSONALITIES = frozenset({Personality.WILLING, Personality.AMIABLE, Personality.CURIOUS})
ENGAGED_PERSONALITIES = frozenset({Personality.PERSONABLE, Personality.CURIOUS})


@dataclass(frozen=True)
class SessionBreakdown:
    """Every term of one session value computation."""

    fm: float
    btv: float
    ptm: float
    sdm: float
    tsm: float
    tr: float
    pv: float
    mm: float
    bm: float
    ctv: float
    trainability_factor: float
    scaled_trainability: float
    duration_multiplier: float
    max_gain: float
    raw_value: float
    diminishing_factor: float
    session_value: float


def duration_scaling(duration: int) -> tuple[float, float]:
    """Multiplier and gain cap; unlisted lengths scale linearly from 15 minutes."""
    check_duration(duration)
    return DURATION_SCALING.get(duration, (duration / 15, DEFAULT_MAX_GAIN))


def prerequisite_penalty(horse: Horse, skill: SkillDefinition) -> float:
    """PTM: 0.1 per missing prerequisite point, any-of groups counting their
    closest option, capped at 5."""
    total = 0.0
    for prereq in skill.prerequisites:
        if isinstance(prereq, AnyOfPrerequisite):
            shortfall = min(
                max(0.0, option.min_level - horse.skill_level(option.skill))
                for option in prereq.any_of
            )
        else:
            shortfall = max(0.0, prereq.min_level - horse.skill_level(prereq.skill))
        total += shortfall * PREREQUISITE_PENALTY_RATE
    return min(total, MAX_PREREQUISITE_PENALTY)


def stat_deficiency_penalty(horse: Horse, skill: SkillDefinition) -> float:
    """SDM: 0.05 per percentage point of stat training below the minimum, capped at 5."""
    total = 0.0
    for req in skill.minimum_stats:
        trained = horse.training_level(req.stat) * 100
        if trained < req.min_level:
            total += (req.min_level - trained) * STAT_DEFICIENCY_RATE
    return min(total, MAX_STAT_DEFICIENCY_PENALTY)


def trainability(horse: Horse) -> float:
    """Tr: natural intelligence scaled by how much of it is unlocked."""
    natural = horse.genes[StatName.INTELLIGENCE].potential
    return natural * horse.training_level(StatName.INTELLIGENCE)


def get_mood_modifier(
    mood: Mood,
    is_physical: bool,
    skill_id: str,
    previous_skill: str | None,
    rng: RandomSource | None = None,
) -> float:
    """MM, with the moods whose effect depends on the session."""
    if mood is Mood.PENT_UP:
        return 1.0 if is_physical else 0.3
    if mood is Mood.ENERGETIC:
        return 1.25 if is_physical else 0.9
    if mood is Mood.SASSY:
        return uniform(*SASSY_RANGE, rng=rng)
    if mood is Mood.CONFUSED:
        return 1.0 if skill_id == previous_skill else 0.8
    if mood is Mood.INTRIGUED:
        return 1.3 if skill_id == previous_skill else 1.0
    return MOOD_MODIFIERS[mood]


def injury_chance(horse: Horse, skill: SkillDefinition) -> float:
    """Chance of injury training below the skill's minimum age (0 when old enough)."""
    if skill.minimum_age is None or horse.age >= skill.minimum_age:
        return 0.0
    days_under = (skill.minimum_age - horse.age) * DAYS_PER_YEAR
    rate = PHYSICAL_INJURY_RATE if skill.is_physical else MENTAL_INJURY_RATE
    return min(MAX_INJURY_CHANCE, days_under * rate / DAYS_PER_YEAR)


def calculate_session_value(
    horse: Horse,
    skill: SkillDefinition,
    trainer: Trainer,
    duration: int,
    rng: RandomSource | None = None,
) -> SessionBreakdown:
    """Compute SV and its terms. Draws for Bold PV, then Sassy MM."""
    source = resolve(rng)
    mind = horse.mental_state
    current_level = horse.skill_level(skill.id)

    fm = get_fatigue_modifier(mind.fatigue)
    btv = 11 - skill.base_training_value
    ptm = prerequisite_penalty(horse, skill)
    sdm = stat_deficiency_penalty(horse, skill)
    tsm = trainer_skill_modifier(trainer)
    tr = trainability(horse)
    pv = get_personality_value(mind.personality, horse.bond_level(trainer.id), source)
    mm = get_mood_modifier(mind.mood, skill.is_physical, skill.id, mind.previous_skill, source)
    bm = FIXED_BOND_MODIFIER

    ctv = (btv - ptm - sdm) * tsm
    trainability_factor = max(0.0, tr + pv) * mm + bm
    scaled = trainability_factor / 100
    multiplier, max_gain = duration_scaling(duration)
    raw_value = fm * ctv * scaled * multiplier
    diminishing = 1.0 - current_level / MASTERY_SCALE
    session_value = clamp(raw_value * diminishing, SESSION_FLOOR, max_gain)

    breakdown = SessionBreakdown(
        fm=fm,
        btv=btv,
        ptm=ptm,
        sdm=sdm,
        tsm=tsm,
        tr=tr,
        pv=pv,
        mm=mm,
        bm=bm,
        ctv=ctv,
        trainability_factor=trainability_factor,
        scaled_trainability=scaled,
        duration_multiplier=multiplier,
        max_gain=max_gain,
        raw_value=raw_value,
        diminishing_factor=diminishing,
        session_value=session_value,
    )
    logger.debug(
        "Session terms: FM=%.3f BTV=%s PTM=%.2f SDM=%.2f TSM=%.3f Tr=%.2f PV=%.2f "
        "MM=%.2f CTV=%.3f raw=%.4f SV=%.4f",
        fm,
        btv,
        ptm,
        sdm,
        tsm,
        tr,
        pv,
        mm,
        ctv,
        raw_value,
        session_value,
        extra={"horse_id": horse.id, "skill_id": skill.id},
    )
    return breakdown


def calculate_stat_gains(
    horse: Horse, skill: SkillDefinition, skill_gained: float
) -> dict[StatName, float]:
    """Stat training gained from a positive skill gain.

    Each contribution shrinks as the stat nears full training, so no stat
    ever passes 1.0.
    """
    gains: dict[StatName, float] = {}
    if skill_gained <= 0:
        return gains
    for contribution in skill.stat_contributions:
        current = horse.training_level(contribution.stat)
        room = 1.0 - current
        new_level = min(1.0, current + contribution.amount * skill_gained * room)
        actual = new_level - current
        if actual > 0:
            gains[contribution.stat] = actual
    return gains


def generate_training_message(
    horse_name: str,
    skill_name: str,
    success: bool,
    skill_gained: float,
    duration: int,
    personality: Personality,
    injured: bool = False,
) -> str:
    if injured:
        return (
            f"{horse_name} sustained an injury during training. "
            f"They may be too young for {skill_name} training."
        )

    if not success or skill_gained < 0:
        if personality in DIFFICULT_PERSONALITIES:
            return f"{horse_name} stubbornly refused to cooperate during {skill_name} training."
        if personality is Personality.TIMID:
            return f"{horse_name} was too anxious to make progress in {skill_name}."
        return f"{horse_name} struggled with {skill_name} training today."

    # Gain per 15 minutes of work
    rate = skill_gained / (duration / 15)
    if rate >= 2:
        if personality in KEEN_PERSONALITIES:
            return f"{horse_name} eagerly worked on {skill_name} and made excellent progress!"
        return f"{horse_name} performed exceptionally well during {skill_name} training!"
    if rate >= 1:
        if personality in ENGAGED_PERSONALITIES:
            return f"{horse_name} was engaged and made good progress with {skill_name}."
        return f"{horse_name} made good progress in {skill_name} today."
    return f"{horse_name} made some progress with {skill_name}."


def apply_training(
    horse: Horse,
    skill_id: str,
    duration: int,
    trainer: Trainer,
    rng: RandomSource | None = None,
) -> TrainingResult:
    """Run one training session and describe its outcome.

    Random draws happen in a fixed order: injury roll (only when under the
    skill's minimum age), Bold personality, Sassy mood, then confusion.

    Args:
        horse: Current state; not modified.
        skill_id: Catalog id of the skill to train.
        duration: Minutes; 5, 15, 30 or 60 are the offered lengths.
        trainer: Person running the session.
        rng: Random source; defaults to the process-wide one.

    Returns:
        TrainingResult. An unknown skill gives a failed result with zero deltas.

    Raises:
        ValueError: If ``duration`` is zero or negative.
    """
    check_duration(duration)
    skill = get_skill(skill_id)
    if skill is None:
        logger.warning("Training requested for unknown skill '%s'", skill_id)
        return TrainingResult(
            success=False,
            skill_gained=0.0,
            message=f"Skill '{skill_id}' not found.",
        )

    source = resolve(rng)
    mind = horse.mental_state

    injured = False
    risk = injury_chance(horse, skill)
    if risk > 0:
        injured = source.random() < risk
        if injured:
            logger.info(
                "%s injured training %s below minimum age (risk %.2f)",
                horse.name,
                skill.name,
                risk,
                extra={"horse_id": horse.id, "skill_id": skill.id},
            )

    current_level = horse.skill_level(skill.id)
    breakdown = calculate_session_value(horse, skill, trainer, duration, source)
    session_value = breakdown.session_value

    success = session_value > 0 and not injured
    if injured:
        new_level = current_level
    else:
        new_level = clamp(current_level + session_value, 0.0, 100.0)
    skill_gained = new_level - current_level

    stats_gained = calculate_stat_gains(horse, skill, skill_gained)

    if skill.is_care:
        fatigue_gained = care_fatigue_delta(mind.fatigue, duration)
    else:
        fatigue_gained = update_fatigue(mind.fatigue, duration, skill.is_physical) - mind.fatigue

    mood_changed = False
    new_mood = mind.mood
    if check_for_confusion(current_level, source):
        mood_changed = True
        new_mood = Mood.CONFUSED
    else:
        transition = check_mood_transition(horse, skill.id, skill.is_physical)
        if transition is not None:
            mood_changed = True
            new_mood = transition

    message = generate_training_message(
        horse.name,
        skill.name,
        success,
        skill_gained,
        duration,
        mind.personality,
        injured,
    )

    return TrainingResult(
        success=success,
        skill_gained=skill_gained,
        stats_gained=stats_gained,
        fatigue_gained=fatigue_gained,
        mood_changed=mood_changed,
        new_mood=new_mood,
        message=message,
        satisfaction_gained=calculate_training_satisfaction(duration, skill.is_physical),
        injured=injured,
        session_value=session_value,
    )
