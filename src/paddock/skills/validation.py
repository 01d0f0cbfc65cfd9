"""Prerequisite validator and derived skill-tree queries."""

from __future__ import annotations

import logging

from paddock.model.horse import Horse
from paddock.model.mental import Mood
from paddock.model.session import TrainingValidation
from paddock.model.skill import (
    AnyOfPrerequisite,
    SkillDefinition,
    SkillPrerequisite,
    StatRequirement,
)
from paddock.skills.catalog import get_skill, load_catalog

logger = logging.getLogger(__name__)

MIN_TRAINING_AGE = 2
FATIGUE_LIMIT = 80
COMPLETED_LEVEL = 80

MASTERY_LEVELS: tuple[tuple[float, str], ...] = (
    (90, "Master"),
    (75, "Expert"),
    (60, "Proficient"),
    (40, "Competent"),
    (20, "Novice"),
)


def _skill_name(skill_id: str) -> str:
    skill = get_skill(skill_id)
    return skill.name if skill else skill_id


def _is_met(horse: Horse, prereq: SkillPrerequisite) -> bool:
    return horse.skill_level(prereq.skill) >= prereq.min_level


def _describe(horse: Horse, prereq: SkillPrerequisite | AnyOfPrerequisite) -> str:
    if isinstance(prereq, AnyOfPrerequisite):
        options = " OR ".join(
            f"{_skill_name(option.skill)} {option.min_level:g}%" for option in prereq.any_of
        )
        return f"Need one of: {options}"
    have = horse.skill_level(prereq.skill)
    return f"{_skill_name(prereq.skill)} (need {prereq.min_level:g}%, have {have:.1f}%)"


def missing_stat_requirements(horse: Horse, skill: SkillDefinition) -> list[StatRequirement]:
    """Stat requirements the horse falls short of, in percent of potential."""
    return [
        req
        for req in skill.minimum_stats
        if horse.training_level(req.stat) * 100 < req.min_level
    ]


def validate_skill_training(horse: Horse, skill_id: str) -> TrainingValidation:
    """Check whether a horse may train a skill right now.

    Checks run in a fixed order and the first failure wins: unknown skill,
    age, fatigue (care skills exempt), shut-down mood, then prerequisites.
    All failing prerequisites are reported together. Minimum stats are
    reported in ``missing_stats`` but never block training.
    """
    skill = get_skill(skill_id)
    if skill is None:
        return TrainingValidation(can_train=False, reason=f"Skill '{skill_id}' not found")

    if horse.age < MIN_TRAINING_AGE:
        return TrainingValidation(
            can_train=False, reason="Horse must be at least 2 years old to train"
        )

    if horse.mental_state.fatigue >= FATIGUE_LIMIT and not skill.is_care:
        return TrainingValidation(
            can_train=False, reason="Horse is too tired to train (fatigue >= 80%)"
        )

    if horse.mental_state.mood is Mood.SHUT_DOWN:
        return TrainingValidation(can_train=False, reason="Horse is shut-down and cannot train")

    missing: list[SkillPrerequisite | AnyOfPrerequisite] = []
    for prereq in skill.prerequisites:
        if isinstance(prereq, AnyOfPrerequisite):
            if not any(_is_met(horse, option) for option in prereq.any_of):
                missing.append(prereq)
        elif not _is_met(horse, prereq):
            missing.append(prereq)

    missing_stats = tuple(missing_stat_requirements(horse, skill))

    if missing:
        reason = "Missing prerequisites: " + ", ".join(_describe(horse, p) for p in missing)
        return TrainingValidation(
            can_train=False,
            reason=reason,
            missing_prerequisites=tuple(missing),
            missing_stats=missing_stats,
        )

    return TrainingValidation(can_train=True, missing_stats=missing_stats)


def get_trainable_skills(horse: Horse) -> list[SkillDefinition]:
    return [
        skill
        for skill_id, skill in load_catalog().items()
        if validate_skill_training(horse, skill_id).can_train
    ]


def get_next_skills(horse: Horse) -> list[SkillDefinition]:
    """Skills held back only by unmet prerequisites."""
    next_skills = []
    for skill_id, skill in load_catalog().items():
        validation = validate_skill_training(horse, skill_id)
        if not validation.can_train and validation.missing_prerequisites:
            next_skills.append(skill)
    return next_skills


def calculate_skill_progress(horse: Horse) -> float:
    """Percent of the catalog trained to 80 or higher."""
    catalog = load_catalog()
    completed = sum(1 for skill_id in catalog if horse.skill_level(skill_id) >= COMPLETED_LEVEL)
    return completed / len(catalog) * 100


def get_skill_mastery_level(level: float) -> str:
    for threshold, label in MASTERY_LEVELS:
        if level >= threshold:
            return label
    if level > 0:
        return "Beginner"
    return "Untrained"
