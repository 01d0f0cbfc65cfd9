"""Tests for the prerequisite validator and skill-tree queries."""

from __future__ import annotations

import pytest

from paddock.model.genetics import StatName
from paddock.model.mental import Mood
from paddock.skills.catalog import get_skill
from paddock.skills.validation import (
    calculate_skill_progress,
    get_next_skills,
    get_skill_mastery_level,
    get_trainable_skills,
    missing_stat_requirements,
    validate_skill_training,
)
from tests.conftest import build_horse


class TestValidateSkillTraining:
    """Tests for validate_skill_training."""

    def test_foundation_skill_allowed(self) -> None:
        result = validate_skill_training(build_horse(), "haltering")
        assert result.can_train is True
        assert result.reason is None
        assert result.missing_prerequisites == ()

    def test_unknown_skill(self) -> None:
        result = validate_skill_training(build_horse(), "levitation")
        assert result.can_train is False
        assert result.reason == "Skill 'levitation' not found"

    def test_too_young(self) -> None:
        result = validate_skill_training(build_horse(age=1), "haltering")
        assert result.reason == "Horse must be at least 2 years old to train"

    def test_too_tired(self) -> None:
        result = validate_skill_training(build_horse(fatigue=80), "haltering")
        assert result.can_train is False
        assert result.reason == "Horse is too tired to train (fatigue >= 80%)"

    def test_care_skills_ignore_fatigue(self) -> None:
        assert validate_skill_training(build_horse(fatigue=95), "brushing").can_train

    def test_shut_down_blocks_care_skills_too(self) -> None:
        horse = build_horse(mood=Mood.SHUT_DOWN)
        result = validate_skill_training(horse, "brushing")
        assert result.reason == "Horse is shut-down and cannot train"

    def test_age_checked_before_fatigue(self) -> None:
        result = validate_skill_training(build_horse(age=1, fatigue=90), "haltering")
        assert result.reason == "Horse must be at least 2 years old to train"

    def test_missing_single_prerequisite(self) -> None:
        result = validate_skill_training(build_horse(), "leading")
        assert result.can_train is False
        assert result.reason == "Missing prerequisites: Haltering (need 25%, have 0.0%)"
        assert len(result.missing_prerequisites) == 1

    def test_reports_current_level(self) -> None:
        horse = build_horse(skills={"haltering": 12.34})
        result = validate_skill_training(horse, "leading")
        assert result.reason == "Missing prerequisites: Haltering (need 25%, have 12.3%)"

    def test_all_missing_prerequisites_listed(self) -> None:
        result = validate_skill_training(build_horse(), "bathing")
        assert result.reason == (
            "Missing prerequisites: Haltering (need 25%, have 0.0%), "
            "Need one of: Standing 30% OR Tying 30%"
        )
        assert len(result.missing_prerequisites) == 2

    def test_any_of_group_unmet(self) -> None:
        horse = build_horse(skills={"haltering": 25, "standing": 20})
        result = validate_skill_training(horse, "bathing")
        assert result.reason == "Missing prerequisites: Need one of: Standing 30% OR Tying 30%"

    def test_any_of_group_met_by_second_option(self) -> None:
        horse = build_horse(skills={"haltering": 25, "tying": 30})
        assert validate_skill_training(horse, "bathing").can_train

    def test_minimum_stats_do_not_block(self) -> None:
        """Unmet stat minimums are reported but training is still allowed."""
        horse = build_horse(skills={"haltering": 65, "standing": 50})
        result = validate_skill_training(horse, "clipping")
        assert result.can_train is True
        assert [req.stat for req in result.missing_stats] == [StatName.STOLIDITY]

    def test_missing_stats_reported_alongside_prerequisites(self) -> None:
        result = validate_skill_training(build_horse(), "clipping")
        assert result.can_train is False
        assert len(result.missing_stats) == 1


class TestMissingStatRequirements:
    """Tests for missing_stat_requirements."""

    def test_compares_in_percent(self) -> None:
        skill = get_skill("walk_under_saddle")
        assert skill is not None
        horse = build_horse(training={StatName.BALANCE: 0.2, StatName.STRENGTH: 0.1})
        missing = missing_stat_requirements(horse, skill)
        assert [req.stat for req in missing] == [StatName.STRENGTH]


class TestSkillTree:
    """Tests for trainable, next and progress queries."""

    def test_fresh_horse_trainable_skills(self) -> None:
        ids = [skill.id for skill in get_trainable_skills(build_horse())]
        assert ids == [
            "brushing",
            "grooming",
            "picking_out_feet",
            "haltering",
            "teach_voice_cues",
            "lunging_free",
        ]

    def test_tired_horse_trainable_skills(self) -> None:
        ids = [skill.id for skill in get_trainable_skills(build_horse(fatigue=90))]
        assert ids == ["brushing", "grooming", "picking_out_feet"]

    def test_next_skills_blocked_by_prerequisites(self) -> None:
        next_ids = {skill.id for skill in get_next_skills(build_horse())}
        assert len(next_ids) == 42
        assert "leading" in next_ids
        assert "haltering" not in next_ids

    def test_next_skills_exclude_fatigue_blocks(self) -> None:
        next_ids = [skill.id for skill in get_next_skills(build_horse(fatigue=90))]
        assert next_ids == ["bathing", "clipping"]

    def test_progress_counts_completed_skills(self) -> None:
        horse = build_horse(skills={"haltering": 80, "leading": 79.9})
        assert calculate_skill_progress(horse) == pytest.approx(1 / 48 * 100)

    def test_progress_zero(self) -> None:
        assert calculate_skill_progress(build_horse()) == 0


class TestMasteryLevel:
    """Tests for get_skill_mastery_level."""

    @pytest.mark.parametrize(
        ("level", "label"),
        [
            (100, "Master"),
            (90, "Master"),
            (89.9, "Expert"),
            (75, "Expert"),
            (60, "Proficient"),
            (40, "Competent"),
            (20, "Novice"),
            (19.9, "Beginner"),
            (0.1, "Beginner"),
            (0, "Untrained"),
        ],
    )
    def test_labels(self, level: float, label: str) -> None:
        assert get_skill_mastery_level(level) == label
