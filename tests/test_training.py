"""Tests for the training formula engine (paddock.engine.training)."""

from __future__ import annotations

import logging

import pytest

from paddock.engine.breeding import create_foundation_horse
from paddock.engine.training import (
    apply_training,
    calculate_session_value,
    calculate_stat_gains,
    duration_scaling,
    generate_training_message,
    get_mood_modifier,
    injury_chance,
    prerequisite_penalty,
    stat_deficiency_penalty,
    trainability,
)
from paddock.model.genetics import StatName
from paddock.model.horse import Gender
from paddock.model.mental import Mood, Personality
from paddock.model.session import SatisfactionGain, Trainer
from paddock.model.skill import SkillCategory, SkillDefinition
from paddock.rng import SeededRandom
from paddock.skills.catalog import get_skill
from tests.conftest import ScriptedRandom, build_horse, uniform_genes


def skill(skill_id: str) -> SkillDefinition:
    definition = get_skill(skill_id)
    assert definition is not None
    return definition


class TestPenalties:
    """Tests for the prerequisite and stat deficiency penalties."""

    def test_no_prerequisites(self) -> None:
        assert prerequisite_penalty(build_horse(), skill("haltering")) == 0

    def test_missing_points(self) -> None:
        assert prerequisite_penalty(build_horse(), skill("leading")) == pytest.approx(2.5)

    def test_prerequisite_penalty_capped(self) -> None:
        assert prerequisite_penalty(build_horse(), skill("tying")) == 5.0

    def test_any_of_uses_closest_option(self) -> None:
        horse = build_horse(skills={"haltering": 25, "standing": 20})
        assert prerequisite_penalty(horse, skill("bathing")) == pytest.approx(1.0)

    def test_met_prerequisites(self) -> None:
        horse = build_horse(skills={"haltering": 30})
        assert prerequisite_penalty(horse, skill("leading")) == 0

    def test_stat_deficiency_capped(self) -> None:
        assert stat_deficiency_penalty(build_horse(), skill("jumping")) == 5.0

    def test_stat_deficiency_partial(self) -> None:
        assert stat_deficiency_penalty(
            build_horse(), skill("walk_under_saddle")
        ) == pytest.approx(1.75)
        horse = build_horse(training={StatName.BALANCE: 0.1})
        assert stat_deficiency_penalty(horse, skill("walk_under_saddle")) == pytest.approx(1.25)


class TestFormulaTerms:
    """Tests for the individual formula terms."""

    def test_trainability_needs_unlocked_intelligence(self) -> None:
        horse = build_horse(genes=uniform_genes(50, intelligence=(80, 60)))
        assert trainability(horse) == 0
        trained = build_horse(
            genes=uniform_genes(50, intelligence=(80, 60)),
            training={StatName.INTELLIGENCE: 0.5},
        )
        assert trainability(trained) == pytest.approx(35.0)

    @pytest.mark.parametrize(
        ("duration", "expected"),
        [
            (5, (0.5, 1.25)),
            (15, (1.0, 2.5)),
            (30, (1.75, 5.0)),
            (60, (3.0, 10.0)),
            (45, (3.0, 2.5)),
        ],
    )
    def test_duration_scaling(self, duration: int, expected: tuple[float, float]) -> None:
        assert duration_scaling(duration) == expected

    @pytest.mark.parametrize("duration", [0, -15])
    def test_duration_scaling_rejects_non_positive(self, duration: int) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            duration_scaling(duration)

    @pytest.mark.parametrize(
        ("mood", "is_physical", "skill_id", "expected"),
        [
            (Mood.PENT_UP, True, "lunging_free", 1.0),
            (Mood.PENT_UP, False, "haltering", 0.3),
            (Mood.ENERGETIC, True, "lunging_free", 1.25),
            (Mood.ENERGETIC, False, "haltering", 0.9),
            (Mood.CONFUSED, False, "haltering", 1.0),
            (Mood.CONFUSED, False, "leading", 0.8),
            (Mood.INTRIGUED, False, "haltering", 1.3),
            (Mood.INTRIGUED, False, "leading", 1.0),
            (Mood.SHUT_DOWN, False, "haltering", 0.0),
            (Mood.FOCUSED, False, "haltering", 1.4),
            (Mood.TIRED, False, "haltering", 0.6),
        ],
    )
    def test_mood_modifier(
        self, mood: Mood, is_physical: bool, skill_id: str, expected: float
    ) -> None:
        rng = ScriptedRandom([])
        assert get_mood_modifier(mood, is_physical, skill_id, "haltering", rng) == expected

    def test_sassy_mood_modifier_rolls(self) -> None:
        modifier = get_mood_modifier(Mood.SASSY, False, "haltering", None, ScriptedRandom([0.5]))
        assert modifier == pytest.approx(1.2)


class TestInjuryChance:
    """Tests for injury_chance."""

    def test_physical_one_year_under(self) -> None:
        horse = build_horse(age=2)
        assert injury_chance(horse, skill("walk_under_saddle")) == pytest.approx(0.5)

    def test_capped(self) -> None:
        horse = build_horse(age=0)
        assert injury_chance(horse, skill("jumping")) == pytest.approx(0.8)

    def test_non_physical_rate(self) -> None:
        groundwork = SkillDefinition(
            id="long_reining",
            name="Long Reining",
            category=SkillCategory.GROUND,
            base_training_value=5,
            minimum_age=3,
        )
        assert injury_chance(build_horse(age=2), groundwork) == pytest.approx(0.25)

    def test_old_enough(self) -> None:
        assert injury_chance(build_horse(age=3), skill("walk_under_saddle")) == 0
        assert injury_chance(build_horse(age=1), skill("haltering")) == 0


class TestSessionValue:
    """Tests for calculate_session_value."""

    def test_fresh_horse_baseline(self, trainer: Trainer) -> None:
        """Untrained intelligence leaves only the bond term: SV = 10 * 0.01."""
        breakdown = calculate_session_value(
            build_horse(), skill("haltering"), trainer, 15, ScriptedRandom([])
        )
        assert breakdown.btv == 10
        assert breakdown.ctv == pytest.approx(10.0)
        assert breakdown.scaled_trainability == pytest.approx(0.01)
        assert breakdown.session_value == pytest.approx(0.1)

    def test_capped_by_duration(self, trainer: Trainer) -> None:
        horse = build_horse(
            personality=Personality.WILLING, training={StatName.INTELLIGENCE: 0.5}
        )
        breakdown = calculate_session_value(
            horse, skill("haltering"), trainer, 15, ScriptedRandom([])
        )
        assert breakdown.raw_value == pytest.approx(3.0)
        assert breakdown.session_value == 2.5

    def test_longer_session_scales(self, trainer: Trainer) -> None:
        breakdown = calculate_session_value(
            build_horse(), skill("haltering"), trainer, 30, ScriptedRandom([])
        )
        assert breakdown.session_value == pytest.approx(0.175)

    def test_diminishing_returns(self, trainer: Trainer) -> None:
        horse = build_horse(skills={"haltering": 75})
        breakdown = calculate_session_value(
            horse, skill("haltering"), trainer, 15, ScriptedRandom([])
        )
        assert breakdown.diminishing_factor == pytest.approx(0.5)
        assert breakdown.session_value == pytest.approx(0.05)

    def test_trainer_skill(self) -> None:
        master = Trainer(id="t2", name="Max", skill_level=100)
        breakdown = calculate_session_value(
            build_horse(), skill("haltering"), master, 15, ScriptedRandom([])
        )
        assert breakdown.tsm == 1.25
        assert breakdown.session_value == pytest.approx(0.125)

    def test_penalties_make_session_negative(self, trainer: Trainer) -> None:
        horse = build_horse(skills={"jumping": 10})
        breakdown = calculate_session_value(
            horse, skill("jumping"), trainer, 15, ScriptedRandom([])
        )
        assert breakdown.ctv == pytest.approx(-7.0)
        assert breakdown.session_value == pytest.approx(-0.07 * (1 - 10 / 150))

    def test_floor(self, trainer: Trainer) -> None:
        horse = build_horse(
            personality=Personality.WILLING, training={StatName.INTELLIGENCE: 1.0}
        )
        breakdown = calculate_session_value(
            horse, skill("jumping"), trainer, 60, ScriptedRandom([])
        )
        assert breakdown.raw_value < -2.5
        assert breakdown.session_value == -2.5

    def test_exhausted_horse_gains_nothing(self, trainer: Trainer) -> None:
        breakdown = calculate_session_value(
            build_horse(fatigue=100), skill("haltering"), trainer, 15, ScriptedRandom([])
        )
        assert breakdown.session_value == 0

    def test_bold_rolls_personality(self, trainer: Trainer) -> None:
        horse = build_horse(personality=Personality.BOLD)
        rng = ScriptedRandom([0.5])
        breakdown = calculate_session_value(horse, skill("haltering"), trainer, 15, rng)
        assert breakdown.pv == pytest.approx(2.5)
        assert breakdown.session_value == pytest.approx(0.35)

    def test_logs_terms(self, trainer: Trainer, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="paddock.engine.training"):
            calculate_session_value(
                build_horse(), skill("haltering"), trainer, 15, ScriptedRandom([])
            )
        record = caplog.records[-1]
        assert "SV=0.1000" in record.getMessage()
        assert record.__dict__["horse_id"] == "h1"
        assert record.__dict__["skill_id"] == "haltering"


class TestStatGains:
    """Tests for calculate_stat_gains."""

    def test_contributions_scale_with_gain(self) -> None:
        gains = calculate_stat_gains(build_horse(), skill("haltering"), 0.1)
        assert gains[StatName.BRAVERY] == pytest.approx(0.0005)
        assert gains[StatName.STOLIDITY] == pytest.approx(0.001)
        assert gains[StatName.INTELLIGENCE] == pytest.approx(0.0005)

    def test_room_shrinks_gain(self) -> None:
        horse = build_horse(training={StatName.STOLIDITY: 0.5})
        gains = calculate_stat_gains(horse, skill("haltering"), 1.0)
        assert gains[StatName.STOLIDITY] == pytest.approx(0.005)

    def test_fully_trained_stat_omitted(self) -> None:
        horse = build_horse(training={StatName.STOLIDITY: 1.0})
        gains = calculate_stat_gains(horse, skill("haltering"), 1.0)
        assert StatName.STOLIDITY not in gains
        assert StatName.BRAVERY in gains

    def test_no_gain_no_stats(self) -> None:
        assert calculate_stat_gains(build_horse(), skill("haltering"), 0.0) == {}
        assert calculate_stat_gains(build_horse(), skill("haltering"), -0.5) == {}


class TestTrainingMessage:
    """Tests for generate_training_message."""

    def test_injury(self) -> None:
        message = generate_training_message(
            "Comet", "Jumping", False, 0.0, 15, Personality.BOLD, injured=True
        )
        assert message == (
            "Comet sustained an injury during training. "
            "They may be too young for Jumping training."
        )

    @pytest.mark.parametrize(
        ("personality", "expected"),
        [
            (
                Personality.STUBBORN,
                "Comet stubbornly refused to cooperate during Haltering training.",
            ),
            (Personality.TIMID, "Comet was too anxious to make progress in Haltering."),
            (Personality.BOLD, "Comet struggled with Haltering training today."),
        ],
    )
    def test_failure(self, personality: Personality, expected: str) -> None:
        message = generate_training_message("Comet", "Haltering", False, 0.0, 15, personality)
        assert message == expected

    def test_negative_gain_reads_as_failure(self) -> None:
        message = generate_training_message(
            "Comet", "Haltering", True, -0.2, 15, Personality.INDIFFERENT
        )
        assert message == "Comet struggled with Haltering training today."

    @pytest.mark.parametrize(
        ("personality", "expected"),
        [
            (
                Personality.WILLING,
                "Comet eagerly worked on Haltering and made excellent progress!",
            ),
            (Personality.BOLD, "Comet performed exceptionally well during Haltering training!"),
        ],
    )
    def test_excellent_rate(self, personality: Personality, expected: str) -> None:
        assert generate_training_message("Comet", "Haltering", True, 2.0, 15, personality) == (
            expected
        )

    def test_good_rate_is_per_fifteen_minutes(self) -> None:
        """2.0 over 30 minutes is a rate of 1.0."""
        engaged = generate_training_message(
            "Comet", "Haltering", True, 2.0, 30, Personality.PERSONABLE
        )
        plain = generate_training_message(
            "Comet", "Haltering", True, 2.0, 30, Personality.INDIFFERENT
        )
        assert engaged == "Comet was engaged and made good progress with Haltering."
        assert plain == "Comet made good progress in Haltering today."

    def test_some_progress(self) -> None:
        message = generate_training_message(
            "Comet", "Haltering", True, 0.1, 15, Personality.CURIOUS
        )
        assert message == "Comet made some progress with Haltering."


class TestApplyTraining:
    """Tests for apply_training."""

    def test_unknown_skill(self, trainer: Trainer, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            result = apply_training(build_horse(), "levitation", 15, trainer, ScriptedRandom([]))
        assert result.success is False
        assert result.skill_gained == 0
        assert result.stats_gained == {}
        assert result.fatigue_gained == 0
        assert result.mood_changed is False
        assert result.message == "Skill 'levitation' not found."
        assert "levitation" in caplog.text

    @pytest.mark.parametrize("duration", [0, -15])
    def test_non_positive_duration(self, trainer: Trainer, duration: int) -> None:
        """Rejected before any draw, so fatigue and satisfaction never run backwards."""
        with pytest.raises(ValueError, match="must be positive"):
            apply_training(build_horse(), "haltering", duration, trainer, ScriptedRandom([]))

    def test_fresh_haltering_session(self, trainer: Trainer) -> None:
        rng = ScriptedRandom([0.5])
        result = apply_training(build_horse(), "haltering", 15, trainer, rng)
        assert result.success is True
        assert result.skill_gained == pytest.approx(0.1)
        assert result.session_value == pytest.approx(0.1)
        assert result.stats_gained == {
            StatName.BRAVERY: pytest.approx(0.0005),
            StatName.STOLIDITY: pytest.approx(0.001),
            StatName.INTELLIGENCE: pytest.approx(0.0005),
        }
        assert result.fatigue_gained == pytest.approx(3.0)
        assert result.mood_changed is False
        assert result.new_mood is Mood.CALM
        assert result.message == "Comet made some progress with Haltering."
        assert result.satisfaction_gained == SatisfactionGain(8, 23, 8)
        assert result.injured is False
        assert rng.remaining == 0

    def test_horse_not_modified(self, trainer: Trainer) -> None:
        horse = build_horse()
        apply_training(horse, "haltering", 15, trainer, ScriptedRandom([0.5]))
        assert horse.skill_level("haltering") == 0
        assert horse.mental_state.fatigue == 0

    def test_confusion(self, trainer: Trainer) -> None:
        result = apply_training(build_horse(), "haltering", 15, trainer, ScriptedRandom([0.001]))
        assert result.mood_changed is True
        assert result.new_mood is Mood.CONFUSED

    def test_energetic_physical_session_focuses(self, trainer: Trainer) -> None:
        horse = build_horse(mood=Mood.ENERGETIC)
        result = apply_training(horse, "lunging_free", 15, trainer, ScriptedRandom([0.5]))
        assert result.new_mood is Mood.FOCUSED
        assert result.mood_changed is True
        assert result.fatigue_gained == pytest.approx(7.5)
        assert result.satisfaction_gained.exercise == 30

    def test_care_session_rests(self, trainer: Trainer) -> None:
        horse = build_horse(fatigue=40)
        result = apply_training(horse, "brushing", 15, trainer, ScriptedRandom([0.5]))
        assert result.fatigue_gained == pytest.approx(-7.5)

    def test_bold_draw_precedes_confusion(self, trainer: Trainer) -> None:
        horse = build_horse(personality=Personality.BOLD)
        rng = ScriptedRandom([0.5, 0.5])
        result = apply_training(horse, "haltering", 15, trainer, rng)
        assert result.session_value == pytest.approx(0.35)
        assert rng.remaining == 0

    def test_injury_below_minimum_age(self, trainer: Trainer) -> None:
        horse = build_horse(age=2)
        rng = ScriptedRandom([0.1, 0.5])
        result = apply_training(horse, "walk_under_saddle", 15, trainer, rng)
        assert result.injured is True
        assert result.success is False
        assert result.skill_gained == 0
        assert result.stats_gained == {}
        assert result.fatigue_gained == pytest.approx(7.5)
        assert result.message == (
            "Comet sustained an injury during training. "
            "They may be too young for Walk Under Saddle training."
        )

    def test_no_injury_roll_when_old_enough(self, trainer: Trainer) -> None:
        rng = ScriptedRandom([0.5])
        apply_training(build_horse(age=3), "walk_under_saddle", 15, trainer, rng)
        assert rng.remaining == 0

    def test_negative_session_loses_skill(self, trainer: Trainer) -> None:
        horse = build_horse(skills={"jumping": 10})
        result = apply_training(horse, "jumping", 15, trainer, ScriptedRandom([0.5]))
        assert result.success is False
        assert result.skill_gained == pytest.approx(-0.07 * (1 - 10 / 150))
        assert result.stats_gained == {}
        assert result.message == "Comet struggled with Jumping training today."

    def test_skill_never_below_zero(self, trainer: Trainer) -> None:
        result = apply_training(build_horse(), "jumping", 15, trainer, ScriptedRandom([0.5]))
        assert result.skill_gained == 0

    def test_foundation_horse_session(self, trainer: Trainer) -> None:
        rng = SeededRandom(12)
        horse = create_foundation_horse("Starlight", Gender.MARE, rng=rng)
        result = apply_training(horse, "haltering", 15, trainer, rng)
        assert result.session_value > 0
        assert result.success is (not result.injured)
        assert 0 < result.skill_gained <= 2.5
        assert result.message.startswith("Starlight")
