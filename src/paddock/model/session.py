"""Training session value types: trainer, durations, results, validations."""

from __future__ import annotations

from dataclasses import dataclass, field

from paddock.model.genetics import StatName
from paddock.model.mental import Mood
from paddock.model.skill import AnyOfPrerequisite, SkillPrerequisite, StatRequirement

# Session lengths offered to players, in minutes.
SESSION_DURATIONS: tuple[int, ...] = (5, 15, 30, 60)


def check_duration(duration: int) -> int:
    """Reject a zero or negative session length. Lengths outside SESSION_DURATIONS pass."""
    if duration <= 0:
        raise ValueError(f"Session duration must be positive, got {duration!r}")
    return duration


@dataclass(frozen=True)
class Trainer:
    """Player or NPC running a session. ``skill_level`` is 0-100."""

    id: str
    name: str
    skill_level: float = 50.0

    def __post_init__(self) -> None:
        if not 0 <= self.skill_level <= 100:
            raise ValueError(f"Trainer skill {self.skill_level!r} outside [0, 100]")


def trainer_skill_modifier(trainer: Trainer) -> float:
    """TSM: 0.75 for a novice trainer up to 1.25 for a master."""
    return 0.75 + (trainer.skill_level / 100) * 0.5


@dataclass(frozen=True)
class SatisfactionGain:
    exercise: int = 0
    stimulation: int = 0
    socialization: int = 0


@dataclass(frozen=True)
class TrainingResult:
    """Outcome of one session. Applying it to a horse is the caller's job.

    ``skill_gained`` may be negative after a bad session. ``stats_gained``
    only lists stats that actually moved.
    """

    success: bool
    skill_gained: float
    stats_gained: dict[StatName, float] = field(default_factory=dict)
    fatigue_gained: float = 0.0
    mood_changed: bool = False
    new_mood: Mood | None = None
    message: str = ""
    satisfaction_gained: SatisfactionGain = SatisfactionGain()
    injured: bool = False
    session_value: float = 0.0


@dataclass(frozen=True)
class TrainingValidation:
    can_train: bool
    reason: str | None = None
    missing_prerequisites: tuple[SkillPrerequisite | AnyOfPrerequisite, ...] = ()
    missing_stats: tuple[StatRequirement, ...] = ()
