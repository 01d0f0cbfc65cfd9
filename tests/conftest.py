"""Shared fixtures for the Paddock test suite."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

import pytest

from paddock.config import get_settings
from paddock.model.genetics import ALL_STATS, GenePair, StatGeneMap
from paddock.model.horse import Gender, Horse
from paddock.model.mental import MentalState, Mood, Personality
from paddock.model.session import Trainer
from paddock.rng import set_default_rng


class ScriptedRandom:
    """Random source that replays a fixed list of draws.

    Running out of draws fails the test, which also proves a code path made
    no draws at all when constructed with an empty list.
    """

    def __init__(self, values: Iterable[float] = ()) -> None:
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self.values):
            raise AssertionError(f"ScriptedRandom exhausted after {self.calls} draws")
        value = self.values[self.calls]
        self.calls += 1
        return value

    @property
    def remaining(self) -> int:
        return len(self.values) - self.calls


def uniform_genes(value: float = 50.0, **overrides: tuple[float, float]) -> StatGeneMap:
    """Gene map with every allele at ``value`` except the overridden stats."""
    pairs: dict[str, Any] = {stat.value: GenePair(value, value) for stat in ALL_STATS}
    for stat, pair in overrides.items():
        pairs[stat] = GenePair(*pair)
    return StatGeneMap.from_pairs(pairs)


def build_horse(**overrides: Any) -> Horse:
    """Four-year-old Indifferent, Calm mare with all alleles at 50."""
    personality = overrides.pop("personality", Personality.INDIFFERENT)
    mood = overrides.pop("mood", Mood.CALM)
    fatigue = overrides.pop("fatigue", 0.0)
    fields: dict[str, Any] = {
        "id": "h1",
        "name": "Comet",
        "age": 4,
        "gender": Gender.MARE,
        "genes": uniform_genes(),
        "mental_state": MentalState(personality=personality, mood=mood, fatigue=fatigue),
    }
    fields.update(overrides)
    return Horse(**fields)


@pytest.fixture(autouse=True)
def reset_global_state():
    """Isolate cached settings, the process-wide random source and logging per test."""
    get_settings.cache_clear()
    set_default_rng(None)
    yield
    get_settings.cache_clear()
    set_default_rng(None)
    # configure_logging() detaches the namespace from the root logger
    paddock_logger = logging.getLogger("paddock")
    paddock_logger.handlers.clear()
    paddock_logger.setLevel(logging.NOTSET)
    paddock_logger.propagate = True


@pytest.fixture
def make_horse() -> Callable[..., Horse]:
    """Factory for horses; keyword arguments override Horse fields.

    ``personality``, ``mood`` and ``fatigue`` are routed into the mental state.
    """
    return build_horse


@pytest.fixture
def scripted() -> type[ScriptedRandom]:
    return ScriptedRandom


@pytest.fixture
def trainer() -> Trainer:
    """Mid-level trainer (TSM = 1.0)."""
    return Trainer(id="t1", name="Sam", skill_level=50.0)
