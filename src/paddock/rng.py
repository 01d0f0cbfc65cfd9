"""Injectable random source for the simulation engine.

Every engine function that rolls dice takes an optional ``rng`` keyword. A
source only has to provide ``random() -> float`` in [0, 1); all other draws
(integers, choices, shuffles) are derived from it here, so a scripted source
with a fixed list of floats replays the engine exactly.
"""

from __future__ import annotations

import logging
import math
import random as _random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """Anything with a uniform ``random()`` method."""

    def random(self) -> float: ...


@dataclass
class SeededRandom:
    """Reproducible source backed by :class:`random.Random`.

    Attributes:
        seed: Seed value; None seeds from the OS.
    """

    seed: int | None = None
    _r: _random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._r = _random.Random(self.seed)

    def random(self) -> float:
        return self._r.random()


_default: RandomSource | None = None


def default_rng() -> RandomSource:
    """Return the process-wide source, creating it on first use.

    Seeded from ``EngineSettings.random_seed`` when that is set.
    """
    global _default
    if _default is None:
        from paddock.config import get_settings

        seed = get_settings().random_seed
        _default = SeededRandom(seed)
        logger.debug("Created default random source (seed=%s)", seed)
    return _default


def set_default_rng(source: RandomSource | None) -> None:
    """Replace the process-wide source. None resets it to lazy creation."""
    global _default
    _default = source


def resolve(rng: RandomSource | None) -> RandomSource:
    return rng if rng is not None else default_rng()


def uniform(low: float, high: float, rng: RandomSource | None = None) -> float:
    """Uniform float in [low, high)."""
    return low + resolve(rng).random() * (high - low)


def randint(low: int, high: int, rng: RandomSource | None = None) -> int:
    """Uniform integer in [low, high], both ends inclusive."""
    if high < low:
        raise ValueError(f"randint range is empty: [{low}, {high}]")
    return low + math.floor(resolve(rng).random() * (high - low + 1))


def chance(probability: float, rng: RandomSource | None = None) -> bool:
    """True with the given probability."""
    return resolve(rng).random() < probability


def choice(items: Sequence[T], rng: RandomSource | None = None) -> T:
    if not items:
        raise ValueError("cannot choose from an empty sequence")
    return items[math.floor(resolve(rng).random() * len(items))]


def shuffled(items: Sequence[T], rng: RandomSource | None = None) -> list[T]:
    """Return a shuffled copy (Fisher-Yates, walking from the end)."""
    source = resolve(rng)
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = math.floor(source.random() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result
