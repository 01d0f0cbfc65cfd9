"""Stat genetics: alleles, gene pairs and the 14-stat gene map."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum


class StatName(StrEnum):
    """The fourteen heritable stats, physical first."""

    # Physical
    STRENGTH = "strength"
    SPEED = "speed"
    AGILITY = "agility"
    BALANCE = "balance"
    STAMINA = "stamina"
    MOVEMENT = "movement"
    TEMPO = "tempo"

    # Mental
    BRAVERY = "bravery"
    COMPETITIVENESS = "competitiveness"
    FLEXIBILITY = "flexibility"
    INTELLIGENCE = "intelligence"
    LOYALTY = "loyalty"
    SOCIABILITY = "sociability"
    STOLIDITY = "stolidity"


ALL_STATS: tuple[StatName, ...] = tuple(StatName)
PHYSICAL_STATS: tuple[StatName, ...] = ALL_STATS[:7]
MENTAL_STATS: tuple[StatName, ...] = ALL_STATS[7:]

MIN_ALLELE = 0.0
MAX_ALLELE = 100.0


def is_valid_allele(value: float) -> bool:
    return MIN_ALLELE <= value <= MAX_ALLELE


def potential(pair: GenePair) -> float:
    """Genetic ceiling of a stat: the mean of its two alleles."""
    return (pair.first + pair.second) / 2


def star_rating(value: float) -> int:
    """Map a potential onto 1-5 stars.

    Thresholds: >=90 elite (5), >=75 excellent (4), >=60 good (3),
    >=45 average (2), otherwise poor (1).
    """
    if value >= 90:
        return 5
    if value >= 75:
        return 4
    if value >= 60:
        return 3
    if value >= 45:
        return 2
    return 1


@dataclass(frozen=True)
class GenePair:
    """Two alleles for one stat, sire's first."""

    first: float
    second: float

    def __post_init__(self) -> None:
        for allele in (self.first, self.second):
            if not is_valid_allele(allele):
                raise ValueError(f"Allele {allele!r} outside [0, 100]")

    @property
    def potential(self) -> float:
        return potential(self)

    def __iter__(self) -> Iterator[float]:
        yield self.first
        yield self.second

    def as_tuple(self) -> tuple[float, float]:
        return (self.first, self.second)


@dataclass(frozen=True)
class StatGeneMap:
    """Complete stat genome of a horse. Created at birth, never mutated."""

    strength: GenePair
    speed: GenePair
    agility: GenePair
    balance: GenePair
    stamina: GenePair
    movement: GenePair
    tempo: GenePair
    bravery: GenePair
    competitiveness: GenePair
    flexibility: GenePair
    intelligence: GenePair
    loyalty: GenePair
    sociability: GenePair
    stolidity: GenePair

    def __getitem__(self, stat: StatName | str) -> GenePair:
        pair: GenePair = getattr(self, StatName(stat).value)
        return pair

    def items(self) -> Iterator[tuple[StatName, GenePair]]:
        for stat in ALL_STATS:
            yield stat, self[stat]

    def potentials(self) -> dict[StatName, float]:
        return {stat: pair.potential for stat, pair in self.items()}

    def to_dict(self) -> dict[str, list[float]]:
        return {stat.value: list(pair) for stat, pair in self.items()}

    @classmethod
    def from_pairs(
        cls, pairs: Mapping[str, GenePair | tuple[float, float] | list[float]]
    ) -> StatGeneMap:
        """Build a map from any stat-keyed mapping of pairs.

        Raises:
            ValueError: If a stat is missing or a pair is malformed.
        """
        missing = [stat.value for stat in ALL_STATS if stat.value not in pairs]
        if missing:
            raise ValueError(f"Gene map missing stats: {', '.join(missing)}")

        values: dict[str, GenePair] = {}
        for stat in ALL_STATS:
            raw = pairs[stat.value]
            if isinstance(raw, GenePair):
                values[stat.value] = raw
                continue
            if len(raw) != 2:
                raise ValueError(f"Gene pair for {stat.value} must have exactly two alleles")
            values[stat.value] = GenePair(float(raw[0]), float(raw[1]))
        return cls(**values)


def validate_gene_map(genes: Mapping[str, object]) -> bool:
    """Check a loosely-typed gene mapping has every stat with valid alleles."""
    for stat in ALL_STATS:
        raw = genes.get(stat.value)
        if isinstance(raw, GenePair):
            continue
        if not isinstance(raw, (list, tuple)) or len(raw) != 2:
            return False
        for allele in raw:
            if not isinstance(allele, (int, float)) or not is_valid_allele(allele):
                return False
    return True

