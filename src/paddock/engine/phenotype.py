"""Phenotype calculator: effective stats from genes, training and age."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from paddock.model.genetics import ALL_STATS, StatGeneMap, StatName, star_rating


@dataclass(frozen=True)
class EffectiveStat:
    potential: float
    trained: float
    effective: float
    stars: int


@dataclass(frozen=True)
class StatExtreme:
    stat: StatName
    potential: float


def get_age_modifier(age: float) -> float:
    """Developing under 5, prime 5-12, declining to 0.6 after 20."""
    if age < 2:
        return 0.5
    if age < 5:
        return 0.7 + (age - 2) * 0.1
    if age <= 12:
        return 1.0
    if age <= 20:
        return 1.0 - (age - 12) * 0.05
    return 0.6


def calculate_phenotype(
    genes: StatGeneMap,
    training: Mapping[StatName, float],
    age: float | None = None,
) -> dict[StatName, EffectiveStat]:
    """Per-stat potential, training, effective value and stars.

    Without an age the modifier is 1.0.
    """
    age_modifier = 1.0 if age is None else get_age_modifier(age)
    stats: dict[StatName, EffectiveStat] = {}
    for stat, pair in genes.items():
        potential = pair.potential
        trained = training.get(stat, 0.0)
        stats[stat] = EffectiveStat(
            potential=potential,
            trained=trained,
            effective=potential * trained * age_modifier,
            stars=star_rating(potential),
        )
    return stats


def calculate_overall_quality(genes: StatGeneMap) -> float:
    """Mean potential across all stats (0-100)."""
    potentials = genes.potentials()
    return sum(potentials.values()) / len(potentials)


def calculate_overall_training(training: Mapping[StatName, float]) -> float:
    """Mean training across all stats, as a percentage (0-100)."""
    return sum(training.get(stat, 0.0) for stat in ALL_STATS) / len(ALL_STATS) * 100


def get_strongest_stat(genes: StatGeneMap) -> StatExtreme:
    """Highest potential; ties go to the earlier stat."""
    strongest = StatExtreme(StatName.STRENGTH, 0.0)
    for stat, pair in genes.items():
        if pair.potential > strongest.potential:
            strongest = StatExtreme(stat, pair.potential)
    return strongest


def get_weakest_stat(genes: StatGeneMap) -> StatExtreme:
    """Lowest potential; ties go to the earlier stat."""
    weakest = StatExtreme(StatName.STRENGTH, 100.0)
    for stat, pair in genes.items():
        if pair.potential < weakest.potential:
            weakest = StatExtreme(stat, pair.potential)
    return weakest
