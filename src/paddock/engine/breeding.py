"""Breeding engine: genetic inheritance, personality and foal creation.

Stat alleles are inherited one per parent with a small chance of mutation.
Visual loci follow the same one-per-parent pattern without mutation.
Multi-allele conformation genes re-segregate: a random half of each parent's
alleles is taken and the halves are concatenated.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TypeVar

from paddock.config import get_settings
from paddock.engine.numeric import clamp, round_half_up
from paddock.model.conformation import (
    GENE_LAYOUT,
    SIMPLE_GENES,
    ConformationGenetics,
    generate_random_conformation_genetics,
)
from paddock.model.genetics import ALL_STATS, GenePair, StatGeneMap
from paddock.model.horse import Gender, Horse, ParentInfo
from paddock.model.mental import (
    PERSONALITY_ORDER,
    MentalState,
    Mood,
    Personality,
    Satisfaction,
    personality_index,
)
from paddock.model.visual import VisualGenetics, generate_random_visual_genetics
from paddock.rng import RandomSource, choice, randint, resolve, shuffled

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MUTATION_CHANCE = 0.05
DEFAULT_MUTATION_AMOUNT = 5.0
PERSONALITY_VARIATION = 1.5
MIN_BREEDING_AGE = 3
FOUNDATION_AGE = 3


class BreedingError(Exception):
    """Raised when breeding is attempted on an ineligible pair."""

    pass


@dataclass(frozen=True)
class BreedingValidation:
    can_breed: bool
    reason: str | None = None


def generate_foundation_genes(
    min_potential: int = 40,
    max_potential: int = 80,
    rng: RandomSource | None = None,
) -> StatGeneMap:
    """Random integer alleles in [min_potential, max_potential] for every stat.

    Raises:
        ValueError: If the bounds are outside [0, 100] or crossed.
    """
    if not 0 <= min_potential <= max_potential <= 100:
        msg = f"Invalid potential range [{min_potential}, {max_potential}]"
        raise ValueError(msg)

    source = resolve(rng)
    pairs = {
        stat.value: GenePair(
            randint(min_potential, max_potential, source),
            randint(min_potential, max_potential, source),
        )
        for stat in ALL_STATS
    }
    return StatGeneMap.from_pairs(pairs)


def _pick(first: T, second: T, source: RandomSource) -> T:
    return first if source.random() < 0.5 else second


def _mutate(allele: float, chance: float, amount: float, source: RandomSource) -> float:
    if source.random() >= chance:
        return allele
    delta = (source.random() * 2 - 1) * amount
    return clamp(allele + delta, 0.0, 100.0)


def breed_stat_genes(
    sire_genes: StatGeneMap,
    dam_genes: StatGeneMap,
    mutation_chance: float = DEFAULT_MUTATION_CHANCE,
    mutation_amount: float = DEFAULT_MUTATION_AMOUNT,
    rng: RandomSource | None = None,
) -> StatGeneMap:
    """Inherit one allele per parent for each stat, sire's allele first.

    Per stat the draws are: sire pick, dam pick, then each allele's mutation
    roll (and delta when it fires).
    """
    source = resolve(rng)
    pairs: dict[str, GenePair] = {}
    for stat in ALL_STATS:
        sire_pair, dam_pair = sire_genes[stat], dam_genes[stat]
        sire_allele = _pick(sire_pair.first, sire_pair.second, source)
        dam_allele = _pick(dam_pair.first, dam_pair.second, source)
        pairs[stat.value] = GenePair(
            _mutate(sire_allele, mutation_chance, mutation_amount, source),
            _mutate(dam_allele, mutation_chance, mutation_amount, source),
        )
    return StatGeneMap.from_pairs(pairs)


def _inherit_pair(
    sire: tuple[str, str], dam: tuple[str, str], source: RandomSource
) -> tuple[str, str]:
    return (_pick(sire[0], sire[1], source), _pick(dam[0], dam[1], source))


def breed_visual_genetics(
    sire: VisualGenetics,
    dam: VisualGenetics,
    rng: RandomSource | None = None,
) -> VisualGenetics:
    source = resolve(rng)
    return VisualGenetics(
        extension=_inherit_pair(sire.extension, dam.extension, source),
        agouti=_inherit_pair(sire.agouti, dam.agouti, source),
        gray=_inherit_pair(sire.gray, dam.gray, source),
    )


def _random_half(alleles: tuple[str, ...], source: RandomSource) -> list[str]:
    half = len(alleles) // 2
    return shuffled(alleles, source)[:half]


def breed_conformation_genetics(
    sire: ConformationGenetics,
    dam: ConformationGenetics,
    rng: RandomSource | None = None,
) -> ConformationGenetics:
    """Two-allele genes take one allele per parent; the rest take random halves."""
    source = resolve(rng)
    genes: dict[str, tuple[str, ...]] = {}
    for name in GENE_LAYOUT:
        sire_alleles: tuple[str, ...] = getattr(sire, name)
        dam_alleles: tuple[str, ...] = getattr(dam, name)
        if name in SIMPLE_GENES:
            genes[name] = (
                _pick(sire_alleles[0], sire_alleles[1], source),
                _pick(dam_alleles[0], dam_alleles[1], source),
            )
        else:
            genes[name] = tuple(
                _random_half(sire_alleles, source) + _random_half(dam_alleles, source)
            )
    return ConformationGenetics(**genes)


def inherit_personality(
    sire: Personality,
    dam: Personality,
    rng: RandomSource | None = None,
) -> Personality:
    """Average the parents' ordinals, jitter by up to 1.5 and round."""
    average = (personality_index(sire) + personality_index(dam)) / 2
    variation = (resolve(rng).random() * 2 - 1) * PERSONALITY_VARIATION
    index = int(clamp(round_half_up(average + variation), 0, len(PERSONALITY_ORDER) - 1))
    return PERSONALITY_ORDER[index]


def generate_random_personality(rng: RandomSource | None = None) -> Personality:
    return choice(PERSONALITY_ORDER, rng)


def validate_breeding(
    sire_age: int,
    dam_age: int,
    sire_gender: Gender | str,
    dam_gender: Gender | str,
) -> BreedingValidation:
    """Check eligibility. Only the first failing rule is reported."""
    if sire_gender != Gender.STALLION:
        return BreedingValidation(can_breed=False, reason="Sire must be a stallion")
    if dam_gender != Gender.MARE:
        return BreedingValidation(can_breed=False, reason="Dam must be a mare")
    if sire_age < MIN_BREEDING_AGE:
        return BreedingValidation(can_breed=False, reason="Sire must be at least 3 years old")
    if dam_age < MIN_BREEDING_AGE:
        return BreedingValidation(can_breed=False, reason="Dam must be at least 3 years old")
    return BreedingValidation(can_breed=True)


def _new_id() -> str:
    return uuid.uuid4().hex


def create_foundation_horse(
    name: str,
    gender: Gender | str,
    *,
    horse_id: str | None = None,
    min_potential: int | None = None,
    max_potential: int | None = None,
    with_conformation: bool = False,
    owner_id: str | None = None,
    birth_date: datetime | None = None,
    rng: RandomSource | None = None,
) -> Horse:
    """Create a generation-0 starter horse.

    Starter horses are three years old, Calm, pastured and fully fed.
    Potential bounds default to the configured foundation range.
    """
    if min_potential is None or max_potential is None:
        settings = get_settings()
        if min_potential is None:
            min_potential = settings.foundation_min_potential
        if max_potential is None:
            max_potential = settings.foundation_max_potential

    source = resolve(rng)
    genes = generate_foundation_genes(min_potential, max_potential, source)
    personality = generate_random_personality(source)
    visual = generate_random_visual_genetics(source)
    conformation = generate_random_conformation_genetics(source) if with_conformation else None

    horse = Horse(
        id=horse_id or _new_id(),
        name=name,
        age=FOUNDATION_AGE,
        gender=Gender(gender),
        genes=genes,
        mental_state=MentalState(personality=personality, mood=Mood.CALM),
        visual_genetics=visual,
        conformation=conformation,
        satisfaction=Satisfaction(),
        generation=0,
        birth_date=birth_date or datetime.now(UTC),
        owner_id=owner_id,
    )
    logger.info(
        "Created foundation horse %s (%s, %s)",
        horse.name,
        horse.gender,
        personality,
        extra={"horse_id": horse.id},
    )
    return horse


def breed_horses(
    sire: Horse,
    dam: Horse,
    foal_name: str,
    *,
    foal_id: str | None = None,
    mutation_chance: float | None = None,
    mutation_amount: float | None = None,
    owner_id: str | None = None,
    birth_date: datetime | None = None,
    rng: RandomSource | None = None,
) -> Horse:
    """Produce a newborn foal from an eligible pair.

    Eligibility is checked before any random draw.

    Raises:
        BreedingError: If :func:`validate_breeding` rejects the pair.
    """
    validation = validate_breeding(sire.age, dam.age, sire.gender, dam.gender)
    if not validation.can_breed:
        logger.info("Breeding rejected: %s", validation.reason)
        raise BreedingError(validation.reason)

    if mutation_chance is None or mutation_amount is None:
        settings = get_settings()
        if mutation_chance is None:
            mutation_chance = settings.mutation_chance
        if mutation_amount is None:
            mutation_amount = settings.mutation_amount

    source = resolve(rng)
    genes = breed_stat_genes(sire.genes, dam.genes, mutation_chance, mutation_amount, source)

    visual = None
    if sire.visual_genetics is not None and dam.visual_genetics is not None:
        visual = breed_visual_genetics(sire.visual_genetics, dam.visual_genetics, source)
    elif sire.visual_genetics is not None or dam.visual_genetics is not None:
        missing = sire if sire.visual_genetics is None else dam
        logger.info(
            "Foal %s gets no coat genotype: %s has no visual genetics",
            foal_name,
            missing.name,
            extra={"horse_id": missing.id},
        )

    conformation = None
    if sire.conformation is not None and dam.conformation is not None:
        conformation = breed_conformation_genetics(sire.conformation, dam.conformation, source)

    personality = inherit_personality(
        sire.mental_state.personality, dam.mental_state.personality, source
    )
    gender = Gender.STALLION if source.random() < 0.5 else Gender.MARE

    foal = Horse(
        id=foal_id or _new_id(),
        name=foal_name,
        age=0,
        gender=gender,
        genes=genes,
        mental_state=MentalState(personality=personality, mood=Mood.APATHETIC),
        visual_genetics=visual,
        conformation=conformation,
        satisfaction=Satisfaction(),
        sire=ParentInfo(id=sire.id, name=sire.name),
        dam=ParentInfo(id=dam.id, name=dam.name),
        generation=max(sire.generation, dam.generation) + 1,
        birth_date=birth_date or datetime.now(UTC),
        owner_id=owner_id if owner_id is not None else dam.owner_id,
    )
    logger.info(
        "Foal %s born to %s x %s (generation %d, %s, %s)",
        foal.name,
        sire.name,
        dam.name,
        foal.generation,
        foal.gender,
        personality,
        extra={"horse_id": foal.id},
    )
    return foal
