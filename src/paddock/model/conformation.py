"""Conformation genetics: ten multi-allele body-structure genes.

Each gene carries a fixed number of alleles drawn from a three-letter
alphabet specific to that gene. Foundation horses only carry it on request;
foals inherit it when both parents carry it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields

from paddock.rng import RandomSource, choice, resolve


@dataclass(frozen=True)
class GeneLayout:
    allele_count: int
    alphabet: tuple[str, ...]


GENE_LAYOUT: dict[str, GeneLayout] = {
    "shoulder_slope": GeneLayout(8, ("i", "m", "u")),
    "shoulder_angle": GeneLayout(8, ("c", "m", "o")),
    "humerus_length": GeneLayout(6, ("s", "m", "l")),
    "femur_length": GeneLayout(2, ("s", "m", "l")),
    "tibia_length": GeneLayout(2, ("s", "m", "l")),
    "wither_height": GeneLayout(4, ("l", "m", "h")),
    "neck_length": GeneLayout(4, ("s", "m", "l")),
    "croup_angle": GeneLayout(8, ("f", "m", "s")),
    "pastern_angle": GeneLayout(8, ("i", "m", "u")),
    "chest_width": GeneLayout(4, ("n", "m", "w")),
}

# Genes inherited one allele per parent rather than by random halves.
SIMPLE_GENES: frozenset[str] = frozenset(
    name for name, layout in GENE_LAYOUT.items() if layout.allele_count == 2
)


@dataclass(frozen=True)
class ConformationGenetics:
    """Body-structure genotype. Immutable after birth."""

    shoulder_slope: tuple[str, ...]
    shoulder_angle: tuple[str, ...]
    humerus_length: tuple[str, ...]
    femur_length: tuple[str, ...]
    tibia_length: tuple[str, ...]
    wither_height: tuple[str, ...]
    neck_length: tuple[str, ...]
    croup_angle: tuple[str, ...]
    pastern_angle: tuple[str, ...]
    chest_width: tuple[str, ...]

    def __post_init__(self) -> None:
        for name, alleles in self.genes():
            layout = GENE_LAYOUT[name]
            if len(alleles) != layout.allele_count:
                raise ValueError(
                    f"{name} needs {layout.allele_count} alleles, got {len(alleles)}"
                )
            unknown = [a for a in alleles if a not in layout.alphabet]
            if unknown:
                raise ValueError(f"{name} has unknown alleles: {unknown}")

    def genes(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        for f in fields(self):
            yield f.name, getattr(self, f.name)

    def to_dict(self) -> dict[str, list[str]]:
        return {name: list(alleles) for name, alleles in self.genes()}


def generate_random_conformation_genetics(
    rng: RandomSource | None = None,
) -> ConformationGenetics:
    """Random genotype for a foundation horse, each allele drawn uniformly."""
    source = resolve(rng)
    genes = {
        name: tuple(choice(layout.alphabet, source) for _ in range(layout.allele_count))
        for name, layout in GENE_LAYOUT.items()
    }
    return ConformationGenetics(**genes)
