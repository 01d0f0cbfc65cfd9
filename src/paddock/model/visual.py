"""Visual genetics: coat color loci and the color calculator.

Three loci are modelled: extension (E/e), agouti (A+/A/At/a) and gray (G/g).
Base color comes from extension and agouti; any G allele turns the horse gray
over time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from paddock.rng import RandomSource, choice, resolve

EXTENSION_ALLELES: tuple[str, ...] = ("E", "e")
AGOUTI_ALLELES: tuple[str, ...] = ("A+", "A", "At", "a")
GRAY_ALLELES: tuple[str, ...] = ("G", "g")

# Foundation horses are mostly non-gray.
NON_GRAY_PROBABILITY = 0.8


class BaseColor(StrEnum):
    CHESTNUT = "chestnut"
    WILD_BAY = "wild_bay"
    BAY = "bay"
    BROWN = "brown"
    BLACK = "black"


COLOR_NAMES: dict[str, str] = {
    "chestnut": "Chestnut",
    "wild_bay": "Wild Bay",
    "bay": "Bay",
    "brown": "Brown",
    "black": "Black",
    "gray_chestnut": "Graying Chestnut",
    "gray_wild_bay": "Graying Wild Bay",
    "gray_bay": "Graying Bay",
    "gray_brown": "Graying Brown",
    "gray_black": "Graying Black",
}


def _check_pair(name: str, pair: tuple[str, str], alphabet: tuple[str, ...]) -> None:
    if len(pair) != 2:
        raise ValueError(f"{name} locus needs exactly two alleles, got {len(pair)}")
    for allele in pair:
        if allele not in alphabet:
            raise ValueError(f"Unknown {name} allele {allele!r}")


@dataclass(frozen=True)
class VisualGenetics:
    """Coat color genotype. Immutable after birth."""

    extension: tuple[str, str]
    agouti: tuple[str, str]
    gray: tuple[str, str]

    def __post_init__(self) -> None:
        _check_pair("extension", self.extension, EXTENSION_ALLELES)
        _check_pair("agouti", self.agouti, AGOUTI_ALLELES)
        _check_pair("gray", self.gray, GRAY_ALLELES)


@dataclass(frozen=True)
class ColorResult:
    base_color: BaseColor
    display_color: str
    is_graying: bool
    genetic_code: str
    shade: str = "medium"
    markings: str = "solid"


def calculate_base_color(genetics: VisualGenetics) -> BaseColor:
    """Resolve base color; agouti only matters when black pigment is present."""
    if "E" not in genetics.extension:
        return BaseColor.CHESTNUT
    if "A+" in genetics.agouti:
        return BaseColor.WILD_BAY
    if "A" in genetics.agouti:
        return BaseColor.BAY
    if "At" in genetics.agouti:
        return BaseColor.BROWN
    return BaseColor.BLACK


def is_graying(genetics: VisualGenetics) -> bool:
    return "G" in genetics.gray


def get_display_color(genetics: VisualGenetics) -> str:
    base = calculate_base_color(genetics)
    if is_graying(genetics):
        return f"gray_{base.value}"
    return base.value


def format_genetic_code(genetics: VisualGenetics) -> str:
    """E.g. ``"Ee/A+a/Gg"``."""
    return "/".join(
        "".join(pair) for pair in (genetics.extension, genetics.agouti, genetics.gray)
    )


def calculate_color(genetics: VisualGenetics) -> ColorResult:
    return ColorResult(
        base_color=calculate_base_color(genetics),
        display_color=get_display_color(genetics),
        is_graying=is_graying(genetics),
        genetic_code=format_genetic_code(genetics),
    )


def get_color_name(display_color: str) -> str:
    return COLOR_NAMES.get(display_color, display_color)


def generate_random_visual_genetics(rng: RandomSource | None = None) -> VisualGenetics:
    """Random genotype for a foundation horse."""
    source = resolve(rng)
    extension = (choice(EXTENSION_ALLELES, source), choice(EXTENSION_ALLELES, source))
    agouti = (choice(AGOUTI_ALLELES, source), choice(AGOUTI_ALLELES, source))
    gray = tuple("g" if source.random() < NON_GRAY_PROBABILITY else "G" for _ in range(2))
    return VisualGenetics(extension=extension, agouti=agouti, gray=(gray[0], gray[1]))
