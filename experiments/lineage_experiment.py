#!/usr/bin/env python3
"""Lineage Experiment: selective breeding over many generations.

Starts from a foundation herd, then each generation breeds the best stallion
to the best mare, keeps the best colt and filly of the crop and repeats.
Records how overall quality and the strongest/weakest stats drift under
selection with mutation.
"""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

from paddock.engine.breeding import MIN_BREEDING_AGE, breed_horses, create_foundation_horse
from paddock.engine.phenotype import (
    calculate_overall_quality,
    get_strongest_stat,
    get_weakest_stat,
)
from paddock.model.horse import Gender, Horse
from paddock.rng import SeededRandom

# Experiment configuration
GENERATIONS = 20
FOUNDATION_HERD = 10
FOALS_PER_GENERATION = 12
MUTATION_CHANCE = 0.05
MUTATION_AMOUNT = 5.0
SEED = 42  # For reproducibility


def best_of(horses: list[Horse], gender: Gender) -> Horse | None:
    """Highest overall quality among horses of one gender."""
    candidates = [h for h in horses if h.gender == gender]
    if not candidates:
        return None
    return max(candidates, key=lambda h: calculate_overall_quality(h.genes))


def generation_stats(generation: int, crop: list[Horse]) -> dict:
    qualities = [calculate_overall_quality(h.genes) for h in crop]
    best = max(crop, key=lambda h: calculate_overall_quality(h.genes))
    return {
        "generation": generation,
        "count": len(crop),
        "mean_quality": sum(qualities) / len(qualities),
        "best_quality": max(qualities),
        "worst_quality": min(qualities),
        "best_strongest_stat": get_strongest_stat(best.genes).stat.value,
        "best_weakest_stat": get_weakest_stat(best.genes).stat.value,
    }


def run_lineage(rng: SeededRandom) -> list[dict]:
    """Run the selection loop.

    Returns:
        Per-generation statistics, generation 0 being the foundation herd.
    """
    herd = [
        create_foundation_horse(
            f"Foundation {i}",
            Gender.STALLION if i % 2 == 0 else Gender.MARE,
            horse_id=f"f{i}",
            rng=rng,
        )
        for i in range(FOUNDATION_HERD)
    ]
    history = [generation_stats(0, herd)]

    sire = best_of(herd, Gender.STALLION)
    dam = best_of(herd, Gender.MARE)
    for generation in range(1, GENERATIONS + 1):
        if sire is None or dam is None:
            print(f"Line ended at generation {generation}: no breeding pair")
            break

        crop = [
            breed_horses(
                sire,
                dam,
                f"G{generation} Foal {i}",
                foal_id=f"g{generation}-{i}",
                mutation_chance=MUTATION_CHANCE,
                mutation_amount=MUTATION_AMOUNT,
                rng=rng,
            )
            for i in range(FOALS_PER_GENERATION)
        ]
        stats = generation_stats(generation, crop)
        history.append(stats)
        print(
            f"Generation {generation:3d}: mean {stats['mean_quality']:.2f}, "
            f"best {stats['best_quality']:.2f}"
        )

        # Foals must grow up before they can breed
        grown = [replace(foal, age=MIN_BREEDING_AGE) for foal in crop]
        sire = best_of(grown, Gender.STALLION) or sire
        dam = best_of(grown, Gender.MARE) or dam

    return history


def save_results(history: list[dict], output_dir: Path) -> None:
    """Save the generation history as JSON.

    Args:
        history: Per-generation statistics.
        output_dir: Directory to save results.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    filename = output_dir / "lineage.json"
    data = {
        "config": {
            "generations": GENERATIONS,
            "foundation_herd": FOUNDATION_HERD,
            "foals_per_generation": FOALS_PER_GENERATION,
            "mutation_chance": MUTATION_CHANCE,
            "mutation_amount": MUTATION_AMOUNT,
            "seed": SEED,
        },
        "history": history,
    }
    with open(filename, "w") as f:
        json.dump(data, f, indent=2)
    print(f"Saved lineage results to {filename}")


def print_summary(history: list[dict]) -> None:
    print(f"\n{'=' * 60}")
    print("EXPERIMENT SUMMARY")
    print(f"{'=' * 60}")

    initial = history[0]["mean_quality"]
    final = history[-1]["mean_quality"]
    print(f"  Foundation mean quality: {initial:.2f}")
    print(f"  Final mean quality: {final:.2f}")
    print(f"  Change: {final - initial:+.2f}")
    print(f"  Final best strongest stat: {history[-1]['best_strongest_stat']}")
    print(f"  Final best weakest stat: {history[-1]['best_weakest_stat']}")


def main() -> None:
    """Run the lineage experiment."""
    print("=" * 60)
    print("PADDOCK LINEAGE EXPERIMENT")
    print("=" * 60)
    print("Configuration:")
    print(f"  Generations: {GENERATIONS}")
    print(f"  Foundation Herd: {FOUNDATION_HERD}")
    print(f"  Foals per Generation: {FOALS_PER_GENERATION}")
    print(f"  Mutation: {MUTATION_CHANCE} x {MUTATION_AMOUNT}")

    history = run_lineage(SeededRandom(SEED))

    output_dir = Path(__file__).parent / "results"
    save_results(history, output_dir)
    print_summary(history)


if __name__ == "__main__":
    main()
