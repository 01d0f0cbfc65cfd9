"""Command-line interface for Paddock.

Small demonstrations of the engine that print JSON records, e.g.::

    paddock --seed 7 foundation --name Comet --gender mare
    paddock --seed 7 train-demo --skill haltering --duration 15 --sessions 5
"""

import argparse
import json
import logging
import sys
from typing import Any

from paddock import __version__
from paddock.config import get_settings
from paddock.economy import (
    EconomyError,
    check_time,
    close_day,
    new_player,
    pay_for_breeding,
    session_time_cost,
    spend_time,
)
from paddock.engine.breeding import (
    BreedingError,
    breed_horses,
    create_foundation_horse,
    validate_breeding,
)
from paddock.engine.day import advance_day, change_housing, train_horse
from paddock.engine.phenotype import calculate_overall_quality
from paddock.logging_config import configure_logging
from paddock.model.horse import Gender, Horse
from paddock.model.mental import HousingType
from paddock.model.session import SESSION_DURATIONS, Trainer
from paddock.model.visual import calculate_color, get_color_name
from paddock.rng import RandomSource, SeededRandom, default_rng
from paddock.schemas import (
    BreedingValidationRecord,
    HorseRecord,
    HorseUpdateRecord,
    TrainingResultRecord,
)


def _horse_summary(horse: Horse) -> dict[str, Any]:
    summary: dict[str, Any] = {
        "horse": HorseRecord.from_horse(horse).model_dump(by_alias=True, mode="json"),
        "overallQuality": round(calculate_overall_quality(horse.genes), 2),
    }
    if horse.visual_genetics is not None:
        summary["color"] = get_color_name(calculate_color(horse.visual_genetics).display_color)
    return summary


def _foundation(parsed: argparse.Namespace, rng: RandomSource) -> dict[str, Any]:
    horse = create_foundation_horse(
        parsed.name,
        parsed.gender,
        min_potential=parsed.min_potential,
        max_potential=parsed.max_potential,
        with_conformation=parsed.conformation,
        rng=rng,
    )
    return _horse_summary(horse)


def _breed_demo(parsed: argparse.Namespace, rng: RandomSource) -> dict[str, Any]:
    sire = create_foundation_horse("Sire", Gender.STALLION, with_conformation=True, rng=rng)
    dam = create_foundation_horse("Dam", Gender.MARE, with_conformation=True, rng=rng)
    validation = validate_breeding(sire.age, dam.age, sire.gender, dam.gender)
    player = pay_for_breeding(new_player(), horse_count=2)
    foal = breed_horses(sire, dam, parsed.foal_name, rng=rng)
    return {
        "validation": BreedingValidationRecord.from_validation(validation).model_dump(
            by_alias=True, mode="json"
        ),
        "sire": _horse_summary(sire),
        "dam": _horse_summary(dam),
        "foal": _horse_summary(foal),
        "balance": player.money,
    }


def _train_demo(parsed: argparse.Namespace, rng: RandomSource) -> dict[str, Any]:
    horse = create_foundation_horse("Trainee", Gender.MARE, rng=rng)
    trainer = Trainer(id="cli", name="CLI Trainer", skill_level=parsed.trainer_skill)
    player = new_player()
    sessions = []
    for _ in range(parsed.sessions):
        cost = session_time_cost(parsed.duration)
        check_time(player, cost)
        trained, result = train_horse(horse, parsed.skill, parsed.duration, trainer, rng)
        # A rejected session hands back the same horse and costs no time
        if trained is not horse:
            player = spend_time(player, cost)
        horse = trained
        record = TrainingResultRecord.from_result(result, horse.skill_level(parsed.skill))
        sessions.append(record.model_dump(by_alias=True, mode="json"))
    return {
        "sessions": sessions,
        "timeRemaining": player.time_remaining,
        "horse": _horse_summary(horse),
    }


def _advance_day_demo(parsed: argparse.Namespace, rng: RandomSource) -> dict[str, Any]:
    horse = create_foundation_horse("Boarder", Gender.STALLION, rng=rng)
    horse = change_housing(horse, HousingType.STALL)
    player = new_player()
    days = []
    for _ in range(parsed.days):
        horse, update = advance_day(horse, player.current_day, rng=rng)
        player, upkeep = close_day(player, horse_count=1)
        entry = HorseUpdateRecord.from_day_result(update).model_dump(by_alias=True, mode="json")
        entry["newDay"] = upkeep.new_day
        entry["dailyCost"] = upkeep.daily_cost
        days.append(entry)
    return {"days": days, "balance": player.money, "horse": _horse_summary(horse)}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paddock",
        description="Paddock - Horse breeding and training simulation engine",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible runs (default: PADDOCK_RANDOM_SEED or unseeded)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    foundation = sub.add_parser("foundation", help="Create a foundation horse")
    foundation.add_argument("--name", default="Foundation")
    foundation.add_argument(
        "--gender", choices=[g.value for g in Gender], default=Gender.MARE.value
    )
    foundation.add_argument("--min-potential", type=int, default=None)
    foundation.add_argument("--max-potential", type=int, default=None)
    foundation.add_argument(
        "--conformation",
        action="store_true",
        help="Also generate conformation genetics",
    )

    breed = sub.add_parser("breed-demo", help="Breed two random foundation horses")
    breed.add_argument("--foal-name", default="Foal")

    train = sub.add_parser("train-demo", help="Train a foundation horse")
    train.add_argument("--skill", default="haltering")
    train.add_argument("--duration", type=int, choices=SESSION_DURATIONS, default=15)
    train.add_argument("--sessions", type=int, default=1)
    train.add_argument("--trainer-skill", type=float, default=50.0)

    day = sub.add_parser("advance-day-demo", help="Advance a stalled horse through days")
    day.add_argument("--days", type=int, default=1)

    return parser


COMMANDS = {
    "foundation": _foundation,
    "breed-demo": _breed_demo,
    "train-demo": _train_demo,
    "advance-day-demo": _advance_day_demo,
}


def main(args: list[str] | None = None) -> int:
    """Run a Paddock demo command.

    Args:
        args: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, 1 when the command was rejected).
    """
    parser = _build_parser()
    parsed = parser.parse_args(args)

    level = getattr(logging, parsed.log_level) if parsed.log_level else None
    configure_logging(level=level)
    seed = parsed.seed if parsed.seed is not None else get_settings().random_seed
    rng = SeededRandom(seed) if seed is not None else default_rng()

    try:
        output = COMMANDS[parsed.command](parsed, rng)
    except (BreedingError, EconomyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
