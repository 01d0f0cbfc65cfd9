"""Stable economy: money, the daily time budget, chores and upkeep.

These rules sit at the collaborator boundary around the engine. They work
on a small immutable :class:`PlayerState` and raise :class:`EconomyError`
for requests the player cannot afford; the caller decides how to surface
them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from paddock.config import EngineSettings, get_settings

logger = logging.getLogger(__name__)


class EconomyError(Exception):
    """Raised when a player lacks the money, time or stable space for an action."""

    pass


@dataclass(frozen=True)
class ChoreDefinition:
    id: str
    name: str
    duration: int
    payment: int


CHORES: dict[str, ChoreDefinition] = {
    "muck_stalls": ChoreDefinition("muck_stalls", "Muck Stalls", 60, 32),
    "water_horses": ChoreDefinition("water_horses", "Water Horses", 15, 8),
    "fill_hay_nets": ChoreDefinition("fill_hay_nets", "Fill Hay Nets", 30, 16),
}


@dataclass(frozen=True)
class PlayerState:
    """Money and time a player has to spend.

    Attributes:
        money: Current balance.
        time_remaining: Minutes left today.
        current_day: Day counter, starting at 0.
    """

    money: int
    time_remaining: int
    current_day: int = 0


@dataclass(frozen=True)
class ChoreResult:
    success: bool
    chore_name: str
    time_spent: int
    money_earned: int
    time_remaining: int
    new_balance: int


@dataclass(frozen=True)
class UpkeepResult:
    """Outcome of closing a day. ``charged`` is False when the player could not pay."""

    new_day: int
    daily_cost: int
    charged: bool
    new_balance: int


def new_player(settings: EngineSettings | None = None) -> PlayerState:
    """Starting balance and a full day of time."""
    settings = settings or get_settings()
    return PlayerState(money=settings.starting_money, time_remaining=settings.daily_time_budget)


def spend_money(state: PlayerState, amount: int) -> PlayerState:
    """Deduct ``amount`` from the balance.

    Raises:
        EconomyError: If the balance is below ``amount``.
    """
    if state.money < amount:
        raise EconomyError("Not enough money")
    return replace(state, money=state.money - amount)


def check_time(state: PlayerState, minutes: int) -> None:
    """Raise EconomyError unless ``minutes`` are left in today's budget."""
    if state.time_remaining < minutes:
        raise EconomyError("Not enough time remaining today")


def spend_time(state: PlayerState, minutes: int) -> PlayerState:
    """Consume minutes from today's budget.

    Raises:
        EconomyError: If fewer than ``minutes`` remain.
    """
    check_time(state, minutes)
    return replace(state, time_remaining=state.time_remaining - minutes)


def session_time_cost(duration: int) -> int:
    """A training session costs its own length in minutes."""
    return duration


def check_stable_capacity(horse_count: int, max_stable_size: int | None = None) -> None:
    """Reject another horse once the stable is full.

    Raises:
        EconomyError: If the stable has no room for another horse.
    """
    if max_stable_size is None:
        max_stable_size = get_settings().max_stable_size
    if horse_count >= max_stable_size:
        raise EconomyError(f"Stable is full (max {max_stable_size} horses)")


def can_afford_breeding(money: int, breeding_cost: int | None = None) -> bool:
    if breeding_cost is None:
        breeding_cost = get_settings().breeding_cost
    return money >= breeding_cost


def pay_for_breeding(
    state: PlayerState,
    horse_count: int,
    *,
    breeding_cost: int | None = None,
    max_stable_size: int | None = None,
) -> PlayerState:
    """Charge for one breeding after checking stable space.

    Args:
        state: Player paying.
        horse_count: Horses currently in the player's stable.
        breeding_cost: Defaults to the configured ``breeding_cost``.
        max_stable_size: Defaults to the configured ``max_stable_size``.

    Returns:
        The player after paying.

    Raises:
        EconomyError: If the stable is full or the player cannot pay.
    """
    if breeding_cost is None:
        breeding_cost = get_settings().breeding_cost
    check_stable_capacity(horse_count, max_stable_size)
    if not can_afford_breeding(state.money, breeding_cost):
        raise EconomyError("Not enough money for breeding")
    logger.info("Breeding paid: %d (balance %d)", breeding_cost, state.money - breeding_cost)
    return replace(state, money=state.money - breeding_cost)


def do_chore(state: PlayerState, chore_id: str) -> tuple[PlayerState, ChoreResult]:
    """Trade time for money.

    Raises:
        EconomyError: For an unknown chore or when too little time is left.
    """
    chore = CHORES.get(chore_id)
    if chore is None:
        raise EconomyError("Invalid Chore")

    if state.time_remaining < chore.duration:
        raise EconomyError(
            f"Not enough time remaining. Need {chore.duration} minutes, "
            f"have {state.time_remaining} minutes left."
        )

    updated = replace(
        state,
        time_remaining=state.time_remaining - chore.duration,
        money=state.money + chore.payment,
    )
    logger.debug(
        "Chore %s done: +%d, %d minutes left", chore.id, chore.payment, updated.time_remaining
    )
    return updated, ChoreResult(
        success=True,
        chore_name=chore.name,
        time_spent=chore.duration,
        money_earned=chore.payment,
        time_remaining=updated.time_remaining,
        new_balance=updated.money,
    )


def daily_upkeep(horse_count: int, cost_per_horse: int | None = None) -> int:
    if cost_per_horse is None:
        cost_per_horse = get_settings().daily_stable_cost_per_horse
    return horse_count * cost_per_horse


def close_day(
    state: PlayerState,
    horse_count: int,
    *,
    cost_per_horse: int | None = None,
    time_budget: int | None = None,
) -> tuple[PlayerState, UpkeepResult]:
    """Advance the day counter, refill the time budget and charge upkeep.

    Upkeep is skipped rather than driving the balance negative.
    """
    if time_budget is None:
        time_budget = get_settings().daily_time_budget
    cost = daily_upkeep(horse_count, cost_per_horse)
    charged = state.money >= cost
    updated = PlayerState(
        money=state.money - cost if charged else state.money,
        time_remaining=time_budget,
        current_day=state.current_day + 1,
    )
    if not charged:
        logger.info("Upkeep of %d skipped, balance %d", cost, state.money)
    return updated, UpkeepResult(
        new_day=updated.current_day,
        daily_cost=cost,
        charged=charged,
        new_balance=updated.money,
    )
