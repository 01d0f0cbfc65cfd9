"""Tests for the stable economy (paddock.economy)."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from paddock.config import EngineSettings
from paddock.economy import (
    CHORES,
    ChoreResult,
    EconomyError,
    PlayerState,
    UpkeepResult,
    can_afford_breeding,
    check_stable_capacity,
    check_time,
    close_day,
    daily_upkeep,
    do_chore,
    new_player,
    pay_for_breeding,
    session_time_cost,
    spend_money,
    spend_time,
)


class TestPlayerState:
    """Tests for new players and plain spending."""

    def test_new_player_defaults(self) -> None:
        player = new_player(EngineSettings(_env_file=None))
        assert player == PlayerState(money=10000, time_remaining=480, current_day=0)

    def test_new_player_from_environment(self) -> None:
        with patch.dict(os.environ, {"STARTING_MONEY": "250", "PADDOCK_DAILY_TIME_BUDGET": "60"}):
            player = new_player()
        assert player.money == 250
        assert player.time_remaining == 60

    def test_spend_money(self) -> None:
        assert spend_money(PlayerState(100, 480), 40).money == 60

    def test_spend_money_insufficient(self) -> None:
        with pytest.raises(EconomyError, match="Not enough money"):
            spend_money(PlayerState(10, 480), 40)

    def test_spend_time(self) -> None:
        player = spend_time(PlayerState(100, 480), session_time_cost(30))
        assert player.time_remaining == 450

    def test_check_time(self) -> None:
        player = PlayerState(100, 15)
        check_time(player, 15)
        with pytest.raises(EconomyError, match="Not enough time remaining today"):
            check_time(player, 16)
        assert player.time_remaining == 15

    def test_spend_time_insufficient(self) -> None:
        with pytest.raises(EconomyError, match="Not enough time remaining today"):
            spend_time(PlayerState(100, 10), 15)


class TestBreedingCosts:
    """Tests for stable capacity and breeding payments."""

    def test_capacity(self) -> None:
        check_stable_capacity(9, max_stable_size=10)
        with pytest.raises(EconomyError, match=r"Stable is full \(max 10 horses\)"):
            check_stable_capacity(10, max_stable_size=10)

    def test_capacity_from_settings(self) -> None:
        with patch.dict(os.environ, {"MAX_STABLE_SIZE": "2"}):
            with pytest.raises(EconomyError, match="max 2 horses"):
                check_stable_capacity(2)

    def test_can_afford(self) -> None:
        assert can_afford_breeding(5000, breeding_cost=5000)
        assert not can_afford_breeding(4999, breeding_cost=5000)

    def test_pay_for_breeding(self) -> None:
        player = pay_for_breeding(
            PlayerState(6000, 480), 2, breeding_cost=5000, max_stable_size=10
        )
        assert player.money == 1000

    def test_pay_for_breeding_without_funds(self) -> None:
        with pytest.raises(EconomyError, match="Not enough money for breeding"):
            pay_for_breeding(PlayerState(100, 480), 2, breeding_cost=5000, max_stable_size=10)

    def test_capacity_checked_before_money(self) -> None:
        with pytest.raises(EconomyError, match="Stable is full"):
            pay_for_breeding(PlayerState(0, 480), 10, breeding_cost=5000, max_stable_size=10)


class TestChores:
    """Tests for do_chore."""

    def test_chore_table(self) -> None:
        assert {chore.id: (chore.duration, chore.payment) for chore in CHORES.values()} == {
            "muck_stalls": (60, 32),
            "water_horses": (15, 8),
            "fill_hay_nets": (30, 16),
        }

    def test_do_chore(self) -> None:
        player, result = do_chore(PlayerState(100, 480), "muck_stalls")
        assert player == PlayerState(132, 420)
        assert result == ChoreResult(
            success=True,
            chore_name="Muck Stalls",
            time_spent=60,
            money_earned=32,
            time_remaining=420,
            new_balance=132,
        )

    def test_unknown_chore(self) -> None:
        with pytest.raises(EconomyError, match="Invalid Chore"):
            do_chore(PlayerState(100, 480), "polish_tack")

    def test_not_enough_time(self) -> None:
        with pytest.raises(
            EconomyError,
            match="Not enough time remaining. Need 30 minutes, have 20 minutes left.",
        ):
            do_chore(PlayerState(100, 20), "fill_hay_nets")


class TestCloseDay:
    """Tests for daily upkeep and closing a day."""

    def test_daily_upkeep(self) -> None:
        assert daily_upkeep(3, cost_per_horse=10) == 30
        assert daily_upkeep(0, cost_per_horse=10) == 0

    def test_charges_and_refills(self) -> None:
        player, result = close_day(
            PlayerState(100, 15, current_day=4), 3, cost_per_horse=10, time_budget=480
        )
        assert player == PlayerState(70, 480, current_day=5)
        assert result == UpkeepResult(new_day=5, daily_cost=30, charged=True, new_balance=70)

    def test_skips_unaffordable_upkeep(self) -> None:
        player, result = close_day(PlayerState(20, 0), 3, cost_per_horse=10, time_budget=480)
        assert player.money == 20
        assert player.current_day == 1
        assert result.charged is False

    def test_defaults_from_settings(self) -> None:
        with patch.dict(os.environ, {"DAILY_STABLE_COST_PER_HORSE": "7"}):
            player, result = close_day(PlayerState(100, 0), 2)
        assert result.daily_cost == 14
        assert player.time_remaining == 480
