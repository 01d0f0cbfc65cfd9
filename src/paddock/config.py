"""Configuration loading for engine defaults and stable economy constants.

Pydantic-based settings read from environment variables and an optional
.env file. Engine functions never consult these implicitly; hosts pass the
values through, and only the helpers in :mod:`paddock.economy`,
:mod:`paddock.engine.day` and the CLI fall back to :func:`get_settings`.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class EngineSettings(BaseSettings):
    """Tunable constants for breeding, day advance and the stable economy.

    Environment Variables:
        MAX_STABLE_SIZE: Maximum horses per stable (default: 10)
        STARTING_MONEY: Currency granted to a new player (default: 10000)
        DAILY_STABLE_COST_PER_HORSE: Upkeep per horse per day (default: 10)
        PADDOCK_BREEDING_COST: Cost of one breeding (default: 5000)
        PADDOCK_DAILY_TIME_BUDGET: Minutes available per day (default: 480)
        PADDOCK_FOUNDATION_MIN_POTENTIAL: Lowest foundation allele (default: 50)
        PADDOCK_FOUNDATION_MAX_POTENTIAL: Highest foundation allele (default: 80)
        PADDOCK_MUTATION_CHANCE: Per-allele mutation probability (default: 0.05)
        PADDOCK_MUTATION_AMOUNT: Maximum mutation delta (default: 5)
        PADDOCK_DAILY_FATIGUE_RECOVERY: Fatigue removed per day (default: 20)
        PADDOCK_RANDOM_SEED: Seed for the process-wide random source (default: unset)

    Example:
        >>> settings = EngineSettings()
        >>> settings = EngineSettings(_env_file=".env")
    """

    model_config = SettingsConfigDict(
        env_prefix="PADDOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Stable economy (collaborator boundary)
    max_stable_size: int = Field(
        default=10,
        ge=1,
        validation_alias=AliasChoices("MAX_STABLE_SIZE", "PADDOCK_MAX_STABLE_SIZE"),
        description="Maximum number of horses a stable may hold",
    )
    starting_money: int = Field(
        default=10000,
        ge=0,
        validation_alias=AliasChoices("STARTING_MONEY", "PADDOCK_STARTING_MONEY"),
        description="Currency granted to a new player",
    )
    daily_stable_cost_per_horse: int = Field(
        default=10,
        ge=0,
        validation_alias=AliasChoices(
            "DAILY_STABLE_COST_PER_HORSE", "PADDOCK_DAILY_STABLE_COST_PER_HORSE"
        ),
        description="Upkeep charged per horse when a day advances",
    )
    breeding_cost: int = Field(default=5000, ge=0, description="Cost of one breeding")
    daily_time_budget: int = Field(
        default=480,
        ge=0,
        le=1440,
        description="Minutes of player time available per day",
    )

    # Engine defaults
    foundation_min_potential: int = Field(default=50, ge=0, le=100)
    foundation_max_potential: int = Field(default=80, ge=0, le=100)
    mutation_chance: float = Field(default=0.05, ge=0.0, le=1.0)
    mutation_amount: float = Field(default=5.0, ge=0.0, le=100.0)
    daily_fatigue_recovery: float = Field(default=20.0, ge=0.0, le=100.0)
    random_seed: int | None = Field(
        default=None,
        description="Seed for the default random source; unset means nondeterministic",
    )

    @model_validator(mode="after")
    def check_potential_range(self) -> EngineSettings:
        """Foundation potential bounds must not cross."""
        if self.foundation_min_potential > self.foundation_max_potential:
            raise ValueError(
                "foundation_min_potential must not exceed foundation_max_potential"
            )
        return self


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached engine settings.

    To reload, call ``get_settings.cache_clear()`` first.

    Returns:
        EngineSettings loaded from the environment.
    """
    settings = EngineSettings()
    logger.info(
        "Loaded engine settings: stable_size=%d, breeding_cost=%d, time_budget=%d, seed=%s",
        settings.max_stable_size,
        settings.breeding_cost,
        settings.daily_time_budget,
        settings.random_seed,
    )
    return settings
