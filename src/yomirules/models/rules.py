"""Immutable rule parameters for the calculators, built from Settings or defaults."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from yomirules.config.settings import Settings

DEFAULT_BASE_SCHEDULE = (100, 150, 200, 250, 300, 400)


class _Rules(BaseModel):
    model_config = ConfigDict(frozen=True)


class PoolRules(_Rules):
    default_liquidity: int = Field(10000, gt=0)
    min_pool: int = Field(10, ge=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> PoolRules:
        return cls(default_liquidity=settings.default_liquidity, min_pool=settings.min_pool)


class StakeRules(_Rules):
    min_stake: int = 10
    max_stake: int = 100000
    fee_rate: float = Field(0.02, ge=0, lt=1)
    min_probability: float = Field(0.01, gt=0, le=1)
    max_probability: float = Field(0.99, gt=0, le=1)
    min_odds: float = Field(1.01, ge=1)
    max_odds: float = Field(100.0, ge=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> StakeRules:
        return cls(
            min_stake=settings.min_stake,
            max_stake=settings.max_stake,
            fee_rate=settings.fee_rate,
            min_probability=settings.min_probability,
            max_probability=settings.max_probability,
            min_odds=settings.min_odds,
            max_odds=settings.max_odds,
        )


class TierThresholds(_Rules):
    holographic_max_rank: int = 3
    diamond_max_rank: int = 10
    gold_min_points: float = 25000
    bronze_min_points: float = 10000

    @classmethod
    def from_settings(cls, settings: Settings) -> TierThresholds:
        return cls(
            holographic_max_rank=settings.holographic_max_rank,
            diamond_max_rank=settings.diamond_max_rank,
            gold_min_points=settings.gold_min_points,
            bronze_min_points=settings.bronze_min_points,
        )


class JackpotEntry(_Rules):
    rarity: str
    label: str
    color: str
    amount: int = Field(..., ge=0)
    weight: float = Field(..., gt=0)


DEFAULT_JACKPOT = (
    JackpotEntry(rarity="common", label="Common", color="#9ca3af", amount=500, weight=60),
    JackpotEntry(rarity="rare", label="Rare", color="#3b82f6", amount=1000, weight=25),
    JackpotEntry(rarity="epic", label="Epic", color="#a855f7", amount=2500, weight=10),
    JackpotEntry(rarity="legendary", label="Legendary", color="#f59e0b", amount=5000, weight=4),
    JackpotEntry(rarity="mythic", label="Mythic", color="#ef4444", amount=10000, weight=1),
)


class RewardSchedule(_Rules):
    """Fixed amounts for streak days 0-5; day 6 draws from ``jackpot``."""

    base: tuple[int, ...] = DEFAULT_BASE_SCHEDULE
    jackpot: tuple[JackpotEntry, ...] = DEFAULT_JACKPOT
    welcome_bonus: int = 1000

    @field_validator("base")
    @classmethod
    def _six_days(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if len(v) != 6:
            raise ValueError("base schedule needs exactly 6 entries (days 0-5)")
        return v

    @field_validator("jackpot")
    @classmethod
    def _non_empty(cls, v: tuple[JackpotEntry, ...]) -> tuple[JackpotEntry, ...]:
        if not v:
            raise ValueError("jackpot table is empty")
        return v

    @classmethod
    def from_settings(cls, settings: Settings) -> RewardSchedule:
        jackpot = tuple(JackpotEntry(**e) for e in settings.jackpot_entries) or DEFAULT_JACKPOT
        return cls(
            base=tuple(settings.base_schedule or DEFAULT_BASE_SCHEDULE),
            jackpot=jackpot,
            welcome_bonus=settings.welcome_bonus,
        )
