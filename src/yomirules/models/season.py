"""Tier, SeasonLeaderboardEntry, UserSeasonCard - seasonal competition entities."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from yomirules.errors import PreconditionError


class Tier(str, Enum):
    """Season card tier. ``BETA`` is granted out-of-band and has no position in the ranking."""

    IRON = "iron"
    BRONZE = "bronze"
    GOLD = "gold"
    DIAMOND = "diamond"
    HOLOGRAPHIC = "holographic"
    BETA = "beta"

    @property
    def ranked(self) -> bool:
        return self is not Tier.BETA

    @property
    def ordinal(self) -> int:
        """Position in the ranked order (iron=0 .. holographic=4)."""
        return tier_ordinal(self)

    @property
    def tracks_current_standing(self) -> bool:
        """Diamond and above reflect the current rank instead of the historical peak."""
        return self.ordinal >= Tier.DIAMOND.ordinal


RANKED_TIERS: tuple[Tier, ...] = (
    Tier.IRON,
    Tier.BRONZE,
    Tier.GOLD,
    Tier.DIAMOND,
    Tier.HOLOGRAPHIC,
)

_ORDINALS = {tier: i for i, tier in enumerate(RANKED_TIERS)}


def tier_ordinal(tier: Tier) -> int:
    """Total order over ranked tiers. Raises PreconditionError for beta."""
    try:
        return _ORDINALS[Tier(tier)]
    except KeyError:
        raise PreconditionError(f"tier {tier!s} is not part of the ranked order") from None


def higher_tier(a: Tier, b: Tier) -> Tier:
    """Return the tier with the greater ordinal; ties return ``a``."""
    return b if tier_ordinal(b) > tier_ordinal(a) else a


class LeaderboardEntry(BaseModel):
    """Per user per season stats. ``points`` is the season's net profit/loss."""

    season_id: str
    user_id: str
    points: float = 0.0
    wins: int = 0
    losses: int = 0
    total_bet_amount: float = 0.0


class UserSeasonCard(BaseModel):
    """Card keyed by (user_id, season_id)."""

    user_id: str
    season_id: str
    tier: Tier
    highest_tier_achieved: Tier
    created_at: int | None = None  # ms epoch
    updated_at: int | None = None  # ms epoch


class TierProgress(BaseModel):
    """Result of a ratcheted recomputation."""

    tier: Tier
    highest_tier: Tier
    is_new_tier: bool
    previous_highest: Tier | None = None


class AwardReport(BaseModel):
    """Outcome of a batch card award for one season."""

    season_id: str
    created: list[str] = Field(default_factory=list)  # user_ids
    skipped: list[str] = Field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
