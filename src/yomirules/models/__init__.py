"""Domain schema (Pydantic) - Market, Stake, Tier, season cards, daily rewards, rule parameters."""

from yomirules.models.market import Direction, Market, MarketKind, MarketStatus, Outcome, Stake, StakeStatus
from yomirules.models.rewards import (
    ClaimOutcome,
    DailyRewardState,
    DayReward,
    JackpotResult,
    LedgerEntry,
    RewardStatus,
)
from yomirules.models.rules import JackpotEntry, PoolRules, RewardSchedule, StakeRules, TierThresholds
from yomirules.models.season import (
    RANKED_TIERS,
    AwardReport,
    LeaderboardEntry,
    Tier,
    TierProgress,
    UserSeasonCard,
    higher_tier,
    tier_ordinal,
)

__all__ = [
    "Market",
    "MarketKind",
    "MarketStatus",
    "Outcome",
    "Direction",
    "Stake",
    "StakeStatus",
    "Tier",
    "RANKED_TIERS",
    "tier_ordinal",
    "higher_tier",
    "LeaderboardEntry",
    "UserSeasonCard",
    "TierProgress",
    "AwardReport",
    "DailyRewardState",
    "DayReward",
    "JackpotResult",
    "ClaimOutcome",
    "RewardStatus",
    "LedgerEntry",
    "PoolRules",
    "StakeRules",
    "TierThresholds",
    "JackpotEntry",
    "RewardSchedule",
]
