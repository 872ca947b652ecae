"""Daily login rewards: streak rules, jackpot draw, claims."""

from yomirules.rewards.daily import (
    CLAIM_COOLDOWN_MS,
    JACKPOT_DAY,
    STREAK_LENGTH,
    STREAK_RESET_MS,
    can_claim,
    next_claim_at,
    plan_claim,
    reward_for_day,
    reward_status,
    should_reset_streak,
)
from yomirules.rewards.jackpot import JackpotDraw, WeightedJackpot

__all__ = [
    "CLAIM_COOLDOWN_MS",
    "STREAK_RESET_MS",
    "STREAK_LENGTH",
    "JACKPOT_DAY",
    "can_claim",
    "should_reset_streak",
    "next_claim_at",
    "reward_for_day",
    "plan_claim",
    "reward_status",
    "JackpotDraw",
    "WeightedJackpot",
]
