"""Daily reward state and claim results."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DailyRewardState(BaseModel):
    """Per-user claim state. ``current_streak_day`` is the index the next claim pays out."""

    user_id: str
    last_claim_at: int | None = None  # ms epoch
    current_streak_day: int = Field(0, ge=0, le=6)
    welcome_bonus_claimed: bool = False


class JackpotResult(BaseModel):
    amount: int = Field(..., ge=0)
    rarity: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    color: str = Field(..., min_length=1)


class DayReward(BaseModel):
    amount: int
    is_jackpot: bool = False
    jackpot: JackpotResult | None = None


class ClaimOutcome(BaseModel):
    """What a claim at ``now`` would pay and how the streak moves."""

    can_claim: bool
    streak_day: int  # 0-based index paid by this claim
    next_streak_day: int  # value to persist after an accepted claim
    streak_reset: bool
    reward_amount: int = 0
    is_jackpot: bool = False
    jackpot: JackpotResult | None = None
    next_claim_at: int | None = None  # ms epoch

    @property
    def display_day(self) -> int:
        """1-based day shown to users."""
        return self.streak_day + 1


class RewardStatus(BaseModel):
    can_claim: bool
    next_claim_at: int | None = None
    current_streak: int = 0
    today_reward: int | None = None  # None on the jackpot day, drawn at claim time
    is_jackpot_day: bool = False
    welcome_bonus_claimed: bool = False
    can_claim_welcome: bool = True


class LedgerEntry(BaseModel):
    user_id: str
    kind: str
    amount: int
    description: str
    created_at: int
