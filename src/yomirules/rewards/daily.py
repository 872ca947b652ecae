"""Daily login reward: claim window, streak continuity, day reward.

Timestamps are ms epoch, as everywhere in the store. The streak is a 7-day
cycle (index 0-6); the stored ``current_streak_day`` is the index the next
accepted claim pays out.
"""

from __future__ import annotations

import time

from yomirules.errors import PreconditionError
from yomirules.models.rewards import ClaimOutcome, DailyRewardState, DayReward, RewardStatus
from yomirules.models.rules import RewardSchedule
from yomirules.rewards.jackpot import JackpotDraw, WeightedJackpot

HOUR_MS = 60 * 60 * 1000
CLAIM_COOLDOWN_MS = 24 * HOUR_MS
STREAK_RESET_MS = 48 * HOUR_MS
STREAK_LENGTH = 7
JACKPOT_DAY = STREAK_LENGTH - 1


def _now_ms() -> int:
    return int(time.time() * 1000)


def _check_ms(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PreconditionError(f"{name} must be an integer ms epoch, got {value!r}")
    return value


def _elapsed(last_claim_at: int, now_ms: int | None) -> int:
    now_ms = _check_ms("now_ms", now_ms) if now_ms is not None else _now_ms()
    return now_ms - _check_ms("last_claim_at", last_claim_at)


def can_claim(last_claim_at: int | None, now_ms: int | None = None) -> bool:
    """True once 24h have passed since the last claim, or if there never was one."""
    if last_claim_at is None:
        return True
    return _elapsed(last_claim_at, now_ms) >= CLAIM_COOLDOWN_MS


def should_reset_streak(last_claim_at: int | None, now_ms: int | None = None) -> bool:
    """True after a 48h gap (a whole day missed), or if there never was a claim."""
    if last_claim_at is None:
        return True
    return _elapsed(last_claim_at, now_ms) >= STREAK_RESET_MS


def next_claim_at(last_claim_at: int) -> int:
    return _check_ms("last_claim_at", last_claim_at) + CLAIM_COOLDOWN_MS


def reward_for_day(
    streak_day: int,
    schedule: RewardSchedule | None = None,
    draw: JackpotDraw | None = None,
) -> DayReward:
    """Fixed schedule amount for days 0-5, a jackpot draw on day 6."""
    if not 0 <= streak_day <= JACKPOT_DAY:
        raise PreconditionError(f"streak day must be in [0, {JACKPOT_DAY}], got {streak_day}")
    schedule = schedule or RewardSchedule()
    if streak_day < JACKPOT_DAY:
        return DayReward(amount=schedule.base[streak_day])
    draw = draw or WeightedJackpot(schedule.jackpot)
    jackpot = draw()
    return DayReward(amount=jackpot.amount, is_jackpot=True, jackpot=jackpot)


def plan_claim(
    state: DailyRewardState,
    now_ms: int | None = None,
    schedule: RewardSchedule | None = None,
    draw: JackpotDraw | None = None,
) -> ClaimOutcome:
    """Evaluate a claim at ``now_ms``. No jackpot is drawn for a rejected claim."""
    now_ms = now_ms if now_ms is not None else _now_ms()
    last = state.last_claim_at
    if not can_claim(last, now_ms):
        return ClaimOutcome(
            can_claim=False,
            streak_day=state.current_streak_day,
            next_streak_day=state.current_streak_day,
            streak_reset=False,
            next_claim_at=next_claim_at(last),
        )
    reset = should_reset_streak(last, now_ms)
    day = 0 if reset else state.current_streak_day
    reward = reward_for_day(day, schedule, draw)
    return ClaimOutcome(
        can_claim=True,
        streak_day=day,
        next_streak_day=(day + 1) % STREAK_LENGTH,
        streak_reset=reset,
        reward_amount=reward.amount,
        is_jackpot=reward.is_jackpot,
        jackpot=reward.jackpot,
        next_claim_at=next_claim_at(now_ms),
    )


def reward_status(
    state: DailyRewardState,
    now_ms: int | None = None,
    schedule: RewardSchedule | None = None,
) -> RewardStatus:
    """Preview for display; the jackpot amount stays unknown until the claim."""
    now_ms = now_ms if now_ms is not None else _now_ms()
    schedule = schedule or RewardSchedule()
    last = state.last_claim_at
    day = 0 if should_reset_streak(last, now_ms) else state.current_streak_day
    is_jackpot_day = day == JACKPOT_DAY
    return RewardStatus(
        can_claim=can_claim(last, now_ms),
        next_claim_at=next_claim_at(last) if last is not None else None,
        current_streak=day,
        today_reward=None if is_jackpot_day else schedule.base[day],
        is_jackpot_day=is_jackpot_day,
        welcome_bonus_claimed=state.welcome_bonus_claimed,
        can_claim_welcome=not state.welcome_bonus_claimed,
    )
