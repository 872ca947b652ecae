"""Claim daily and welcome rewards against the store."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import structlog

from yomirules.errors import AlreadyClaimed, ClaimConflict
from yomirules.models.rewards import ClaimOutcome, LedgerEntry
from yomirules.models.rules import RewardSchedule
from yomirules.rewards.daily import plan_claim
from yomirules.rewards.jackpot import JackpotDraw
from yomirules.storage.rewards import append_ledger, apply_claim, get_state, mark_welcome_claimed

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

log = structlog.get_logger(__name__)


def claim_description(outcome: ClaimOutcome) -> str:
    if outcome.is_jackpot and outcome.jackpot is not None:
        return f"Daily bonus day {outcome.display_day} - Jackpot {outcome.jackpot.label}!"
    return f"Daily bonus day {outcome.display_day}"


def claim_daily(
    conn: DuckDBPyConnection,
    user_id: str,
    now_ms: int | None = None,
    schedule: RewardSchedule | None = None,
    draw: JackpotDraw | None = None,
) -> ClaimOutcome:
    """Claim today's reward. A claim inside the 24h window returns ``can_claim=False`` and writes nothing.

    The state update is conditional on the ``last_claim_at`` read here; if a
    concurrent claim landed first, ClaimConflict is raised and nothing is credited.
    """
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    state = get_state(conn, user_id)
    outcome = plan_claim(state, now_ms, schedule, draw)
    if not outcome.can_claim:
        log.info("daily_claim_rejected", user_id=user_id, next_claim_at=outcome.next_claim_at)
        return outcome

    conn.begin()
    try:
        if not apply_claim(conn, user_id, state.last_claim_at, now_ms, outcome.next_streak_day):
            raise ClaimConflict(f"daily reward for {user_id} was claimed concurrently")
        append_ledger(
            conn,
            LedgerEntry(
                user_id=user_id,
                kind="daily",
                amount=outcome.reward_amount,
                description=claim_description(outcome),
                created_at=now_ms,
            ),
        )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    log.info(
        "daily_claim_accepted",
        user_id=user_id,
        streak_day=outcome.streak_day,
        streak_reset=outcome.streak_reset,
        amount=outcome.reward_amount,
        jackpot=outcome.jackpot.rarity if outcome.jackpot else None,
    )
    return outcome


def claim_welcome_bonus(
    conn: DuckDBPyConnection,
    user_id: str,
    now_ms: int | None = None,
    schedule: RewardSchedule | None = None,
) -> int:
    """Credit the one-time welcome bonus. Raises AlreadyClaimed on a second attempt."""
    schedule = schedule or RewardSchedule()
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    conn.begin()
    try:
        if not mark_welcome_claimed(conn, user_id):
            raise AlreadyClaimed(f"welcome bonus already claimed by {user_id}")
        append_ledger(
            conn,
            LedgerEntry(
                user_id=user_id,
                kind="welcome",
                amount=schedule.welcome_bonus,
                description="Welcome bonus",
                created_at=now_ms,
            ),
        )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    log.info("welcome_bonus_claimed", user_id=user_id, amount=schedule.welcome_bonus)
    return schedule.welcome_bonus
