"""Daily reward state and reward ledger persistence."""

from __future__ import annotations

from typing import TYPE_CHECKING

from yomirules.models.rewards import DailyRewardState, LedgerEntry

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection


def _ensure_state_row(conn: DuckDBPyConnection, user_id: str) -> None:
    conn.execute(
        "INSERT INTO daily_reward_state (user_id) VALUES (?) ON CONFLICT (user_id) DO NOTHING",
        [user_id],
    )


def get_state(conn: DuckDBPyConnection, user_id: str) -> DailyRewardState:
    """Current state; a user never seen before gets the first-claim defaults."""
    row = conn.execute(
        "SELECT last_claim_at, current_streak_day, welcome_bonus_claimed FROM daily_reward_state WHERE user_id = ?",
        [user_id],
    ).fetchone()
    if not row:
        return DailyRewardState(user_id=user_id)
    return DailyRewardState(
        user_id=user_id,
        last_claim_at=row[0],
        current_streak_day=row[1],
        welcome_bonus_claimed=bool(row[2]),
    )


def apply_claim(
    conn: DuckDBPyConnection,
    user_id: str,
    expected_last_claim: int | None,
    claimed_at: int,
    next_streak_day: int,
) -> bool:
    """Record a claim only if ``last_claim_at`` still equals ``expected_last_claim``.

    Returns False when another claim got there first.
    """
    _ensure_state_row(conn, user_id)
    if expected_last_claim is None:
        rows = conn.execute(
            """
            UPDATE daily_reward_state SET last_claim_at = ?, current_streak_day = ?
            WHERE user_id = ? AND last_claim_at IS NULL
            RETURNING user_id
            """,
            [claimed_at, next_streak_day, user_id],
        ).fetchall()
    else:
        rows = conn.execute(
            """
            UPDATE daily_reward_state SET last_claim_at = ?, current_streak_day = ?
            WHERE user_id = ? AND last_claim_at = ?
            RETURNING user_id
            """,
            [claimed_at, next_streak_day, user_id, expected_last_claim],
        ).fetchall()
    return len(rows) == 1


def mark_welcome_claimed(conn: DuckDBPyConnection, user_id: str) -> bool:
    """Flip the welcome flag once. Returns False if it was already set."""
    _ensure_state_row(conn, user_id)
    rows = conn.execute(
        """
        UPDATE daily_reward_state SET welcome_bonus_claimed = TRUE
        WHERE user_id = ? AND NOT welcome_bonus_claimed
        RETURNING user_id
        """,
        [user_id],
    ).fetchall()
    return len(rows) == 1


def append_ledger(conn: DuckDBPyConnection, entry: LedgerEntry) -> None:
    conn.execute(
        "INSERT INTO reward_ledger (user_id, kind, amount, description, created_at) VALUES (?, ?, ?, ?, ?)",
        [entry.user_id, entry.kind, entry.amount, entry.description, entry.created_at],
    )


def list_ledger(conn: DuckDBPyConnection, user_id: str) -> list[LedgerEntry]:
    rows = conn.execute(
        "SELECT user_id, kind, amount, description, created_at FROM reward_ledger WHERE user_id = ? ORDER BY id",
        [user_id],
    ).fetchall()
    columns = ["user_id", "kind", "amount", "description", "created_at"]
    return [LedgerEntry(**dict(zip(columns, r))) for r in rows]
