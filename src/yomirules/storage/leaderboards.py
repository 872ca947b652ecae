"""Season leaderboard persistence (read side for the tier rules)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from yomirules.models.season import LeaderboardEntry

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

_COLUMNS = ["season_id", "user_id", "points", "wins", "losses", "total_bet_amount"]


def upsert_entry(conn: DuckDBPyConnection, entry: LeaderboardEntry) -> None:
    """Insert or replace one leaderboard row."""
    conn.execute(
        """
        INSERT INTO season_leaderboards (season_id, user_id, points, wins, losses, total_bet_amount)
        VALUES (?, ?, ?, ?, ?, ?)
        ON CONFLICT (season_id, user_id) DO UPDATE SET
            points = excluded.points,
            wins = excluded.wins,
            losses = excluded.losses,
            total_bet_amount = excluded.total_bet_amount
        """,
        [entry.season_id, entry.user_id, entry.points, entry.wins, entry.losses, entry.total_bet_amount],
    )


def upsert_entries(conn: DuckDBPyConnection, entries: list[LeaderboardEntry]) -> None:
    """Upsert multiple leaderboard rows."""
    for e in entries:
        upsert_entry(conn, e)


def load_leaderboard(conn: DuckDBPyConnection, season_id: str) -> list[LeaderboardEntry]:
    """Season rows ordered by points descending (user_id breaks ties for a stable order)."""
    rows = conn.execute(
        """
        SELECT season_id, user_id, points, wins, losses, total_bet_amount
        FROM season_leaderboards
        WHERE season_id = ?
        ORDER BY points DESC, user_id
        """,
        [season_id],
    ).fetchall()
    return [LeaderboardEntry(**dict(zip(_COLUMNS, r))) for r in rows]
