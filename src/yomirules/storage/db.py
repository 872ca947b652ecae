"""DuckDB connection and schema init."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import duckdb

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

SCHEMA_SQL = """
CREATE SEQUENCE IF NOT EXISTS ledger_seq START 1;

-- Season leaderboard rows, maintained by staking activity
CREATE TABLE IF NOT EXISTS season_leaderboards (
    season_id           VARCHAR NOT NULL,
    user_id             VARCHAR NOT NULL,
    points              DOUBLE NOT NULL DEFAULT 0,
    wins                INTEGER NOT NULL DEFAULT 0,
    losses              INTEGER NOT NULL DEFAULT 0,
    total_bet_amount    DOUBLE NOT NULL DEFAULT 0,
    PRIMARY KEY (season_id, user_id)
);

-- One card per (user, season)
CREATE TABLE IF NOT EXISTS user_season_cards (
    user_id                 VARCHAR NOT NULL,
    season_id               VARCHAR NOT NULL,
    tier                    VARCHAR NOT NULL,
    highest_tier_achieved   VARCHAR NOT NULL,
    created_at              BIGINT NOT NULL,
    updated_at              BIGINT NOT NULL,
    PRIMARY KEY (user_id, season_id)
);

-- Daily login reward state
CREATE TABLE IF NOT EXISTS daily_reward_state (
    user_id                 VARCHAR PRIMARY KEY,
    last_claim_at           BIGINT,
    current_streak_day      INTEGER NOT NULL DEFAULT 0,
    welcome_bonus_claimed   BOOLEAN NOT NULL DEFAULT FALSE
);

-- Credited rewards (append-only)
CREATE TABLE IF NOT EXISTS reward_ledger (
    id              BIGINT PRIMARY KEY DEFAULT nextval('ledger_seq'),
    user_id         VARCHAR NOT NULL,
    kind            VARCHAR NOT NULL,
    amount          BIGINT NOT NULL,
    description     VARCHAR NOT NULL,
    created_at      BIGINT NOT NULL
);
"""


def get_connection(db_path: str | Path, read_only: bool = False) -> DuckDBPyConnection:
    """Return a DuckDB connection. Caller must close or use as context manager.
    ``:memory:`` opens an in-process database."""
    if str(db_path) == ":memory:":
        return duckdb.connect(":memory:")
    path = Path(db_path)
    if not read_only:
        path.parent.mkdir(parents=True, exist_ok=True)
    return duckdb.connect(str(path), read_only=read_only)


def init_schema(conn: DuckDBPyConnection) -> None:
    """Create tables and sequences if they do not exist."""
    for stmt in SCHEMA_SQL.split(";"):
        stmt = stmt.strip()
        if stmt:
            try:
                conn.execute(stmt)
            except duckdb.Error as e:
                if "already exists" not in str(e).lower():
                    raise
