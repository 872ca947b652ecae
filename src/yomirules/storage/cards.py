"""User season card persistence.

Reading your own collection goes through ``list_user_cards``. Writing cards
for other users (recompute, season award, beta grant) requires a
``SeasonCardWriter``, constructed explicitly with the acting principal so
every cross-user write is attributable.
"""

from __future__ import annotations

import time
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

import structlog

from yomirules.models.season import Tier, UserSeasonCard

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

log = structlog.get_logger(__name__)

_COLUMNS = ["user_id", "season_id", "tier", "highest_tier_achieved", "created_at", "updated_at"]


def _row_to_card(row: tuple) -> UserSeasonCard:
    return UserSeasonCard(**dict(zip(_COLUMNS, row)))


def _batches(items: Sequence[UserSeasonCard], size: int) -> Iterator[Sequence[UserSeasonCard]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


def list_user_cards(conn: DuckDBPyConnection, user_id: str) -> list[UserSeasonCard]:
    """All cards of one user, newest season first."""
    rows = conn.execute(
        f"SELECT {', '.join(_COLUMNS)} FROM user_season_cards WHERE user_id = ? ORDER BY created_at DESC, season_id DESC",
        [user_id],
    ).fetchall()
    return [_row_to_card(r) for r in rows]


class SeasonCardWriter:
    """Cross-user write access to ``user_season_cards``."""

    def __init__(self, conn: DuckDBPyConnection, actor: str) -> None:
        if not actor:
            raise ValueError("SeasonCardWriter needs an actor")
        self.conn = conn
        self.actor = actor
        self._log = log.bind(actor=actor)

    def get_card(self, user_id: str, season_id: str) -> UserSeasonCard | None:
        row = self.conn.execute(
            f"SELECT {', '.join(_COLUMNS)} FROM user_season_cards WHERE user_id = ? AND season_id = ?",
            [user_id, season_id],
        ).fetchone()
        return _row_to_card(row) if row else None

    def count_cards(self, season_id: str) -> int:
        return self.conn.execute(
            "SELECT COUNT(*) FROM user_season_cards WHERE season_id = ?", [season_id]
        ).fetchone()[0]

    def upsert_card(self, user_id: str, season_id: str, tier: Tier, highest: Tier, now_ms: int | None = None) -> None:
        """Insert or update the card for (user_id, season_id). ``created_at`` is kept on update."""
        now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
        self.conn.execute(
            """
            INSERT INTO user_season_cards (user_id, season_id, tier, highest_tier_achieved, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT (user_id, season_id) DO UPDATE SET
                tier = excluded.tier,
                highest_tier_achieved = excluded.highest_tier_achieved,
                updated_at = excluded.updated_at
            """,
            [user_id, season_id, Tier(tier).value, Tier(highest).value, now_ms, now_ms],
        )
        self._log.info("season_card_upserted", user_id=user_id, season_id=season_id, tier=Tier(tier).value, highest=Tier(highest).value)

    def _existing_user_ids(self, season_id: str, user_ids: Sequence[str]) -> set[str]:
        if not user_ids:
            return set()
        placeholders = ", ".join("?" for _ in user_ids)
        rows = self.conn.execute(
            f"SELECT user_id FROM user_season_cards WHERE season_id = ? AND user_id IN ({placeholders})",
            [season_id, *user_ids],
        ).fetchall()
        return {r[0] for r in rows}

    def insert_missing(
        self,
        season_id: str,
        cards: Sequence[UserSeasonCard],
        batch_size: int = 500,
    ) -> list[str]:
        """Create cards that do not exist yet; existing (user, season) pairs are left untouched.

        One multi-row insert per batch, ``ON CONFLICT DO NOTHING`` on the card
        key. Returns the user_ids of the rows the insert actually wrote.
        """
        seen: set[str] = set()
        unique: list[UserSeasonCard] = []
        for card in cards:
            if card.season_id != season_id:
                raise ValueError(f"card for season {card.season_id!r} passed to insert for {season_id!r}")
            if card.user_id not in seen:
                seen.add(card.user_id)
                unique.append(card)

        created: list[str] = []
        for batch in _batches(unique, max(1, batch_size)):
            existing = self._existing_user_ids(season_id, [c.user_id for c in batch])
            fresh = [c for c in batch if c.user_id not in existing]
            if not fresh:
                continue
            now_ms = int(time.time() * 1000)
            values_sql = ", ".join("(?, ?, ?, ?, ?, ?)" for _ in fresh)
            params: list = []
            for c in fresh:
                params += [
                    c.user_id,
                    c.season_id,
                    c.tier.value,
                    c.highest_tier_achieved.value,
                    c.created_at or now_ms,
                    c.updated_at or now_ms,
                ]
            rows = self.conn.execute(
                f"""
                INSERT INTO user_season_cards (user_id, season_id, tier, highest_tier_achieved, created_at, updated_at)
                VALUES {values_sql}
                ON CONFLICT (user_id, season_id) DO NOTHING
                RETURNING user_id
                """,
                params,
            ).fetchall()
            inserted = {r[0] for r in rows}
            created.extend(c.user_id for c in fresh if c.user_id in inserted)
        self._log.info(
            "season_cards_inserted",
            season_id=season_id,
            created=len(created),
            skipped=len(unique) - len(created),
        )
        return created
