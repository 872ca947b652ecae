"""Seasons subcommand: load-leaderboard, recompute, award, grant-beta, cards."""

from __future__ import annotations

import json
import os
from pathlib import Path

import typer

from yomirules.models import LeaderboardEntry, TierThresholds
from yomirules.storage.cards import SeasonCardWriter, list_user_cards
from yomirules.storage.db import get_connection, init_schema
from yomirules.storage.leaderboards import upsert_entries
from yomirules.tiers.service import award_season, grant_beta_cards, recompute_card

app = typer.Typer(help="Season leaderboards and cards")


def _actor(actor: str | None) -> str:
    return actor or f"cli:{os.environ.get('USER', 'unknown')}"


@app.command("load-leaderboard")
def load_leaderboard_cmd(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, help="JSON list of {user_id, points, wins, losses, total_bet_amount}"),
    season: str = typer.Option(..., "--season", "-s", help="Season ID"),
) -> None:
    """Seed or refresh a season leaderboard from a JSON file."""
    rows = json.loads(path.read_text())
    entries = [LeaderboardEntry(season_id=season, **row) for row in rows]
    conn = get_connection(ctx.obj["db_path"])
    init_schema(conn)
    try:
        upsert_entries(conn, entries)
        typer.echo(f"Loaded {len(entries)} leaderboard rows for season {season}.")
    finally:
        conn.close()


@app.command("recompute")
def recompute(
    ctx: typer.Context,
    season: str = typer.Option(..., "--season", "-s", help="Season ID"),
    user: str = typer.Option(..., "--user", "-u", help="User ID"),
    actor: str | None = typer.Option(None, "--actor", help="Acting principal for the audit log"),
) -> None:
    """Recompute one user's card with the highest-tier ratchet."""
    settings = ctx.obj["settings"]
    conn = get_connection(ctx.obj["db_path"])
    init_schema(conn)
    try:
        writer = SeasonCardWriter(conn, _actor(actor))
        progress = recompute_card(writer, season, user, TierThresholds.from_settings(settings))
        typer.echo(f"Tier: {progress.tier.value}  Highest: {progress.highest_tier.value}")
        if progress.is_new_tier:
            typer.echo("New tier unlocked!")
    finally:
        conn.close()


@app.command("award")
def award(
    ctx: typer.Context,
    season: str = typer.Option(..., "--season", "-s", help="Season ID"),
    actor: str | None = typer.Option(None, "--actor", help="Acting principal for the audit log"),
) -> None:
    """Give every participant of a season a card (existing cards are kept)."""
    settings = ctx.obj["settings"]
    conn = get_connection(ctx.obj["db_path"])
    init_schema(conn)
    try:
        writer = SeasonCardWriter(conn, _actor(actor))
        report = award_season(
            writer, season, TierThresholds.from_settings(settings), batch_size=settings.card_batch_size
        )
        typer.echo(f"Created: {report.created_count}  Skipped: {report.skipped_count}")
    finally:
        conn.close()


@app.command("grant-beta")
def grant_beta(
    ctx: typer.Context,
    users: list[str] = typer.Argument(..., help="User IDs"),
    actor: str | None = typer.Option(None, "--actor", help="Acting principal for the audit log"),
) -> None:
    """One-time beta card grant."""
    settings = ctx.obj["settings"]
    conn = get_connection(ctx.obj["db_path"])
    init_schema(conn)
    try:
        writer = SeasonCardWriter(conn, _actor(actor))
        report = grant_beta_cards(writer, users, settings.beta_season_id, batch_size=settings.card_batch_size)
        typer.echo(f"Created: {report.created_count}  Skipped: {report.skipped_count}")
    finally:
        conn.close()


@app.command("cards")
def cards(
    ctx: typer.Context,
    user: str = typer.Option(..., "--user", "-u", help="User ID"),
) -> None:
    """List a user's card collection (highest tier per season)."""
    conn = get_connection(ctx.obj["db_path"])
    init_schema(conn)
    try:
        rows = list_user_cards(conn, user)
        for c in rows:
            typer.echo(f"  {c.season_id:<20} {c.highest_tier_achieved.value}")
        typer.echo(f"Total: {len(rows)} cards")
    finally:
        conn.close()
