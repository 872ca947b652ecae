"""Rewards subcommand: status, claim, welcome."""

from __future__ import annotations

import random
from datetime import datetime, timezone

import typer

from yomirules.errors import AlreadyClaimed, ClaimConflict
from yomirules.models import RewardSchedule
from yomirules.rewards.daily import reward_status
from yomirules.rewards.jackpot import WeightedJackpot
from yomirules.rewards.service import claim_daily, claim_welcome_bonus
from yomirules.storage.db import get_connection, init_schema
from yomirules.storage.rewards import get_state

app = typer.Typer(help="Daily login rewards")


def _fmt_ts(ms: int | None) -> str:
    if ms is None:
        return "-"
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


@app.command("status")
def status(
    ctx: typer.Context,
    user: str = typer.Option(..., "--user", "-u", help="User ID"),
) -> None:
    """Show claim eligibility and today's reward."""
    schedule = RewardSchedule.from_settings(ctx.obj["settings"])
    conn = get_connection(ctx.obj["db_path"])
    init_schema(conn)
    try:
        st = reward_status(get_state(conn, user), schedule=schedule)
        typer.echo(f"Can claim: {st.can_claim}  Next claim: {_fmt_ts(st.next_claim_at)}")
        reward = "jackpot" if st.is_jackpot_day else str(st.today_reward)
        typer.echo(f"Streak day: {st.current_streak + 1}/7  Today's reward: {reward}")
        typer.echo(f"Welcome bonus available: {st.can_claim_welcome}")
    finally:
        conn.close()


@app.command("claim")
def claim(
    ctx: typer.Context,
    user: str = typer.Option(..., "--user", "-u", help="User ID"),
) -> None:
    """Claim today's reward."""
    schedule = RewardSchedule.from_settings(ctx.obj["settings"])
    seed = ctx.obj["seed"]
    draw = WeightedJackpot(schedule.jackpot, random.Random(seed) if seed is not None else None)
    conn = get_connection(ctx.obj["db_path"])
    init_schema(conn)
    try:
        outcome = claim_daily(conn, user, schedule=schedule, draw=draw)
    except ClaimConflict as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)
    finally:
        conn.close()
    if not outcome.can_claim:
        typer.echo(f"Next reward available at {_fmt_ts(outcome.next_claim_at)}")
        raise typer.Exit(1)
    if outcome.is_jackpot and outcome.jackpot is not None:
        typer.echo(f"Day 7 jackpot: {outcome.jackpot.label} ({outcome.jackpot.rarity}) +{outcome.reward_amount}")
    else:
        typer.echo(f"Day {outcome.display_day}: +{outcome.reward_amount}")


@app.command("welcome")
def welcome(
    ctx: typer.Context,
    user: str = typer.Option(..., "--user", "-u", help="User ID"),
) -> None:
    """Claim the one-time welcome bonus."""
    schedule = RewardSchedule.from_settings(ctx.obj["settings"])
    conn = get_connection(ctx.obj["db_path"])
    init_schema(conn)
    try:
        amount = claim_welcome_bonus(conn, user, schedule=schedule)
    except AlreadyClaimed:
        typer.echo("Welcome bonus already claimed.")
        raise typer.Exit(1)
    finally:
        conn.close()
    typer.echo(f"Welcome bonus: +{amount}")
