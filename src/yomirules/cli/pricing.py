"""Pricing subcommand: allocate, payout, quote."""

from __future__ import annotations

import typer

from yomirules.errors import PreconditionError, StakeRejected
from yomirules.models import Direction, Market, MarketKind, Outcome, PoolRules, StakeRules
from yomirules.pricing import allocate, payout, quote_stake

app = typer.Typer(help="Market pools and stake payouts")


@app.command("allocate")
def allocate_cmd(
    ctx: typer.Context,
    probability: float | None = typer.Option(None, "--probability", "-p", help="Desired yes probability (percent)"),
    liquidity: int | None = typer.Option(None, "--liquidity", "-l", help="Total liquidity (default from config)"),
) -> None:
    """Initial yes/no pools for a binary market."""
    rules = PoolRules.from_settings(ctx.obj["settings"])
    total = liquidity if liquidity is not None else rules.default_liquidity
    pools = allocate(probability, total, rules=rules)
    typer.echo(f"pool_yes={pools.pool_yes}  pool_no={pools.pool_no}  implied={pools.implied_probability:.2f}%")
    drift = pools.pool_yes + pools.pool_no - total
    if drift:
        typer.echo(f"Note: pools sum to {total + drift} ({drift:+d} vs liquidity)")


@app.command("payout")
def payout_cmd(
    amount: float = typer.Option(..., "--amount", "-a", help="Stake amount"),
    probability: float = typer.Option(..., "--probability", "-p", help="Implied probability (percent)"),
) -> None:
    """Payout of a winning stake at the given implied probability."""
    try:
        typer.echo(str(payout(amount, probability)))
    except PreconditionError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("quote")
def quote_cmd(
    ctx: typer.Context,
    amount: int = typer.Option(..., "--amount", "-a", help="Stake amount"),
    probability: float = typer.Option(..., "--probability", "-p", help="Outcome probability (percent)"),
    no: bool = typer.Option(False, "--no", help="Bet against the outcome (multi-outcome markets only)"),
    multi: bool = typer.Option(False, "--multi", help="Treat as a multi-outcome market"),
) -> None:
    """Full stake ticket: fee, odds at bet, potential payout."""
    kind = MarketKind.MULTI if multi else MarketKind.BINARY
    market = Market(
        market_id="cli",
        kind=kind,
        outcomes=[Outcome(outcome_id="o1", name="Outcome", probability=probability, is_yes=True)],
    )
    direction = Direction.NO if no else Direction.YES
    try:
        quote = quote_stake(market, "o1", amount, direction, rules=StakeRules.from_settings(ctx.obj["settings"]))
    except (PreconditionError, StakeRejected) as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)
    typer.echo(f"Fee: {quote.fee:.2f}  Investment: {quote.investment:.2f}")
    typer.echo(f"Odds: {quote.odds_at_bet:.2f}  Potential payout: {quote.potential_payout}")
