"""Stake-time payout: plain contract and the full stake ticket."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from yomirules.errors import PreconditionError, StakeRejected
from yomirules.models.market import Direction, Market, MarketKind, Stake
from yomirules.models.rules import StakeRules
from yomirules.pricing.rounding import round_half_up

log = structlog.get_logger(__name__)


def payout(amount: float, implied_probability_percent: float) -> int:
    """Payout if the chosen side wins: round(amount / (p / 100)).

    ``implied_probability_percent`` must be positive; zero has no defined payout.
    """
    if implied_probability_percent <= 0:
        raise PreconditionError(
            f"implied probability must be > 0, got {implied_probability_percent}"
        )
    return round_half_up(amount / (implied_probability_percent / 100))


def implied_probability(market: Market, outcome_id: str, direction: Direction = Direction.YES) -> float:
    """Percent probability backing a stake on ``outcome_id`` in ``direction``.

    Binary markets: the stored price of the chosen side (always a yes stake on
    that side). Multi-outcome: the outcome's probability for yes, its
    complement for no.
    """
    outcome = market.outcome(outcome_id)
    if outcome is None:
        raise PreconditionError(f"outcome {outcome_id!r} not in market {market.market_id!r}")
    direction = Direction(direction)
    if market.kind is MarketKind.BINARY:
        if direction is Direction.NO:
            raise PreconditionError("binary stakes pick a side; direction must be yes")
        return outcome.probability
    if direction is Direction.NO:
        return 100 - outcome.probability
    return outcome.probability


@dataclass
class StakeQuote:
    """Stake ticket as recorded: fee-adjusted investment, clamped odds, payout."""

    amount: int
    fee: float
    investment: float
    implied_probability: float  # percent, before clamping
    odds_at_bet: float  # 2 decimals, display/storage only
    potential_payout: int
    direction: Direction


def quote_stake(
    market: Market,
    outcome_id: str,
    amount: int,
    direction: Direction = Direction.YES,
    *,
    rules: StakeRules | None = None,
) -> StakeQuote:
    """Price a stake: validate limits, take the house fee, clamp probability and odds."""
    rules = rules or StakeRules()
    if amount < rules.min_stake or amount > rules.max_stake:
        raise StakeRejected(amount, rules.min_stake, rules.max_stake)
    direction = Direction(direction)
    pct = implied_probability(market, outcome_id, direction)

    fee = amount * rules.fee_rate
    investment = amount - fee
    prob = min(rules.max_probability, max(rules.min_probability, pct / 100))
    odds = min(rules.max_odds, max(rules.min_odds, 1 / prob))
    quote = StakeQuote(
        amount=amount,
        fee=fee,
        investment=investment,
        implied_probability=pct,
        odds_at_bet=round_half_up(odds * 100) / 100,
        potential_payout=round_half_up(investment * odds),
        direction=direction,
    )
    log.debug(
        "stake_quoted",
        market_id=market.market_id,
        outcome_id=outcome_id,
        direction=direction.value,
        probability=pct,
        odds=quote.odds_at_bet,
        payout=quote.potential_payout,
    )
    return quote


def build_stake(
    market: Market,
    outcome_id: str,
    user_id: str,
    amount: int,
    direction: Direction = Direction.YES,
    *,
    rules: StakeRules | None = None,
) -> Stake:
    """Quote and snapshot a pending Stake for the caller to persist."""
    quote = quote_stake(market, outcome_id, amount, direction, rules=rules)
    return Stake(
        market_id=market.market_id,
        outcome_id=outcome_id,
        user_id=user_id,
        amount=amount,
        odds_at_bet=quote.odds_at_bet,
        potential_payout=quote.potential_payout,
        direction=quote.direction,
    )
