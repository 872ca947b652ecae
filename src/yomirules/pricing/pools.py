"""Initial liquidity pools for a binary market."""

from __future__ import annotations

from typing import NamedTuple

import structlog

from yomirules.models.market import Market, MarketKind
from yomirules.models.rules import PoolRules
from yomirules.pricing.rounding import round_half_up

log = structlog.get_logger(__name__)


class PoolAllocation(NamedTuple):
    pool_yes: int
    pool_no: int

    @property
    def implied_probability(self) -> float:
        """Percent implied by pool_yes / (pool_yes + pool_no)."""
        total = self.pool_yes + self.pool_no
        return self.pool_yes / total * 100 if total else 0.0


def allocate(
    desired_probability: float | None,
    total_liquidity: int,
    *,
    rules: PoolRules | None = None,
) -> PoolAllocation:
    """Split ``total_liquidity`` into (pool_yes, pool_no) so that pool_yes/total ~ desired_probability.

    Each side is rounded independently, so the sum can drift by one from
    ``total_liquidity``. A side below ``min_pool`` is raised to the floor
    without taking anything from the other side. Without a desired
    probability both pools get half the liquidity. The probability is not
    range-checked here.
    """
    rules = rules or PoolRules()
    if desired_probability is None:
        half = total_liquidity // 2
        return PoolAllocation(half, half)

    p = desired_probability / 100
    pool_yes = round_half_up(p * total_liquidity)
    pool_no = round_half_up((1 - p) * total_liquidity)
    if pool_yes < rules.min_pool or pool_no < rules.min_pool:
        log.debug(
            "pool_floor_clamped",
            desired_probability=desired_probability,
            pool_yes=pool_yes,
            pool_no=pool_no,
            min_pool=rules.min_pool,
        )
        pool_yes = max(pool_yes, rules.min_pool)
        pool_no = max(pool_no, rules.min_pool)
    return PoolAllocation(pool_yes, pool_no)


def allocate_market_pools(
    market: Market,
    total_liquidity: int | None = None,
    *,
    rules: PoolRules | None = None,
) -> PoolAllocation:
    """Pools for a market at creation time, from its "yes" outcome's probability.

    Multi-outcome markets, and binary markets missing a yes outcome, get the even split.
    """
    rules = rules or PoolRules()
    liquidity = total_liquidity if total_liquidity is not None else rules.default_liquidity
    desired = None
    if market.kind is MarketKind.BINARY and len(market.outcomes) >= 2:
        yes = market.yes_outcome
        if yes is not None:
            desired = yes.probability
    return allocate(desired, liquidity, rules=rules)
