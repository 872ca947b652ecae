"""Pricing rules: initial pool allocation and stake-time payouts."""

from yomirules.pricing.payout import StakeQuote, build_stake, implied_probability, payout, quote_stake
from yomirules.pricing.pools import PoolAllocation, allocate, allocate_market_pools

__all__ = [
    "PoolAllocation",
    "allocate",
    "allocate_market_pools",
    "payout",
    "implied_probability",
    "StakeQuote",
    "quote_stake",
    "build_stake",
]
