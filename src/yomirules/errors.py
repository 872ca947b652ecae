"""Exception types raised by the rules engine and its persistence boundary."""

from __future__ import annotations


class YomiError(Exception):
    """Base for all yomirules errors."""


class PreconditionError(YomiError, ValueError):
    """Caller passed a value the calculators do not accept (zero probability, beta in ordering, ...)."""


class StakeRejected(YomiError):
    """Stake amount outside the configured limits."""

    def __init__(self, amount: float, min_stake: float, max_stake: float) -> None:
        self.amount = amount
        self.min_stake = min_stake
        self.max_stake = max_stake
        super().__init__(f"stake {amount} outside [{min_stake}, {max_stake}]")


class ClaimConflict(YomiError):
    """A concurrent claim updated the reward state first; nothing was credited."""


class AlreadyClaimed(YomiError):
    """One-time grant (welcome bonus) was already taken."""
