"""Weighted jackpot draw for the last day of the streak."""

from __future__ import annotations

import random
from typing import Protocol

from yomirules.models.rewards import JackpotResult
from yomirules.models.rules import DEFAULT_JACKPOT, JackpotEntry


class JackpotDraw(Protocol):
    """Anything that yields one jackpot result per call."""

    def __call__(self) -> JackpotResult: ...


class WeightedJackpot:
    """Draw an entry with probability weight / sum(weights)."""

    def __init__(self, entries: tuple[JackpotEntry, ...] = DEFAULT_JACKPOT, rng: random.Random | None = None) -> None:
        if not entries:
            raise ValueError("jackpot table is empty")
        self.entries = entries
        self.rng = rng or random.Random()

    def __call__(self) -> JackpotResult:
        (entry,) = self.rng.choices(self.entries, weights=[e.weight for e in self.entries], k=1)
        return JackpotResult(amount=entry.amount, rarity=entry.rarity, label=entry.label, color=entry.color)

    def odds(self) -> dict[str, float]:
        """Rarity -> probability, for display."""
        total = sum(e.weight for e in self.entries)
        return {e.rarity: e.weight / total for e in self.entries}
