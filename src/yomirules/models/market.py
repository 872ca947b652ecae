"""Market, Outcome, Stake - entities consumed by the pricing rules."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class MarketKind(str, Enum):
    BINARY = "binary"
    MULTI = "multi-outcome"


class MarketStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    RESOLVED = "resolved"


class Direction(str, Enum):
    """Polarity of a stake against an outcome."""

    YES = "yes"
    NO = "no"


class StakeStatus(str, Enum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    CANCELLED = "cancelled"


class Outcome(BaseModel):
    """Selectable answer within a market. Probability is a percentage, tracked per outcome."""

    outcome_id: str
    name: str
    color: str | None = None
    probability: float = Field(..., ge=0, le=100, description="Percent in [0, 100]")
    is_winner: bool | None = None
    # Binary markets mark their "yes" side explicitly
    is_yes: bool = False


class Market(BaseModel):
    market_id: str
    question: str = ""
    kind: MarketKind = MarketKind.BINARY
    status: MarketStatus = MarketStatus.OPEN
    outcomes: list[Outcome] = Field(default_factory=list)
    pool_yes: int | None = None
    pool_no: int | None = None

    @property
    def yes_outcome(self) -> Outcome | None:
        for outcome in self.outcomes:
            if outcome.is_yes:
                return outcome
        return None

    def outcome(self, outcome_id: str) -> Outcome | None:
        for outcome in self.outcomes:
            if outcome.outcome_id == outcome_id:
                return outcome
        return None


class Stake(BaseModel):
    """A bet as recorded at stake time. Only ``status`` changes afterwards."""

    market_id: str
    outcome_id: str
    user_id: str
    amount: int = Field(..., gt=0)
    odds_at_bet: float
    potential_payout: int
    direction: Direction = Direction.YES
    status: StakeStatus = StakeStatus.PENDING
