"""Half-up rounding, as the platform's stored numbers were produced."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going towards +inf (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)
