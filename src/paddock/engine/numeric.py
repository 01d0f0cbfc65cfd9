"""Small numeric helpers shared by the engine."""

from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    ``round()`` uses banker's rounding, which would shift personality
    inheritance and satisfaction requirements at exact halves.
    """
    return math.floor(value + 0.5)
