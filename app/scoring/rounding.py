from __future__ import annotations

import math

# Float noise such as 62.49999999999999 must still round as the half it represents.
_NOISE_DIGITS = 9


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (62.5 -> 63)."""
    return int(math.floor(round(value, _NOISE_DIGITS) + 0.5))


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, round_half_up(value)))
