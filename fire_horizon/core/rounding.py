from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded towards +infinity (12.5 -> 13, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
