"""
Rounding helpers.

Built-in `round` sends exact halves to the even neighbour (2.5 -> 2).
Durations and suggested gaps are reported with halves rounded up instead,
so a 2m30s event lasts 3 minutes.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round a non-negative number to the nearest integer, halves upwards."""
    return int(math.floor(value + 0.5))
