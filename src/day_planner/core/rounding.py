# src/day_planner/core/rounding.py

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """
    Nearest integer, halves toward +infinity: 12.5 -> 13, -2.5 -> -2.

    Built-in round() sends halves to the even neighbour (12.5 -> 12), which
    is not what a percentage or a temperature display should show.
    """
    return math.floor(value + 0.5)
