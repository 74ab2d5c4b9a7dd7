"""Rounding rules for reported metrics.

Every rounded figure in the analytics output goes through ``round_half_up``
so that 17.5 days reports as 18 and -12.5% reports as -12, regardless of
Python's banker's rounding in the builtin ``round``. Shares of one
whole that are reported side by side go through ``allocate_percentages``
instead, so they never add up to more than 100.
"""

import math
from typing import List


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    """Rounded ``part / whole * 100``; 0 when ``whole`` is not positive."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def average(total: float, count: int) -> int:
    """Rounded mean; 0 for an empty set."""
    if count <= 0:
        return 0
    return round_half_up(total / count)


def allocate_percentages(counts: List[int], whole: int) -> List[int]:
    """Integer percentages of ``whole`` that never add up to more than 100.

    Uses the largest-remainder method: every share is floored, then the
    points lost to flooring are handed back to the largest remainders
    (earlier entries win ties). Each result is the floor or ceiling of its
    exact share, and the total is the rounded sum of the exact shares,
    capped at 100.
    """
    if whole <= 0:
        return [0 for _ in counts]

    floors = [count * 100 // whole for count in counts]
    remainders = [count * 100 % whole for count in counts]
    target = min(100, round_half_up(sum(counts) * 100 / whole))

    allocated = list(floors)
    spare = target - sum(floors)
    by_remainder = sorted(range(len(counts)), key=lambda index: -remainders[index])
    for index in by_remainder:
        if spare <= 0 or remainders[index] == 0:
            break
        allocated[index] += 1
        spare -= 1
    return allocated
