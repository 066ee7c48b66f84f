# File: utils/math_utils.py
"""Math and calculation utilities for Project 50.

Pure Python math functions with ZERO Home Assistant dependencies.

Functions:
    - calculate_percentage: Progress percentage calculations
    - clamp: Bound an integer to a closed range
    - longest_run: Longest run of consecutive integers
    - run_ending_at: Length of the consecutive run ending at a value
"""

from __future__ import annotations

from collections.abc import Iterable

# Default float precision for percentages
DATA_FLOAT_PRECISION = 2


def calculate_percentage(
    current: float,
    target: float,
    precision: int = DATA_FLOAT_PRECISION,
) -> float:
    """Calculate progress percentage with proper rounding.

    Examples:
        calculate_percentage(1, 3) → 33.33
        calculate_percentage(5, 0) → 0.0  # Division by zero protection
    """
    if target <= 0:
        return 0.0
    return round((current / target) * 100, precision)


def clamp(value: int, min_val: int, max_val: int) -> int:
    """Clamp a value between minimum and maximum bounds.

    Examples:
        clamp(51, 1, 50) → 50
        clamp(-2, 1, 50) → 1
    """
    return max(min_val, min(value, max_val))


def longest_run(values: Iterable[int]) -> int:
    """Return the length of the longest run of consecutive integers.

    Examples:
        longest_run([1, 2, 3, 5, 6]) → 3
        longest_run([]) → 0
    """
    best = 0
    current = 0
    previous: int | None = None
    for value in sorted(set(values)):
        current = current + 1 if previous is not None and value == previous + 1 else 1
        best = max(best, current)
        previous = value
    return best


def run_ending_at(values: Iterable[int], end: int) -> int:
    """Return the length of the consecutive run that ends exactly at `end`.

    Examples:
        run_ending_at([1, 2, 3, 5], 3) → 3
        run_ending_at([1, 2, 3, 5], 4) → 0
    """
    members = set(values)
    length = 0
    while end - length in members:
        length += 1
    return length
