"""Utility functions for indicator calculations."""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple


def true_range(high: float, low: float, prev_close: Optional[float]) -> float:
    """Calculate true range.

    TR = max(H - L, abs(H - prev_C), abs(L - prev_C))

    Args:
        high: Current high
        low: Current low
        prev_close: Previous close, None on the first bar

    Returns:
        True range value (H - L when there is no previous close)
    """
    hl_range = high - low
    if prev_close is None:
        return hl_range

    h_prev_close = abs(high - prev_close)
    l_prev_close = abs(low - prev_close)

    return max(hl_range, h_prev_close, l_prev_close)


def directional_movement(
    high: float,
    low: float,
    prev_high: float,
    prev_low: float
) -> Tuple[float, float]:
    """Calculate the (+DM, -DM) pair for one bar.

    Only the larger excursion counts; an inside bar or a tie gives (0, 0).
    """
    diff_p = high - prev_high
    diff_m = prev_low - low

    if diff_m > 0.0 and diff_p < diff_m:
        return 0.0, diff_m
    if diff_p > 0.0 and diff_p > diff_m:
        return diff_p, 0.0
    return 0.0, 0.0


def wilder_sum(previous: float, value: float, period: int) -> float:
    """Advance a Wilder-smoothed running sum by one value.

    sum = sum - sum / period + value
    """
    return previous - (previous / period) + value


def wilder_average(previous: float, value: float, period: int) -> float:
    """Advance a Wilder-smoothed average by one value.

    avg = (avg * (period - 1) + value) / period
    """
    return ((previous * (period - 1.0)) + value) / period


def running_mean(values: Iterable[float], count: int) -> float:
    """Plain left-to-right sum divided by count.

    Accumulated one value at a time so the result is reproducible across
    interpreters (builtin sum() uses compensated summation on 3.12+).
    """
    total = 0.0
    for value in values:
        total += value
    return total / count


def round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))
