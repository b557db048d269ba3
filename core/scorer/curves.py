#!/usr/bin/env python3
"""
Curve Library - Numeric normalization helpers shared by the component calculators.

- diminishing_curve: logarithmic count -> score mapping that reaches its cap
  at a target count and flattens past it
- recency_weighted_average: mean of percentages, newest values weighted higher
- linear_slope_normalized: least-squares trend mapped onto 0-100 (50 = flat)
"""

from typing import Sequence
import math

import numpy as np

RECENCY_START_WEIGHT = 1.5
RECENCY_DECAY = 0.1
RECENCY_FLOOR = 1.0

SLOPE_NEUTRAL = 50.0
SLOPE_SCALE = 10.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def diminishing_curve(count: float, target: float, cap: float) -> int:
    """
    Map a raw count onto [0, cap] with diminishing returns.

    Formula: round(cap * ln(1 + count/scale) / ln(1 + target/scale)), scale = target/2

    count == target yields exactly cap; beyond target the curve keeps
    growing but is clamped to cap.
    """
    if count is None or count <= 0 or target <= 0 or cap <= 0:
        return 0

    scale = target / 2.0
    ratio = math.log1p(count / scale) / math.log1p(target / scale)
    return int(clamp(round_half_up(cap * ratio), 0, cap))


def recency_weighted_average(values: Sequence[float]) -> float:
    """
    Weighted mean of percentages ordered newest first.

    The i-th value (0 = newest) gets weight max(1.5 - 0.1*i, 1.0).
    Returns 0.0 for an empty sequence.
    """
    if not values:
        return 0.0

    scores = np.asarray(values, dtype=float)
    weights = np.maximum(
        RECENCY_START_WEIGHT - RECENCY_DECAY * np.arange(len(scores)),
        RECENCY_FLOOR
    )
    return float((scores * weights).sum() / weights.sum())


def linear_slope_normalized(series: Sequence[float]) -> int:
    """
    Ordinary least-squares slope of value vs. index, mapped to 0-100.

    Series is ordered oldest first. 50 means flat; each point of slope per
    step moves the result by 10. Single-point or flat series return 50.
    """
    if len(series) < 2:
        return int(SLOPE_NEUTRAL)

    y = np.asarray(series, dtype=float)
    x = np.arange(len(y), dtype=float)
    x_centered = x - x.mean()

    denominator = float((x_centered ** 2).sum())
    if denominator == 0:
        return int(SLOPE_NEUTRAL)

    slope = float((x_centered * (y - y.mean())).sum()) / denominator
    return int(clamp(round_half_up(SLOPE_NEUTRAL + SLOPE_SCALE * slope)))
