"""Trend classification from periodic growth rates."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

INCREASING = "increasing"
DECREASING = "decreasing"
STABLE = "stable"
VOLATILE = "volatile"


def classify_trend(
    growth_rates: Sequence[float],
    has_seasonality: bool = False,
    volatility_threshold: float = 30.0,
) -> str:
    """Label a series from its percent growth rates.

    A population standard deviation above ``volatility_threshold`` makes the
    series volatile. Otherwise the share of positive rates decides the
    direction; seasonal series get looser cutoffs (60/40 instead of 70/30)
    because part of their swing is expected.
    """
    if len(growth_rates) == 0:
        return STABLE

    rates = np.asarray(growth_rates, dtype=float)
    if float(np.std(rates)) > volatility_threshold:
        return VOLATILE

    positive_pct = float((rates > 0).mean() * 100)
    rising, falling = (60, 40) if has_seasonality else (70, 30)
    if positive_pct >= rising:
        return INCREASING
    if positive_pct <= falling:
        return DECREASING
    return STABLE
