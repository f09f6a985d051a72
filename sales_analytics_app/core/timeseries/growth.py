"""Growth rates: clamped median growth, periodic rates, CAGR."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from ..data.models import TimeSeriesPoint

logger = logging.getLogger(__name__)


def _values(series: Sequence[TimeSeriesPoint] | Sequence[float]) -> np.ndarray:
    values = [p.value if isinstance(p, TimeSeriesPoint) else p for p in series]
    return np.asarray(values, dtype=float)


def estimate_growth_rate(
    series: Sequence[TimeSeriesPoint] | Sequence[float],
    bounds: tuple[float, float] = (-0.2, 0.2),
    default: float = 0.01,
) -> float:
    """Median period-over-period growth between consecutive non-zero points.

    Zero periods are skipped rather than divided by, and the median keeps a
    single spike from dominating. The result is clamped to ``bounds``;
    fewer than two usable points give ``default`` (also clamped).
    """
    low, high = bounds
    values = _values(series)
    values = values[np.isfinite(values) & (values > 0)]

    if len(values) < 2:
        return float(np.clip(default, low, high))

    rates = np.diff(values) / values[:-1]
    rates = rates[np.isfinite(rates)]
    if len(rates) == 0:
        return float(np.clip(default, low, high))

    return float(np.clip(np.median(rates), low, high))


def periodic_growth_rates(series: Sequence[TimeSeriesPoint] | Sequence[float]) -> list[float]:
    """Percent change between every pair of consecutive periods.

    Growth from a zero period counts as 100% when the next period sold
    anything and 0% otherwise.
    """
    values = _values(series)
    rates = []
    for prev, cur in zip(values[:-1], values[1:]):
        if prev == 0:
            rates.append(100.0 if cur > 0 else 0.0)
        else:
            rates.append(float((cur - prev) / prev * 100))
    return rates


def overall_growth(series: Sequence[TimeSeriesPoint] | Sequence[float]) -> float:
    """Percent change from the first to the last period."""
    values = _values(series)
    if len(values) < 2:
        return 0.0
    first, last = values[0], values[-1]
    if first == 0:
        return 100.0 if last > 0 else 0.0
    return float((last - first) / first * 100)


def yearly_growth_trend(
    series: Sequence[TimeSeriesPoint],
    bounds: tuple[float, float] = (-0.10, 0.15),
    default: float = 0.05,
) -> float:
    """Compound annual growth between the first and last calendar year's average."""
    by_year: dict[int, list[float]] = {}
    for point in series:
        by_year.setdefault(point.period.year, []).append(point.value)

    if len(by_year) < 2:
        return default

    years = sorted(by_year)
    first_year, last_year = years[0], years[-1]
    first_avg = float(np.mean(by_year[first_year]))
    last_avg = float(np.mean(by_year[last_year]))
    n_years = last_year - first_year

    if n_years == 0 or first_avg <= 0 or last_avg < 0:
        return default

    cagr = (last_avg / first_avg) ** (1 / max(1, n_years)) - 1
    capped = float(np.clip(cagr, *bounds))
    logger.debug(f"Yearly growth trend: {capped:.2%} (raw {cagr:.2%})")
    return capped
