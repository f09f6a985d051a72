"""Historical revenue analysis: statistics, growth, trend and seasonality."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import numpy as np

from ..config import TrendConfig
from ..data.models import TimeSeriesPoint
from ..data.repository import SalesRepository
from ..errors import InsufficientDataError
from ..periods.period_key import as_naive_datetime, utc_now
from ..periods.resolution import Resolution, select_trend_resolution
from ..periods.windows import QueryWindow, trend_window
from ..timeseries.aggregation import aggregate_sales
from ..timeseries.growth import estimate_growth_rate, overall_growth, periodic_growth_rates
from ..timeseries.seasonality import MONTH, WEEKDAY, SeasonalPattern, seasonal_indices
from ..timeseries.trend import classify_trend
from .sales_data import fetch_records, lookup_bounds

logger = logging.getLogger(__name__)

_SEASONAL_UNITS = {
    Resolution.HOURLY: WEEKDAY,
    Resolution.DAILY: WEEKDAY,
    Resolution.MONTHLY: MONTH,
}


@dataclass(frozen=True)
class GrowthSummary:
    overall: float
    periodic: list[float] = field(default_factory=list)
    average_periodic: float = 0.0


@dataclass(frozen=True)
class RevenueTrendAnalysis:
    points: list[TimeSeriesPoint]
    total: float
    average: float
    median: float
    min_point: TimeSeriesPoint
    max_point: TimeSeriesPoint
    growth: GrowthSummary
    resolution: Resolution
    window: QueryWindow
    trend: str
    seasonality: SeasonalPattern | None = None
    forecast: list[TimeSeriesPoint] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "data": [p.to_dict() for p in self.points],
            "total": self.total,
            "average": self.average,
            "median": self.median,
            "min": self.min_point.to_dict(),
            "max": self.max_point.to_dict(),
            "growth": {
                "overall": self.growth.overall,
                "periodic": self.growth.periodic,
                "averagePeriodic": self.growth.average_periodic,
            },
            "resolution": self.resolution.label,
            "dateRange": {"start": self.window.start.isoformat(), "end": self.window.end.isoformat()},
            "trend": self.trend,
        }
        if self.seasonality is not None:
            s = self.seasonality
            out["seasonality"] = {
                "detected": s.detected,
                "unit": s.unit,
                "indices": s.indices,
                "strongest": s.unit_name(s.strongest) if s.strongest is not None else None,
                "weakest": s.unit_name(s.weakest) if s.weakest is not None else None,
            }
        if self.forecast is not None:
            out["forecastData"] = [p.to_dict() for p in self.forecast]
        return out


def simple_forecast(
    points: list[TimeSeriesPoint],
    periods: int,
    config: TrendConfig,
    rng: np.random.Generator,
) -> list[TimeSeriesPoint]:
    """Compound the last value forward one period at a time."""
    if len(points) < 2:
        return []

    growth = estimate_growth_rate(points, config.growth_bounds)
    key, value = points[-1].period, points[-1].value
    forecast = []
    for _ in range(periods):
        key = key.next()
        value = value * (1 + growth) * rng.uniform(1 - config.forecast_jitter, 1 + config.forecast_jitter)
        forecast.append(TimeSeriesPoint(period=key, value=float(value), is_projected=True))
    return forecast


def _aggregate_with_coarsening(records, resolution: Resolution, window: QueryWindow):
    current: Resolution | None = resolution
    while current is not None:
        points = aggregate_sales(records, current, window.start, window.end)
        if points:
            return points, current
        logger.warning(f"No {current.label} periods in range, trying a coarser resolution")
        current = current.coarser()
    raise InsufficientDataError("Unable to aggregate revenue data, even at yearly resolution.")


def analyze_revenue(
    repository: SalesRepository,
    time_range_days: int,
    user_id: str | None = None,
    include_forecast: bool = False,
    config: TrendConfig | None = None,
    rng: np.random.Generator | None = None,
    now: datetime | None = None,
) -> RevenueTrendAnalysis:
    config = config or TrendConfig()
    rng = rng if rng is not None else np.random.default_rng()
    now = as_naive_datetime(now) if now is not None else utc_now()
    resolution = select_trend_resolution(time_range_days)

    bounds = lookup_bounds(repository, user_id) if time_range_days == 0 else None
    window = trend_window(
        time_range_days, now, bounds, config.all_time_buffer_days, config.fallback_window_days
    )
    records = fetch_records(repository, window.start, window.end, user_id)
    if not records:
        raise InsufficientDataError("Insufficient sales data for revenue analysis.")

    points, resolution = _aggregate_with_coarsening(records, resolution, window)
    logger.debug(f"Analyzing {len(points)} {resolution.label} period(s)")

    values = np.array([p.value for p in points])
    periodic = periodic_growth_rates(points)

    seasonality = None
    unit = _SEASONAL_UNITS.get(resolution)
    if unit is not None and len(points) >= config.min_points_for_seasonality:
        seasonality = seasonal_indices(points, unit)

    return RevenueTrendAnalysis(
        points=points,
        total=float(values.sum()),
        average=float(values.mean()),
        median=float(np.median(values)),
        min_point=points[int(values.argmin())],
        max_point=points[int(values.argmax())],
        growth=GrowthSummary(
            overall=overall_growth(points),
            periodic=periodic,
            average_periodic=float(np.mean(periodic)) if periodic else 0.0,
        ),
        resolution=resolution,
        window=window,
        trend=classify_trend(
            periodic,
            has_seasonality=bool(seasonality and seasonality.detected),
            volatility_threshold=config.volatility_threshold,
        ),
        seasonality=seasonality,
        forecast=simple_forecast(points, config.forecast_periods, config, rng) if include_forecast else None,
    )
