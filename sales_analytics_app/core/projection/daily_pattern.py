"""Daily projections from a weekday pattern and a damped trend."""

from __future__ import annotations

from collections.abc import Sequence

from ..data.models import TimeSeriesPoint
from ..periods.period_key import PeriodKey
from ..timeseries.growth import estimate_growth_rate
from ..timeseries.seasonality import WEEKDAY, SeasonalPattern, seasonal_indices
from .base import BaseProjector, series_average


class DailyPattern(BaseProjector):
    name = "Daily Pattern"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._average: float = 0.0
        self._growth: float = 0.0
        self._pattern: SeasonalPattern | None = None

    def fit(self, actual: Sequence[TimeSeriesPoint]) -> None:
        self._average = series_average(actual)
        self._growth = estimate_growth_rate(actual, self.config.growth_bounds, self.config.default_growth)
        self._pattern = seasonal_indices(actual, WEEKDAY)

    def project(self, future: Sequence[PeriodKey]) -> list[TimeSeriesPoint]:
        divisor = self.config.daily_trend_divisor
        return [
            self._point(
                key,
                self._average * self._pattern.factor(key.weekday) * (1 + self._growth * i / divisor),
            )
            for i, key in enumerate(future)
        ]

    def get_params(self) -> dict:
        return {
            "average": round(self._average, 2),
            "growth": round(self._growth, 4),
            "weekday_indices": [round(f, 3) for f in self._pattern.indices] if self._pattern else [],
        }
