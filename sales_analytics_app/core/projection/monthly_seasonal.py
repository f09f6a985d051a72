"""Monthly projections from a month-of-year pattern, for horizons up to two years."""

from __future__ import annotations

from collections.abc import Sequence

from ..data.models import TimeSeriesPoint
from ..periods.period_key import PeriodKey
from ..timeseries.growth import estimate_growth_rate
from ..timeseries.seasonality import MONTH, SeasonalPattern, seasonal_indices
from .base import BaseProjector, series_average


class MonthlySeasonal(BaseProjector):
    name = "Monthly Seasonal"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._average: float = 0.0
        self._growth: float = 0.0
        self._pattern: SeasonalPattern | None = None

    def fit(self, actual: Sequence[TimeSeriesPoint]) -> None:
        self._average = series_average(actual)
        self._growth = estimate_growth_rate(actual, self.config.growth_bounds, self.config.default_growth)
        self._pattern = seasonal_indices(actual, MONTH)

    def project(self, future: Sequence[PeriodKey]) -> list[TimeSeriesPoint]:
        points = []
        for i, key in enumerate(future):
            # A month that historically sold nothing still gets an average month
            factor = self._pattern.factor(key.month - 1) or 1.0
            year_factor = 1 + self._growth * (i // 12)
            value = self._average * factor * year_factor * self._jitter(self.config.monthly_jitter)
            points.append(self._point(key, value))
        return points

    def get_params(self) -> dict:
        return {
            "average": round(self._average, 2),
            "growth": round(self._growth, 4),
            "month_indices": [round(f, 3) for f in self._pattern.indices] if self._pattern else [],
        }
