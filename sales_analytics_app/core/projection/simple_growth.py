"""Compounding from the last actual value, for short histories."""

from __future__ import annotations

from collections.abc import Sequence

from ..data.models import TimeSeriesPoint
from ..periods.period_key import PeriodKey
from ..timeseries.growth import estimate_growth_rate
from .base import BaseProjector


class SimpleGrowth(BaseProjector):
    name = "Simple Growth"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._last_value: float = 0.0
        self._growth: float = 0.0

    def fit(self, actual: Sequence[TimeSeriesPoint]) -> None:
        self._last_value = actual[-1].value if actual else 0.0
        self._growth = estimate_growth_rate(actual, self.config.growth_bounds, self.config.default_growth)

    def project(self, future: Sequence[PeriodKey]) -> list[TimeSeriesPoint]:
        # Half-period exponent keeps compounding gentle over long horizons
        return [
            self._point(
                key,
                self._last_value
                * (1 + self._growth) ** (0.5 * i)
                * self._jitter(self.config.simple_growth_jitter),
            )
            for i, key in enumerate(future)
        ]

    def get_params(self) -> dict:
        return {"last_value": round(self._last_value, 2), "growth": round(self._growth, 4)}
