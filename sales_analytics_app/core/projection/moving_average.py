"""Weekly projections from a trailing moving average."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..data.models import TimeSeriesPoint
from ..periods.period_key import PeriodKey
from ..timeseries.growth import estimate_growth_rate
from .base import BaseProjector


class MovingAverage(BaseProjector):
    name = "Moving Average"

    def __init__(self, window: int | None = None, **kwargs):
        super().__init__(**kwargs)
        self.window = window or self.config.moving_average_window
        self._ma_value: float = 0.0
        self._growth: float = 0.0

    def fit(self, actual: Sequence[TimeSeriesPoint]) -> None:
        tail = [p.value for p in actual[-self.window:]]
        self._ma_value = float(np.mean(tail)) if tail else 0.0
        self._growth = estimate_growth_rate(actual, self.config.growth_bounds, self.config.default_growth)

    def project(self, future: Sequence[PeriodKey]) -> list[TimeSeriesPoint]:
        divisor = self.config.weekly_trend_divisor
        return [
            self._point(key, self._ma_value * (1 + self._growth * i / divisor))
            for i, key in enumerate(future)
        ]

    def get_params(self) -> dict:
        return {"window": self.window, "ma_value": round(self._ma_value, 2), "growth": round(self._growth, 4)}

    def summary(self) -> str:
        return f"Moving Average (window={self.window}): MA value={self._ma_value:.2f}, growth={self._growth:.2%}."
