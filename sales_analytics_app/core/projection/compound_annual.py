"""Long-horizon monthly projections: yearly CAGR with a damped economic cycle."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from ..data.models import TimeSeriesPoint
from ..periods.period_key import PeriodKey
from ..timeseries.growth import yearly_growth_trend
from ..timeseries.seasonality import MONTH, SeasonalPattern, seasonal_indices
from .base import BaseProjector, series_average

logger = logging.getLogger(__name__)


class CompoundAnnual(BaseProjector):
    name = "Compound Annual"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._average: float = 0.0
        self._cagr: float = 0.0
        self._pattern: SeasonalPattern | None = None

    def fit(self, actual: Sequence[TimeSeriesPoint]) -> None:
        self._average = series_average(actual)
        self._cagr = yearly_growth_trend(actual, self.config.cagr_bounds, self.config.default_cagr)
        self._pattern = seasonal_indices(actual, MONTH)

    def cycle_amplitude(self, projection_year: int) -> float:
        """Cycle amplitude for a projection year, widening after the first year."""
        cfg = self.config
        amplitude = cfg.cycle_amplitude * cfg.cycle_amplitude_growth ** max(0, projection_year - 1)
        return min(cfg.max_cycle_amplitude, amplitude)

    def project(self, future: Sequence[PeriodKey]) -> list[TimeSeriesPoint]:
        cfg = self.config
        future_years = sorted({key.year for key in future})
        logger.debug(f"Projecting {len(future_years)} year(s) ahead with {len(future)} periods")

        points = []
        for key in future:
            year = future_years.index(key.year)
            factor = self._pattern.factor(key.month - 1) or 1.0
            growth = (1 + self._cagr) ** year
            cycle = 1 + math.sin(year * cfg.cycle_frequency) * self.cycle_amplitude(year)
            value = self._average * factor * growth * cycle * self._jitter(cfg.long_horizon_jitter)
            points.append(self._point(key, value))
        return points

    def get_params(self) -> dict:
        return {"average": round(self._average, 2), "cagr": round(self._cagr, 4)}
