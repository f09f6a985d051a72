"""Abstract base class for all projection strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

from ..config import ProjectionConfig
from ..data.models import TimeSeriesPoint
from ..periods.period_key import PeriodKey


class BaseProjector(ABC):
    """Contract that every projection strategy must implement."""

    name: str = "BaseProjector"

    def __init__(self, config: ProjectionConfig | None = None, rng: np.random.Generator | None = None):
        self.config = config or ProjectionConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    @abstractmethod
    def fit(self, actual: Sequence[TimeSeriesPoint]) -> None:
        """Learn level, growth and pattern from the actual series.

        Args:
            actual: Zero-filled actual points in chronological order.
        """

    @abstractmethod
    def project(self, future: Sequence[PeriodKey]) -> list[TimeSeriesPoint]:
        """Generate one projected point per future period key.

        Args:
            future: Period keys strictly after the last actual period.

        Returns:
            Points with ``is_projected=True``, in the order of ``future``.
        """

    @abstractmethod
    def get_params(self) -> dict:
        """Return fitted parameters as a dictionary."""

    def summary(self) -> str:
        """Return a human-readable summary of the fitted strategy."""
        return f"{self.name}: {self.get_params()}"

    def _jitter(self, spread: float) -> float:
        return float(self.rng.uniform(1 - spread, 1 + spread))

    @staticmethod
    def _point(key: PeriodKey, value: float) -> TimeSeriesPoint:
        return TimeSeriesPoint(period=key, value=float(value), is_projected=True)


def series_average(actual: Sequence[TimeSeriesPoint]) -> float:
    if not actual:
        return 0.0
    return float(np.mean([p.value for p in actual]))
