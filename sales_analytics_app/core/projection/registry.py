"""Projection registry: pick, instantiate and run a strategy."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

import numpy as np

from ..config import ProjectionConfig
from ..data.models import TimeSeriesPoint
from ..periods.period_key import PeriodKey, period_range
from ..periods.resolution import Resolution
from .base import BaseProjector
from .compound_annual import CompoundAnnual
from .daily_pattern import DailyPattern
from .monthly_seasonal import MonthlySeasonal
from .moving_average import MovingAverage
from .simple_growth import SimpleGrowth

logger = logging.getLogger(__name__)


PROJECTOR_REGISTRY: dict[str, type[BaseProjector]] = {
    "Simple Growth": SimpleGrowth,
    "Daily Pattern": DailyPattern,
    "Moving Average": MovingAverage,
    "Monthly Seasonal": MonthlySeasonal,
    "Compound Annual": CompoundAnnual,
}

# Strategy used once a resolution has enough history
_PATTERN_PROJECTORS: dict[Resolution, str] = {
    Resolution.DAILY: "Daily Pattern",
    Resolution.WEEKLY: "Moving Average",
    Resolution.MONTHLY: "Monthly Seasonal",
}


def get_available_projectors() -> list[str]:
    return list(PROJECTOR_REGISTRY.keys())


def create_projector(name: str, **kwargs) -> BaseProjector:
    """Create a projector instance by name."""
    if name not in PROJECTOR_REGISTRY:
        raise ValueError(f"Unknown projector: {name}. Available: {get_available_projectors()}")
    return PROJECTOR_REGISTRY[name](**kwargs)


def select_projector(
    n_actual: int,
    n_future: int,
    resolution: Resolution,
    config: ProjectionConfig | None = None,
) -> str:
    """Name of the strategy suited to the history length and horizon."""
    config = config or ProjectionConfig()
    if resolution not in _PATTERN_PROJECTORS:
        raise ValueError(f"No projection strategy for {resolution.label} resolution.")

    if n_actual < config.min_history[resolution.label]:
        return "Simple Growth"
    if resolution is Resolution.MONTHLY and n_future > config.long_horizon_periods:
        return "Compound Annual"
    return _PATTERN_PROJECTORS[resolution]


def future_periods(
    actual: Sequence[TimeSeriesPoint],
    now: datetime,
    end: datetime,
    resolution: Resolution,
) -> list[PeriodKey]:
    """Keys from ``now`` to ``end`` that come after every actual key."""
    taken = {p.period for p in actual}
    last = actual[-1].period if actual else None
    return [
        key for key in period_range(now, end, resolution)
        if key not in taken and (last is None or key > last)
    ]


def generate_projections(
    actual: Sequence[TimeSeriesPoint],
    resolution: Resolution,
    now: datetime,
    end: datetime,
    config: ProjectionConfig | None = None,
    rng: np.random.Generator | None = None,
) -> list[TimeSeriesPoint]:
    """Project the actual series forward to ``end``."""
    if not actual:
        return []

    future = future_periods(actual, now, end, resolution)
    if not future:
        return []

    name = select_projector(len(actual), len(future), resolution, config)
    projector = create_projector(name, config=config, rng=rng)
    projector.fit(actual)
    logger.debug(f"{projector.summary()} over {len(future)} {resolution.label} period(s)")
    return projector.project(future)
