"""Actual revenue plus a forward projection around "now"."""

from __future__ import annotations

import logging
from datetime import datetime

import numpy as np

from ..config import ProjectionConfig
from ..data.models import RevenueProjection
from ..data.repository import SalesRepository
from ..errors import InsufficientDataError
from ..periods.period_key import as_naive_datetime, utc_now
from ..periods.resolution import select_projection_resolution
from ..periods.windows import projection_window
from ..projection.registry import generate_projections
from ..timeseries.aggregation import aggregate_sales
from ..timeseries.today import resolve_today_index
from .sales_data import fetch_records, lookup_bounds

logger = logging.getLogger(__name__)


def compute_revenue_projection(
    repository: SalesRepository,
    time_range_days: int,
    user_id: str | None = None,
    config: ProjectionConfig | None = None,
    rng: np.random.Generator | None = None,
    now: datetime | None = None,
) -> RevenueProjection:
    """Aggregate history up to ``now`` and project it to the window's end.

    ``time_range_days`` of 0 means all time. The actual series spans the
    earliest to the latest sale found, with empty periods zero-filled.
    """
    config = config or ProjectionConfig()
    now = as_naive_datetime(now) if now is not None else utc_now()
    resolution = select_projection_resolution(time_range_days)

    bounds = lookup_bounds(repository, user_id) if time_range_days == 0 else None
    window = projection_window(time_range_days, now, bounds, config.fallback_window_months)
    logger.debug(
        f"Projecting revenue at {resolution.label} resolution over "
        f"{window.start:%Y-%m-%d} to {window.end:%Y-%m-%d}"
    )

    records = fetch_records(repository, window.start, window.current, user_id)
    if not records:
        raise InsufficientDataError("No sales data found for the selected time range.")

    actual = aggregate_sales(records, resolution)
    projected = generate_projections(actual, resolution, window.current, window.end, config, rng)
    return RevenueProjection(
        actual=actual,
        projected=projected,
        today_index=resolve_today_index(actual, now),
        resolution=resolution,
        window=window,
    )
