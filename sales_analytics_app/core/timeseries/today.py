"""Locate "now" inside an actual series."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from ..data.models import TimeSeriesPoint


def resolve_today_index(actual: Sequence[TimeSeriesPoint], now: datetime) -> int:
    """Index of the point whose period contains ``now``.

    Falls back to the last point when ``now`` lies outside the series, and
    to 0 for an empty series.
    """
    for i, point in enumerate(actual):
        if point.period.contains(now):
            return i
    return max(len(actual) - 1, 0)
