"""Query windows for each analysis path."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

import pandas as pd

from .period_key import as_naive_datetime


@dataclass(frozen=True)
class QueryWindow:
    """Time span an analysis looks at.

    ``start``/``end`` bound the whole view; ``current`` is "now", the point
    that separates history from projection.
    """

    start: datetime
    end: datetime
    current: datetime
    is_fallback: bool = False

    @property
    def days(self) -> float:
        return (self.end - self.start).total_seconds() / 86400


def _shift_months(moment: datetime, months: int) -> datetime:
    return as_naive_datetime((pd.Timestamp(moment) + pd.DateOffset(months=months)).to_pydatetime())


def projection_window(
    time_range_days: int,
    now: datetime,
    bounds: tuple[datetime, datetime] | None = None,
    fallback_months: int = 12,
) -> QueryWindow:
    """Window for revenue projections.

    A positive range looks the same distance back and forward from ``now``.
    All-time (0) mirrors the historical span past the newest sale; without
    sale bounds it falls back to ``fallback_months`` either side of ``now``.
    """
    now = as_naive_datetime(now)
    if time_range_days > 0:
        span = timedelta(days=time_range_days)
        return QueryWindow(start=now - span, end=now + span, current=now)

    if bounds is None:
        return QueryWindow(
            start=_shift_months(now, -fallback_months),
            end=_shift_months(now, fallback_months),
            current=now,
            is_fallback=True,
        )

    oldest, newest = (as_naive_datetime(b) for b in bounds)
    history = newest - oldest
    return QueryWindow(start=oldest, end=newest + history, current=now)


def trend_window(
    time_range_days: int,
    now: datetime,
    bounds: tuple[datetime, datetime] | None = None,
    buffer_days: int = 7,
    fallback_days: int = 365,
) -> QueryWindow:
    """Window for historical trend analysis (ends at ``now`` for a fixed range)."""
    now = as_naive_datetime(now)
    if time_range_days > 0:
        return QueryWindow(start=now - timedelta(days=time_range_days), end=now, current=now)

    if bounds is None:
        return QueryWindow(start=now - timedelta(days=fallback_days), end=now, current=now, is_fallback=True)

    oldest, newest = (as_naive_datetime(b) for b in bounds)
    return QueryWindow(start=oldest, end=newest + timedelta(days=buffer_days), current=now)


def recommendation_window(time_range_days: int, now: datetime, default_days: int = 90) -> QueryWindow:
    now = as_naive_datetime(now)
    days = time_range_days if time_range_days > 0 else default_days
    return QueryWindow(start=now - timedelta(days=days), end=now, current=now)
