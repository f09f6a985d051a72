"""Aggregation granularities and the rules that pick one for a time range."""

from __future__ import annotations

from enum import IntEnum


class Resolution(IntEnum):
    """Ordered from finest to coarsest so that coarsening is ``value + 1``."""

    HOURLY = 0
    DAILY = 1
    WEEKLY = 2
    MONTHLY = 3
    QUARTERLY = 4
    YEARLY = 5

    @property
    def label(self) -> str:
        return self.name.lower()

    def coarser(self) -> Resolution | None:
        """Next coarser resolution, or None when already yearly."""
        if self is Resolution.YEARLY:
            return None
        return Resolution(self.value + 1)


def check_time_range(time_range_days: int) -> None:
    if time_range_days < 0:
        raise ValueError(f"Time range must be zero (all time) or positive, got {time_range_days}.")


def select_projection_resolution(time_range_days: int) -> Resolution:
    """Resolution for revenue projections: daily, weekly or monthly."""
    check_time_range(time_range_days)
    if time_range_days == 0:
        return Resolution.MONTHLY
    if time_range_days <= 14:
        return Resolution.DAILY
    if time_range_days <= 90:
        return Resolution.WEEKLY
    return Resolution.MONTHLY


def select_trend_resolution(time_range_days: int) -> Resolution:
    """Six-level resolution for historical trend analysis."""
    check_time_range(time_range_days)
    if time_range_days == 0:
        return Resolution.YEARLY
    if time_range_days <= 3:
        return Resolution.HOURLY
    if time_range_days <= 14:
        return Resolution.DAILY
    if time_range_days <= 90:
        return Resolution.WEEKLY
    if time_range_days <= 365:
        return Resolution.MONTHLY
    if time_range_days <= 730:
        return Resolution.QUARTERLY
    return Resolution.YEARLY
