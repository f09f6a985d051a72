"""Tagged period keys: a bucket's resolution travels with its boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from .resolution import Resolution

WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def as_naive_datetime(value: datetime | date) -> datetime:
    """Normalize dates and aware datetimes to naive UTC datetimes."""
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    if type(value) is not datetime:
        # pandas.Timestamp and other subclasses
        value = datetime(
            value.year, value.month, value.day,
            value.hour, value.minute, value.second, value.microsecond,
        )
    return value


def utc_now() -> datetime:
    """Current time as a naive UTC datetime, matching normalized sale timestamps."""
    return as_naive_datetime(datetime.now(timezone.utc))


def sunday_weekday(moment: datetime | date) -> int:
    """Day of week with 0 = Sunday."""
    return (moment.weekday() + 1) % 7


def add_months(moment: datetime, months: int) -> datetime:
    """Shift a month-start datetime by whole months."""
    total = moment.year * 12 + (moment.month - 1) + months
    return moment.replace(year=total // 12, month=total % 12 + 1, day=1)


def _floor(moment: datetime, resolution: Resolution) -> datetime:
    day_start = datetime(moment.year, moment.month, moment.day)
    if resolution is Resolution.HOURLY:
        return day_start.replace(hour=moment.hour)
    if resolution is Resolution.DAILY:
        return day_start
    if resolution is Resolution.WEEKLY:
        return day_start - timedelta(days=sunday_weekday(day_start))
    if resolution is Resolution.MONTHLY:
        return datetime(moment.year, moment.month, 1)
    if resolution is Resolution.QUARTERLY:
        return datetime(moment.year, 3 * ((moment.month - 1) // 3) + 1, 1)
    return datetime(moment.year, 1, 1)


def _advance(start: datetime, resolution: Resolution) -> datetime:
    if resolution is Resolution.HOURLY:
        return start + timedelta(hours=1)
    if resolution is Resolution.DAILY:
        return start + timedelta(days=1)
    if resolution is Resolution.WEEKLY:
        return start + timedelta(days=7)
    if resolution is Resolution.MONTHLY:
        return add_months(start, 1)
    if resolution is Resolution.QUARTERLY:
        return add_months(start, 3)
    return start.replace(year=start.year + 1)


@dataclass(frozen=True, order=True)
class PeriodKey:
    """One aggregation bucket covering ``[start, end)`` at a resolution.

    Keys order chronologically. The label is derived from the boundaries,
    never the other way round.
    """

    start: datetime
    resolution: Resolution

    @classmethod
    def containing(cls, moment: datetime | date, resolution: Resolution) -> PeriodKey:
        return cls(start=_floor(as_naive_datetime(moment), resolution), resolution=resolution)

    @property
    def end(self) -> datetime:
        return _advance(self.start, self.resolution)

    @property
    def label(self) -> str:
        start = self.start
        if self.resolution is Resolution.HOURLY:
            return f"{start:%Y-%m-%d %H}:00"
        if self.resolution is Resolution.DAILY:
            return f"{start:%Y-%m-%d}"
        if self.resolution is Resolution.WEEKLY:
            return f"{start:%Y-%m-%d} to {start + timedelta(days=6):%Y-%m-%d}"
        if self.resolution is Resolution.MONTHLY:
            return f"{start:%Y-%m}"
        if self.resolution is Resolution.QUARTERLY:
            return f"{start.year}-Q{self.quarter}"
        return f"{start.year}"

    @property
    def year(self) -> int:
        return self.start.year

    @property
    def month(self) -> int:
        return self.start.month

    @property
    def quarter(self) -> int:
        return (self.start.month - 1) // 3 + 1

    @property
    def weekday(self) -> int:
        """Weekday of the bucket start, 0 = Sunday."""
        return sunday_weekday(self.start)

    def next(self) -> PeriodKey:
        return PeriodKey(start=self.end, resolution=self.resolution)

    def contains(self, moment: datetime | date) -> bool:
        moment = as_naive_datetime(moment)
        return self.start <= moment < self.end

    def __str__(self) -> str:
        return self.label


def period_range(start: datetime | date, end: datetime | date, resolution: Resolution) -> list[PeriodKey]:
    """All keys from the one containing ``start`` to the one containing ``end``."""
    start = as_naive_datetime(start)
    end = as_naive_datetime(end)
    if start > end:
        return []

    keys = []
    key = PeriodKey.containing(start, resolution)
    while key.start <= end:
        keys.append(key)
        key = key.next()
    return keys
