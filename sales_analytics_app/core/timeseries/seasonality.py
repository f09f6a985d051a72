"""Cyclical seasonal indices (weekday or month of year)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import pandas as pd

from ..data.models import TimeSeriesPoint
from ..periods.period_key import WEEKDAY_NAMES

WEEKDAY = "weekday"
MONTH = "month"

_CYCLE_LENGTH = {WEEKDAY: 7, MONTH: 12}
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


@dataclass
class SeasonalPattern:
    unit: str
    indices: list[float]  # 1.0 = average; weekday 0 = Sunday, month 0 = January
    detected: bool = False
    strongest: int | None = None
    weakest: int | None = None
    observed: list[int] = field(default_factory=list)

    def factor(self, position: int) -> float:
        return self.indices[position]

    def unit_name(self, position: int) -> str:
        names = WEEKDAY_NAMES if self.unit == WEEKDAY else MONTH_NAMES
        return names[position]


def _position(point: TimeSeriesPoint, unit: str) -> int:
    if unit == WEEKDAY:
        return point.period.weekday
    return point.period.month - 1


def seasonal_indices(
    series: Sequence[TimeSeriesPoint],
    unit: str = WEEKDAY,
    upper: float = 1.2,
    lower: float = 0.8,
) -> SeasonalPattern:
    """Average value per cycle position divided by the overall average.

    Positions with no observations get a neutral 1.0, as does every position
    when the series averages zero. A pattern is detected when any observed
    index leaves the ``[lower, upper]`` band.
    """
    if unit not in _CYCLE_LENGTH:
        raise ValueError(f"Unknown seasonal unit: {unit}. Use '{WEEKDAY}' or '{MONTH}'.")

    length = _CYCLE_LENGTH[unit]
    pattern = SeasonalPattern(unit=unit, indices=[1.0] * length)
    if not series:
        return pattern

    frame = pd.DataFrame({
        "position": [_position(p, unit) for p in series],
        "value": [p.value for p in series],
    })
    overall = frame["value"].mean()
    if not overall > 0:
        return pattern

    by_position = frame.groupby("position")["value"].mean() / overall
    pattern.indices = by_position.reindex(range(length), fill_value=1.0).astype(float).tolist()
    pattern.observed = sorted(int(p) for p in by_position.index)

    observed = by_position.astype(float)
    pattern.strongest = int(observed.idxmax())
    pattern.weakest = int(observed.idxmin())
    pattern.detected = bool(((observed > upper) | (observed < lower)).any())
    return pattern
