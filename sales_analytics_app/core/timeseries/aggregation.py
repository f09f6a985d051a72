"""Time bucketing: sale records into a continuous, zero-filled series."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

import pandas as pd

from ..data.models import SaleRecord, TimeSeriesPoint
from ..periods.period_key import PeriodKey, as_naive_datetime, period_range
from ..periods.resolution import Resolution

logger = logging.getLogger(__name__)


def aggregate_sales(
    records: Sequence[SaleRecord],
    resolution: Resolution,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[TimeSeriesPoint]:
    """Sum sale amounts per period over ``[start, end]``.

    Every period in the span appears exactly once, in order, with zero value
    and count where nothing was sold, so gaps never compress the time axis.
    Without explicit bounds the span runs from the earliest to the latest
    record.
    """
    if start is None or end is None:
        if not records:
            return []
        timestamps = [r.timestamp for r in records]
        start = min(timestamps) if start is None else start
        end = max(timestamps) if end is None else end

    keys = period_range(start, end, resolution)
    if not keys:
        return []

    start, end = as_naive_datetime(start), as_naive_datetime(end)
    frame = pd.DataFrame(
        [
            {"period": PeriodKey.containing(r.timestamp, resolution), "amount": r.total_amount}
            for r in records
            if start <= as_naive_datetime(r.timestamp) <= end
        ],
        columns=["period", "amount"],
    )

    if frame.empty:
        totals = pd.DataFrame({"sum": 0.0, "count": 0}, index=pd.Index(keys, dtype=object))
    else:
        totals = frame.groupby("period", sort=False)["amount"].agg(["sum", "count"])
        totals = totals.reindex(pd.Index(keys, dtype=object), fill_value=0)

    logger.debug(
        f"Aggregated {len(frame)} sale(s) into {len(keys)} {resolution.label} period(s) "
        f"({int((totals['count'] > 0).sum())} with sales)"
    )

    return [
        TimeSeriesPoint(period=key, value=float(row["sum"]), is_projected=False, count=int(row["count"]))
        for key, row in zip(keys, totals.to_dict("records"))
    ]
