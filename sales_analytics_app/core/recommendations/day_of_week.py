"""Per-product weekday demand patterns."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from ..data.models import DayOfWeekTrend, DaySales, SaleRecord
from ..periods.period_key import WEEKDAY_NAMES, sunday_weekday

logger = logging.getLogger(__name__)


def _line_items(transactions: Sequence[SaleRecord]) -> pd.DataFrame:
    rows = [
        {
            "product_id": item.product.id,
            "product_name": item.product.name,
            "weekday": sunday_weekday(sale.timestamp),
            "quantity": item.quantity,
        }
        for sale in transactions
        for item in sale.valid_items
    ]
    return pd.DataFrame(rows, columns=["product_id", "product_name", "weekday", "quantity"])


def analyze_day_of_week(transactions: Sequence[SaleRecord], min_units: int = 3) -> list[DayOfWeekTrend]:
    """Units sold per weekday for every product with at least ``min_units`` sold.

    Percent of average compares each weekday with total units / 7. Products
    are ordered by their strongest weekday, most pronounced first.
    """
    items = _line_items(transactions)
    if items.empty:
        return []

    by_day = (
        items.pivot_table(index="product_id", columns="weekday", values="quantity", aggfunc="sum", fill_value=0)
        .reindex(columns=range(7), fill_value=0)
    )
    names = items.drop_duplicates("product_id").set_index("product_id")["product_name"]

    trends = []
    for product_id in items["product_id"].unique():
        units = [int(u) for u in by_day.loc[product_id]]
        total = sum(units)
        if total < min_units:
            continue

        average = total / 7
        sales_by_day = tuple(
            DaySales(day=WEEKDAY_NAMES[i], sales=u, percent_of_average=round(u / average * 100) if average > 0 else 0)
            for i, u in enumerate(units)
        )
        best = units.index(max(units))
        trends.append(DayOfWeekTrend(
            product_id=product_id,
            product_name=names[product_id],
            best_day=WEEKDAY_NAMES[best],
            day_index=best,
            average_sales=average,
            sales_by_day=sales_by_day,
        ))

    logger.debug(f"{len(trends)} of {items['product_id'].nunique()} product(s) have a weekday trend")
    return sorted(trends, key=lambda t: t.peak_percent, reverse=True)
