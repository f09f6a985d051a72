"""Tabular views of the engine's outputs, for display and export."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ..data.models import (
    Bundle,
    DayOfWeekTrend,
    OptimalProduct,
    PriceProjectionPoint,
    PriceRecommendation,
    RevenueProjection,
    TimeSeriesPoint,
)
from ..periods.period_key import WEEKDAY_NAMES


def series_frame(points: Sequence[TimeSeriesPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "period": p.label,
                "period_start": p.period.start,
                "value": round(p.value, 2),
                "is_projected": p.is_projected,
                "sales_count": p.count,
            }
            for p in points
        ],
        columns=["period", "period_start", "value", "is_projected", "sales_count"],
    )


def projection_frame(projection: RevenueProjection) -> pd.DataFrame:
    """Actual and projected points in one chronological table."""
    frame = series_frame([*projection.actual, *projection.projected])
    frame["is_today"] = False
    if projection.actual:
        frame.loc[projection.today_index, "is_today"] = True
    return frame


def bundles_frame(bundles: Sequence[Bundle]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "bundle_id": b.id,
                "name": b.name,
                "products": ", ".join(p.name for p in b.products),
                "individual_price": b.individual_price,
                "bundle_price": b.bundle_price,
                "discount": b.discount,
                "discount_pct": b.discount_percentage,
                "tier": b.confidence,
                "confidence": round(b.confidence_score, 4),
                "support": round(b.support, 4),
                "lift": round(b.lift, 2),
            }
            for b in bundles
        ],
        columns=[
            "bundle_id", "name", "products", "individual_price", "bundle_price", "discount",
            "discount_pct", "tier", "confidence", "support", "lift",
        ],
    )


def day_of_week_frame(trends: Sequence[DayOfWeekTrend], value: str = "sales") -> pd.DataFrame:
    """One row per product, one column per weekday (Sunday first).

    ``value`` picks units sold (``"sales"``) or ``"percent_of_average"``.
    """
    rows = []
    for t in trends:
        row = {"product": t.product_name, "best_day": t.best_day}
        row.update({d.day: getattr(d, value) for d in t.sales_by_day})
        rows.append(row)
    return pd.DataFrame(rows, columns=["product", "best_day", *WEEKDAY_NAMES])


def optimal_products_frame(products: Sequence[OptimalProduct]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"id": p.id, "name": p.name, "score": p.score, **p.factors} for p in products],
        columns=["id", "name", "score", "margin", "volume", "returns", "turnover", "recency"],
    )


def price_recommendations_frame(recommendations: Sequence[PriceRecommendation]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "product_id": r.product_id,
                "product": r.product_name,
                "current_price": round(r.current_price, 2),
                "recommended_price": round(r.recommended_price, 2),
                "tier": r.confidence,
                "elasticity": round(r.elasticity, 2),
                "current_revenue": round(r.current_revenue, 2),
                "potential_revenue": round(r.potential_revenue, 2),
                "revenue_change_pct": round(r.percentage_change, 1),
            }
            for r in recommendations
        ],
        columns=[
            "product_id", "product", "current_price", "recommended_price", "tier", "elasticity",
            "current_revenue", "potential_revenue", "revenue_change_pct",
        ],
    )


def price_projection_frame(points: Sequence[PriceProjectionPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"month": p.date, "current_revenue": p.current_revenue, "optimized_revenue": p.optimized_revenue}
         for p in points],
        columns=["month", "current_revenue", "optimized_revenue"],
    )
