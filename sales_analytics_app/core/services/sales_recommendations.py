"""Weekday trends and bundle recommendations from recent transactions."""

from __future__ import annotations

import logging
from datetime import datetime

from ..config import RecommendationConfig
from ..data.models import SalesRecommendations
from ..data.repository import SalesRepository
from ..errors import InsufficientDataError
from ..periods.period_key import as_naive_datetime, utc_now
from ..periods.windows import recommendation_window
from ..recommendations.association_rules import check_tier, mine_bundles
from ..recommendations.day_of_week import analyze_day_of_week
from .sales_data import fetch_records

logger = logging.getLogger(__name__)


def compute_sales_recommendations(
    repository: SalesRepository,
    time_range_days: int = 90,
    user_id: str | None = None,
    min_confidence: str = "medium",
    config: RecommendationConfig | None = None,
    now: datetime | None = None,
) -> SalesRecommendations:
    """Analyze the last ``time_range_days`` of sales (90 when not positive).

    Only transactions with at least one item whose product still exists
    take part.
    """
    check_tier(min_confidence)
    config = config or RecommendationConfig()
    now = as_naive_datetime(now) if now is not None else utc_now()

    window = recommendation_window(time_range_days, now, config.default_window_days)
    records = fetch_records(repository, window.start, window.end, user_id)
    transactions = [r for r in records if r.valid_items]
    logger.debug(f"{len(transactions)} of {len(records)} sale(s) have items with valid products")

    if not transactions:
        raise InsufficientDataError(
            "No sales data found. Cannot generate sales recommendations without historical data."
        )

    trends = analyze_day_of_week(transactions, config.min_units_per_product)
    bundles = mine_bundles(transactions, min_confidence, config)
    if not trends and not bundles:
        raise InsufficientDataError(
            "Insufficient sales data for meaningful recommendations. "
            "Try extending the time range or reducing the confidence threshold."
        )
    return SalesRecommendations(day_of_week_trends=trends, product_bundles=bundles)
