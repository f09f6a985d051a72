"""Price recommendations and the six-month revenue outlook they imply."""

from __future__ import annotations

import logging
from datetime import datetime

from ..config import PricingConfig
from ..data.models import PriceAnalysis
from ..data.repository import SalesRepository
from ..periods.period_key import as_naive_datetime, utc_now
from ..periods.windows import recommendation_window
from ..recommendations.pricing import check_price_tier, project_monthly_revenue, recommend_prices
from .sales_data import fetch_records

logger = logging.getLogger(__name__)


def compute_price_analysis(
    repository: SalesRepository,
    time_range_days: int = 90,
    user_id: str | None = None,
    min_confidence: str = "all",
    config: PricingConfig | None = None,
    now: datetime | None = None,
) -> PriceAnalysis:
    """Analyze the last ``time_range_days`` of sales (90 when not positive).

    No sales, or no change worth recommending, gives an empty analysis
    rather than an error.
    """
    check_price_tier(min_confidence)
    config = config or PricingConfig()
    now = as_naive_datetime(now) if now is not None else utc_now()

    window = recommendation_window(time_range_days, now, config.default_window_days)
    records = fetch_records(repository, window.start, window.end, user_id)
    transactions = [r for r in records if r.valid_items]
    if not transactions:
        logger.info("No sales with valid products in range, nothing to price")
        return PriceAnalysis(recommendations=[], revenue_projections=[])

    recommendations = recommend_prices(transactions, min_confidence, config, now, window.days)
    projections = project_monthly_revenue(transactions, recommendations, now, config, window.days)
    return PriceAnalysis(recommendations=recommendations, revenue_projections=projections)
