"""Facade exposing the analytics operations over one sales repository."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

import numpy as np

from ..config import AnalyticsConfig
from ..data.models import OptimalProduct, PriceAnalysis, PriceRecommendation, RevenueProjection, SalesRecommendations
from ..data.repository import SalesRepository
from ..errors import AnalyticsError, InsufficientDataError
from ..periods.period_key import utc_now
from ..periods.resolution import check_time_range
from ..recommendations.association_rules import check_tier
from ..recommendations.optimal_products import score_bundles
from ..recommendations.pricing import check_price_tier
from .price_recommendations import compute_price_analysis
from .revenue_projection import compute_revenue_projection
from .revenue_trends import RevenueTrendAnalysis, analyze_revenue
from .sales_data import ensure_reachable
from .sales_recommendations import compute_sales_recommendations

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnalyticsEngine:
    """Every call probes the repository, reads a fresh snapshot and recomputes.

    ``rng`` and ``clock`` can be injected to make runs reproducible.
    """

    def __init__(
        self,
        repository: SalesRepository,
        config: AnalyticsConfig | None = None,
        rng: np.random.Generator | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.repository = repository
        self.config = config or AnalyticsConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock or utc_now

    def _run(self, operation: str, func: Callable[..., T], **kwargs) -> T:
        ensure_reachable(self.repository)
        try:
            return func(self.repository, now=self.clock(), **kwargs)
        except AnalyticsError:
            raise
        except Exception as exc:
            logger.exception(f"Error while trying to {operation}")
            raise AnalyticsError(f"Failed to {operation}. {exc}", original_error=exc) from exc

    def compute_revenue_projection(self, time_range_days: int, user_id: str | None = None) -> RevenueProjection:
        check_time_range(time_range_days)
        return self._run(
            "calculate projected earnings",
            compute_revenue_projection,
            time_range_days=time_range_days,
            user_id=user_id,
            config=self.config.projection,
            rng=self.rng,
        )

    def compute_sales_recommendations(
        self,
        time_range_days: int = 90,
        user_id: str | None = None,
        min_confidence: str = "medium",
    ) -> SalesRecommendations:
        check_tier(min_confidence)
        return self._run(
            "calculate sales recommendations",
            compute_sales_recommendations,
            time_range_days=time_range_days,
            user_id=user_id,
            min_confidence=min_confidence,
            config=self.config.recommendations,
        )

    def compute_optimal_products(
        self,
        time_range_days: int,
        confidence_threshold: str = "medium",
        user_id: str | None = None,
    ) -> list[OptimalProduct]:
        """Top bundles re-scored for the dashboard; empty when data is insufficient."""
        try:
            recommendations = self.compute_sales_recommendations(time_range_days, user_id, confidence_threshold)
        except InsufficientDataError as exc:
            logger.info(f"Insufficient data for optimal products: {exc}")
            return []
        return score_bundles(recommendations.product_bundles, self.config.recommendations, self.rng)

    def analyze_revenue(
        self,
        time_range_days: int,
        user_id: str | None = None,
        include_forecast: bool = False,
    ) -> RevenueTrendAnalysis:
        check_time_range(time_range_days)
        return self._run(
            "analyze revenue",
            analyze_revenue,
            time_range_days=time_range_days,
            user_id=user_id,
            include_forecast=include_forecast,
            config=self.config.trend,
            rng=self.rng,
        )

    def compute_price_analysis(
        self,
        time_range_days: int = 90,
        user_id: str | None = None,
        min_confidence: str = "all",
    ) -> PriceAnalysis:
        check_price_tier(min_confidence)
        return self._run(
            "calculate price recommendations",
            compute_price_analysis,
            time_range_days=time_range_days,
            user_id=user_id,
            min_confidence=min_confidence,
            config=self.config.pricing,
        )

    def compute_price_recommendations(
        self,
        time_range_days: int = 90,
        confidence_threshold: str = "all",
        user_id: str | None = None,
    ) -> list[PriceRecommendation]:
        """Recommendations only, for the dashboard; any analytics failure gives ``[]``."""
        try:
            return self.compute_price_analysis(time_range_days, user_id, confidence_threshold).recommendations
        except InsufficientDataError as exc:
            logger.info(f"Insufficient data for price recommendations: {exc}")
        except AnalyticsError as exc:
            logger.error(f"Error generating price recommendations: {exc}")
        return []
