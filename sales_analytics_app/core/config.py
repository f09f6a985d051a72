"""Tunable thresholds for the analytics engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ProjectionConfig:
    growth_bounds: tuple[float, float] = (-0.2, 0.2)
    default_growth: float = 0.01
    # Fewer actual points than this switches to simple compounding
    min_history: dict[str, int] = field(
        default_factory=lambda: {"daily": 7, "weekly": 4, "monthly": 6}
    )
    simple_growth_jitter: float = 0.05
    daily_trend_divisor: float = 30.0
    weekly_trend_divisor: float = 12.0
    moving_average_window: int = 4
    monthly_jitter: float = 0.03
    long_horizon_periods: int = 24  # monthly periods beyond this use the CAGR model
    cagr_bounds: tuple[float, float] = (-0.10, 0.15)
    default_cagr: float = 0.05
    cycle_amplitude: float = 0.1
    cycle_amplitude_growth: float = 1.2
    max_cycle_amplitude: float = 0.4
    cycle_frequency: float = 0.8
    long_horizon_jitter: float = 0.1
    fallback_window_months: int = 12


@dataclass
class TrendConfig:
    growth_bounds: tuple[float, float] = (-0.5, 0.5)
    forecast_periods: int = 12
    forecast_jitter: float = 0.05
    min_points_for_seasonality: int = 7
    volatility_threshold: float = 30.0  # std of percent growth rates
    all_time_buffer_days: int = 7
    fallback_window_days: int = 365


@dataclass
class RecommendationConfig:
    default_window_days: int = 90
    min_units_per_product: int = 3
    support_floor: float = 0.01
    confidence_thresholds: dict[str, float] = field(
        default_factory=lambda: {"high": 0.2, "medium": 0.1, "low": 0.05}
    )
    support_thresholds: dict[str, float] = field(
        default_factory=lambda: {"high": 0.02, "medium": 0.01, "low": 0.005}
    )
    discount_percentages: dict[str, int] = field(
        default_factory=lambda: {"high": 15, "medium": 10, "low": 5}
    )
    max_itemset_size: int = 3
    optimal_products_limit: int = 10
    optimal_base_scores: dict[str, int] = field(
        default_factory=lambda: {"high": 90, "medium": 75, "low": 60}
    )
    optimal_score_jitter: float = 5.0


@dataclass
class PricingConfig:
    default_window_days: int = 90
    # Units a product must sell before the query tier considers it
    min_quantity: dict[str, int] = field(
        default_factory=lambda: {"high": 12, "medium": 8, "low": 5, "all": 5}
    )
    min_price_points: int = 2
    min_point_quantity: int = 3  # per price point, for an elasticity estimate
    min_price_change: float = 0.01
    default_elasticity: float = -0.8
    elasticity_bounds: tuple[float, float] = (-3.0, -0.1)
    max_point_elasticity: float = 10.0
    inelastic_volume_share: float = 0.6
    inelastic_markup: float = 1.05
    elastic_volume_share: float = 0.8
    elastic_markdown: float = 0.95
    min_price_variation: float = 0.05  # coefficient of variation of line prices
    score_weights: tuple[float, float, float, float] = (0.4, 0.3, 0.2, 0.1)
    tier_scores: dict[str, float] = field(default_factory=lambda: {"high": 0.75, "medium": 0.5})
    seasonal_bounds: tuple[float, float] = (0.8, 1.2)
    seasonal_adjustments: tuple[float, float] = (0.97, 1.03)
    adjustment_factors: dict[str, float] = field(
        default_factory=lambda: {"high": 1.0, "medium": 0.7, "low": 0.4}
    )
    max_change: dict[str, float] = field(
        default_factory=lambda: {"high": 0.15, "medium": 0.10, "low": 0.05}
    )
    projection_days: int = 180
    projection_months: int = 6
    monthly_growth: float = 0.02
    min_revenue_change_pct: float = 2.0


@dataclass
class AnalyticsConfig:
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    trend: TrendConfig = field(default_factory=TrendConfig)
    recommendations: RecommendationConfig = field(default_factory=RecommendationConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
