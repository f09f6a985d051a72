"""Price recommendations from observed price points and arc elasticity.

Each product's line items are grouped by charged price. Adjacent price
points give an arc elasticity estimate, which picks a revenue-maximizing
price; that price is nudged for the current month's seasonality and then
damped and capped according to how much evidence backs it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

import numpy as np
import pandas as pd

from ..config import PricingConfig
from ..data.models import PriceProjectionPoint, PriceRecommendation, SaleRecord
from ..periods.period_key import utc_now
from .association_rules import TIERS

logger = logging.getLogger(__name__)

PRICE_TIERS = TIERS + ("all",)

_LINE_COLUMNS = ["product_id", "product_name", "price", "quantity", "month"]


def check_price_tier(tier: str) -> str:
    if tier not in PRICE_TIERS:
        raise ValueError(f"Unknown confidence tier: {tier!r}. Use one of {list(PRICE_TIERS)}.")
    return tier


def line_items(transactions: Sequence[SaleRecord]) -> pd.DataFrame:
    """One row per valid sale line with the price charged and the sale month."""
    rows = [
        {
            "product_id": item.product.id,
            "product_name": item.product.name,
            "price": item.price,
            "quantity": item.quantity,
            "month": sale.timestamp.month,
        }
        for sale in transactions
        for item in sale.valid_items
    ]
    return pd.DataFrame(rows, columns=_LINE_COLUMNS)


def price_points(lines: pd.DataFrame) -> pd.DataFrame:
    """Quantity and revenue per price rounded to cents, cheapest first."""
    points = lines.assign(price=lines["price"].round(2))
    points = points.assign(revenue=points["price"] * points["quantity"])
    return points.groupby("price")[["quantity", "revenue"]].sum().sort_index()


def estimate_elasticity(points: pd.DataFrame, config: PricingConfig | None = None) -> float:
    """Mean arc elasticity over adjacent price points.

    Pairs where either side sold fewer than ``min_point_quantity`` units, or
    whose prices barely differ, are skipped; so are non-negative or extreme
    estimates. Falls back to ``default_elasticity`` when nothing qualifies.
    """
    config = config or PricingConfig()
    prices = points.index.to_numpy(dtype=float)
    quantities = points["quantity"].to_numpy(dtype=float)

    estimates = []
    for i in range(1, len(prices)):
        low_q, high_q = quantities[i - 1], quantities[i]
        if low_q < config.min_point_quantity or high_q < config.min_point_quantity:
            continue
        price_change = (prices[i] - prices[i - 1]) / ((prices[i] + prices[i - 1]) / 2)
        quantity_change = (high_q - low_q) / ((high_q + low_q) / 2)
        if abs(price_change) <= config.min_price_change:
            continue
        elasticity = quantity_change / price_change
        if -config.max_point_elasticity < elasticity < 0:
            estimates.append(elasticity)

    if not estimates:
        return config.default_elasticity
    low, high = config.elasticity_bounds
    return float(np.clip(np.mean(estimates), low, high))


def revenue_maximizing_price(points: pd.DataFrame, elasticity: float, config: PricingConfig | None = None) -> float:
    """Price expected to earn the most given the demand elasticity.

    Inelastic demand moves just above the highest price that kept decent
    volume; elastic demand moves just below the lowest one. Unit elasticity
    keeps the price point with the best observed revenue.
    """
    config = config or PricingConfig()
    best_revenue_price = float(points["revenue"].idxmax())
    if abs(elasticity + 1) < 0.01:
        return best_revenue_price

    average_quantity = points["quantity"].mean()
    if elasticity > -1:
        viable = points[points["quantity"] >= average_quantity * config.inelastic_volume_share]
        if not viable.empty:
            return float(viable.index.max()) * config.inelastic_markup
    else:
        viable = points[points["quantity"] >= average_quantity * config.elastic_volume_share]
        if not viable.empty:
            return float(viable.index.min()) * config.elastic_markdown
    return best_revenue_price


def price_variation(prices) -> float:
    """Coefficient of variation of line prices (population standard deviation)."""
    prices = np.asarray(prices, dtype=float)
    if prices.size == 0:
        return 0.0
    mean = prices.mean()
    return float(prices.std() / mean) if mean > 0 else 0.0


def _step_score(value: float, steps: Sequence[tuple[float, float]], floor: float = 0.2) -> float:
    for threshold, score in steps:
        if value >= threshold:
            return score
    return floor


def confidence_score(
    total_quantity: float,
    distinct_prices: int,
    line_count: int,
    config: PricingConfig | None = None,
) -> float:
    """Weighted evidence score in [0, 1] from volume, price spread and line count."""
    config = config or PricingConfig()
    quantity = _step_score(total_quantity, [(50, 1.0), (25, 0.8), (12, 0.6), (8, 0.4)])
    spread = _step_score(distinct_prices, [(4, 1.0), (3, 0.8), (2, 0.5)])
    lines = _step_score(line_count, [(20, 1.0), (12, 0.8), (8, 0.6), (5, 0.4)])
    recency = 1.0  # lines are already limited to the analysis window
    weights = config.score_weights
    return quantity * weights[0] + spread * weights[1] + lines * weights[2] + recency * weights[3]


def score_tier(score: float, config: PricingConfig | None = None) -> str:
    config = config or PricingConfig()
    if score >= config.tier_scores["high"]:
        return "high"
    if score >= config.tier_scores["medium"]:
        return "medium"
    return "low"


def seasonal_adjustment(price: float, lines: pd.DataFrame, month: int, config: PricingConfig | None = None) -> float:
    """Raise the price slightly in a strong month and lower it in a weak one."""
    config = config or PricingConfig()
    by_month = lines.groupby("month")["quantity"].sum().reindex(range(1, 13), fill_value=0)
    average = by_month.sum() / 12
    if average <= 0:
        return price

    factor = by_month[month] / average
    low, high = config.seasonal_bounds
    if factor > high:
        return price * config.seasonal_adjustments[1]
    if factor < low:
        return price * config.seasonal_adjustments[0]
    return price


def confidence_adjustment(current: float, suggested: float, tier: str, config: PricingConfig | None = None) -> float:
    """Move part of the way to ``suggested`` and cap the change by tier."""
    config = config or PricingConfig()
    adjusted = current + (suggested - current) * config.adjustment_factors[tier]
    cap = config.max_change[tier]
    return float(np.clip(adjusted, current * (1 - cap), current * (1 + cap)))


def project_revenue(
    total_quantity: float,
    average_price: float,
    price: float,
    elasticity: float,
    history_days: float,
    config: PricingConfig | None = None,
) -> float:
    """Revenue over ``projection_days`` at ``price`` with a linear elasticity response."""
    config = config or PricingConfig()
    if total_quantity <= 0 or history_days <= 0 or average_price <= 0:
        return 0.0
    base_quantity = total_quantity / history_days * config.projection_days
    quantity = base_quantity * (1 + (price / average_price - 1) * elasticity)
    return quantity * price


def recommend_prices(
    transactions: Sequence[SaleRecord],
    min_confidence: str = "all",
    config: PricingConfig | None = None,
    now: datetime | None = None,
    history_days: float = 90,
) -> list[PriceRecommendation]:
    """Price changes worth making, largest expected revenue swing first.

    ``min_confidence`` keeps only recommendations of exactly that tier;
    "all" keeps every tier. A product needs enough units for the queried
    tier, two or more price points and some spread in the prices charged.
    Changes under two percent of projected revenue, or under a cent, are
    dropped.
    """
    check_price_tier(min_confidence)
    config = config or PricingConfig()
    month = (now or utc_now()).month

    lines = line_items(transactions)
    if lines.empty:
        return []

    recommendations = []
    for product_id, product_lines in lines.groupby("product_id", sort=False):
        total_quantity = float(product_lines["quantity"].sum())
        if total_quantity < config.min_quantity[min_confidence]:
            continue

        points = price_points(product_lines)
        if len(points) < config.min_price_points:
            continue

        elasticity = estimate_elasticity(points, config)
        target = revenue_maximizing_price(points, elasticity, config)
        if price_variation(product_lines["price"]) < config.min_price_variation:
            continue

        tier = score_tier(confidence_score(total_quantity, len(points), len(product_lines), config), config)
        if min_confidence != "all" and tier != min_confidence:
            continue

        current = float((product_lines["price"] * product_lines["quantity"]).sum()) / total_quantity
        target = seasonal_adjustment(target, product_lines, month, config)
        recommended = confidence_adjustment(current, target, tier, config)

        current_revenue = project_revenue(total_quantity, current, current, elasticity, history_days, config)
        potential_revenue = project_revenue(total_quantity, current, recommended, elasticity, history_days, config)
        recommendation = PriceRecommendation(
            product_id=product_id,
            product_name=product_lines["product_name"].iloc[0],
            current_price=current,
            recommended_price=recommended,
            confidence=tier,
            potential_revenue=potential_revenue,
            current_revenue=current_revenue,
            elasticity=elasticity,
        )
        if (abs(recommendation.percentage_change) >= config.min_revenue_change_pct
                and abs(recommended - current) > 0.01):
            recommendations.append(recommendation)

    recommendations.sort(key=lambda r: abs(r.percentage_change), reverse=True)
    logger.debug(f"{len(recommendations)} price recommendation(s) from {lines['product_id'].nunique()} product(s)")
    return recommendations


def project_monthly_revenue(
    transactions: Sequence[SaleRecord],
    recommendations: Sequence[PriceRecommendation],
    now: datetime,
    config: PricingConfig | None = None,
    history_days: float = 90,
) -> list[PriceProjectionPoint]:
    """Monthly revenue at current and at recommended prices, starting this month.

    Every product sold in the window contributes; products without a
    recommendation keep their current revenue in the optimized line.
    """
    config = config or PricingConfig()
    lines = line_items(transactions)
    if lines.empty or not recommendations:
        return []

    by_product = {r.product_id: r for r in recommendations}
    base_current = 0.0
    base_optimized = 0.0
    for product_id, product_lines in lines.groupby("product_id", sort=False):
        total_quantity = float(product_lines["quantity"].sum())
        revenue = float((product_lines["price"] * product_lines["quantity"]).sum())
        average_price = revenue / total_quantity if total_quantity > 0 else 0.0
        current = project_revenue(
            total_quantity, average_price, average_price, config.default_elasticity, history_days, config
        )
        recommendation = by_product.get(product_id)
        base_current += current / config.projection_months
        base_optimized += (recommendation.potential_revenue if recommendation else current) / config.projection_months

    projections = []
    for offset in range(config.projection_months):
        growth = (1 + config.monthly_growth) ** offset
        label = (pd.Timestamp(now) + pd.DateOffset(months=offset)).strftime("%b %Y")
        projections.append(PriceProjectionPoint(
            date=label,
            current_revenue=round(base_current * growth, 2),
            optimized_revenue=round(base_optimized * growth, 2),
        ))
    return projections
