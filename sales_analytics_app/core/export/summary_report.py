"""Summary report builder."""

from __future__ import annotations

from ..data.models import PriceAnalysis, RevenueProjection, SalesRecommendations
from ..services.revenue_trends import RevenueTrendAnalysis


def build_text_report(
    data_summary: dict,
    projection: RevenueProjection | None = None,
    trends: RevenueTrendAnalysis | None = None,
    recommendations: SalesRecommendations | None = None,
    pricing: PriceAnalysis | None = None,
) -> str:
    """Build a full-text analytics report from whichever results exist."""
    lines = []

    lines.append("=" * 70)
    lines.append("SALES ANALYTICS REPORT")
    lines.append("=" * 70)
    lines.append("")

    lines.append("DATA OVERVIEW")
    lines.append("-" * 40)
    for key, val in data_summary.items():
        lines.append(f"  {key}: {val}")
    lines.append("")

    if projection is not None and projection.actual:
        actual_total = sum(p.value for p in projection.actual)
        projected_total = sum(p.value for p in projection.projected)
        current = projection.actual[projection.today_index]
        lines.append("REVENUE PROJECTION")
        lines.append("-" * 40)
        lines.append(f"  Resolution: {projection.resolution.label}")
        lines.append(f"  Actual periods: {len(projection.actual)} (total {actual_total:,.2f})")
        lines.append(f"  Projected periods: {len(projection.projected)} (total {projected_total:,.2f})")
        lines.append(f"  Current period: {current.label} ({current.value:,.2f})")
        lines.append("")

    if trends is not None:
        lines.append("REVENUE TRENDS")
        lines.append("-" * 40)
        lines.append(f"  Resolution: {trends.resolution.label}")
        lines.append(f"  Total: {trends.total:,.2f}  Average: {trends.average:,.2f}  Median: {trends.median:,.2f}")
        lines.append(f"  Best period: {trends.max_point.label} ({trends.max_point.value:,.2f})")
        lines.append(f"  Overall growth: {trends.growth.overall:.1f}%")
        lines.append(f"  Trend: {trends.trend}")
        s = trends.seasonality
        if s is not None and s.detected:
            lines.append(
                f"  Seasonality: strongest {s.unit_name(s.strongest)}, weakest {s.unit_name(s.weakest)}"
            )
        lines.append("")

    if recommendations is not None:
        lines.append("SALES RECOMMENDATIONS")
        lines.append("-" * 40)
        for t in recommendations.day_of_week_trends[:5]:
            lines.append(f"  Promote {t.product_name} on {t.best_day} ({t.peak_percent}% of average)")
        for b in recommendations.product_bundles[:5]:
            lines.append(
                f"  Bundle {b.name}: {b.bundle_price:,.2f} instead of {b.individual_price:,.2f} "
                f"({b.confidence} confidence, lift {b.lift:.2f})"
            )
        lines.append("")

    if pricing is not None and pricing.recommendations:
        lines.append("PRICE RECOMMENDATIONS")
        lines.append("-" * 40)
        for r in pricing.recommendations[:5]:
            lines.append(
                f"  {r.product_name}: {r.current_price:,.2f} -> {r.recommended_price:,.2f} "
                f"({r.percentage_change:+.1f}% projected revenue, {r.confidence} confidence)"
            )
        if pricing.revenue_projections:
            current = sum(p.current_revenue for p in pricing.revenue_projections)
            optimized = sum(p.optimized_revenue for p in pricing.revenue_projections)
            lines.append(
                f"  Next {len(pricing.revenue_projections)} months: {current:,.2f} at current prices, "
                f"{optimized:,.2f} optimized"
            )
        lines.append("")

    lines.append("=" * 70)
    lines.append("End of Report")
    lines.append("=" * 70)

    return "\n".join(lines)
