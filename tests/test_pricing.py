"""Tests for elasticity-based price recommendations."""

from datetime import timedelta

import pandas as pd
import pytest

from sales_analytics_app.core.config import AnalyticsConfig, PricingConfig
from sales_analytics_app.core.data.repository import load_sale_records
from sales_analytics_app.core.recommendations.pricing import (
    confidence_adjustment,
    confidence_score,
    estimate_elasticity,
    price_points,
    price_variation,
    project_monthly_revenue,
    recommend_prices,
    revenue_maximizing_price,
    score_tier,
    seasonal_adjustment,
)
from tests.factories import NOW, UnreachableRepository, make_sale, priced_sales


def _lines(product, *price_counts, **kwargs):
    """Sales in June 2024 unless ``start`` says otherwise."""
    return priced_sales(*product, *price_counts, **kwargs)


KETTLE = ("pk", "Kettle")
GRINDER = ("pg", "Grinder")
SCALE = ("ps", "Scale")

# 20 sold at 10, 10 sold at 12: elastic, high confidence
ELASTIC = _lines(KETTLE, (10.0, 20), (12.0, 10))
# 20 sold at 10, 18 sold at 12: inelastic, high confidence
INELASTIC = _lines(GRINDER, (10.0, 20), (12.0, 18))
# 8 sold at 10, 4 sold at 12: elastic, medium confidence
MEDIUM = _lines(SCALE, (10.0, 8), (12.0, 4))


def _recommend(rows, tier="all", history_days=90):
    return recommend_prices(load_sale_records(rows), tier, now=NOW, history_days=history_days)


def _points(*price_quantity):
    lines = pd.DataFrame([{"price": p, "quantity": q} for p, q in price_quantity])
    return price_points(lines)


class TestElasticity:

    def test_arc_elasticity_is_clamped(self):
        # (10 - 20) / 15 over 2 / 11 is about -3.67
        assert estimate_elasticity(_points((10.0, 20), (12.0, 10))) == -3.0

    def test_inelastic_estimate(self):
        assert estimate_elasticity(_points((10.0, 20), (12.0, 18))) == pytest.approx(-(2 / 19) / (2 / 11))

    def test_thin_price_points_use_default(self):
        assert estimate_elasticity(_points((10.0, 20), (12.0, 2))) == -0.8

    def test_rising_demand_ignored(self):
        assert estimate_elasticity(_points((10.0, 5), (12.0, 9))) == -0.8

    def test_points_rounded_to_cents(self):
        points = _points((9.999, 2), (10.001, 3), (12.0, 1))
        assert list(points.index) == [10.0, 12.0]
        assert points.loc[10.0, "quantity"] == 5
        assert points.loc[10.0, "revenue"] == pytest.approx(50.0)


class TestRevenueMaximizingPrice:

    def test_elastic_moves_below_lowest_viable_price(self):
        assert revenue_maximizing_price(_points((10.0, 20), (12.0, 10)), -3.0) == pytest.approx(9.5)

    def test_inelastic_moves_above_highest_viable_price(self):
        assert revenue_maximizing_price(_points((10.0, 20), (12.0, 18)), -0.58) == pytest.approx(12.6)

    def test_inelastic_skips_thin_high_price(self):
        points = _points((10.0, 20), (12.0, 18), (15.0, 2))
        assert revenue_maximizing_price(points, -0.5) == pytest.approx(12.6)

    def test_unit_elasticity_keeps_best_revenue_point(self):
        assert revenue_maximizing_price(_points((10.0, 20), (12.0, 18)), -1.0) == 12.0


class TestScoring:

    def test_confidence_score_weights(self):
        # quantity 30 -> 0.8, two prices -> 0.5, 30 lines -> 1.0, recency 1.0
        assert confidence_score(30, 2, 30) == pytest.approx(0.77)
        assert confidence_score(4, 1, 1) == pytest.approx(0.2 * 0.4 + 0.2 * 0.3 + 0.2 * 0.2 + 0.1)

    def test_score_tiers(self):
        assert score_tier(0.77) == "high"
        assert score_tier(0.65) == "medium"
        assert score_tier(0.49) == "low"

    def test_price_variation(self):
        assert price_variation([10.0, 10.0]) == 0.0
        assert price_variation([]) == 0.0
        assert price_variation([9.0, 11.0]) == pytest.approx(0.1)

    def test_confidence_adjustment_damps_and_caps(self):
        assert confidence_adjustment(10.0, 20.0, "high") == pytest.approx(11.5)
        assert confidence_adjustment(10.0, 10.5, "medium") == pytest.approx(10.35)
        assert confidence_adjustment(10.0, 9.0, "low") == pytest.approx(9.6)

    def test_seasonal_adjustment(self):
        june_heavy = pd.DataFrame({"month": [6] * 10 + [1], "quantity": [1] * 11})
        assert seasonal_adjustment(10.0, june_heavy, 6) == pytest.approx(10.3)
        assert seasonal_adjustment(10.0, june_heavy, 2) == pytest.approx(9.7)
        even = pd.DataFrame({"month": list(range(1, 13)), "quantity": [1] * 12})
        assert seasonal_adjustment(10.0, even, 6) == 10.0


class TestRecommendPrices:

    def test_elastic_product_gets_a_lower_price(self):
        [rec] = _recommend(ELASTIC)
        assert rec.product_id == "pk"
        assert rec.confidence == "high"
        assert rec.elasticity == -3.0
        assert rec.current_price == pytest.approx(32 / 3)
        # 9.5 raised 3% for a strong June
        assert rec.recommended_price == pytest.approx(9.785)
        assert rec.current_revenue == pytest.approx(640.0)
        assert rec.percentage_change == pytest.approx(14.48, abs=0.05)
        assert rec.revenue_difference == pytest.approx(rec.potential_revenue - rec.current_revenue)

    def test_inelastic_product_capped_increase(self):
        [rec] = _recommend(INELASTIC)
        assert rec.confidence == "high"
        assert rec.recommended_price == pytest.approx(416 / 38 * 1.15)
        assert rec.recommended_price > rec.current_price
        assert rec.potential_revenue > rec.current_revenue

    def test_tier_filter_is_exact(self):
        rows = ELASTIC + MEDIUM
        assert {r.product_id for r in _recommend(rows, "all")} == {"pk", "ps"}
        assert [r.product_id for r in _recommend(rows, "high")] == ["pk"]
        assert [r.product_id for r in _recommend(rows, "medium")] == ["ps"]
        assert _recommend(rows, "low") == []

    def test_medium_confidence_is_damped(self):
        [rec] = _recommend(MEDIUM, "medium")
        current = 128 / 12
        assert rec.recommended_price == pytest.approx(current + (9.785 - current) * 0.7)

    def test_sorted_by_size_of_change(self):
        recs = _recommend(ELASTIC + INELASTIC + MEDIUM)
        changes = [abs(r.percentage_change) for r in recs]
        assert changes == sorted(changes, reverse=True)

    def test_ineligible_products_skipped(self):
        single_price = _lines(("p1", "Tray"), (10.0, 15))
        too_few = _lines(("p2", "Spoon"), (10.0, 2), (12.0, 2))
        flat_prices = _lines(("p3", "Jar"), (10.0, 10), (10.2, 10))
        assert _recommend(single_price + too_few + flat_prices) == []

    def test_high_query_needs_more_units(self):
        few = _lines(("p4", "Cup"), (10.0, 6), (12.0, 4))
        assert _recommend(few, "high") == []

    def test_deleted_products_ignored(self):
        rows = ELASTIC + [make_sale("gone", NOW - timedelta(days=1), items=[(None, None, 3, 5.0)])]
        assert [r.product_id for r in _recommend(rows)] == ["pk"]

    def test_to_dict(self):
        out = _recommend(ELASTIC)[0].to_dict()
        assert set(out) == {
            "productId", "productName", "currentPrice", "recommendedPrice", "confidence",
            "potentialRevenue", "currentRevenue", "revenueDifference", "percentageChange",
        }
        assert out["productName"] == "Kettle"

    def test_unknown_tier(self):
        with pytest.raises(ValueError):
            recommend_prices([], "certain")


class TestMonthlyProjection:

    def test_six_months_with_growth(self):
        transactions = load_sale_records(ELASTIC)
        recs = recommend_prices(transactions, now=NOW)
        months = project_monthly_revenue(transactions, recs, NOW)
        assert [m.date for m in months] == ["Jun 2024", "Jul 2024", "Aug 2024", "Sep 2024", "Oct 2024", "Nov 2024"]
        assert months[0].current_revenue == pytest.approx(640 / 6, abs=0.01)
        assert months[0].optimized_revenue == pytest.approx(recs[0].potential_revenue / 6, abs=0.01)
        assert months[1].current_revenue == pytest.approx(640 / 6 * 1.02, abs=0.01)

    def test_products_without_recommendation_count_in_both_lines(self):
        transactions = load_sale_records(ELASTIC + _lines(("p1", "Tray"), (5.0, 9)))
        recs = recommend_prices(transactions, now=NOW)
        first = project_monthly_revenue(transactions, recs, NOW)[0]
        tray = 9 / 90 * 180 * 5.0 / 6
        assert first.current_revenue == pytest.approx(640 / 6 + tray, abs=0.01)
        assert first.optimized_revenue == pytest.approx(recs[0].potential_revenue / 6 + tray, abs=0.01)

    def test_no_recommendations_no_projection(self):
        transactions = load_sale_records(_lines(("p1", "Tray"), (5.0, 9)))
        assert project_monthly_revenue(transactions, [], NOW) == []


class TestEngine:

    def test_price_analysis(self, make_engine):
        analysis = make_engine(ELASTIC + INELASTIC).compute_price_analysis(90)
        assert {r.product_id for r in analysis.recommendations} == {"pk", "pg"}
        assert len(analysis.revenue_projections) == 6
        out = analysis.to_dict()
        assert out["revenueProjections"][0]["date"] == "Jun 2024"

    def test_window_limits_history(self, make_engine):
        old = _lines(KETTLE, (10.0, 20), (12.0, 10), start=NOW - timedelta(days=200))
        assert make_engine(old).compute_price_recommendations(90) == []

    def test_empty_repository(self, make_engine):
        analysis = make_engine([]).compute_price_analysis(30)
        assert analysis.recommendations == []
        assert analysis.revenue_projections == []

    def test_unreachable_gives_empty_list(self, make_engine):
        engine = make_engine(repository=UnreachableRepository(ELASTIC))
        assert engine.compute_price_recommendations(90) == []

    def test_confidence_threshold(self, make_engine):
        engine = make_engine(ELASTIC + MEDIUM)
        assert [r.product_id for r in engine.compute_price_recommendations(90, "medium")] == ["ps"]

    def test_unknown_tier(self, make_engine):
        with pytest.raises(ValueError):
            make_engine([]).compute_price_analysis(90, min_confidence="certain")

    def test_config_is_used(self, make_engine):
        config = AnalyticsConfig(pricing=PricingConfig(min_revenue_change_pct=50.0))
        assert make_engine(ELASTIC, config=config).compute_price_recommendations(90) == []
