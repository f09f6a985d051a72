"""Tests for association rules, bundles, weekday trends and optimal products."""

from datetime import datetime, timedelta

import numpy as np
import pandas as pd
import pytest
from mlxtend.frequent_patterns import apriori
from mlxtend.preprocessing import TransactionEncoder

from sales_analytics_app.core.config import RecommendationConfig
from sales_analytics_app.core.data.repository import load_sale_records
from sales_analytics_app.core.recommendations.association_rules import (
    assign_tier,
    bundle_name,
    mine_association_rules,
    mine_bundles,
)
from sales_analytics_app.core.recommendations.day_of_week import analyze_day_of_week
from sales_analytics_app.core.recommendations.optimal_products import FACTOR_RANGES, score_bundles
from tests.factories import make_sale

MONDAY = datetime(2024, 6, 10, 11)
FRIDAY = datetime(2024, 6, 14, 11)

A = ("pa", "Dripper", 1, 24.0)
B = ("pb", "Filters", 1, 4.0)
C = ("pc", "Kettle", 1, 65.0)
D = ("pd", "Mug", 1, 12.0)


def _transactions(*baskets, when=MONDAY):
    return load_sale_records(
        make_sale(f"s{i}", when + timedelta(minutes=i), items=items) for i, items in enumerate(baskets)
    )


class TestAssociationRules:

    def test_always_bought_together(self):
        transactions = _transactions(*([[A, B]] * 5 + [[C, D]] * 5))
        rules = {r.key: r for r in mine_association_rules(transactions)}
        ab = rules[("pa", "pb")]
        assert ab.support == pytest.approx(0.5)
        assert ab.confidence == pytest.approx(1.0)
        assert ab.lift == pytest.approx(2.0)

    def test_three_item_baskets_yield_pairs_and_triple(self):
        rules = mine_association_rules(_transactions([A, B, C]))
        keys = {r.key for r in rules}
        assert keys == {("pa", "pb"), ("pa", "pc"), ("pb", "pc"), ("pa", "pb", "pc")}

    def test_duplicate_lines_count_once(self):
        transactions = _transactions([A, A, B], [A])
        rules = {r.key: r for r in mine_association_rules(transactions)}
        ab = rules[("pa", "pb")]
        assert ab.frequency == 1
        # A is in both transactions, B in one
        assert ab.confidence == pytest.approx(1.0)
        assert ab.lift == pytest.approx(0.5 / (1.0 * 0.5))

    def test_deleted_products_ignored(self):
        deleted = (None, None, 1, 3.0)
        rules = mine_association_rules(_transactions([A, deleted], [A, B]))
        assert [r.key for r in rules] == [("pa", "pb")]

    def test_metrics_bounded(self):
        rng = np.random.default_rng(0)
        catalog = [A, B, C, D]
        baskets = [[catalog[j] for j in rng.choice(4, size=rng.integers(1, 5), replace=False)] for _ in range(60)]
        for rule in mine_association_rules(_transactions(*baskets)):
            assert 0 < rule.support <= 1
            assert 0 <= rule.confidence <= 1
            assert rule.lift >= 0

    def test_supports_match_apriori(self):
        rng = np.random.default_rng(11)
        catalog = [A, B, C, D]
        baskets = [[catalog[j] for j in rng.choice(4, size=rng.integers(1, 5), replace=False)] for _ in range(50)]
        ids = [sorted({item[0] for item in basket}) for basket in baskets]
        encoder = TransactionEncoder()
        onehot = pd.DataFrame(encoder.fit(ids).transform(ids), columns=encoder.columns_)
        expected = apriori(onehot, min_support=0.01, use_colnames=True, max_len=3)
        expected = {
            tuple(sorted(itemset)): support
            for itemset, support in zip(expected["itemsets"], expected["support"])
            if len(itemset) >= 2
        }

        rules = {r.key: r for r in mine_association_rules(_transactions(*baskets))}
        assert rules.keys() == expected.keys()
        for key, rule in rules.items():
            assert rule.support == pytest.approx(expected[key])
            singles = [sum(pid in basket for basket in ids) / len(ids) for pid in key]
            assert rule.confidence == pytest.approx(expected[key] / min(singles))
            assert rule.frequency == sum(set(key) <= set(basket) for basket in ids)

    def test_support_floor(self):
        baskets = [[A, B]] + [[C]] * 199
        assert mine_association_rules(_transactions(*baskets)) == []

    def test_tier_assignment(self):
        thresholds = RecommendationConfig().confidence_thresholds
        assert assign_tier(0.5, thresholds) == "high"
        assert assign_tier(0.15, thresholds) == "medium"
        assert assign_tier(0.05, thresholds) == "low"
        assert assign_tier(0.01, thresholds) is None


class TestBundles:

    def test_high_tier_bundle_pricing(self):
        transactions = _transactions(*([[A, B]] * 5 + [[C, D]] * 5))
        bundles = mine_bundles(transactions, "high")
        assert [b.id for b in bundles] == ["bundle-1", "bundle-2"]
        ab = next(b for b in bundles if {p.id for p in b.products} == {"pa", "pb"})
        assert ab.confidence == "high"
        assert ab.discount_percentage == 15
        assert ab.individual_price == 28.0
        assert ab.discount == 4.2
        assert ab.bundle_price == 23.8
        assert ab.name == "Dripper + Filters"
        assert ab.lift > 1

    def test_sorted_by_tier_then_support(self):
        # A+B together in 4 of 4 A-sales; C+D in 1 of 10 C-sales
        baskets = [[A, B]] * 4 + [[C, D]] + [[C]] * 9 + [[D]] * 6
        bundles = mine_bundles(_transactions(*baskets), "low")
        tiers = [b.confidence for b in bundles]
        assert tiers == sorted(tiers, key=["high", "medium", "low"].index)
        assert bundles[0].name == "Dripper + Filters"
        assert bundles[-1].confidence in ("medium", "low")

    def test_tighter_tier_returns_fewer(self):
        rng = np.random.default_rng(4)
        catalog = [A, B, C, D, ("pe", "Tea", 1, 9.0), ("pf", "Scale", 1, 32.0)]
        baskets = [
            [catalog[j] for j in rng.choice(6, size=rng.integers(1, 4), replace=False)]
            for _ in range(80)
        ]
        transactions = _transactions(*baskets)
        counts = [len(mine_bundles(transactions, tier)) for tier in ("low", "medium", "high")]
        assert counts[0] >= counts[1] >= counts[2]

    def test_triple_name(self):
        bundles = mine_bundles(_transactions(*([[A, B, C]] * 3)), "high")
        triple = next(b for b in bundles if len(b.products) == 3)
        assert triple.name == "Dripper + 2 items"
        assert bundle_name(triple.products[:2]) == "Dripper + Filters"

    def test_tier_from_confidence_not_support(self):
        # A+B always together but in only 1 of 60 sales
        baskets = [[A, B]] + [[C]] * 59
        transactions = _transactions(*baskets)
        [ab] = mine_bundles(transactions, "low")
        assert ab.confidence == "high"
        assert ab.discount_percentage == 15
        assert ab.support == pytest.approx(1 / 60)
        assert mine_bundles(transactions, "high") == []

    def test_unknown_tier(self):
        with pytest.raises(ValueError):
            mine_bundles([], "certain")

    def test_to_dict(self):
        bundle = mine_bundles(_transactions(*([[A, B]] * 3)), "high")[0]
        out = bundle.to_dict()
        assert out["id"] == "bundle-1"
        assert out["products"][0] == {"id": "pa", "name": "Dripper", "price": 24.0}
        assert out["supportMetric"] == 1.0


class TestDayOfWeek:

    def test_percent_of_average_and_best_day(self):
        transactions = load_sale_records([
            make_sale("s1", MONDAY, items=[("pa", "Dripper", 3, 24.0)]),
            make_sale("s2", FRIDAY, items=[("pa", "Dripper", 1, 24.0)]),
        ])
        [trend] = analyze_day_of_week(transactions)
        assert trend.best_day == "Monday"
        assert trend.day_index == 1
        assert trend.average_sales == pytest.approx(4 / 7)
        by_day = {d.day: d for d in trend.sales_by_day}
        assert by_day["Monday"].sales == 3
        assert by_day["Monday"].percent_of_average == 525
        assert by_day["Friday"].percent_of_average == 175
        assert by_day["Sunday"].percent_of_average == 0
        assert [d.day for d in trend.sales_by_day][0] == "Sunday"

    def test_products_below_three_units_excluded(self):
        transactions = load_sale_records([
            make_sale("s1", MONDAY, items=[("pa", "Dripper", 2, 24.0), ("pb", "Filters", 3, 4.0)]),
        ])
        assert [t.product_id for t in analyze_day_of_week(transactions)] == ["pb"]

    def test_first_maximum_wins(self):
        sunday = datetime(2024, 6, 9, 10)
        wednesday = datetime(2024, 6, 12, 10)
        transactions = load_sale_records([
            make_sale("s1", wednesday, items=[("pa", "Dripper", 2, 24.0)]),
            make_sale("s2", sunday, items=[("pa", "Dripper", 2, 24.0)]),
        ])
        assert analyze_day_of_week(transactions)[0].best_day == "Sunday"

    def test_sorted_by_strongest_day(self):
        spread = [make_sale(f"x{i}", MONDAY + timedelta(days=i), items=[("pa", "Dripper", 1, 24.0)]) for i in range(7)]
        peaked = [make_sale("y", FRIDAY, items=[("pb", "Filters", 5, 4.0)])]
        trends = analyze_day_of_week(load_sale_records(spread + peaked))
        assert [t.product_id for t in trends] == ["pb", "pa"]
        assert trends[0].peak_percent == 700
        assert trends[1].peak_percent == 100

    def test_no_valid_items(self):
        transactions = load_sale_records([make_sale("s1", MONDAY, items=[(None, None, 5, 1.0)])])
        assert analyze_day_of_week(transactions) == []


class TestOptimalProducts:

    def test_scores_and_factor_ranges(self):
        bundles = mine_bundles(_transactions(*([[A, B]] * 5 + [[C, D]] * 5)), "high")
        products = score_bundles(bundles, rng=np.random.default_rng(9))
        assert [p.id for p in products] == [b.id for b in bundles]
        for product in products:
            assert 85 <= product.score <= 95
            for name, (floor, spread) in FACTOR_RANGES.items():
                assert floor <= product.factors[name] <= floor + spread

    def test_limited_to_ten(self):
        catalog = [(f"p{i}", f"Item {i}", 1, 5.0) for i in range(6)]
        baskets = [[catalog[i], catalog[j]] for i in range(6) for j in range(i + 1, 6)]
        bundles = mine_bundles(_transactions(*baskets), "low")
        assert len(bundles) > 10
        assert len(score_bundles(bundles, rng=np.random.default_rng(0))) == 10
