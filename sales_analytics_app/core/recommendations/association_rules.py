"""Market-basket association rules and the product bundles built from them."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

import numpy as np
import pandas as pd
from mlxtend.frequent_patterns import fpgrowth
from mlxtend.preprocessing import TransactionEncoder

from ..config import RecommendationConfig
from ..data.models import Bundle, BundleProduct, SaleRecord

logger = logging.getLogger(__name__)

TIERS = ("high", "medium", "low")
_TIER_RANK = {"high": 3, "medium": 2, "low": 1}


@dataclass(frozen=True)
class AssociationRule:
    products: tuple[BundleProduct, ...]
    frequency: int
    support: float
    confidence: float
    lift: float

    @property
    def key(self) -> tuple[str, ...]:
        return tuple(sorted(p.id for p in self.products))


def check_tier(tier: str) -> str:
    if tier not in TIERS:
        raise ValueError(f"Unknown confidence tier: {tier!r}. Use one of {list(TIERS)}.")
    return tier


def _basket(sale: SaleRecord) -> list[BundleProduct]:
    """Distinct valid products of a sale, in order of first appearance."""
    seen: dict[str, BundleProduct] = {}
    for item in sale.valid_items:
        product = item.product
        if product.id not in seen:
            seen[product.id] = BundleProduct(id=product.id, name=product.name, price=item.price)
    return list(seen.values())


def mine_association_rules(
    transactions: Sequence[SaleRecord],
    max_itemset_size: int = 3,
    support_floor: float = 0.01,
) -> list[AssociationRule]:
    """Frequent co-purchased itemsets of size 2 up to ``max_itemset_size``.

    Baskets are one-hot encoded and mined with FP-Growth, which also yields
    the support of every single product. Confidence divides an itemset's
    support by its smallest member support, so it never exceeds 1; lift
    divides it by the product of member supports. Itemsets at or below
    ``support_floor`` are dropped.
    """
    n = len(transactions)
    if n == 0:
        return []

    baskets = [_basket(sale) for sale in transactions]
    catalog: dict[str, BundleProduct] = {}
    for basket in baskets:
        for product in basket:
            catalog.setdefault(product.id, product)
    if not catalog:
        return []

    encoder = TransactionEncoder()
    ids = [[p.id for p in basket] for basket in baskets]
    onehot = pd.DataFrame(encoder.fit(ids).transform(ids), columns=encoder.columns_)
    itemsets = fpgrowth(
        onehot,
        min_support=max(support_floor, 1e-6),  # fpgrowth rejects a zero floor
        use_colnames=True,
        max_len=max_itemset_size,
    )

    supports = dict(zip(itemsets["itemsets"], itemsets["support"]))
    order = {pid: i for i, pid in enumerate(catalog)}

    rules = []
    for itemset, support in supports.items():
        if len(itemset) < 2 or support <= support_floor:
            continue
        key = sorted(itemset, key=order.__getitem__)
        member_supports = np.array([supports[frozenset([pid])] for pid in key])
        rules.append(AssociationRule(
            products=tuple(catalog[pid] for pid in key),
            frequency=int(round(support * n)),
            support=float(support),
            confidence=float(support / member_supports.min()),
            lift=float(support / member_supports.prod()),
        ))

    # First-seen product order keeps ties deterministic
    rules.sort(key=lambda r: tuple(order[p.id] for p in r.products))
    logger.debug(f"Mined {len(rules)} itemset(s) above {support_floor:.1%} support from {n} transaction(s)")
    return rules


def assign_tier(confidence: float, thresholds: dict[str, float]) -> str | None:
    """Highest tier whose confidence cutoff is met."""
    for tier in TIERS:
        if confidence >= thresholds[tier]:
            return tier
    return None


def bundle_name(products: Sequence[BundleProduct]) -> str:
    if len(products) == 2:
        return f"{products[0].name} + {products[1].name}"
    others = len(products) - 1
    return f"{products[0].name} + {others} {'item' if others == 1 else 'items'}"


def build_bundle(rule: AssociationRule, tier: str, discount_percentage: int, bundle_id: str = "") -> Bundle:
    individual = sum(p.price for p in rule.products)
    discount = individual * discount_percentage / 100
    return Bundle(
        id=bundle_id,
        name=bundle_name(rule.products),
        products=rule.products,
        bundle_price=round(individual - discount, 2),
        individual_price=round(individual, 2),
        discount=round(discount, 2),
        discount_percentage=discount_percentage,
        confidence=tier,
        support=rule.support,
        lift=rule.lift,
        confidence_score=rule.confidence,
    )


def mine_bundles(
    transactions: Sequence[SaleRecord],
    min_confidence: str = "medium",
    config: RecommendationConfig | None = None,
) -> list[Bundle]:
    """Bundle recommendations meeting the ``min_confidence`` tier.

    Sorted by tier then support, both descending; ids follow output order.
    A bundle's tier comes from its confidence alone, so a lower query tier
    can return a "high" bundle whose support a "high" query would reject.
    """
    check_tier(min_confidence)
    config = config or RecommendationConfig()

    rules = mine_association_rules(transactions, config.max_itemset_size, config.support_floor)
    min_conf = config.confidence_thresholds[min_confidence]
    min_support = config.support_thresholds[min_confidence]

    bundles = []
    for rule in rules:
        if rule.confidence < min_conf or rule.support < min_support:
            continue
        tier = assign_tier(rule.confidence, config.confidence_thresholds)
        bundles.append(build_bundle(rule, tier, config.discount_percentages[tier]))

    bundles.sort(key=lambda b: (_TIER_RANK[b.confidence], b.support), reverse=True)
    return [replace(b, id=f"bundle-{i}") for i, b in enumerate(bundles, start=1)]
