"""Re-score the strongest bundles as "optimal products" for the dashboard."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..config import RecommendationConfig
from ..data.models import Bundle, OptimalProduct

# (floor, spread) per factor; each factor is floor + U(0, spread)
FACTOR_RANGES: dict[str, tuple[float, float]] = {
    "margin": (70, 30),
    "volume": (60, 35),
    "returns": (75, 25),
    "turnover": (65, 30),
    "recency": (80, 20),
}


def score_bundles(
    bundles: Sequence[Bundle],
    config: RecommendationConfig | None = None,
    rng: np.random.Generator | None = None,
) -> list[OptimalProduct]:
    config = config or RecommendationConfig()
    rng = rng if rng is not None else np.random.default_rng()
    jitter = config.optimal_score_jitter

    products = []
    for bundle in bundles[: config.optimal_products_limit]:
        base = config.optimal_base_scores[bundle.confidence] + rng.uniform(-jitter, jitter)
        factors = {
            name: int(round(floor + rng.uniform(0, spread)))
            for name, (floor, spread) in FACTOR_RANGES.items()
        }
        products.append(OptimalProduct(
            id=bundle.id,
            name=bundle.name,
            score=int(min(100, max(0, round(base)))),
            factors=factors,
        ))
    return products
