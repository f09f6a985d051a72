"""Plain data structures flowing between the repository, the engine and the UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..periods.period_key import PeriodKey
from ..periods.resolution import Resolution
from ..periods.windows import QueryWindow


@dataclass(frozen=True)
class ProductRef:
    id: str
    name: str
    selling_price: float = 0.0


@dataclass(frozen=True)
class SaleItem:
    product: ProductRef | None  # None when the product no longer exists
    quantity: int
    unit_price: float = 0.0
    product_id: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.product is not None

    @property
    def price(self) -> float:
        """Price charged, falling back to the product's selling price."""
        if self.unit_price:
            return self.unit_price
        if self.product is not None:
            return self.product.selling_price
        return 0.0


@dataclass(frozen=True)
class SaleRecord:
    id: str
    timestamp: datetime
    total_amount: float
    user_id: str | None = None
    items: tuple[SaleItem, ...] = ()

    @property
    def valid_items(self) -> list[SaleItem]:
        return [item for item in self.items if item.is_valid]


@dataclass(frozen=True)
class TimeSeriesPoint:
    period: PeriodKey
    value: float
    is_projected: bool = False
    count: int | None = None

    @property
    def label(self) -> str:
        return self.period.label

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"date": self.label, "value": self.value, "isProjected": self.is_projected}
        if self.count is not None:
            out["count"] = self.count
        return out


@dataclass(frozen=True)
class BundleProduct:
    id: str
    name: str
    price: float


@dataclass(frozen=True)
class Bundle:
    id: str
    name: str
    products: tuple[BundleProduct, ...]
    bundle_price: float
    individual_price: float
    discount: float
    discount_percentage: int
    confidence: str  # "high" | "medium" | "low"
    support: float
    lift: float
    confidence_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "products": [{"id": p.id, "name": p.name, "price": p.price} for p in self.products],
            "bundlePrice": self.bundle_price,
            "individualPrice": self.individual_price,
            "discount": self.discount,
            "discountPercentage": self.discount_percentage,
            "confidence": self.confidence,
            "supportMetric": self.support,
            "liftMetric": self.lift,
        }


@dataclass(frozen=True)
class DaySales:
    day: str
    sales: int
    percent_of_average: int


@dataclass(frozen=True)
class DayOfWeekTrend:
    product_id: str
    product_name: str
    best_day: str
    day_index: int  # 0 = Sunday
    average_sales: float
    sales_by_day: tuple[DaySales, ...]

    @property
    def peak_percent(self) -> int:
        return max((d.percent_of_average for d in self.sales_by_day), default=0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "bestDay": self.best_day,
            "dayIndex": self.day_index,
            "averageSales": self.average_sales,
            "salesByDay": [
                {"day": d.day, "sales": d.sales, "percentOfAverage": d.percent_of_average}
                for d in self.sales_by_day
            ],
        }


@dataclass(frozen=True)
class OptimalProduct:
    id: str
    name: str
    score: int
    factors: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class RevenueProjection:
    actual: list[TimeSeriesPoint]
    projected: list[TimeSeriesPoint]
    today_index: int
    resolution: Resolution
    window: QueryWindow

    def to_dict(self) -> dict[str, Any]:
        return {
            "actual": [p.to_dict() for p in self.actual],
            "projected": [p.to_dict() for p in self.projected],
            "todayIndex": self.today_index,
        }


@dataclass(frozen=True)
class SalesRecommendations:
    day_of_week_trends: list[DayOfWeekTrend]
    product_bundles: list[Bundle]

    def to_dict(self) -> dict[str, Any]:
        return {
            "dayOfWeekTrends": [t.to_dict() for t in self.day_of_week_trends],
            "productBundles": [b.to_dict() for b in self.product_bundles],
        }


@dataclass(frozen=True)
class PriceRecommendation:
    product_id: str
    product_name: str
    current_price: float
    recommended_price: float
    confidence: str  # "high" | "medium" | "low"
    potential_revenue: float
    current_revenue: float
    elasticity: float = 0.0

    @property
    def revenue_difference(self) -> float:
        return self.potential_revenue - self.current_revenue

    @property
    def percentage_change(self) -> float:
        if self.current_revenue <= 0:
            return 0.0
        return self.revenue_difference / self.current_revenue * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "currentPrice": self.current_price,
            "recommendedPrice": self.recommended_price,
            "confidence": self.confidence,
            "potentialRevenue": self.potential_revenue,
            "currentRevenue": self.current_revenue,
            "revenueDifference": self.revenue_difference,
            "percentageChange": self.percentage_change,
        }


@dataclass(frozen=True)
class PriceProjectionPoint:
    date: str  # e.g. "Jun 2024"
    current_revenue: float
    optimized_revenue: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "currentRevenue": self.current_revenue,
            "optimizedRevenue": self.optimized_revenue,
        }


@dataclass(frozen=True)
class PriceAnalysis:
    recommendations: list[PriceRecommendation]
    revenue_projections: list[PriceProjectionPoint]

    def to_dict(self) -> dict[str, Any]:
        return {
            "recommendations": [r.to_dict() for r in self.recommendations],
            "revenueProjections": [p.to_dict() for p in self.revenue_projections],
        }
