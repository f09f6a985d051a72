"""Builders for raw repository rows and repository doubles."""

from __future__ import annotations

from datetime import datetime, timedelta

from sales_analytics_app.core.data.coercion import safe_number
from sales_analytics_app.core.data.repository import InMemorySalesRepository

# Saturday
NOW = datetime(2024, 6, 15, 12, 0)


def make_sale(sale_id, when, items=(), amount=None, user_id=None) -> dict:
    """Raw row as a repository returns it.

    ``items`` are ``(product_id, name, quantity, unit_price)`` tuples; a
    ``product_id`` of None stands for a product that has been deleted.
    """
    raw_items = []
    for product_id, name, quantity, price in items:
        raw_items.append({
            "productId": product_id,
            "quantity": quantity,
            "unitPrice": price,
            "product": None if product_id is None else {"id": product_id, "name": name, "sellingPrice": price},
        })
    if amount is None:
        amount = sum(safe_number(q) * safe_number(p) for _, _, q, p in items)

    row = {"id": sale_id, "createdAt": when, "totalAmount": amount, "items": raw_items}
    if user_id is not None:
        row["userId"] = user_id
    return row


def priced_sales(product_id: str, name: str, *price_counts, start: datetime = NOW - timedelta(days=10)) -> list[dict]:
    """One single-unit sale per count at each price, an hour apart."""
    rows = []
    for price, count in price_counts:
        for _ in range(count):
            when = start + timedelta(hours=len(rows))
            rows.append(make_sale(f"{product_id}-{len(rows)}", when, items=[(product_id, name, 1, price)]))
    return rows


def daily_sales(days: int, amount: float = 100.0, end: datetime = NOW, hour: int = 10) -> list[dict]:
    """One sale per day for ``days`` days, the last on ``end``'s date."""
    last = end.replace(hour=hour, minute=0, second=0, microsecond=0)
    return [
        make_sale(f"d{i}", last - timedelta(days=days - 1 - i), amount=amount)
        for i in range(days)
    ]


def monthly_sales(start_year: int, end_year: int, end_month: int = 12, amount: float = 1000.0) -> list[dict]:
    rows = []
    for year in range(start_year, end_year + 1):
        last_month = end_month if year == end_year else 12
        for month in range(1, last_month + 1):
            rows.append(make_sale(f"m{year}{month:02d}", datetime(year, month, 10, 9), amount=amount))
    return rows


class UnreachableRepository(InMemorySalesRepository):
    name = "Unreachable"

    def ping(self) -> None:
        raise OSError("connection refused")


class FailingBoundsRepository(InMemorySalesRepository):
    def sale_bounds(self, user_id=None):
        raise RuntimeError("aggregate query timed out")


class FailingFetchRepository(InMemorySalesRepository):
    def fetch_sales(self, sales_filter):
        raise RuntimeError("boom")
