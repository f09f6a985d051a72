"""Sales repository contract, row parsing and an in-memory implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .coercion import safe_number, safe_quantity, safe_timestamp
from .models import ProductRef, SaleItem, SaleRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SalesFilter:
    start_date: datetime
    end_date: datetime
    user_id: str | None = None


class SalesRepository(ABC):
    """Contract every sales data source must implement."""

    name: str = "SalesRepository"

    @abstractmethod
    def ping(self) -> None:
        """Raise if the data source cannot be reached."""

    @abstractmethod
    def fetch_sales(self, sales_filter: SalesFilter) -> Sequence[Mapping[str, Any]]:
        """Return raw sale rows created within the filter's window.

        Each row looks like ``{id, createdAt, totalAmount, userId?, items?}``
        where items are ``{productId, quantity, unitPrice, product}`` and
        ``product`` is ``{id, name, sellingPrice}`` or None.
        """

    @abstractmethod
    def sale_bounds(self, user_id: str | None = None) -> tuple[datetime, datetime] | None:
        """Timestamps of the oldest and newest sale, or None when there are none."""


def _first(row: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return default


def _parse_product(raw: Any) -> ProductRef | None:
    if not isinstance(raw, Mapping):
        return None
    product_id = _first(raw, "id")
    if product_id is None:
        return None
    return ProductRef(
        id=str(product_id),
        name=str(_first(raw, "name", default=product_id)),
        selling_price=safe_number(_first(raw, "sellingPrice", "selling_price", "price")),
    )


def parse_sale_item(raw: Any) -> SaleItem | None:
    """Parse one line item; None when its quantity is unusable."""
    if not isinstance(raw, Mapping):
        return None
    quantity = safe_quantity(_first(raw, "quantity", default=1))
    if quantity is None:
        return None
    product = _parse_product(_first(raw, "product"))
    product_id = _first(raw, "productId", "product_id")
    return SaleItem(
        product=product,
        quantity=quantity,
        unit_price=safe_number(_first(raw, "unitPrice", "unit_price", "price")),
        product_id=str(product_id) if product_id is not None else (product.id if product else None),
    )


def parse_sale_row(row: Mapping[str, Any]) -> SaleRecord | None:
    """Turn a raw repository row into a SaleRecord, or None if it has no usable timestamp."""
    timestamp = safe_timestamp(_first(row, "createdAt", "created_at", "date", "timestamp"))
    if timestamp is None:
        return None

    raw_items = _first(row, "items", default=()) or ()
    items = tuple(item for item in (parse_sale_item(raw) for raw in raw_items) if item is not None)
    user_id = _first(row, "userId", "user_id")
    return SaleRecord(
        id=str(_first(row, "id", default="")),
        timestamp=timestamp,
        total_amount=safe_number(_first(row, "totalAmount", "total_amount", "total")),
        user_id=str(user_id) if user_id is not None else None,
        items=items,
    )


def load_sale_records(rows: Iterable[Mapping[str, Any]]) -> list[SaleRecord]:
    """Parse rows, skipping malformed ones, ordered by timestamp."""
    records = []
    skipped = 0
    for row in rows:
        record = parse_sale_row(row) if isinstance(row, Mapping) else None
        if record is None:
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.debug(f"Skipped {skipped} sale row(s) without a usable timestamp")
    records.sort(key=lambda r: r.timestamp)
    return records


class InMemorySalesRepository(SalesRepository):
    """Repository over a list of raw rows; used by tests and the dashboard."""

    name = "In-memory"

    def __init__(self, rows: Iterable[Mapping[str, Any]] | None = None):
        self._rows = list(rows or [])

    def __len__(self) -> int:
        return len(self._rows)

    def ping(self) -> None:
        return None

    def _matching(self, user_id: str | None) -> list[tuple[datetime, Mapping[str, Any]]]:
        matched = []
        for row in self._rows:
            timestamp = safe_timestamp(_first(row, "createdAt", "created_at", "date", "timestamp"))
            if timestamp is None:
                continue
            if user_id is not None and str(_first(row, "userId", "user_id", default="")) != str(user_id):
                continue
            matched.append((timestamp, row))
        matched.sort(key=lambda pair: pair[0])
        return matched

    def fetch_sales(self, sales_filter: SalesFilter) -> list[Mapping[str, Any]]:
        return [
            row
            for timestamp, row in self._matching(sales_filter.user_id)
            if sales_filter.start_date <= timestamp <= sales_filter.end_date
        ]

    def sale_bounds(self, user_id: str | None = None) -> tuple[datetime, datetime] | None:
        matched = self._matching(user_id)
        if not matched:
            return None
        return matched[0][0], matched[-1][0]
