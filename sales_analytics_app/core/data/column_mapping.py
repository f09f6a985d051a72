"""Auto-detect and manual mapping of sales line-item columns."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass
class SalesColumnMapping:
    sale_id_col: str | None = None
    date_col: str | None = None
    amount_col: str | None = None
    user_col: str | None = None
    product_id_col: str | None = None
    product_name_col: str | None = None
    quantity_col: str | None = None
    price_col: str | None = None

    @property
    def is_complete(self) -> bool:
        """Date plus either a sale amount or quantity and price."""
        if self.date_col is None:
            return False
        return self.amount_col is not None or (self.quantity_col is not None and self.price_col is not None)


_HINTS: dict[str, list[str]] = {
    "sale_id_col": ["sale_id", "order_id", "transaction_id", "receipt_id", "invoice", "order"],
    "date_col": ["date", "created_at", "createdat", "timestamp", "sale_date", "order_date", "time"],
    "amount_col": ["total_amount", "totalamount", "total", "amount", "revenue", "sale_total"],
    "user_col": ["user_id", "userid", "owner_id", "store_id"],
    "product_id_col": ["product_id", "productid", "sku", "item_id"],
    "product_name_col": ["product_name", "productname", "product", "item", "item_name", "name"],
    "quantity_col": ["quantity", "qty", "units"],
    "price_col": ["unit_price", "unitprice", "price", "selling_price"],
}


def _normalize(col: str) -> str:
    return str(col).strip().lower().replace(" ", "_").replace("-", "_")


def auto_detect_sales_columns(df: pd.DataFrame) -> SalesColumnMapping:
    mapping = SalesColumnMapping()
    cols_lower = {c: _normalize(c) for c in df.columns}
    taken: set[str] = set()

    for attr, hints in _HINTS.items():
        for hint in hints:
            match = next((c for c, norm in cols_lower.items() if norm == hint and c not in taken), None)
            if match is not None:
                setattr(mapping, attr, match)
                taken.add(match)
                break

    # Fall back to the first parseable column for the date
    if mapping.date_col is None:
        for col in df.columns:
            if col in taken or pd.api.types.is_numeric_dtype(df[col]):
                continue
            parsed = pd.to_datetime(df[col].dropna().head(20), errors="coerce")
            if len(parsed) > 0 and parsed.notna().all():
                mapping.date_col = col
                break

    return mapping
