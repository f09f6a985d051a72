"""Data ingestion: Excel and CSV sales exports into repository rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any

import pandas as pd

from .coercion import safe_number
from .column_mapping import SalesColumnMapping, auto_detect_sales_columns

logger = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    """A raw line-item table plus where it came from."""

    df: pd.DataFrame
    source_name: str = ""
    sheet_names: list[str] = field(default_factory=list)

    @property
    def shape(self) -> tuple[int, int]:
        return self.df.shape


def load_excel(file_buffer: BytesIO | Any, sheet_name: str | int = 0) -> IngestionResult:
    with pd.ExcelFile(file_buffer, engine="openpyxl") as xls:
        df = pd.read_excel(xls, sheet_name=sheet_name)
        sheets = list(xls.sheet_names)
    return IngestionResult(df=df, source_name=getattr(file_buffer, "name", "sales.xlsx"), sheet_names=sheets)


def load_csv(file_buffer: BytesIO | Any) -> IngestionResult:
    return IngestionResult(df=pd.read_csv(file_buffer), source_name=getattr(file_buffer, "name", "sales.csv"))


def load_file(file_buffer: BytesIO | Any, filename: str, sheet_name: str | int = 0) -> IngestionResult:
    """Load a sales export, picking the reader from the file extension."""
    ext = filename.rsplit(".", 1)[-1].lower()
    if ext in ("xlsx", "xls"):
        result = load_excel(file_buffer, sheet_name=sheet_name)
    elif ext == "csv":
        result = load_csv(file_buffer)
    else:
        raise ValueError(f"Unsupported file type: .{ext}. Use .xlsx, .xls, or .csv.")
    logger.info(f"Loaded {result.shape[0]} line item(s) from {filename}")
    return result


def _cell(row: pd.Series, col: str | None) -> Any:
    if col is None:
        return None
    value = row[col]
    return None if pd.isna(value) else value


def frame_to_sale_rows(df: pd.DataFrame, mapping: SalesColumnMapping | None = None) -> list[dict]:
    """Group a flat line-item table into repository rows.

    Rows sharing a sale id form one sale; without a sale id column every row
    is its own sale. A blank product id becomes a missing product. When no
    amount column is mapped, the sale total is the sum of quantity x price.
    """
    if mapping is None:
        mapping = auto_detect_sales_columns(df)
    if not mapping.is_complete:
        raise ValueError("Column mapping incomplete: need a date column and an amount or quantity/price columns.")

    sales: dict[str, dict] = {}
    for idx, row in df.iterrows():
        sale_id = _cell(row, mapping.sale_id_col)
        key = str(sale_id) if sale_id is not None else f"row-{idx}"

        sale = sales.get(key)
        if sale is None:
            sale = {
                "id": key,
                "createdAt": _cell(row, mapping.date_col),
                "totalAmount": _cell(row, mapping.amount_col),
                "userId": _cell(row, mapping.user_col),
                "items": [],
            }
            sales[key] = sale

        if mapping.product_id_col is None and mapping.product_name_col is None:
            continue

        product_id = _cell(row, mapping.product_id_col)
        product_name = _cell(row, mapping.product_name_col)
        if product_id is None:
            product_id = product_name
        price = _cell(row, mapping.price_col)
        product = None
        if product_id is not None:
            product = {"id": str(product_id), "name": str(product_name or product_id), "sellingPrice": price}
        sale["items"].append({
            "productId": str(product_id) if product_id is not None else None,
            "quantity": _cell(row, mapping.quantity_col) if mapping.quantity_col else 1,
            "unitPrice": price,
            "product": product,
        })

    if mapping.amount_col is None:
        for sale in sales.values():
            sale["totalAmount"] = sum(
                safe_number(item["quantity"]) * safe_number(item["unitPrice"]) for item in sale["items"]
            )

    return list(sales.values())
