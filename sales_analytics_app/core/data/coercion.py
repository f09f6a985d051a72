"""Safe coercion of repository values at the ingestion boundary.

Amounts may arrive as ``Decimal``, arbitrarily large ``int``, numeric
strings or numpy scalars. None of these helpers raise; malformed input
becomes a default instead.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import pandas as pd

from ..periods.period_key import as_naive_datetime


def safe_number(value: Any, default: float = 0.0) -> float:
    """Convert a monetary or numeric value to float, or return ``default``."""
    if value is None:
        return default

    try:
        if isinstance(value, Decimal):
            number = float(value) if value.is_finite() else default
        elif isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, (str, bytes)):
            text = value.decode() if isinstance(value, bytes) else value
            number = float(Decimal(text.strip().replace(",", "")))
        else:
            number = float(value)
    except (TypeError, ValueError, OverflowError, InvalidOperation, UnicodeDecodeError):
        return default

    if not math.isfinite(number):
        return default
    return number


def safe_quantity(value: Any) -> int | None:
    """Positive whole quantity, or None when the value is unusable."""
    number = safe_number(value, default=0.0)
    if number <= 0 or not number.is_integer():
        return None
    return int(number)


def safe_timestamp(value: Any) -> datetime | None:
    """Parse a timestamp into a naive UTC datetime, or None.

    Numbers are read as epoch milliseconds.
    """
    if value is None or value is pd.NaT or isinstance(value, bool):
        return None
    if isinstance(value, (datetime, date)):
        return as_naive_datetime(value)

    try:
        if isinstance(value, (int, float)):
            parsed = pd.to_datetime(value, unit="ms", errors="coerce")
        else:
            parsed = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None

    if not isinstance(parsed, pd.Timestamp) or pd.isna(parsed):
        return None
    return as_naive_datetime(parsed.to_pydatetime())
