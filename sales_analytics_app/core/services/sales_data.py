"""Repository access shared by the analytics operations."""

from __future__ import annotations

import logging
from datetime import datetime

from ..data.models import SaleRecord
from ..data.repository import SalesFilter, SalesRepository, load_sale_records
from ..errors import ConnectivityFailure

logger = logging.getLogger(__name__)


def ensure_reachable(repository: SalesRepository) -> None:
    """Probe the repository, translating any failure into ConnectivityFailure."""
    try:
        repository.ping()
    except Exception as exc:
        logger.error(f"Sales repository {repository.name!r} is unreachable: {exc}")
        raise ConnectivityFailure(
            f"Unable to connect to the sales repository. {exc}", original_error=exc
        ) from exc


def lookup_bounds(repository: SalesRepository, user_id: str | None = None) -> tuple[datetime, datetime] | None:
    """Oldest and newest sale timestamps; None when unknown or the lookup fails."""
    try:
        return repository.sale_bounds(user_id)
    except Exception as exc:
        logger.warning(f"Sale bounds lookup failed, using the default window: {exc}")
        return None


def fetch_records(
    repository: SalesRepository,
    start: datetime,
    end: datetime,
    user_id: str | None = None,
) -> list[SaleRecord]:
    rows = repository.fetch_sales(SalesFilter(start_date=start, end_date=end, user_id=user_id))
    records = load_sale_records(rows)
    logger.debug(f"Fetched {len(records)} sale(s) from {start:%Y-%m-%d %H:%M} to {end:%Y-%m-%d %H:%M}")
    return records
