"""Pytest fixtures shared by the analytics tests."""

import numpy as np
import pytest

from sales_analytics_app.core.data.repository import InMemorySalesRepository
from sales_analytics_app.core.services.engine import AnalyticsEngine
from tests.factories import NOW


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def rng():
    return np.random.default_rng(7)


@pytest.fixture
def make_engine():
    """Engine over the given rows (or repository) with a pinned clock and seed."""

    def _make(rows=None, repository=None, seed=7, config=None):
        if repository is None:
            repository = InMemorySalesRepository(rows or [])
        return AnalyticsEngine(
            repository,
            config=config,
            rng=np.random.default_rng(seed),
            clock=lambda: NOW,
        )

    return _make
