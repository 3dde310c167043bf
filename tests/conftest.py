"""Shared fixtures for planning core and API tests."""

import os
import random
from decimal import Decimal

import pytest

# Must be set before api.config is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from planning import PlanningSession
from planning.catalog import HISTORICAL_PERIODS
from planning.forecast_grid import ForecastGrid


class FakeHistorical:
    """Stands in for HistoricalSalesStore with fixed monthly totals."""

    def __init__(self, totals_by_product):
        self._totals = totals_by_product

    def get_total(self, product, period):
        values = self._totals.get(product)
        if values is None:
            return None
        return values[HISTORICAL_PERIODS.index(period)]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def grid():
    grid = ForecastGrid()
    grid.initialize()
    return grid


@pytest.fixture
def session():
    session = PlanningSession(seed=42)
    session.start()
    return session


@pytest.fixture
def fake_historical():
    def _make(totals_by_product):
        return FakeHistorical({
            product: [Decimal(str(v)) if v is not None else None for v in values]
            for product, values in totals_by_product.items()
        })
    return _make


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from api.dependencies import get_registry
    from api.main import app

    with TestClient(app) as test_client:
        yield test_client
    get_registry().clear()
