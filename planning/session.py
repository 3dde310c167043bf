"""Planning session: one analyst's ephemeral working state.

A session owns the historical store, the forecast grid, the selection and a
seeded random source. Nothing is persisted; discarding the session discards
the data.

Usage:
    session = PlanningSession(seed=42)
    session.start()
    session.edit_cell("Agriculture", "Mar 2025", "Rebar Tie Wire", "Backlog", "20")
    series = session.project_series()
"""

from __future__ import annotations

import logging
import random
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional, Tuple

from . import aggregation
from .forecast_grid import ForecastGrid
from .historical import HistoricalSalesStore
from .models import ForecastSnapshot, HistoricalSnapshot, TrendLine, UpdatedTotal
from .selection import SelectionState

logger = logging.getLogger(__name__)


class PlanningSession:
    """Single-editor session state and the operations the review UI calls."""

    def __init__(self, seed: Optional[int] = None, session_id: Optional[str] = None):
        self.session_id = session_id or uuid.uuid4().hex
        self.seed = seed
        self.created_at = datetime.utcnow()
        self.last_used_at = self.created_at

        self._rng = random.Random(seed)
        self.historical = HistoricalSalesStore()
        self.forecast = ForecastGrid()
        self.selection = SelectionState()

    def start(self) -> Tuple[HistoricalSnapshot, ForecastSnapshot]:
        """Seed historical sales and an empty forecast grid."""
        historical = self.seed_historical()
        forecast = self.seed_forecast()
        logger.info(f"Session {self.session_id} started (seed={self.seed})")
        return historical, forecast

    def touch(self) -> None:
        self.last_used_at = datetime.utcnow()

    # -------------------------------------------------------------------------
    # Historical
    # -------------------------------------------------------------------------

    def seed_historical(self) -> HistoricalSnapshot:
        """Generate historical sales. Only once per session."""
        self.historical.generate(self._rng)
        return self.historical.snapshot()

    def historical_snapshot(self) -> HistoricalSnapshot:
        return self.historical.snapshot()

    # -------------------------------------------------------------------------
    # Forecast
    # -------------------------------------------------------------------------

    def seed_forecast(self) -> ForecastSnapshot:
        """Clear every forecast cell and zero every total, discarding edits."""
        self.forecast.initialize()
        return self.forecast.snapshot()

    def forecast_snapshot(self) -> ForecastSnapshot:
        return self.forecast.snapshot()

    def edit_cell(
        self,
        product: str,
        period: str,
        group: str,
        metric: str,
        raw_value: Optional[str],
    ) -> UpdatedTotal:
        return self.forecast.set_cell(product, period, group, metric, raw_value)

    def get_cell(self, product: str, period: str, group: str, metric: str) -> Optional[str]:
        return self.forecast.get_cell(product, period, group, metric)

    def get_total(self, product: str, period: str, metric: str) -> Optional[Decimal]:
        return self.forecast.get_total(product, period, metric)

    def load_sample_forecast(self) -> ForecastSnapshot:
        aggregation.load_sample(self.forecast, self._rng)
        return self.forecast.snapshot()

    # -------------------------------------------------------------------------
    # Chart
    # -------------------------------------------------------------------------

    def project_series(self) -> aggregation.Series:
        return aggregation.project_series(self.historical, self.forecast)

    def project_trendlines(self) -> Dict[str, Optional[TrendLine]]:
        return aggregation.project_trendlines(self.project_series())

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def toggle_selection(self, product: str) -> Optional[str]:
        return self.selection.toggle(product)
