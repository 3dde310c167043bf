"""Forecast grid: editable cells and their rolled-up totals.

Cells are keyed by (product, forecast period, group, metric) and hold the raw
text the analyst typed, or ``None`` when nothing was entered. Totals are keyed
by (product, forecast period, metric) and are recomputed from the cells of
their slice on every write.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from .aggregation import rollup_totals, slice_total
from .catalog import (
    FORECAST_PERIODS,
    METRICS,
    PRODUCT_GROUPS,
    PRODUCTS,
    forecast_cell_keys,
    forecast_period_index,
    forecast_total_keys,
    group_index,
    metric_index,
    product_index,
)
from .models import ForecastSnapshot, UpdatedTotal
from .parsing import ZERO

logger = logging.getLogger(__name__)

CellKey = Tuple[int, int, int, int]   # (product, period, group, metric)
TotalKey = Tuple[int, int, int]       # (product, period, metric)


class ForecastGrid:
    """Mutable forecast cells with per-slice totals."""

    def __init__(self):
        self._cells: Dict[CellKey, Optional[str]] = {}
        self._totals: Dict[TotalKey, Decimal] = {}

    def initialize(self) -> None:
        """Reset every cell to absent and every total to zero."""
        self._cells = {key: None for key in forecast_cell_keys()}
        self._totals = {key: ZERO for key in forecast_total_keys()}

    def set_cell(
        self,
        product: str,
        period: str,
        group: str,
        metric: str,
        raw_value: Optional[str],
    ) -> UpdatedTotal:
        """Store the raw text verbatim and recompute its slice total.

        Partial input such as ``"1."`` or ``"-"`` is kept as typed; it only
        counts as its numeric prefix (or 0) in the total.
        """
        p_idx = product_index(product)
        m_idx = forecast_period_index(period)
        g_idx = group_index(group)
        k_idx = metric_index(metric)

        # Total first, so a failure leaves both the cell and its total untouched
        values = self._slice_values(p_idx, m_idx, k_idx)
        values[g_idx] = raw_value
        total = slice_total(values)

        self._cells[(p_idx, m_idx, g_idx, k_idx)] = raw_value
        self._totals[(p_idx, m_idx, k_idx)] = total

        return UpdatedTotal(product=product, period=period, metric=metric, value=total)

    def get_cell(self, product: str, period: str, group: str, metric: str) -> Optional[str]:
        key = (
            product_index(product),
            forecast_period_index(period),
            group_index(group),
            metric_index(metric),
        )
        return self._cells.get(key)

    def get_total(self, product: str, period: str, metric: str) -> Optional[Decimal]:
        key = (product_index(product), forecast_period_index(period), metric_index(metric))
        return self._totals.get(key)

    def slice_cells(self, product: str, period: str, metric: str) -> Dict[str, Optional[str]]:
        """Raw cells of every group for one (product, period, metric)."""
        p_idx = product_index(product)
        m_idx = forecast_period_index(period)
        k_idx = metric_index(metric)
        return dict(zip(PRODUCT_GROUPS, self._slice_values(p_idx, m_idx, k_idx)))

    def replace_cells(self, cells: Dict[CellKey, Optional[str]]) -> None:
        """Overwrite cells in bulk and recompute every total in one pass."""
        self._cells.update(cells)
        self._totals = rollup_totals(self._cells)
        logger.debug(f"Replaced {len(cells)} cells, recomputed {len(self._totals)} totals")

    def snapshot(self) -> ForecastSnapshot:
        snap = ForecastSnapshot()
        for p_idx, product in enumerate(PRODUCTS):
            snap.cells[product] = {}
            snap.totals[product] = {}
            for m_idx, period in enumerate(FORECAST_PERIODS):
                snap.cells[product][period] = {
                    group: {
                        metric: self._cells.get((p_idx, m_idx, g_idx, k_idx))
                        for k_idx, metric in enumerate(METRICS)
                    }
                    for g_idx, group in enumerate(PRODUCT_GROUPS)
                }
                snap.totals[product][period] = {
                    metric: self._totals.get((p_idx, m_idx, k_idx))
                    for k_idx, metric in enumerate(METRICS)
                }
        return snap

    def _slice_values(self, p_idx: int, m_idx: int, k_idx: int) -> List[Optional[str]]:
        return [
            self._cells.get((p_idx, m_idx, g_idx, k_idx))
            for g_idx in range(len(PRODUCT_GROUPS))
        ]
