"""Aggregation engine: roll-ups, sample loading and chart projection.

- ``slice_total`` / ``rollup_totals``: forecast totals from raw cells
- ``load_sample``: destructive bulk fill of the forecast grid for demos
- ``project_series``: one chronological series per product for the trend chart
- ``project_trendlines`` / ``series_frame``: derived views of that series

All totals are summed at full precision and rounded once at the end.
"""

from __future__ import annotations

import logging
import random
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from .catalog import (
    FORECAST_PERIODS,
    HISTORICAL_PERIODS,
    METRICS,
    PRODUCT_GROUPS,
    PRODUCTS,
    SAMPLE_FORECAST_RANGE,
    forecast_cell_keys,
    forecast_total_keys,
    timeline,
)
from .models import SeriesPoint, TrendLine
from .parsing import (
    QUANTITY_CONTEXT,
    format_tenth,
    quantity_or_zero,
    random_tenths,
    round_tenth,
    sum_rounded,
    to_float,
)

if TYPE_CHECKING:
    from .forecast_grid import ForecastGrid
    from .historical import HistoricalSalesStore

logger = logging.getLogger(__name__)

Series = Dict[str, List[SeriesPoint]]


# =============================================================================
# TOTALS
# =============================================================================

def slice_total(raw_values: Iterable[Optional[str]]) -> Decimal:
    """Total of one (product, period, metric) slice.

    Absent and unparseable cells count as 0.
    """
    return sum_rounded(quantity_or_zero(raw) for raw in raw_values)


def rollup_totals(
    cells: Mapping[Tuple[int, int, int, int], Optional[str]],
) -> Dict[Tuple[int, int, int], Decimal]:
    """Recompute every forecast total from the full cell map."""
    return {
        (p_idx, m_idx, k_idx): slice_total(
            cells.get((p_idx, m_idx, g_idx, k_idx)) for g_idx in range(len(PRODUCT_GROUPS))
        )
        for p_idx, m_idx, k_idx in forecast_total_keys()
    }


# =============================================================================
# SAMPLE LOADER
# =============================================================================

def load_sample(grid: ForecastGrid, rng: random.Random) -> int:
    """Overwrite every forecast cell with a random sample value.

    Hand-entered values are lost. Returns the number of cells written.
    """
    low, high = SAMPLE_FORECAST_RANGE
    cells = {key: format_tenth(random_tenths(rng, low, high)) for key in forecast_cell_keys()}
    grid.replace_cells(cells)
    logger.info(f"Loaded sample forecast into {len(cells)} cells")
    return len(cells)


# =============================================================================
# CHART PROJECTION
# =============================================================================

def _finite_or_none(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None or not value.is_finite():
        return None
    return value


def forecast_point_value(grid: ForecastGrid, product: str, period: str) -> Optional[Decimal]:
    """Sum of all metric totals for one product and forecast month.

    Backlog, Forecast, Absolute and Final Forecast are added together into a
    single trend value; the chart shows that combined figure.
    """
    totals = [grid.get_total(product, period, metric) for metric in METRICS]
    if any(total is None for total in totals):
        return None
    combined = totals[0]
    for total in totals[1:]:
        combined = QUANTITY_CONTEXT.add(combined, total)
    return _finite_or_none(round_tenth(combined))


def project_series(historical: HistoricalSalesStore, grid: ForecastGrid) -> Series:
    """Historical monthly totals followed by combined forecast totals, per product.

    Recomputed on every call. A point is ``None`` only when its total is not
    a finite number (or the store was never seeded); zero is reported as zero.
    """
    series: Series = {}
    for product in PRODUCTS:
        points = [
            SeriesPoint(period, _finite_or_none(historical.get_total(product, period)))
            for period in HISTORICAL_PERIODS
        ]
        points.extend(
            SeriesPoint(period, forecast_point_value(grid, product, period), is_forecast=True)
            for period in FORECAST_PERIODS
        )
        series[product] = points
    return series


def project_trendlines(series: Series) -> Dict[str, Optional[TrendLine]]:
    """Linear least-squares trend per product over its timeline positions.

    Points without a value are skipped. Products with fewer than two valued
    points get ``None``.
    """
    trends: Dict[str, Optional[TrendLine]] = {}
    for product, points in series.items():
        x = [idx for idx, point in enumerate(points) if point.value is not None]
        if len(x) < 2:
            trends[product] = None
            continue
        y = [float(points[idx].value) for idx in x]
        slope, intercept = np.polyfit(np.asarray(x, dtype=float), np.asarray(y, dtype=float), 1)
        fitted = [float(slope * idx + intercept) for idx in range(len(points))]
        trends[product] = TrendLine(
            product=product,
            slope=float(slope),
            intercept=float(intercept),
            fitted=fitted,
        )
    return trends


def series_frame(series: Series) -> pd.DataFrame:
    """Projection as a table: one row per period, one column per product."""
    index = pd.Index(list(timeline()), name="period")
    columns = {
        product: pd.Series(
            [to_float(point.value) for point in points],
            index=[point.period for point in points],
            dtype="float64",
        )
        for product, points in series.items()
    }
    return pd.DataFrame(columns, index=index)
