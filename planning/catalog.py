"""Static reference lists for the demand review.

Display order everywhere follows the order of these tuples. Stores key their
data by the index of each entry, so lookups go through the ``*_index`` helpers
which reject anything outside the catalog.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .errors import UnknownKeyError


# =============================================================================
# CATALOG
# =============================================================================

PRODUCTS: Tuple[str, ...] = ("Agriculture", "Mesh", "Nails", "Stucco", "Wire")

PRODUCT_GROUPS: Tuple[str, ...] = (
    "Rebar Tie Wire",
    "Bright Annealed Wire",
    "Galvanized Wire",
    "Bar Ties",
    "Mesh Panels",
)

# Chronological; historical months all precede forecast months
HISTORICAL_PERIODS: Tuple[str, ...] = ("Nov 2024", "Dec 2024", "Jan 2025", "Feb 2025")
FORECAST_PERIODS: Tuple[str, ...] = ("Mar 2025", "Apr 2025", "May 2025", "Jun 2025")

METRICS: Tuple[str, ...] = ("Backlog", "Forecast", "Absolute", "Final Forecast")

# Chart line colours, cycled by product index
SERIES_COLORS: Tuple[str, ...] = ("#EF4444", "#10B981", "#F59E0B", "#6366F1", "#14B8A6")

UNIT = "tons"

# Random ranges for seeding: [low, high)
HISTORICAL_SALES_RANGE = (10.0, 110.0)
SAMPLE_FORECAST_RANGE = (5.0, 55.0)


def _build_index(values: Sequence[str]) -> Dict[str, int]:
    return {value: idx for idx, value in enumerate(values)}


_PRODUCT_INDEX = _build_index(PRODUCTS)
_GROUP_INDEX = _build_index(PRODUCT_GROUPS)
_HISTORICAL_INDEX = _build_index(HISTORICAL_PERIODS)
_FORECAST_INDEX = _build_index(FORECAST_PERIODS)
_METRIC_INDEX = _build_index(METRICS)


def _lookup(index: Dict[str, int], kind: str, value: str) -> int:
    try:
        return index[value]
    except (KeyError, TypeError):
        raise UnknownKeyError(kind, value) from None


def product_index(product: str) -> int:
    return _lookup(_PRODUCT_INDEX, "product", product)


def group_index(group: str) -> int:
    return _lookup(_GROUP_INDEX, "product group", group)


def historical_period_index(period: str) -> int:
    return _lookup(_HISTORICAL_INDEX, "historical period", period)


def forecast_period_index(period: str) -> int:
    return _lookup(_FORECAST_INDEX, "forecast period", period)


def metric_index(metric: str) -> int:
    return _lookup(_METRIC_INDEX, "metric", metric)


def timeline() -> Tuple[str, ...]:
    """All period labels in chronological order, historical first."""
    return HISTORICAL_PERIODS + FORECAST_PERIODS


def series_color(product: str) -> str:
    return SERIES_COLORS[product_index(product) % len(SERIES_COLORS)]


def as_dict() -> Dict[str, object]:
    """Catalog as plain lists for the reference endpoint."""
    return {
        "products": list(PRODUCTS),
        "productGroups": list(PRODUCT_GROUPS),
        "historicalPeriods": list(HISTORICAL_PERIODS),
        "forecastPeriods": list(FORECAST_PERIODS),
        "metrics": list(METRICS),
        "seriesColors": {product: series_color(product) for product in PRODUCTS},
        "unit": UNIT,
    }


def forecast_cell_keys() -> List[Tuple[int, int, int, int]]:
    """Index keys (product, period, group, metric) of every forecast cell, in catalog order."""
    return [
        (p_idx, m_idx, g_idx, k_idx)
        for p_idx in range(len(PRODUCTS))
        for m_idx in range(len(FORECAST_PERIODS))
        for g_idx in range(len(PRODUCT_GROUPS))
        for k_idx in range(len(METRICS))
    ]


def forecast_total_keys() -> List[Tuple[int, int, int]]:
    """Index keys (product, period, metric) of every forecast total."""
    return [
        (p_idx, m_idx, k_idx)
        for p_idx in range(len(PRODUCTS))
        for m_idx in range(len(FORECAST_PERIODS))
        for k_idx in range(len(METRICS))
    ]
