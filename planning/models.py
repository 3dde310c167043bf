"""Core dataclasses returned by the planning stores and the aggregation engine.

Snapshots are nested dicts in catalog order (product -> period -> ...), the
shape the review table reads row by row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional


# Common aliases
ProductName = str
PeriodLabel = str
GroupName = str
MetricName = str


@dataclass(frozen=True)
class UpdatedTotal:
    """Total for one (product, forecast period, metric) slice after an edit."""

    product: ProductName
    period: PeriodLabel
    metric: MetricName
    value: Decimal


@dataclass
class HistoricalSnapshot:
    """Per-product monthly totals plus the per-group detail behind them."""

    totals: Dict[ProductName, Dict[PeriodLabel, Optional[Decimal]]] = field(default_factory=dict)
    groups: Dict[ProductName, Dict[PeriodLabel, Dict[GroupName, Optional[Decimal]]]] = field(
        default_factory=dict
    )


@dataclass
class ForecastSnapshot:
    """Raw cell strings (``None`` = not entered) and the rolled-up totals."""

    cells: Dict[ProductName, Dict[PeriodLabel, Dict[GroupName, Dict[MetricName, Optional[str]]]]] = field(
        default_factory=dict
    )
    totals: Dict[ProductName, Dict[PeriodLabel, Dict[MetricName, Optional[Decimal]]]] = field(
        default_factory=dict
    )


@dataclass(frozen=True)
class SeriesPoint:
    period: PeriodLabel
    value: Optional[Decimal]  # None = no value (non-finite or not seeded)
    is_forecast: bool = False


@dataclass
class TrendLine:
    """Least-squares line over a product's timeline positions (0, 1, 2, ...)."""

    product: ProductName
    slope: float
    intercept: float
    fitted: List[float] = field(default_factory=list)
