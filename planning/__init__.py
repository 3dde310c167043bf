"""Demand review planning core.

Hierarchical forecast data model and aggregation engine:
- Catalog of products, groups, periods and metrics
- Historical sales store (read-only actuals)
- Forecast grid (editable cells with rolled-up totals)
- Aggregation engine (recompute, sample load, chart projection)
- Selection state for the expanded product row
"""

from .errors import PlanningError, UnknownKeyError, HistoricalDataLockedError
from .session import PlanningSession

__all__ = [
    'PlanningError',
    'UnknownKeyError',
    'HistoricalDataLockedError',
    'PlanningSession',
]
