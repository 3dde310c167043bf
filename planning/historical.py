"""Historical sales store.

Actual shipments per (product, group, historical month), generated once per
session and read-only afterwards. Monthly product totals are derived from the
group values at generation time and never stored independently.
"""

from __future__ import annotations

import logging
import random
from decimal import Decimal
from typing import Dict, Optional, Tuple

from .catalog import (
    HISTORICAL_PERIODS,
    HISTORICAL_SALES_RANGE,
    PRODUCT_GROUPS,
    PRODUCTS,
    group_index,
    historical_period_index,
    product_index,
)
from .errors import HistoricalDataLockedError
from .models import HistoricalSnapshot
from .parsing import random_tenths, sum_rounded

logger = logging.getLogger(__name__)


class HistoricalSalesStore:
    """Write-once store of historical sales in tons."""

    def __init__(self):
        # (product_idx, period_idx, group_idx) -> tons
        self._records: Dict[Tuple[int, int, int], Decimal] = {}
        # (product_idx, period_idx) -> rounded group sum
        self._totals: Dict[Tuple[int, int], Decimal] = {}
        self._generated = False

    @property
    def is_generated(self) -> bool:
        return self._generated

    def generate(self, rng: random.Random) -> None:
        """Populate every record and monthly total.

        Raises:
            HistoricalDataLockedError if this store was already generated.
        """
        if self._generated:
            raise HistoricalDataLockedError("Historical sales are already generated")

        low, high = HISTORICAL_SALES_RANGE
        records: Dict[Tuple[int, int, int], Decimal] = {}
        totals: Dict[Tuple[int, int], Decimal] = {}

        for p_idx in range(len(PRODUCTS)):
            for m_idx in range(len(HISTORICAL_PERIODS)):
                values = []
                for g_idx in range(len(PRODUCT_GROUPS)):
                    value = random_tenths(rng, low, high)
                    records[(p_idx, m_idx, g_idx)] = value
                    values.append(value)
                totals[(p_idx, m_idx)] = sum_rounded(values)

        self._records = records
        self._totals = totals
        self._generated = True
        logger.info(f"Generated {len(records)} historical records")

    def get_record(self, product: str, group: str, period: str) -> Optional[Decimal]:
        key = (product_index(product), historical_period_index(period), group_index(group))
        return self._records.get(key)

    def get_total(self, product: str, period: str) -> Optional[Decimal]:
        return self._totals.get((product_index(product), historical_period_index(period)))

    def group_breakdown(self, product: str, period: str) -> Dict[str, Optional[Decimal]]:
        p_idx = product_index(product)
        m_idx = historical_period_index(period)
        return {
            group: self._records.get((p_idx, m_idx, g_idx))
            for g_idx, group in enumerate(PRODUCT_GROUPS)
        }

    def snapshot(self) -> HistoricalSnapshot:
        snap = HistoricalSnapshot()
        for product in PRODUCTS:
            snap.totals[product] = {}
            snap.groups[product] = {}
            for period in HISTORICAL_PERIODS:
                snap.totals[product][period] = self.get_total(product, period)
                snap.groups[product][period] = self.group_breakdown(product, period)
        return snap
