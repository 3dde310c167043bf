"""Pydantic models for the Demand Review API.

Field names are camelCase to match the review UI. Quantities go out as
floats with one decimal; missing or non-finite totals go out as null. Raw
forecast cells go out exactly as typed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, validator

from planning import catalog
from planning.models import ForecastSnapshot, HistoricalSnapshot, SeriesPoint, TrendLine, UpdatedTotal
from planning.parsing import format_tenth, to_float


# =============================================================================
# INPUT VALIDATION
# =============================================================================

# Request-size guard only; any text up to this length is stored as typed
MAX_RAW_VALUE_LENGTH = 1024


def _check_member(value: str, allowed, kind: str) -> str:
    if value not in allowed:
        raise ValueError(f'Unknown {kind}')
    return value


# =============================================================================
# REQUEST MODELS
# =============================================================================

class SessionCreateRequest(BaseModel):
    """Request to start a planning session."""
    seed: Optional[int] = Field(default=None, ge=0, description="Seed for reproducible sample data")


class CellRef(BaseModel):
    """Address of one forecast cell."""
    product: str
    period: str = Field(..., description="Forecast month, e.g. 'Mar 2025'")
    group: str
    metric: str

    @validator('product')
    def validate_product(cls, v):
        return _check_member(v, catalog.PRODUCTS, 'product')

    @validator('period')
    def validate_period(cls, v):
        return _check_member(v, catalog.FORECAST_PERIODS, 'forecast period')

    @validator('group')
    def validate_group(cls, v):
        return _check_member(v, catalog.PRODUCT_GROUPS, 'product group')

    @validator('metric')
    def validate_metric(cls, v):
        return _check_member(v, catalog.METRICS, 'metric')


class CellEditRequest(CellRef):
    """Raw keystroke state for one cell. null clears the cell."""
    value: Optional[str] = Field(default=None, max_length=MAX_RAW_VALUE_LENGTH)


class SelectionToggleRequest(BaseModel):
    product: str

    @validator('product')
    def validate_product(cls, v):
        return _check_member(v, catalog.PRODUCTS, 'product')


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response format."""
    error: str
    code: str
    details: Optional[Dict[str, Any]] = None


class UpdatedTotalResponse(BaseModel):
    """Slice total after a cell edit."""
    product: str
    period: str
    metric: str
    value: Optional[float] = None
    display: str  # one-decimal text, e.g. "25.0"

    @classmethod
    def from_total(cls, total: UpdatedTotal) -> "UpdatedTotalResponse":
        return cls(
            product=total.product,
            period=total.period,
            metric=total.metric,
            value=to_float(total.value),
            display=format_tenth(total.value),
        )


class HistoricalSnapshotResponse(BaseModel):
    """Monthly product totals and per-group detail, in tons."""
    totals: Dict[str, Dict[str, Optional[float]]]
    groups: Dict[str, Dict[str, Dict[str, Optional[float]]]]

    @classmethod
    def from_snapshot(cls, snap: HistoricalSnapshot) -> "HistoricalSnapshotResponse":
        return cls(
            totals={
                product: {period: to_float(value) for period, value in periods.items()}
                for product, periods in snap.totals.items()
            },
            groups={
                product: {
                    period: {group: to_float(value) for group, value in groups.items()}
                    for period, groups in periods.items()
                }
                for product, periods in snap.groups.items()
            },
        )


class ForecastSnapshotResponse(BaseModel):
    """Raw cells (null = not entered) and rolled-up totals."""
    cells: Dict[str, Dict[str, Dict[str, Dict[str, Optional[str]]]]]
    totals: Dict[str, Dict[str, Dict[str, Optional[float]]]]

    @classmethod
    def from_snapshot(cls, snap: ForecastSnapshot) -> "ForecastSnapshotResponse":
        return cls(
            cells=snap.cells,
            totals={
                product: {
                    period: {metric: to_float(value) for metric, value in metrics.items()}
                    for period, metrics in periods.items()
                }
                for product, periods in snap.totals.items()
            },
        )


class SessionResponse(BaseModel):
    """Newly started session with both seeded snapshots."""
    sessionId: str
    seed: Optional[int] = None
    createdAt: datetime
    historical: HistoricalSnapshotResponse
    forecast: ForecastSnapshotResponse
    expandedProduct: Optional[str] = None


class CellLookupResponse(BaseModel):
    """One cell plus the slice it rolls up into."""
    product: str
    period: str
    group: str
    metric: str
    value: Optional[str] = None
    total: Optional[float] = None
    sliceCells: Dict[str, Optional[str]]


class SeriesPointModel(BaseModel):
    period: str
    value: Optional[float] = None
    isForecast: bool = False

    @classmethod
    def from_point(cls, point: SeriesPoint) -> "SeriesPointModel":
        return cls(period=point.period, value=to_float(point.value), isForecast=point.is_forecast)


class TrendLineModel(BaseModel):
    slope: float
    intercept: float
    fitted: List[float]

    @classmethod
    def from_trend(cls, trend: Optional[TrendLine]) -> Optional["TrendLineModel"]:
        if trend is None:
            return None
        return cls(slope=trend.slope, intercept=trend.intercept, fitted=trend.fitted)


class ProductSeriesModel(BaseModel):
    product: str
    color: str
    points: List[SeriesPointModel]
    trendline: Optional[TrendLineModel] = None


class SeriesResponse(BaseModel):
    """Chart data: shared period labels and one series per product."""
    labels: List[str]
    series: List[ProductSeriesModel]


class SelectionResponse(BaseModel):
    expandedProduct: Optional[str] = None
