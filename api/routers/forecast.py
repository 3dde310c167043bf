"""Forecast router - the editable forecast grid.

Endpoints:
    GET  /api/sessions/{session_id}/forecast - Cells and totals
    POST /api/sessions/{session_id}/forecast/reset - Clear all cells, zero totals
    PUT  /api/sessions/{session_id}/forecast/cell - Edit one cell
    POST /api/sessions/{session_id}/forecast/cell/lookup - Read one cell and its slice
    POST /api/sessions/{session_id}/forecast/sample - Fill every cell with sample data
"""

import logging

from fastapi import APIRouter, Depends, Request

from planning import PlanningSession
from planning.parsing import to_float

from ..dependencies import get_session
from ..middleware.rate_limit import rate_limit_edit, rate_limit_read, rate_limit_write
from ..models import (
    CellEditRequest,
    CellLookupResponse,
    CellRef,
    ErrorResponse,
    ForecastSnapshotResponse,
    UpdatedTotalResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/sessions/{session_id}/forecast",
    response_model=ForecastSnapshotResponse,
    responses={404: {"model": ErrorResponse}},
)
@rate_limit_read
async def get_forecast(
    request: Request,
    session: PlanningSession = Depends(get_session),
) -> ForecastSnapshotResponse:
    return ForecastSnapshotResponse.from_snapshot(session.forecast_snapshot())


@router.post(
    "/sessions/{session_id}/forecast/reset",
    response_model=ForecastSnapshotResponse,
    responses={404: {"model": ErrorResponse}},
)
@rate_limit_write
async def reset_forecast(
    request: Request,
    session: PlanningSession = Depends(get_session),
) -> ForecastSnapshotResponse:
    """Discard every edit: all cells empty, all totals zero."""
    snapshot = session.seed_forecast()
    logger.info(f"Session {session.session_id}: forecast reset")
    return ForecastSnapshotResponse.from_snapshot(snapshot)


@router.put(
    "/sessions/{session_id}/forecast/cell",
    response_model=UpdatedTotalResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
@rate_limit_edit
async def edit_cell(
    request: Request,
    body: CellEditRequest,
    session: PlanningSession = Depends(get_session),
) -> UpdatedTotalResponse:
    """Store the raw value as typed and return the recomputed slice total.

    Text that is not a number is kept for display but counts as 0.
    """
    updated = session.edit_cell(body.product, body.period, body.group, body.metric, body.value)
    return UpdatedTotalResponse.from_total(updated)


@router.post(
    "/sessions/{session_id}/forecast/cell/lookup",
    response_model=CellLookupResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
@rate_limit_read
async def lookup_cell(
    request: Request,
    body: CellRef,
    session: PlanningSession = Depends(get_session),
) -> CellLookupResponse:
    """Raw cell value (null when never entered) and its slice total."""
    return CellLookupResponse(
        product=body.product,
        period=body.period,
        group=body.group,
        metric=body.metric,
        value=session.get_cell(body.product, body.period, body.group, body.metric),
        total=to_float(session.get_total(body.product, body.period, body.metric)),
        sliceCells=session.forecast.slice_cells(body.product, body.period, body.metric),
    )


@router.post(
    "/sessions/{session_id}/forecast/sample",
    response_model=ForecastSnapshotResponse,
    responses={404: {"model": ErrorResponse}},
)
@rate_limit_write
async def load_sample_forecast(
    request: Request,
    session: PlanningSession = Depends(get_session),
) -> ForecastSnapshotResponse:
    """Overwrite every cell, including hand-entered ones, with sample values."""
    snapshot = session.load_sample_forecast()
    logger.info(f"Session {session.session_id}: sample forecast loaded")
    return ForecastSnapshotResponse.from_snapshot(snapshot)
