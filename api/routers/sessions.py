"""Session router - start, inspect and discard planning sessions.

Endpoints:
    POST   /api/sessions - Start a session (seeds historical + empty forecast)
    DELETE /api/sessions/{session_id} - Discard a session
    GET    /api/sessions/{session_id}/historical - Historical sales snapshot
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from planning import PlanningSession

from ..dependencies import get_registry, get_session
from ..middleware.rate_limit import rate_limit_read, rate_limit_write
from ..models import (
    ErrorResponse,
    ForecastSnapshotResponse,
    HistoricalSnapshotResponse,
    SessionCreateRequest,
    SessionResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/sessions", response_model=SessionResponse, status_code=201)
@rate_limit_write
async def create_session(
    request: Request,  # Required for slowapi rate limiting
    body: Optional[SessionCreateRequest] = None,
) -> SessionResponse:
    """Start a session.

    Historical sales are generated once here and stay fixed for the life of
    the session. The forecast grid starts with every cell empty.
    """
    seed = body.seed if body is not None else None
    session = get_registry().create(seed=seed)
    logger.info(f"Created session {session.session_id}")

    return SessionResponse(
        sessionId=session.session_id,
        seed=session.seed,
        createdAt=session.created_at,
        historical=HistoricalSnapshotResponse.from_snapshot(session.historical_snapshot()),
        forecast=ForecastSnapshotResponse.from_snapshot(session.forecast_snapshot()),
        expandedProduct=session.selection.expanded,
    )


@router.delete(
    "/sessions/{session_id}",
    responses={404: {"model": ErrorResponse}},
)
@rate_limit_write
async def delete_session(
    request: Request,
    session: PlanningSession = Depends(get_session),
) -> dict:
    """Discard a session and all of its data."""
    get_registry().discard(session.session_id)
    logger.info(f"Discarded session {session.session_id}")
    return {"message": f"Session {session.session_id} discarded"}


@router.get(
    "/sessions/{session_id}/historical",
    response_model=HistoricalSnapshotResponse,
    responses={404: {"model": ErrorResponse}},
)
@rate_limit_read
async def get_historical(
    request: Request,
    session: PlanningSession = Depends(get_session),
) -> HistoricalSnapshotResponse:
    """Historical monthly totals per product with per-group detail."""
    return HistoricalSnapshotResponse.from_snapshot(session.historical_snapshot())
