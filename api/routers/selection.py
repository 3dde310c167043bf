"""Selection router - which product row is expanded."""

from fastapi import APIRouter, Depends, Request

from planning import PlanningSession

from ..dependencies import get_session
from ..middleware.rate_limit import rate_limit_edit, rate_limit_read
from ..models import ErrorResponse, SelectionResponse, SelectionToggleRequest

router = APIRouter()


@router.get(
    "/sessions/{session_id}/selection",
    response_model=SelectionResponse,
    responses={404: {"model": ErrorResponse}},
)
@rate_limit_read
async def get_selection(
    request: Request,
    session: PlanningSession = Depends(get_session),
) -> SelectionResponse:
    return SelectionResponse(expandedProduct=session.selection.expanded)


@router.post(
    "/sessions/{session_id}/selection/toggle",
    response_model=SelectionResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
@rate_limit_edit
async def toggle_selection(
    request: Request,
    body: SelectionToggleRequest,
    session: PlanningSession = Depends(get_session),
) -> SelectionResponse:
    """Expand the product, or collapse it if it is already expanded."""
    return SelectionResponse(expandedProduct=session.toggle_selection(body.product))
