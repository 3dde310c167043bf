"""Chart router - per-product trend series.

Endpoints:
    GET /api/sessions/{session_id}/chart/series - Series, colours and trend lines
    GET /api/sessions/{session_id}/chart/series.csv - Series as CSV
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from planning import PlanningSession, catalog
from planning.aggregation import project_trendlines, series_frame

from ..dependencies import get_session
from ..middleware.rate_limit import rate_limit_read
from ..models import (
    ErrorResponse,
    ProductSeriesModel,
    SeriesPointModel,
    SeriesResponse,
    TrendLineModel,
)

router = APIRouter()


@router.get(
    "/sessions/{session_id}/chart/series",
    response_model=SeriesResponse,
    responses={404: {"model": ErrorResponse}},
)
@rate_limit_read
async def get_series(
    request: Request,
    session: PlanningSession = Depends(get_session),
) -> SeriesResponse:
    """Historical totals then forecast totals, one series per product.

    Forecast points add all four metrics together. A null value means the
    total is not a finite number.
    """
    series = session.project_series()
    trends = project_trendlines(series)

    return SeriesResponse(
        labels=list(catalog.timeline()),
        series=[
            ProductSeriesModel(
                product=product,
                color=catalog.series_color(product),
                points=[SeriesPointModel.from_point(point) for point in points],
                trendline=TrendLineModel.from_trend(trends.get(product)),
            )
            for product, points in series.items()
        ],
    )


@router.get(
    "/sessions/{session_id}/chart/series.csv",
    responses={404: {"model": ErrorResponse}},
)
@rate_limit_read
async def get_series_csv(
    request: Request,
    session: PlanningSession = Depends(get_session),
) -> Response:
    """Series as CSV: one row per period, one column per product."""
    frame = series_frame(session.project_series())
    return Response(
        content=frame.to_csv(float_format="%.1f"),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="series_{session.session_id}.csv"'},
    )
