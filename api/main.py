"""Demand Review API - Main Application.

FastAPI application exposing the planning core to the review page:
sessions, historical snapshot, forecast grid edits, sample data and chart
series.

Usage:
    uvicorn api.main:app --host 127.0.0.1 --port 8000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from planning import HistoricalDataLockedError, PlanningError, UnknownKeyError

from .config import ALLOWED_ORIGINS, API_TITLE, API_VERSION, DEBUG_MODE
from .dependencies import get_registry
from .middleware.rate_limit import setup_rate_limiting
from .routers import chart, forecast, health, reference, selection, sessions

# Logging setup
logging.basicConfig(
    level=logging.DEBUG if DEBUG_MODE else logging.INFO,
    format='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
)
logger = logging.getLogger("api.main")


# =============================================================================
# LIFESPAN (Startup/Shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown hooks."""
    logger.info(f"Starting Demand Review API v{API_VERSION}")
    logger.info(f"Debug mode: {DEBUG_MODE}")

    get_registry()

    yield

    # Sessions are ephemeral; nothing to flush
    registry = get_registry()
    logger.info(f"Shutting down Demand Review API, discarding {len(registry)} session(s)")
    registry.clear()


# =============================================================================
# APPLICATION
# =============================================================================

if DEBUG_MODE:
    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        lifespan=lifespan,
    )
else:
    # Production: disable docs endpoints
    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )


# =============================================================================
# MIDDLEWARE
# =============================================================================

setup_rate_limiting(app)

# CORS - strict origins only
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
    max_age=3600,
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Add security headers to all responses."""
    response = await call_next(request)

    if "server" in response.headers:
        del response.headers["server"]

    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests for debugging."""
    start_time = datetime.utcnow()

    response = await call_next(request)

    duration_ms = (datetime.utcnow() - start_time).total_seconds() * 1000
    logger.debug(
        f"{request.method} {request.url.path} "
        f"-> {response.status_code} ({duration_ms:.0f}ms)"
    )

    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(UnknownKeyError)
async def unknown_key_handler(request: Request, exc: UnknownKeyError):
    """Catalog key outside the fixed lists."""
    logger.warning(f"Unknown key on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=404,
        content={
            "error": str(exc),
            "code": "UNKNOWN_KEY",
            "details": {"kind": exc.kind, "value": str(exc.value)},
        }
    )


@app.exception_handler(HistoricalDataLockedError)
async def historical_locked_handler(request: Request, exc: HistoricalDataLockedError):
    return JSONResponse(
        status_code=409,
        content={"error": str(exc), "code": "HISTORICAL_LOCKED"}
    )


@app.exception_handler(PlanningError)
async def planning_error_handler(request: Request, exc: PlanningError):
    logger.error(f"Planning error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"error": str(exc), "code": "PLANNING_ERROR"}
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions with generic error response."""
    logger.exception(f"Unhandled exception on {request.url.path}")

    # Return generic error to client (no stack traces)
    if DEBUG_MODE:
        return JSONResponse(
            status_code=500,
            content={
                "error": str(exc),
                "code": "INTERNAL_ERROR",
                "type": type(exc).__name__
            }
        )
    else:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "code": "INTERNAL_ERROR"
            }
        )


# =============================================================================
# ROUTERS
# =============================================================================

app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(reference.router, prefix="/api", tags=["Reference"])
app.include_router(sessions.router, prefix="/api", tags=["Sessions"])
app.include_router(forecast.router, prefix="/api", tags=["Forecast"])
app.include_router(chart.router, prefix="/api", tags=["Chart"])
app.include_router(selection.router, prefix="/api", tags=["Selection"])


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/")
async def root():
    """Root endpoint - API info."""
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "status": "running"
    }


@app.get("/api")
async def api_root():
    """API root - available endpoints."""
    return {
        "endpoints": {
            "health": "/api/health",
            "catalog": "/api/catalog",
            "sessions": "/api/sessions",
            "forecast": "/api/sessions/{session_id}/forecast",
            "chart": "/api/sessions/{session_id}/chart/series",
            "selection": "/api/sessions/{session_id}/selection",
        }
    }
