"""Health check router - liveness and session count."""

from datetime import datetime

from fastapi import APIRouter

from ..config import API_VERSION
from ..dependencies import get_registry

router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """Basic health check.

    Returns overall API status.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": API_VERSION,
        "sessions": len(get_registry()),
    }
