"""Reference data router - the fixed planning catalog."""

from typing import Any, Dict

from fastapi import APIRouter, Request

from planning import catalog

from ..middleware.rate_limit import rate_limit_read

router = APIRouter()


@router.get("/catalog")
@rate_limit_read
async def get_catalog(request: Request) -> Dict[str, Any]:
    """Return products, groups, periods and metrics in display order."""
    return catalog.as_dict()
