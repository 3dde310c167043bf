"""Environment-driven settings for the Demand Review API."""

from __future__ import annotations

import os
from typing import List, Optional

# Environment
DEBUG_MODE = os.environ.get("DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
API_TITLE = "Demand Review API"

# CORS - strict origin allowlist
_DEFAULT_ORIGINS = [
    "http://localhost:5173",  # Vite dev server
    "http://localhost:3000",  # Alternative dev port
]


def _parse_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


ALLOWED_ORIGINS = _parse_origins(os.environ.get("ALLOWED_ORIGINS", "")) or _DEFAULT_ORIGINS

# Sessions live in process memory only
MAX_SESSIONS = int(os.environ.get("MAX_SESSIONS", 100))


def _parse_seed(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


# Default seed for new sessions; unset means fresh randomness per session
DEFAULT_SEED = _parse_seed(os.environ.get("DEMAND_REVIEW_SEED"))

# Rate limiting (disable for local load tests)
RATE_LIMIT_ENABLED = os.environ.get("RATE_LIMIT_ENABLED", "true").lower() in ("1", "true")

# Only trust X-Forwarded-For behind a known reverse proxy
TRUST_PROXY = os.environ.get("TRUST_PROXY", "").lower() in ("1", "true")
