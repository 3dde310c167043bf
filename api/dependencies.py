"""FastAPI dependencies for session state.

Sessions are kept in process memory, keyed by session id. Every endpoint that
reads or edits planning data resolves its session through ``get_session``.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Optional

from fastapi import HTTPException, Path

from planning import PlanningSession

from .config import DEFAULT_SEED, MAX_SESSIONS

logger = logging.getLogger("api.dependencies")


# =============================================================================
# SESSION REGISTRY
# =============================================================================

class SessionRegistry:
    """In-memory sessions with least-recently-used eviction."""

    def __init__(self, max_sessions: int = MAX_SESSIONS):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, PlanningSession]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, seed: Optional[int] = None) -> PlanningSession:
        """Create and seed a new session."""
        session = PlanningSession(seed=DEFAULT_SEED if seed is None else seed)
        session.start()
        self._sessions[session.session_id] = session

        while len(self._sessions) > self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info(f"Evicted session {evicted_id} (limit {self.max_sessions})")

        return session

    def get(self, session_id: str) -> Optional[PlanningSession]:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
            session.touch()
        return session

    def discard(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        self._sessions.clear()


_registry: Optional[SessionRegistry] = None


def get_registry() -> SessionRegistry:
    """Get session registry (singleton)."""
    global _registry

    if _registry is None:
        _registry = SessionRegistry()
        logger.info(f"Session registry initialized (max {_registry.max_sessions})")

    return _registry


def get_session(
    session_id: str = Path(..., pattern=r"^[0-9a-f]{32}$", description="Session id"),
) -> PlanningSession:
    """Resolve the session named in the path.

    Raises:
        HTTPException 404 if the session does not exist (or was evicted)
    """
    session = get_registry().get(session_id)
    if session is None:
        raise HTTPException(404, "Session not found")
    return session
