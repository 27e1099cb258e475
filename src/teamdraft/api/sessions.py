"""In-memory registry of draft sessions hosted by the API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Dict, List, Sequence
from uuid import uuid4

from teamdraft.config.stats import StatKey
from teamdraft.draft import DraftEngine


logger = logging.getLogger(__name__)


class SessionLimitReached(RuntimeError):
    """Raised when the registry already holds its maximum number of sessions."""


@dataclass
class DraftSession:
    session_id: str
    engine: DraftEngine
    stat_keys: Sequence[StatKey]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SessionRegistry:
    """One :class:`DraftEngine` per session id.

    Sessions are independent; the registry never shares engine state
    between them.
    """

    def __init__(self, max_sessions: int):
        self._max_sessions = max_sessions
        self._sessions: Dict[str, DraftSession] = {}

    def create(self, engine: DraftEngine, stat_keys: Sequence[StatKey]) -> DraftSession:
        if len(self._sessions) >= self._max_sessions:
            raise SessionLimitReached(f"At most {self._max_sessions} draft sessions can be open")
        session = DraftSession(session_id=uuid4().hex, engine=engine, stat_keys=tuple(stat_keys))
        self._sessions[session.session_id] = session
        logger.info("Opened draft session %s with %d players", session.session_id, len(engine.players))
        return session

    def get(self, session_id: str) -> DraftSession:
        return self._sessions[session_id]

    def delete(self, session_id: str) -> DraftSession:
        session = self._sessions.pop(session_id)
        logger.info("Closed draft session %s", session_id)
        return session

    def list_sessions(self) -> List[DraftSession]:
        return sorted(self._sessions.values(), key=lambda session: session.created_at, reverse=True)

    def __len__(self) -> int:
        return len(self._sessions)
