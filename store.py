from __future__ import annotations

import logging
import secrets
from typing import Dict, Optional

from session import Session
from settings import MAX_SESSIONS

logger = logging.getLogger("helix.store")


class SessionStore:
    # insertion-ordered: the first key is the oldest session
    _sessions: Dict[str, Session] = {}

    @classmethod
    def create(cls, seed: Optional[int] = None) -> Session:
        while len(cls._sessions) >= MAX_SESSIONS:
            oldest = next(iter(cls._sessions))
            cls._sessions.pop(oldest)
            logger.info("evicted session %s (cap %d)", oldest, MAX_SESSIONS)

        sid = secrets.token_hex(16)
        s = Session(sid, seed=seed)
        cls._sessions[sid] = s
        logger.info("created session %s", sid)
        return s

    @classmethod
    def get(cls, session_id: Optional[str]) -> Optional[Session]:
        if not session_id:
            return None
        return cls._sessions.get(session_id)

    @classmethod
    def drop(cls, session_id: str) -> bool:
        return cls._sessions.pop(session_id, None) is not None

    @classmethod
    def clear(cls) -> int:
        n = len(cls._sessions)
        cls._sessions.clear()
        return n

    @classmethod
    def count(cls) -> int:
        return len(cls._sessions)


# Public API
def create_session(seed: Optional[int] = None) -> Session:
    return SessionStore.create(seed)


def get_session(session_id: Optional[str]) -> Optional[Session]:
    return SessionStore.get(session_id)
