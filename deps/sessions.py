from typing import Annotated, Optional

from fastapi import Header, HTTPException

from session import Session
from store import get_session


def optional_session(
    x_session_id: Annotated[str | None, Header(alias="x-session-id")] = None,
) -> Optional[Session]:
    """
    Menu-style lookups work without a session (only the first topic is open then).
    """
    return get_session(x_session_id)


def require_session(
    x_session_id: Annotated[str | None, Header(alias="x-session-id")] = None,
) -> Session:
    """
    Strict guard for session actions. Requires X-Session-Id to name a live session.
    """
    if not x_session_id:
        raise HTTPException(status_code=400, detail="x-session-id header required.")
    s = get_session(x_session_id)
    if s is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return s
