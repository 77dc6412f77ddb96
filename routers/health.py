# routers/health.py
from fastapi import APIRouter

from store import SessionStore
from topics import all_topics

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health():
    return {"ok": True, "sessions": SessionStore.count(), "topics": len(all_topics())}
