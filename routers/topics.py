from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from deps.sessions import optional_session
from schemas.topics import ExplainerOut, TopicOut
from session import Session
from topics import all_topics, get_explainer, get_topic

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=List[TopicOut])
def list_topics(session: Optional[Session] = Depends(optional_session)):
    # Without a session only the first topic is open
    unlocked = session.unlocked_index if session else 0
    return [TopicOut(**t.model_dump(), locked=t.position > unlocked) for t in all_topics()]


@router.get("/{topic_id}/explainer", response_model=ExplainerOut)
def topic_explainer(topic_id: str):
    if get_topic(topic_id) is None:
        raise HTTPException(status_code=404, detail="topic not found")
    e = get_explainer(topic_id)
    return ExplainerOut(topic_id=topic_id, title=e.title, content=e.content)
