from __future__ import annotations

import random as _rnd
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from generator import next_question
from schemas.questions import QuestionOut
from topics import get_topic

router = APIRouter(tags=["questions"])


@router.get("/questions", response_model=List[QuestionOut])
def sample_questions(
    topic: str,
    limit: int = Query(default=5, ge=1, le=50),
    seed: Optional[int] = Query(default=None, description="Fix the random stream"),
):
    """Preview prompts for a topic; answers are not included."""
    if get_topic(topic) is None:
        raise HTTPException(status_code=404, detail="topic not found")

    rng = _rnd.Random(seed)
    out: List[QuestionOut] = []
    prev = None
    for i in range(1, limit + 1):
        prev = next_question(topic, i, previous=prev, rng=rng)
        out.append(QuestionOut(id=prev.id, topic=topic, prompt=prev.text))
    return out
