# schemas/sessions.py
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from settings import ANSWER_MAX_LEN

# ---------- Requests ----------


class SessionCreate(BaseModel):
    # Same seed -> same question stream
    seed: Optional[int] = None


class TopicRequest(BaseModel):
    topic_id: str


class AnswerRequest(BaseModel):
    answer: str = Field(max_length=ANSWER_MAX_LEN)


# ---------- Responses ----------


class AnswerResponse(BaseModel):
    ok: bool
    correct: bool
    score: int
    feedback: str
    bookwork_check: bool = False
    round_complete: bool = False


class BookworkResponse(BaseModel):
    ok: bool
    correct: bool
    feedback: str
    # present only on a mismatch
    expected: Optional[str] = None
    submitted: Optional[str] = None
    round_complete: bool = False


# ---------- Session view ----------


class QuestionView(BaseModel):
    id: int
    text: str
    # only while the last submission was wrong
    steps: Optional[str] = None


class BookworkView(BaseModel):
    state: Literal["inactive", "awaiting_input", "failed"]
    target: Optional[int] = None
    expected: Optional[str] = None
    submitted: Optional[str] = None


class SessionOut(BaseModel):
    id: str
    view: Literal["menu", "explainer", "practice", "level_complete"]
    topic_id: Optional[str] = None
    xp: int
    unlocked_index: int
    unlocked_topics: List[str]
    rounds_completed: int
    round_count: int
    questions_per_round: int
    feedback: Literal["idle", "correct", "wrong"]
    question: Optional[QuestionView] = None
    bookwork: BookworkView
