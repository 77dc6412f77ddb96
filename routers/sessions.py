from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, HTTPException

from deps.sessions import require_session
from schemas.sessions import (
    AnswerRequest,
    AnswerResponse,
    BookworkResponse,
    BookworkView,
    QuestionView,
    SessionCreate,
    SessionOut,
    TopicRequest,
)
from session import (
    BookworkState,
    Feedback,
    Session,
    SessionStateError,
    TopicLockedError,
    UnknownTopicError,
    View,
)
from store import SessionStore, create_session

logger = logging.getLogger("helix.api")

router = APIRouter(tags=["sessions"])


def _transition(action: Callable[..., Any], *args: Any) -> Any:
    """Run a state-machine action, mapping domain errors to HTTP status codes."""
    try:
        return action(*args)
    except UnknownTopicError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TopicLockedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))


def _session_out(s: Session) -> SessionOut:
    question: Optional[QuestionView] = None
    if s.view is View.PRACTICE and s.question is not None:
        question = QuestionView(
            id=s.question.id,
            text=s.question.text,
            steps=s.question.steps if s.feedback is Feedback.WRONG else None,
        )

    failed = s.bookwork is BookworkState.FAILED
    bookwork = BookworkView(
        state=s.bookwork.value,
        target=s.bookwork_target,
        expected=s.failed_expected if failed else None,
        submitted=s.failed_submitted if failed else None,
    )

    return SessionOut(
        id=s.id,
        view=s.view.value,
        topic_id=s.topic_id,
        xp=s.xp,
        unlocked_index=s.unlocked_index,
        unlocked_topics=s.unlocked_topic_ids(),
        rounds_completed=s.rounds_completed,
        round_count=s.round_count,
        questions_per_round=s.questions_per_round,
        feedback=s.feedback.value,
        question=question,
        bookwork=bookwork,
    )


# --- Lifecycle --------------------------------------------------------------------


@router.post("/sessions", response_model=SessionOut, status_code=201)
def new_session(req: Optional[SessionCreate] = None):
    s = create_session(seed=req.seed if req else None)
    return _session_out(s)


@router.get("/session", response_model=SessionOut)
def current_session(s: Session = Depends(require_session)):
    return _session_out(s)


@router.delete("/session")
def end_session(s: Session = Depends(require_session)):
    SessionStore.drop(s.id)
    logger.info("ended session %s", s.id)
    return {"ok": True}


# --- Navigation -------------------------------------------------------------------


@router.post("/session/topic", response_model=SessionOut)
def choose_topic(req: TopicRequest, s: Session = Depends(require_session)):
    _transition(s.start_topic, req.topic_id)
    return _session_out(s)


@router.post("/session/practice", response_model=SessionOut)
def start_practice(s: Session = Depends(require_session)):
    _transition(s.start_practice)
    return _session_out(s)


@router.post("/session/exit", response_model=SessionOut)
def exit_to_menu(s: Session = Depends(require_session)):
    s.exit_to_menu()
    return _session_out(s)


# --- Practice ---------------------------------------------------------------------


@router.post("/session/answer", response_model=AnswerResponse)
def submit_answer(req: AnswerRequest, s: Session = Depends(require_session)):
    return _transition(s.submit_answer, req.answer)


@router.post("/session/retry", response_model=SessionOut)
def retry(s: Session = Depends(require_session)):
    _transition(s.retry)
    return _session_out(s)


# --- Bookwork check ---------------------------------------------------------------


@router.post("/session/bookwork", response_model=BookworkResponse)
def submit_bookwork(req: AnswerRequest, s: Session = Depends(require_session)):
    return _transition(s.submit_bookwork, req.answer)


@router.post("/session/bookwork/acknowledge", response_model=SessionOut)
def acknowledge_bookwork(s: Session = Depends(require_session)):
    _transition(s.acknowledge_bookwork)
    return _session_out(s)
