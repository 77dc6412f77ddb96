from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Any, Dict, List, Optional

from generator import Question, next_question
from marking import check_answer, check_bookwork, validate_answer_text
from settings import BOOKWORK_CHANCE, QUESTIONS_PER_ROUND, XP_PER_CORRECT
from topics import TOPICS, get_topic, topic_index

logger = logging.getLogger("helix.session")


class View(str, Enum):
    MENU = "menu"
    EXPLAINER = "explainer"
    PRACTICE = "practice"
    LEVEL_COMPLETE = "level_complete"


class Feedback(str, Enum):
    IDLE = "idle"
    CORRECT = "correct"
    WRONG = "wrong"


class BookworkState(str, Enum):
    INACTIVE = "inactive"
    AWAITING_INPUT = "awaiting_input"
    FAILED = "failed"


class SessionStateError(ValueError):
    """Action not allowed from the current screen."""


class UnknownTopicError(SessionStateError):
    pass


class TopicLockedError(SessionStateError):
    pass


class Session:
    """
    One learner's run through Helix: menu -> explainer -> practice -> level_complete.

    While practising, a correct answer may open the bookwork overlay, which blocks
    normal submissions until it is passed (round advances) or failed and
    acknowledged (current question must be answered again).
    """

    def __init__(
        self,
        session_id: str,
        seed: Optional[int] = None,
        questions_per_round: int = QUESTIONS_PER_ROUND,
        xp_per_correct: int = XP_PER_CORRECT,
        bookwork_chance: float = BOOKWORK_CHANCE,
    ):
        self.id = session_id
        self.seed = seed
        self.rng = random.Random(seed)
        self.questions_per_round = max(1, questions_per_round)
        self.xp_per_correct = xp_per_correct
        self.bookwork_chance = bookwork_chance

        self.view = View.MENU
        self.topic_id: Optional[str] = None
        self.unlocked_index = 0
        self.rounds_completed = 0
        self.xp = 0

        # practice state
        self.question: Optional[Question] = None
        self.feedback = Feedback.IDLE
        self.history: Dict[int, str] = {}
        self.round_count = 0

        # bookwork overlay
        self.bookwork = BookworkState.INACTIVE
        self.bookwork_target: Optional[int] = None
        self.failed_expected = ""
        self.failed_submitted = ""

    # --- guards -----------------------------------------------------------------

    def _require_view(self, *views: View) -> None:
        if self.view not in views:
            allowed = ", ".join(v.value for v in views)
            raise SessionStateError(f"not allowed from '{self.view.value}' (needs {allowed})")

    def _require_bookwork(self, state: BookworkState) -> None:
        if self.bookwork is not state:
            raise SessionStateError(
                f"bookwork check is '{self.bookwork.value}', expected '{state.value}'"
            )

    def is_unlocked(self, topic_id: str) -> bool:
        idx = topic_index(topic_id)
        return 0 <= idx <= self.unlocked_index

    def unlocked_topic_ids(self) -> List[str]:
        return [t.id for t in TOPICS[: self.unlocked_index + 1]]

    # --- navigation -------------------------------------------------------------

    def start_topic(self, topic_id: str) -> None:
        self._require_view(View.MENU, View.EXPLAINER, View.LEVEL_COMPLETE)
        if get_topic(topic_id) is None:
            raise UnknownTopicError(f"unknown topic: {topic_id}")
        if not self.is_unlocked(topic_id):
            raise TopicLockedError(f"topic is locked: {topic_id}")
        self.topic_id = topic_id
        self.view = View.EXPLAINER

    def start_practice(self) -> None:
        # Also the "Replay" action on the completion screen
        self._require_view(View.EXPLAINER, View.LEVEL_COMPLETE)
        self.round_count = 1
        self.history = {}
        self._reset_bookwork()
        # the previous round's last question still counts for the anti-dupe check
        self._next_question(1)
        self.view = View.PRACTICE
        logger.info("session %s: round started on %s", self.id, self.topic_id)

    def exit_to_menu(self) -> None:
        # Abandons any round in progress; XP and unlocks are kept
        self.view = View.MENU
        self.feedback = Feedback.IDLE
        self._reset_bookwork()

    # --- practice ---------------------------------------------------------------

    def submit_answer(self, answer: str) -> Dict[str, Any]:
        self._require_view(View.PRACTICE)
        if self.bookwork is not BookworkState.INACTIVE:
            raise SessionStateError("finish the bookwork check first")

        msg = validate_answer_text(answer)
        if msg:
            return {"ok": False, "correct": False, "score": 0, "feedback": msg}

        if not check_answer(answer, self.question.answer):
            self.feedback = Feedback.WRONG
            return {"ok": True, "correct": False, "score": 0, "feedback": self.question.steps}

        self.feedback = Feedback.CORRECT
        self.xp += self.xp_per_correct
        # keep the raw text: the bookwork check compares against what was typed
        self.history[self.question.id] = answer

        bookwork = self._maybe_trigger_bookwork()
        round_complete = False
        if not bookwork:
            round_complete = self._advance()
        return {
            "ok": True,
            "correct": True,
            "score": self.xp_per_correct,
            "feedback": "",
            "bookwork_check": bookwork,
            "round_complete": round_complete,
        }

    def retry(self) -> None:
        self._require_view(View.PRACTICE)
        if self.feedback is Feedback.WRONG:
            self.feedback = Feedback.IDLE

    def _next_question(self, seq: int) -> None:
        self.question = next_question(self.topic_id, seq, previous=self.question, rng=self.rng)
        self.feedback = Feedback.IDLE

    def _advance(self) -> bool:
        """Move to the next question, or finish the round. True when the round ended."""
        if self.round_count >= self.questions_per_round:
            self._complete_round()
            return True
        self.round_count += 1
        self._next_question(self.question.id + 1)
        return False

    def _complete_round(self) -> None:
        idx = topic_index(self.topic_id)
        self.rounds_completed += 1
        if idx == self.unlocked_index and self.unlocked_index < len(TOPICS) - 1:
            self.unlocked_index += 1
            logger.info(
                "session %s: unlocked %s", self.id, TOPICS[self.unlocked_index].id
            )
        self.view = View.LEVEL_COMPLETE
        logger.info("session %s: round complete on %s (xp=%d)", self.id, self.topic_id, self.xp)

    # --- bookwork check ---------------------------------------------------------

    def _reset_bookwork(self) -> None:
        self.bookwork = BookworkState.INACTIVE
        self.bookwork_target = None
        self.failed_expected = ""
        self.failed_submitted = ""

    def _maybe_trigger_bookwork(self) -> bool:
        earlier = sorted(qid for qid in self.history if qid < self.question.id)
        if not earlier or self.rng.random() >= self.bookwork_chance:
            return False
        self.bookwork_target = self.rng.choice(earlier)
        self.bookwork = BookworkState.AWAITING_INPUT
        logger.debug("session %s: bookwork check on Q%d", self.id, self.bookwork_target)
        return True

    def submit_bookwork(self, answer: str) -> Dict[str, Any]:
        self._require_view(View.PRACTICE)
        self._require_bookwork(BookworkState.AWAITING_INPUT)

        msg = validate_answer_text(answer)
        if msg:
            return {"ok": False, "correct": False, "feedback": msg}

        recorded = self.history[self.bookwork_target]
        if check_bookwork(answer, recorded):
            logger.info("session %s: bookwork check passed", self.id)
            self._reset_bookwork()
            round_complete = self._advance()
            return {"ok": True, "correct": True, "feedback": "", "round_complete": round_complete}

        logger.info("session %s: bookwork check failed on Q%d", self.id, self.bookwork_target)
        self.bookwork = BookworkState.FAILED
        self.failed_expected = recorded
        self.failed_submitted = answer
        return {
            "ok": True,
            "correct": False,
            "feedback": "That doesn't match your previous answer.",
            "expected": recorded,
            "submitted": answer,
            "round_complete": False,
        }

    def acknowledge_bookwork(self) -> None:
        self._require_view(View.PRACTICE)
        self._require_bookwork(BookworkState.FAILED)
        # the current question has to be answered again
        self._reset_bookwork()
        self.feedback = Feedback.IDLE
