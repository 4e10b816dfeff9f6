"""In-memory quiz sessions, each a history of quiz values under one id.

A session never changes a quiz in place: each intent maps the newest quiz
value to a new one, which is appended to the history. Undo drops the newest
value again.
"""

from __future__ import annotations

import logging
import os
import random
import uuid
from typing import Callable

from pydantic import BaseModel

from quizstate.errors import SessionNotFound
from quizstate.quiz import Quiz
from quizstate.quiz_engine import build_quiz
from quizstate.quiz_models import QuizDefinition

logger = logging.getLogger(__name__)

# Max quiz values kept per session (override with QUIZ_HISTORY_LIMIT env var)
HISTORY_LIMIT = int(os.environ.get("QUIZ_HISTORY_LIMIT", 100))


class Session(BaseModel):
    id: str
    quiz_id: str
    title: str
    history: list[Quiz]

    @property
    def quiz(self) -> Quiz:
        return self.history[-1]

    def can_undo(self) -> bool:
        return len(self.history) > 1


class SessionStore:
    """Holds running quiz sessions in memory."""

    def __init__(self, history_limit: int = HISTORY_LIMIT) -> None:
        self.history_limit = max(2, history_limit)
        self._sessions: dict[str, Session] = {}

    def start(
        self, definition: QuizDefinition, rng: random.Random | None = None
    ) -> Session:
        quiz = build_quiz(definition, rng)
        session = Session(
            id=uuid.uuid4().hex[:12],
            quiz_id=definition.id,
            title=definition.title,
            history=[quiz],
        )
        self._sessions[session.id] = session
        logger.info("Started session %s for quiz %s", session.id, definition.id)
        return session

    def get(self, session_id: str) -> Session:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFound(session_id) from None

    def list_ids(self) -> list[str]:
        return list(self._sessions)

    def discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def apply(self, session_id: str, transition: Callable[[Quiz], Quiz]) -> Session:
        """Run ``transition`` on the newest quiz value and record the result.

        Errors raised by the transition propagate and leave the history as it
        was. A transition that returns the same value is not recorded.
        """
        session = self.get(session_id)
        before = session.quiz
        after = transition(before)
        if after is before:
            return session
        session.history.append(after)
        if len(session.history) > self.history_limit:
            # The start value stays; the oldest step after it goes
            del session.history[1]
        logger.debug(
            "Session %s: question %d/%d, %d answered",
            session_id,
            after.current_index + 1,
            after.size,
            after.answered_count(),
        )
        return session

    # --- Intents ---

    def next(self, session_id: str) -> Session:
        return self.apply(session_id, Quiz.next)

    def previous(self, session_id: str) -> Session:
        return self.apply(session_id, Quiz.previous)

    def goto(self, session_id: str, index: int) -> Session:
        return self.apply(session_id, lambda quiz: quiz.goto_index(index))

    def answer(self, session_id: str, selected_index: int) -> Session:
        return self.apply(
            session_id, lambda quiz: quiz.answer_current_question(selected_index)
        )

    def finish(self, session_id: str) -> Session:
        session = self.apply(session_id, Quiz.finish)
        logger.info(
            "Session %s finished with score %d/%d", session_id, *session.quiz.get_score()
        )
        return session

    def undo(self, session_id: str) -> Session:
        session = self.get(session_id)
        if session.can_undo():
            session.history.pop()
        return session
