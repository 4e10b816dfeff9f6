"""Quiz engine — JSON storage for quiz definitions + starting quizzes from them."""

from __future__ import annotations

import logging
import os
import random
import re
from pathlib import Path

from pydantic import ValidationError

from quizstate.errors import InvalidQuizId
from quizstate.question import create_question
from quizstate.quiz import Quiz
from quizstate.quiz_models import QUIZ_ID_PATTERN, QuizDefinition

logger = logging.getLogger(__name__)

# Where quiz definitions live; QUIZ_DIR points it elsewhere
QUIZ_DIR = Path(
    os.environ.get("QUIZ_DIR", Path(__file__).parent.parent.parent / "quizzes")
)


class QuizStore:
    """Quiz definitions, one ``<id>.json`` file each."""

    def __init__(self, directory: Path = QUIZ_DIR) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, quiz_id: str) -> Path:
        if not re.fullmatch(QUIZ_ID_PATTERN, quiz_id):
            raise InvalidQuizId(f"Invalid quiz id: {quiz_id!r}")
        return self.directory / f"{quiz_id}.json"

    def save(self, quiz: QuizDefinition) -> QuizDefinition:
        self._path(quiz.id).write_text(quiz.model_dump_json(indent=2), encoding="utf-8")
        return quiz

    def load(self, quiz_id: str) -> QuizDefinition:
        path = self._path(quiz_id)
        if not path.exists():
            raise FileNotFoundError(f"Quiz not found: {quiz_id}")
        return QuizDefinition.model_validate_json(path.read_text(encoding="utf-8"))

    def delete(self, quiz_id: str) -> None:
        self._path(quiz_id).unlink(missing_ok=True)

    def list_all(self) -> list[dict]:
        """Id, title and question count of every readable quiz file."""
        quizzes = []
        for p in sorted(self.directory.glob("*.json")):
            try:
                quiz = QuizDefinition.model_validate_json(p.read_text(encoding="utf-8"))
            except ValidationError:
                logger.warning("Skipping unreadable quiz file %s", p.name)
                continue
            quizzes.append(
                {"id": quiz.id, "title": quiz.title, "question_count": len(quiz.questions)}
            )
        return quizzes


def build_quiz(
    definition: QuizDefinition,
    rng: random.Random | None = None,
) -> Quiz:
    """Start a fresh quiz from a definition.

    Every question is checked with ``create_question`` (InvalidQuestion on a
    bad one). Questions are shuffled when ``randomize`` is set and cut to
    ``max_questions``. A definition without questions raises EmptyQuiz.
    """
    questions = [
        create_question(q.text, q.options, q.correct_index)
        for q in definition.questions
    ]

    # Randomize and limit
    if definition.randomize:
        (rng or random).shuffle(questions)

    if definition.max_questions > 0:
        questions = questions[: definition.max_questions]

    logger.debug(
        "Built quiz %s with %d questions", definition.id, len(questions)
    )
    return Quiz.start(questions)
