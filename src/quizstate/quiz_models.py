"""Quiz definitions — JSON-based question banks a quiz is started from."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

# Ids become file names, so keep them to a safe alphabet
QUIZ_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


class QuestionDefinition(BaseModel):
    """One multiple-choice question as authored."""

    text: str
    options: list[str]
    correct_index: int  # zero-based index into options


class QuizDefinition(BaseModel):
    """A complete quiz definition stored as JSON."""

    id: str = Field(
        default_factory=lambda: uuid.uuid4().hex[:12], pattern=QUIZ_ID_PATTERN
    )
    title: str = "Untitled Quiz"
    description: str = ""
    questions: list[QuestionDefinition] = Field(default_factory=list)

    # Quiz settings
    randomize: bool = False
    max_questions: int = 0  # 0 = all questions
