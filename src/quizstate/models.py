"""Read-only views of quiz values for rendering collaborators."""

from __future__ import annotations

from pydantic import BaseModel

from quizstate.question import Question, UnansweredQuestion
from quizstate.quiz import Quiz


class QuestionView(BaseModel):
    index: int
    answered: bool
    text: str | None = None  # None once answered
    options: list[str] | None = None
    selected_index: int | None = None  # None while unanswered
    correct: bool | None = None


class ScoreView(BaseModel):
    correct: int
    total: int


class QuizView(BaseModel):
    session_id: str
    title: str = ""
    current_index: int
    size: int
    has_next: bool
    has_previous: bool
    answered_count: int
    fully_answered: bool
    finished: bool
    score: ScoreView
    current: QuestionView
    can_undo: bool = False


def question_view(question: Question, index: int) -> QuestionView:
    if isinstance(question, UnansweredQuestion):
        return QuestionView(
            index=index,
            answered=False,
            text=question.text,
            options=list(question.options),
        )
    return QuestionView(
        index=index,
        answered=True,
        selected_index=question.selected_index,
        correct=question.is_answered_correctly(),
    )


def score_view(quiz: Quiz) -> ScoreView:
    correct, total = quiz.get_score()
    return ScoreView(correct=correct, total=total)


def quiz_view(
    quiz: Quiz, session_id: str, title: str = "", can_undo: bool = False
) -> QuizView:
    return QuizView(
        session_id=session_id,
        title=title,
        current_index=quiz.current_index,
        size=quiz.size,
        has_next=quiz.has_next(),
        has_previous=quiz.has_previous(),
        answered_count=quiz.answered_count(),
        fully_answered=quiz.fully_answered(),
        finished=quiz.is_finished(),
        score=score_view(quiz),
        current=question_view(quiz.current_question, quiz.current_index),
        can_undo=can_undo,
    )
