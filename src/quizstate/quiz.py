"""Quiz values — an ordered run of questions with a cursor.

The sequence is held as three parts: the questions before the cursor
(nearest first), the current question and the questions after it. Both
remainders are persistent stacks, so a single step only touches their tops.
Every operation returns a new ``Quiz`` (or the same one when nothing
changes); questions that are not touched are shared between the old and the
new value.
"""

from __future__ import annotations

from typing import Any, Iterable, NamedTuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_serializer,
    field_validator,
)

from quizstate.errors import EmptyQuiz, IndexOutOfRange, NotFullyAnswered
from quizstate.question import Question
from quizstate.stack import EMPTY, QuestionStack

_QUESTIONS = TypeAdapter(tuple[Question, ...])


class Score(NamedTuple):
    correct: int
    total: int


class Quiz(BaseModel):
    """An immutable quiz. Start one with ``Quiz.start(questions)``.

    Snapshots (``model_dump``) list ``before`` and ``after`` in quiz order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    before: QuestionStack = Field(default_factory=lambda: EMPTY)  # nearest on top
    current: Question
    after: QuestionStack = Field(default_factory=lambda: EMPTY)
    finished: bool = False

    @field_validator("before", mode="plain")
    @classmethod
    def _load_before(cls, value: Any) -> QuestionStack:
        if isinstance(value, QuestionStack):
            return value
        return QuestionStack.of(reversed(_QUESTIONS.validate_python(value)))

    @field_validator("after", mode="plain")
    @classmethod
    def _load_after(cls, value: Any) -> QuestionStack:
        if isinstance(value, QuestionStack):
            return value
        return QuestionStack.of(_QUESTIONS.validate_python(value))

    @field_serializer("before")
    def _dump_before(self, stack: QuestionStack) -> tuple[Question, ...]:
        return tuple(reversed(tuple(stack)))

    @field_serializer("after")
    def _dump_after(self, stack: QuestionStack) -> tuple[Question, ...]:
        return tuple(stack)

    @classmethod
    def start(cls, questions: Iterable[Question]) -> Quiz:
        """Create a quiz positioned on the first question.

        Questions are used as given, without re-validation.
        Raises EmptyQuiz when ``questions`` is empty.
        """
        questions = tuple(questions)
        if not questions:
            raise EmptyQuiz("Cannot start a quiz without questions")
        return cls.model_construct(
            before=EMPTY,
            current=questions[0],
            after=QuestionStack.of(questions[1:]),
            finished=False,
        )

    # --- Position ---

    @property
    def current_question(self) -> Question:
        return self.current

    @property
    def current_index(self) -> int:
        return len(self.before)

    @property
    def size(self) -> int:
        return len(self.before) + 1 + len(self.after)

    def questions(self) -> tuple[Question, ...]:
        """All questions in order."""
        return tuple(reversed(tuple(self.before))) + (self.current,) + tuple(self.after)

    # --- Navigation ---

    def goto_index(self, n: int) -> Quiz:
        """Move the cursor to question ``n`` (zero-based).

        Raises IndexOutOfRange when ``n`` is outside the quiz.
        """
        if isinstance(n, bool) or not isinstance(n, int) or not 0 <= n < self.size:
            raise IndexOutOfRange(
                f"Question index {n!r} out of range (quiz has {self.size} questions)"
            )
        if n == self.current_index:
            return self
        seq = self.questions()
        return self.model_copy(
            update={
                "before": QuestionStack.of(reversed(seq[:n])),
                "current": seq[n],
                "after": QuestionStack.of(seq[n + 1 :]),
            }
        )

    def has_next(self) -> bool:
        return bool(self.after)

    def next(self) -> Quiz:
        """Step forward one question; stays put on the last one."""
        if not self.after:
            return self
        return self.model_copy(
            update={
                "before": self.before.push(self.current),
                "current": self.after.first,
                "after": self.after.rest,
            }
        )

    def has_previous(self) -> bool:
        return bool(self.before)

    def previous(self) -> Quiz:
        """Step back one question; stays put on the first one."""
        if not self.before:
            return self
        return self.model_copy(
            update={
                "before": self.before.rest,
                "current": self.before.first,
                "after": self.after.push(self.current),
            }
        )

    # --- Answering ---

    def answer_current_question(self, selected_index: int) -> Quiz:
        """Answer the question under the cursor. The cursor does not move.

        Raises InvalidAnswerIndex when the current question is unanswered and
        ``selected_index`` is not one of its options.
        """
        answered = self.current.answer(selected_index)
        if answered is self.current:
            return self
        return self.model_copy(update={"current": answered})

    def answered_count(self) -> int:
        return sum(1 for q in self.questions() if q.is_answered())

    def fully_answered(self) -> bool:
        return all(q.is_answered() for q in self.questions())

    # --- Completion ---

    def finish(self) -> Quiz:
        """Mark the quiz finished. Raises NotFullyAnswered if any question is open."""
        if not self.fully_answered():
            open_count = self.size - self.answered_count()
            raise NotFullyAnswered(
                f"{open_count} of {self.size} questions are still unanswered"
            )
        if self.finished:
            return self
        return self.model_copy(update={"finished": True})

    def is_finished(self) -> bool:
        return self.finished

    def get_score(self) -> Score:
        """Correct answers so far and the question total, finished or not."""
        correct = sum(1 for q in self.questions() if q.is_answered_correctly())
        return Score(correct, self.size)
