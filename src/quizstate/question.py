"""Question values — one multiple-choice question, unanswered or answered.

A question starts out *unanswered* (prompt, options, correct option) and,
once answered, becomes an *answered* value that only remembers which option
was picked and whether it was right. Build questions with
``create_question``; the variant classes are exported for type checks and
snapshot loading only.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

from quizstate.errors import InvalidAnswerIndex, InvalidQuestion


def _in_range(index: object, count: int) -> bool:
    # bool is an int subclass; True is not an option index
    if not isinstance(index, int) or isinstance(index, bool):
        return False
    return 0 <= index < count


class UnansweredQuestion(BaseModel):
    """A question waiting for an answer."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unanswered"] = "unanswered"
    text: str
    options: tuple[str, ...]
    correct_index: StrictInt = Field(repr=False)

    @model_validator(mode="after")
    def _check_shape(self) -> UnansweredQuestion:
        if len(self.options) < 2:
            raise ValueError("a question needs at least two options")
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError("correct_index must point at one of the options")
        return self

    def answer(self, selected_index: int) -> AnsweredQuestion:
        """Pick an option. Raises InvalidAnswerIndex for an unknown option."""
        if not _in_range(selected_index, len(self.options)):
            raise InvalidAnswerIndex(
                f"Answer index {selected_index!r} out of range "
                f"(question has {len(self.options)} options)"
            )
        return AnsweredQuestion(
            selected_index=selected_index,
            correct=selected_index == self.correct_index,
        )

    def is_answered(self) -> bool:
        return False

    def is_answered_correctly(self) -> bool:
        return False

    def is_selected_answer(self, n: int) -> bool:
        return False


class AnsweredQuestion(BaseModel):
    """A question after answering. Prompt and options are no longer carried."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["answered"] = "answered"
    selected_index: StrictInt = Field(ge=0)
    correct: bool

    def answer(self, selected_index: int) -> AnsweredQuestion:
        # Answering twice keeps the first answer, whatever the new index is
        return self

    def is_answered(self) -> bool:
        return True

    def is_answered_correctly(self) -> bool:
        return self.correct

    def is_selected_answer(self, n: int) -> bool:
        return not isinstance(n, bool) and n == self.selected_index


Question = Annotated[
    Union[UnansweredQuestion, AnsweredQuestion], Field(discriminator="kind")
]


def create_question(
    text: str, options: list[str] | tuple[str, ...], correct_index: int
) -> UnansweredQuestion:
    """Build an unanswered question.

    Raises InvalidQuestion when there are fewer than two options or when
    ``correct_index`` does not point at one of them.
    """
    options = tuple(options)
    if len(options) < 2:
        raise InvalidQuestion(
            f"Question {text!r} needs at least two options, got {len(options)}"
        )
    if not _in_range(correct_index, len(options)):
        raise InvalidQuestion(
            f"Correct index {correct_index!r} out of range for question {text!r} "
            f"({len(options)} options)"
        )
    return UnansweredQuestion(text=text, options=options, correct_index=correct_index)
