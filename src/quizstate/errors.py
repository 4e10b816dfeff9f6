"""Errors raised for invalid input to questions and quizzes."""

from __future__ import annotations


class QuizError(ValueError):
    """Base class for invalid input to a Question or Quiz operation."""


class InvalidQuestion(QuizError):
    """Fewer than two options, or a correct index outside the options."""


class InvalidAnswerIndex(QuizError):
    """Selected option index outside the options of an unanswered question."""


class IndexOutOfRange(QuizError):
    """Cursor target outside the question sequence."""


class EmptyQuiz(QuizError):
    """A quiz needs at least one question."""


class NotFullyAnswered(QuizError):
    """Finishing requires every question to be answered."""


class SessionNotFound(KeyError):
    """No session registered under the given id."""


class InvalidQuizId(ValueError):
    """Quiz ids are limited to letters, digits, '-' and '_'."""
