"""MCP tools for authoring and listing quiz definitions."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from quizstate.errors import InvalidQuizId, QuizError
from quizstate.quiz_engine import QuizStore, build_quiz
from quizstate.quiz_models import QuestionDefinition, QuizDefinition


def register(mcp: FastMCP, store: QuizStore) -> None:
    @mcp.tool()
    def list_quizzes() -> list[dict]:
        """List saved quizzes with their id, title and question count."""
        return store.list_all()

    @mcp.tool()
    def save_quiz(
        title: str,
        questions: list[dict],
        description: str = "",
        randomize: bool = False,
        max_questions: int = 0,
        quiz_id: str | None = None,
    ) -> dict:
        """Validate and save a multiple-choice quiz.

        Each question is a dict with "text", "options" (at least two strings)
        and "correct_index" (zero-based index of the right option). Every
        question is checked before anything is written.

        Args:
            title: Quiz title
            questions: Question dicts, in the order they should be asked
            description: Optional quiz description
            randomize: Shuffle question order each time the quiz is started
            max_questions: Max questions per run (0 = all)
            quiz_id: Existing quiz id to overwrite (default: new id)
        """
        definition = QuizDefinition(
            title=title,
            description=description,
            questions=[QuestionDefinition(**q) for q in questions],
            randomize=randomize,
            max_questions=max_questions,
        )
        if quiz_id:
            definition = definition.model_copy(update={"id": quiz_id})

        try:
            quiz = build_quiz(definition)
            store.save(definition)
        except (QuizError, InvalidQuizId) as e:
            return {"error": type(e).__name__, "detail": str(e)}

        return {
            "quiz_definition": definition.model_dump(),
            "validation": {"questions_per_run": quiz.size},
        }
