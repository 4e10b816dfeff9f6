"""MCP tools for taking a quiz: start, navigate, answer, finish, undo, discard."""

from __future__ import annotations

from typing import Callable, Literal

from mcp.server.fastmcp import FastMCP

from quizstate.errors import InvalidQuizId, QuizError, SessionNotFound
from quizstate.models import quiz_view
from quizstate.quiz_engine import QuizStore
from quizstate.sessions import Session, SessionStore


def _run(action: Callable[[], Session]) -> dict:
    """Run a session action, turning expected failures into an error dict."""
    try:
        session = action()
    except SessionNotFound as e:
        return {"error": "SessionNotFound", "detail": f"Session not found: {e.args[0]}"}
    except FileNotFoundError as e:
        return {"error": "QuizNotFound", "detail": str(e)}
    except (QuizError, InvalidQuizId) as e:
        return {"error": type(e).__name__, "detail": str(e)}
    return quiz_view(
        session.quiz,
        session_id=session.id,
        title=session.title,
        can_undo=session.can_undo(),
    ).model_dump()


def register(mcp: FastMCP, store: QuizStore, sessions: SessionStore) -> None:
    @mcp.tool()
    def start_quiz(quiz_id: str) -> dict:
        """Start taking a saved quiz and show its first question.

        Returns the session view; keep its session_id for the other tools.

        Args:
            quiz_id: Id of a saved quiz (see list_quizzes)
        """
        return _run(lambda: sessions.start(store.load(quiz_id)))

    @mcp.tool()
    def show_session(session_id: str) -> dict:
        """Show the current question, progress and score of a session."""
        return _run(lambda: sessions.get(session_id))

    @mcp.tool()
    def navigate(
        session_id: str,
        direction: Literal["next", "previous", "goto"],
        index: int | None = None,
    ) -> dict:
        """Move between questions.

        "next" and "previous" stop at the last and first question.
        "goto" jumps to a zero-based question index.

        Args:
            session_id: Session to move in
            direction: "next", "previous" or "goto"
            index: Target question for "goto"
        """
        if direction == "next":
            return _run(lambda: sessions.next(session_id))
        if direction == "previous":
            return _run(lambda: sessions.previous(session_id))
        if index is None:
            return {"error": "IndexOutOfRange", "detail": "goto needs an index"}
        return _run(lambda: sessions.goto(session_id, index))

    @mcp.tool()
    def answer_question(session_id: str, selected_index: int) -> dict:
        """Answer the current question with a zero-based option index.

        A question keeps its first answer; answering it again changes nothing.
        """
        return _run(lambda: sessions.answer(session_id, selected_index))

    @mcp.tool()
    def finish_quiz(session_id: str) -> dict:
        """Finish the quiz. Every question must be answered first."""
        return _run(lambda: sessions.finish(session_id))

    @mcp.tool()
    def undo(session_id: str) -> dict:
        """Go back to the quiz state before the last change."""
        return _run(lambda: sessions.undo(session_id))

    @mcp.tool()
    def discard_session(session_id: str) -> dict:
        """Drop a session and its history once it is no longer needed."""
        sessions.discard(session_id)
        return {"status": "discarded", "session_id": session_id}
