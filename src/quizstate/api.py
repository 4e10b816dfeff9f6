"""FastAPI HTTP layer wrapping the quiz store and running sessions."""

from __future__ import annotations

import hmac
import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from quizstate.errors import (
    InvalidQuizId,
    NotFullyAnswered,
    QuizError,
    SessionNotFound,
)
from quizstate.models import quiz_view, score_view
from quizstate.quiz_engine import QuizStore, build_quiz
from quizstate.quiz_models import QuizDefinition
from quizstate.sessions import Session, SessionStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Quiz State API",
    description="Immutable quiz sessions: navigation, answering and scoring",
    version="0.1.0",
)

API_KEY = os.getenv("API_KEY")
if not API_KEY:
    logger.warning("API_KEY not set. Quizzes and sessions are open to every client.")

# Paths reachable without an x-api-key header
OPEN_PATHS = {"/health"}


@app.middleware("http")
async def require_api_key(request: Request, call_next):
    if not API_KEY or request.url.path in OPEN_PATHS:
        return await call_next(request)
    if hmac.compare_digest(request.headers.get("x-api-key", ""), API_KEY):
        return await call_next(request)
    return JSONResponse(status_code=401, content={"detail": "Invalid API key"})


@app.exception_handler(QuizError)
@app.exception_handler(InvalidQuizId)
async def invalid_input_handler(request: Request, exc: ValueError):
    status = 409 if isinstance(exc, NotFullyAnswered) else 422
    logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(
        status_code=status,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


@app.exception_handler(SessionNotFound)
async def session_not_found_handler(request: Request, exc: SessionNotFound):
    return JSONResponse(
        status_code=404, content={"detail": f"Session not found: {exc.args[0]}"}
    )


@app.get("/health")
def health():
    """Liveness check; never needs the API key."""
    return {"status": "ok"}


quiz_store = QuizStore()
sessions = SessionStore()


# --- Request models ---


class GotoRequest(BaseModel):
    index: int


class AnswerRequest(BaseModel):
    selected_index: int


def _view(session: Session) -> dict:
    return quiz_view(
        session.quiz,
        session_id=session.id,
        title=session.title,
        can_undo=session.can_undo(),
    ).model_dump()


def _load_definition(quiz_id: str) -> QuizDefinition:
    try:
        return quiz_store.load(quiz_id)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Quiz not found: {quiz_id}")


def _store_definition(quiz: QuizDefinition) -> dict:
    """Save a definition only if a quiz can be started from it."""
    quiz_size = build_quiz(quiz).size
    quiz_store.save(quiz)
    logger.info("Saved quiz %s (%d questions per run)", quiz.id, quiz_size)
    return quiz.model_dump()


# --- Quiz endpoints ---


@app.get("/api/quizzes")
def list_quizzes():
    """List saved quizzes with their question counts."""
    return quiz_store.list_all()


@app.post("/api/quizzes")
def create_quiz(quiz: QuizDefinition):
    """Validate and save a new quiz."""
    return _store_definition(quiz)


@app.get("/api/quizzes/{quiz_id}")
def get_quiz(quiz_id: str):
    """Load a quiz definition by ID."""
    return _load_definition(quiz_id).model_dump()


@app.put("/api/quizzes/{quiz_id}")
def update_quiz(quiz_id: str, quiz: QuizDefinition):
    """Validate and overwrite the quiz stored under ``quiz_id``."""
    return _store_definition(quiz.model_copy(update={"id": quiz_id}))


@app.delete("/api/quizzes/{quiz_id}")
def delete_quiz(quiz_id: str):
    """Delete a quiz definition. Running sessions keep their questions."""
    quiz_store.delete(quiz_id)
    return {"status": "deleted"}


@app.post("/api/quizzes/{quiz_id}/sessions")
def start_session(quiz_id: str):
    """Start taking a quiz. Returns the first question."""
    definition = _load_definition(quiz_id)
    return _view(sessions.start(definition))


# --- Session endpoints ---


@app.get("/api/sessions/{session_id}")
def get_session(session_id: str):
    """Current state of a running quiz."""
    return _view(sessions.get(session_id))


@app.post("/api/sessions/{session_id}/next")
def next_question(session_id: str):
    """Move to the next question (stays on the last one)."""
    return _view(sessions.next(session_id))


@app.post("/api/sessions/{session_id}/previous")
def previous_question(session_id: str):
    """Move to the previous question (stays on the first one)."""
    return _view(sessions.previous(session_id))


@app.post("/api/sessions/{session_id}/goto")
def goto_question(session_id: str, req: GotoRequest):
    """Jump to a question by zero-based index."""
    return _view(sessions.goto(session_id, req.index))


@app.post("/api/sessions/{session_id}/answer")
def answer_question(session_id: str, req: AnswerRequest):
    """Answer the current question. Answering again is ignored."""
    return _view(sessions.answer(session_id, req.selected_index))


@app.post("/api/sessions/{session_id}/finish")
def finish_quiz(session_id: str):
    """Finish the quiz once every question is answered."""
    return _view(sessions.finish(session_id))


@app.post("/api/sessions/{session_id}/undo")
def undo(session_id: str):
    """Step back to the previous quiz state."""
    return _view(sessions.undo(session_id))


@app.get("/api/sessions/{session_id}/score")
def get_score(session_id: str):
    """Correct answers so far and the question total."""
    return score_view(sessions.get(session_id).quiz).model_dump()


@app.delete("/api/sessions/{session_id}")
def delete_session(session_id: str):
    """Discard a session."""
    sessions.discard(session_id)
    return {"status": "deleted"}


def main():
    """Run the API server."""
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
