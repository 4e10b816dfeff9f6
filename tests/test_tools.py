"""Tests for the MCP tool functions registered on the server."""

import asyncio

import pytest
from mcp.server.fastmcp import FastMCP

from quizstate.quiz_engine import QuizStore
from quizstate.quiz_models import QuestionDefinition, QuizDefinition
from quizstate.sessions import SessionStore
from quizstate.tools import quiz as quiz_tools
from quizstate.tools import session as session_tools

QUESTIONS = [
    {"text": "2+2?", "options": ["3", "4"], "correct_index": 1},
    {"text": "Sky colour?", "options": ["Blue", "Green"], "correct_index": 0},
]


class ToolRecorder:
    """Stands in for FastMCP and keeps each registered tool by name."""

    def __init__(self):
        self.tools = {}

    def tool(self):
        def decorator(fn):
            self.tools[fn.__name__] = fn
            return fn

        return decorator


@pytest.fixture
def store(tmp_path):
    return QuizStore(directory=tmp_path)


@pytest.fixture
def tools(store):
    recorder = ToolRecorder()
    quiz_tools.register(recorder, store)
    session_tools.register(recorder, store, SessionStore())
    return recorder.tools


@pytest.fixture
def quiz_id(store):
    definition = QuizDefinition(
        title="Tools Quiz",
        questions=[QuestionDefinition(**q) for q in QUESTIONS],
    )
    store.save(definition)
    return definition.id


@pytest.fixture
def session_id(tools, quiz_id):
    return tools["start_quiz"](quiz_id)["session_id"]


def test_registered_on_fastmcp(store):
    mcp = FastMCP("Test")
    quiz_tools.register(mcp, store)
    session_tools.register(mcp, store, SessionStore())
    names = {t.name for t in asyncio.run(mcp.list_tools())}
    assert names == {
        "list_quizzes",
        "save_quiz",
        "start_quiz",
        "show_session",
        "navigate",
        "answer_question",
        "finish_quiz",
        "undo",
        "discard_session",
    }


# --- Question bank ---


class TestQuizTools:
    def test_save_and_list(self, tools, store):
        result = tools["save_quiz"](title="Saved", questions=QUESTIONS, max_questions=1)
        assert result["validation"] == {"questions_per_run": 1}
        quiz_id = result["quiz_definition"]["id"]
        assert store.load(quiz_id).title == "Saved"
        assert tools["list_quizzes"]() == [
            {"id": quiz_id, "title": "Saved", "question_count": 2}
        ]

    def test_overwrite_existing(self, tools, store, quiz_id):
        tools["save_quiz"](title="Renamed", questions=QUESTIONS, quiz_id=quiz_id)
        assert store.load(quiz_id).title == "Renamed"
        assert len(store.list_all()) == 1

    def test_invalid_question_not_saved(self, tools, tmp_path):
        bad = [{"text": "?", "options": ["a", "b"], "correct_index": 2}]
        result = tools["save_quiz"](title="Bad", questions=bad)
        assert result["error"] == "InvalidQuestion"
        assert list(tmp_path.glob("*.json")) == []

    def test_empty_quiz_not_saved(self, tools, tmp_path):
        result = tools["save_quiz"](title="Empty", questions=[])
        assert result["error"] == "EmptyQuiz"
        assert list(tmp_path.glob("*.json")) == []

    def test_unsafe_id_not_saved(self, tools, tmp_path):
        result = tools["save_quiz"](title="Out", questions=QUESTIONS, quiz_id="../escaped")
        assert result["error"] == "InvalidQuizId"
        assert not (tmp_path.parent / "escaped.json").exists()
        assert list(tmp_path.glob("*.json")) == []


# --- Sessions ---


class TestSessionTools:
    def test_full_run(self, tools, session_id):
        view = tools["show_session"](session_id)
        assert view["title"] == "Tools Quiz"
        assert view["current"]["text"] == "2+2?"

        view = tools["answer_question"](session_id, 1)
        assert view["current"]["correct"] is True
        view = tools["navigate"](session_id, "next")
        assert view["current_index"] == 1
        tools["answer_question"](session_id, 1)
        view = tools["navigate"](session_id, "goto", 0)
        assert view["current_index"] == 0

        view = tools["finish_quiz"](session_id)
        assert view["finished"] is True
        assert view["score"] == {"correct": 1, "total": 2}

    def test_previous_and_undo(self, tools, session_id):
        tools["navigate"](session_id, "next")
        assert tools["navigate"](session_id, "previous")["current_index"] == 0
        view = tools["undo"](session_id)
        assert view["current_index"] == 1

    def test_goto_without_index(self, tools, session_id):
        result = tools["navigate"](session_id, "goto")
        assert result == {"error": "IndexOutOfRange", "detail": "goto needs an index"}

    def test_goto_out_of_range(self, tools, session_id):
        assert tools["navigate"](session_id, "goto", 5)["error"] == "IndexOutOfRange"

    def test_invalid_answer(self, tools, session_id):
        assert tools["answer_question"](session_id, 9)["error"] == "InvalidAnswerIndex"

    def test_finish_too_early(self, tools, session_id):
        assert tools["finish_quiz"](session_id)["error"] == "NotFullyAnswered"

    def test_unknown_session(self, tools):
        result = tools["show_session"]("missing")
        assert result["error"] == "SessionNotFound"
        assert "missing" in result["detail"]

    def test_missing_quiz(self, tools):
        assert tools["start_quiz"]("nonexistent")["error"] == "QuizNotFound"

    def test_unsafe_quiz_id(self, tools):
        assert tools["start_quiz"]("../etc/passwd")["error"] == "InvalidQuizId"

    def test_discard_session(self, tools, session_id):
        result = tools["discard_session"](session_id)
        assert result == {"status": "discarded", "session_id": session_id}
        assert tools["show_session"](session_id)["error"] == "SessionNotFound"
