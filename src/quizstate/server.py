"""MCP Server — quiz authoring and quiz-taking tools.

Registers two tool groups on a FastMCP server:
- list_quizzes / save_quiz                        (question bank)
- start_quiz / show_session / navigate /
  answer_question / finish_quiz / undo /
  discard_session                                 (running sessions)
"""

from __future__ import annotations

import argparse
import logging

from mcp.server.fastmcp import FastMCP

from quizstate.quiz_engine import QuizStore
from quizstate.sessions import SessionStore
from quizstate.tools import quiz as quiz_tools
from quizstate.tools import session as session_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

mcp = FastMCP("Quiz State")

# Shared stores used by the tools
quiz_store = QuizStore()
sessions = SessionStore()

quiz_tools.register(mcp, quiz_store)
session_tools.register(mcp, quiz_store, sessions)


def main():
    """Run the MCP server over stdio, SSE or Streamable HTTP."""
    parser = argparse.ArgumentParser(description="Quiz State MCP Server")
    transport = parser.add_mutually_exclusive_group()
    transport.add_argument(
        "--sse",
        type=int,
        metavar="PORT",
        help="Serve over SSE on PORT",
    )
    transport.add_argument(
        "--http",
        type=int,
        metavar="PORT",
        help="Serve over Streamable HTTP on PORT",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every session step",
    )
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info("Quiz definitions in %s", quiz_store.directory)

    if args.sse or args.http:
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = args.sse or args.http
        name = "sse" if args.sse else "streamable-http"
        logger.info("Starting Quiz State MCP server (%s on port %d)", name, mcp.settings.port)
        mcp.run(transport=name)
    else:
        logger.info("Starting Quiz State MCP server (stdio)")
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
