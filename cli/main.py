#!/usr/bin/env python3
"""
CatChat CLI

Two ways to talk to the bot:

1) chat
   - Run the chat widget right in the terminal: greeting, then a prompt
     loop that prints bot bubbles as they are rendered. The loop ends
     when the bot terminates the session (or on EOF / Ctrl-C).

2) serve
   - Start the HTTP runtime with uvicorn, equivalent to:

       uvicorn runtime.api.server:app --reload
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

# Ensure project root is on sys.path when running as a script
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from configs.settings import settings
from core.api.content_client import ContentClient
from runtime.agents.conversation_agent import ConversationAgent
from runtime.models.session_models import TranscriptEntry
from runtime.render.transcript import Transcript
from runtime.store.log_store import LogStore
from runtime.store.session_store import SessionStore


PROMPT = "you> "


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def format_entry(entry: TranscriptEntry) -> Optional[str]:
    """Terminal rendering of one transcript entry (None = print nothing)."""
    if entry.role in ("user", "typing"):
        # User text is already on screen; the typing placeholder is transient.
        return None
    if entry.role == "source":
        return f"     {Transcript.display_text(entry)} <{entry.link}>"
    return f"bot> {entry.text}"


def _print_entry(entry: TranscriptEntry) -> None:
    line = format_entry(entry)
    if line is not None:
        print(line, flush=True)


# ---------------------------------------------------------------------------
# chat – interactive terminal widget
# ---------------------------------------------------------------------------


async def run_chat(
    agent: ConversationAgent,
    read_line: Callable[[str], str] = input,
) -> int:
    """
    Drive one chat session from the terminal.

    Returns the number of turns the session accepted.
    """
    session = await agent.start_session()
    for entry in session.transcript.entries:
        _print_entry(entry)
    session.transcript.add_listener(_print_entry)

    while session.state.input_enabled:
        try:
            # Read on the loop thread so Ctrl-C lands here.
            line = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            print("[CatChat] Bye.")
            break

        await agent.handle_user_message(session.session_id, line)

    if not session.state.input_enabled:
        print(f"[CatChat] {session.state.input_placeholder}")
    return session.state.turn_count


def cmd_chat() -> None:
    agent = ConversationAgent(
        session_store=SessionStore(),
        content_client=ContentClient(),
        log_store=LogStore(),
    )
    print("[CatChat] Fetching fresh cat facts and trivia...")
    try:
        asyncio.run(run_chat(agent))
    except KeyboardInterrupt:
        print("\n[CatChat] Bye.")


# ---------------------------------------------------------------------------
# serve – HTTP runtime
# ---------------------------------------------------------------------------


def cmd_serve(host: str, port: int, reload: bool) -> None:
    import uvicorn

    print(f"[CatChat] Starting runtime on http://{host}:{port}/chat")
    uvicorn.run(
        "runtime.api.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CatChat CLI")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: CATCHAT_LOG_LEVEL or 'INFO')",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("chat", help="Chat with the bot in this terminal")

    p_serve = subparsers.add_parser("serve", help="Start the HTTP runtime with uvicorn")
    p_serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    p_serve.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    command: str = args.command

    if command == "chat":
        cmd_chat()
    elif command == "serve":
        cmd_serve(host=args.host, port=args.port, reload=args.reload)
    else:
        parser.error(f"Unknown command: {command}")


if __name__ == "__main__":
    main()
