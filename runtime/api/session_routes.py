"""HTTP routes for interacting with the CatChat runtime.

Exposes endpoints like:

- POST /chat/start_session                   -> new session, greeting included
- POST /chat/message                         -> takes (session_id, message) and
                                                returns the bubbles rendered for
                                                that turn
- GET  /chat/sessions/{session_id}/transcript -> full transcript + state
- GET  /chat/healthz
"""

import logging

from fastapi import APIRouter, HTTPException
from typing import Optional

from exceptions.exceptions import SessionNotFoundException
from ..models.api_models import (
    StartSessionResponse,
    MessageRequest,
    AgentResponse,
    TranscriptResponse,
)
from ..agents.conversation_agent import ConversationAgent


logger = logging.getLogger(__name__)

# Router for all chat-related endpoints
router = APIRouter()


# Module-level reference, to be initialized by the server.
_CONVERSATION_AGENT: Optional[ConversationAgent] = None


def init_routes(conversation_agent: ConversationAgent) -> None:
    """Initialize module-level references used by the route handlers."""
    global _CONVERSATION_AGENT
    _CONVERSATION_AGENT = conversation_agent


def _require_conversation_agent() -> ConversationAgent:
    if _CONVERSATION_AGENT is None:
        raise HTTPException(
            status_code=500,
            detail="ConversationAgent is not configured on the server.",
        )
    return _CONVERSATION_AGENT


@router.post("/start_session", response_model=StartSessionResponse)
async def start_session() -> StartSessionResponse:
    """Create a new chat session and return its ID plus the greeting.

    Both content banks are prefetched before this returns, so the first
    message can already be answered from them.
    """
    agent = _require_conversation_agent()
    session = await agent.start_session()
    state = session.state
    return StartSessionResponse(
        session_id=state.session_id,
        turn_limit=state.turn_limit,
        input_enabled=state.input_enabled,
        input_placeholder=state.input_placeholder,
        entries=session.transcript.entries,
    )


@router.post("/message", response_model=AgentResponse)
async def handle_message(request: MessageRequest) -> AgentResponse:
    """Handle a single user message within a session.

    Submissions to a terminated session, or blank ones, come back with
    accepted=false and no entries.
    """
    try:
        agent = _require_conversation_agent()
        try:
            return await agent.handle_user_message(
                session_id=request.session_id,
                message=request.message,
            )
        except SessionNotFoundException:
            raise HTTPException(status_code=404, detail="Session not found")

    except HTTPException as e:
        logger.warning(
            "[CHAT] HTTP %s for session_id=%s message=%r reason=%r",
            e.status_code,
            request.session_id,
            request.message,
            e.detail,
        )
        raise

    except Exception:
        logger.exception(
            "[CHAT] Unexpected error for session_id=%s message=%r",
            request.session_id,
            request.message,
        )
        raise


@router.get("/sessions/{session_id}/transcript", response_model=TranscriptResponse)
def get_transcript(session_id: str) -> TranscriptResponse:
    agent = _require_conversation_agent()
    try:
        session = agent.get_session(session_id)
    except SessionNotFoundException:
        logger.warning("[CHAT] Transcript requested for unknown session_id=%s", session_id)
        raise HTTPException(status_code=404, detail="Session not found")

    state = session.state
    return TranscriptResponse(
        session_id=state.session_id,
        status=state.status,
        turn_count=state.turn_count,
        input_enabled=state.input_enabled,
        input_placeholder=state.input_placeholder,
        entries=session.transcript.entries,
    )


# --------------------------------------------------------
# Endpoint: GET /healthz
# --------------------------------------------------------
@router.get("/healthz")
def health_check():
    """
    Simple health check endpoint for uptime monitoring.
    """
    return {"status": "ok"}
