"""
FastAPI application entry point for the CatChat runtime.

Responsibilities:
- create the FastAPI app
- construct shared singletons (SessionStore, LogStore, ContentClient, ConversationAgent)
- include chat routes under /chat

Run with:

    uvicorn runtime.api.server:app --reload
"""

from typing import Optional

from fastapi import FastAPI

from core.api.content_client import ContentClient
from runtime.agents.conversation_agent import ConversationAgent
from runtime.store.log_store import LogStore
from runtime.store.session_store import SessionStore
from . import session_routes


def build_app(
    content_client: Optional[ContentClient] = None,
    conversation_agent: Optional[ConversationAgent] = None,
) -> FastAPI:
    """Wire the shared objects together and return a ready FastAPI app.

    Tests pass a ContentClient backed by httpx.MockTransport, or a fully
    configured ConversationAgent.
    """
    if conversation_agent is None:
        conversation_agent = ConversationAgent(
            session_store=SessionStore(),
            content_client=content_client or ContentClient(),
            log_store=LogStore(),
        )

    app = FastAPI(title="CatChat Runtime")

    # Initialize the router module with our shared objects, then include it.
    session_routes.init_routes(conversation_agent=conversation_agent)
    app.include_router(session_routes.router, prefix="/chat")
    return app


app = build_app()
