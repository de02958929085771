"""Minimal session storage for CatChat.

An in-memory dict of session_id -> ChatSession. Sessions are never
written to disk: a chat lives until the process restarts, the same way
the widget's state lives until a page reload.
"""

from typing import Dict, Optional
from uuid import uuid4

from core.content.banks import ContentBank
from ..models.session_models import ChatSession, SessionState
from ..render.transcript import Transcript


class SessionStore:
    """In-memory session store."""

    def __init__(self) -> None:
        self._sessions: Dict[str, ChatSession] = {}

    def create_session(
        self,
        turn_limit: int,
        cat_facts: ContentBank,
        trivia: ContentBank,
    ) -> ChatSession:
        """Create a new session and return it.

        A newly created session starts with:
        - a random UUID as `session_id`
        - status ACTIVE, turn_count 0, input enabled
        - an empty transcript
        - the given (not yet loaded) content banks
        """
        session_id = str(uuid4())
        session = ChatSession(
            state=SessionState(session_id=session_id, turn_limit=turn_limit),
            transcript=Transcript(),
            cat_facts=cat_facts,
            trivia=trivia,
        )
        self._sessions[session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[ChatSession]:
        """Retrieve an existing session by ID, or None."""
        return self._sessions.get(session_id)

    def save_session(self, session: ChatSession) -> None:
        self._sessions[session.session_id] = session
