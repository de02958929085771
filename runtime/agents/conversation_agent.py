"""ConversationAgent implementation.

Responsible for:
- starting sessions: drawing the turn limit, prefetching both content
  banks and greeting the user
- taking a new user message and deciding how to respond

Per message:
- blank messages and messages to a terminated session are ignored
- the user's bubble is rendered and the typing placeholder shown
- the TurnController counts the turn and either
    - hands it to a response generator (cat fact or trivia, 50/50), or
    - hands the session to the SessionTerminator when the limit is reached
- the typing placeholder is removed, whatever happened
"""

import asyncio
import logging
import random
from typing import Any, Optional, Tuple

from configs.settings import settings
from core.api.content_client import ContentClient
from core.content.banks import ContentBank
from exceptions.exceptions import SessionNotFoundException
from ..models.api_models import AgentResponse
from ..models.session_models import ChatSession
from ..store.session_store import SessionStore
from .responders import CatFactResponder, TriviaResponder
from .terminator import SessionTerminator
from .turn_controller import TurnController, TurnDecision, draw_turn_limit


logger = logging.getLogger(__name__)


class ConversationAgent:
    """Conversation + decision logic for CatChat.

    Parameters
    ----------
    session_store:
        Store used to create and look up ChatSession objects.
    content_client:
        Client for the cat fact, trivia and on-this-day APIs.
    log_store:
        Store used to log high-level events (optional).
    rng:
        Random source for turn limits, coin flips, dates and links.
        Tests pass a seeded random.Random.
    source_delay:
        Seconds between a bot reply and its source bubble.
    turn_limit_range:
        Inclusive (low, high) bounds for the per-session turn limit.
    greeting:
        First bot bubble of every session.
    """

    def __init__(
        self,
        session_store: SessionStore,
        content_client: ContentClient,
        log_store: Optional[Any] = None,
        rng: Optional[random.Random] = None,
        source_delay: Optional[float] = None,
        turn_limit_range: Optional[Tuple[int, int]] = None,
        greeting: Optional[str] = None,
    ):
        self.session_store = session_store
        self.content_client = content_client
        self.log_store = log_store
        self.rng = rng or random.Random()
        self.source_delay = settings.source_delay if source_delay is None else source_delay
        self.turn_limit_range = turn_limit_range or settings.turn_limit_range
        self.greeting = settings.greeting if greeting is None else greeting

        self.controller = TurnController(self.rng)
        self.cat_responder = CatFactResponder(self.rng, self.source_delay, log_store)
        self.trivia_responder = TriviaResponder(self.rng, self.source_delay, log_store)
        self.terminator = SessionTerminator(content_client, self.rng, self.source_delay, log_store)

    async def start_session(self) -> ChatSession:
        """Create a session, prefetch its content banks and greet the user.

        Both banks are loaded concurrently and are fully populated (or
        left empty on failure) before this returns.
        """
        low, high = self.turn_limit_range
        turn_limit = draw_turn_limit(self.rng, low, high)

        session = self.session_store.create_session(
            turn_limit=turn_limit,
            cat_facts=ContentBank("cat_facts", self.content_client.fetch_cat_facts, self.log_store),
            trivia=ContentBank("trivia", self.content_client.fetch_trivia_questions, self.log_store),
        )

        await asyncio.gather(session.trivia.load(), session.cat_facts.load())

        if self.greeting:
            session.transcript.append_message(self.greeting, "bot")

        logger.info(
            "[AGENT] Session %s started (turn_limit=%d, cat_facts=%d, trivia=%d)",
            session.session_id,
            turn_limit,
            len(session.cat_facts),
            len(session.trivia),
        )
        if self.log_store is not None:
            self.log_store.log_event(
                event_type="session_started",
                payload={"session_id": session.session_id, "turn_limit": turn_limit},
            )
        return session

    def get_session(self, session_id: str) -> ChatSession:
        session = self.session_store.get_session(session_id)
        if session is None:
            raise SessionNotFoundException(session_id)
        return session

    async def handle_user_message(self, session_id: str, message: str) -> AgentResponse:
        """Handle a single user message within the given session.

        Flow:
        - load ChatSession from store
        - ignore blank messages
        - take the session's turn lock; concurrent messages queue here
        - ignore messages after termination
        - render the user bubble and the typing placeholder
        - count the turn; respond or terminate
        - remove the typing placeholder
        - return the entries rendered for this turn
        """
        session = self.get_session(session_id)
        state = session.state
        transcript = session.transcript

        text = (message or "").strip()
        if not text:
            return self._build_response(session, accepted=False, since=transcript.last_seq)

        async with session.turn_lock:
            if not self.controller.accepts_input(state):
                return self._build_response(session, accepted=False, since=transcript.last_seq)

            start_seq = transcript.last_seq
            transcript.append_message(text, "user")
            decision = self.controller.register_turn(state)

            transcript.show_typing()
            try:
                if decision is TurnDecision.TERMINATE:
                    await self.terminator.terminate(session)
                elif self.controller.flip_for_cat_fact():
                    await self.cat_responder.respond(session.cat_facts, transcript, session_id)
                else:
                    await self.trivia_responder.respond(session.trivia, transcript, session_id)
            finally:
                transcript.remove_typing()

            self.session_store.save_session(session)
            return self._build_response(session, accepted=True, since=start_seq)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _build_response(session: ChatSession, accepted: bool, since: int) -> AgentResponse:
        state = session.state
        return AgentResponse(
            session_id=state.session_id,
            accepted=accepted,
            status=state.status,
            turn_count=state.turn_count,
            input_enabled=state.input_enabled,
            input_placeholder=state.input_placeholder,
            entries=session.transcript.since(since),
        )
