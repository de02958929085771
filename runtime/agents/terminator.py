"""SessionTerminator: the final bot turn.

Picks a random calendar date, asks the on-this-day service what happened
then, and turns one of those events into a "try again when..." excuse.
Whatever the service does, the session's input is disabled afterwards.
"""

import asyncio
import logging
import random
from typing import Any, Optional

from core.api.content_client import ContentClient
from core.content.links import pick_distraction_link
from exceptions.exceptions import ContentFetchException
from ..models.session_models import ChatSession, SessionStatus, TERMINATED_INPUT_PLACEHOLDER


logger = logging.getLogger(__name__)

TERMINATION_FALLBACK = "SESSION TERMINATED. Try again when the singularity occurs. Goodbye."


class SessionTerminator:
    def __init__(
        self,
        content_client: ContentClient,
        rng: Optional[random.Random] = None,
        source_delay: float = 0.6,
        log_store: Optional[Any] = None,
    ) -> None:
        self.content_client = content_client
        self.rng = rng or random.Random()
        self.source_delay = source_delay
        self.log_store = log_store

    def draw_date(self):
        # Day is capped at 28 so every month is valid.
        month = self.rng.randint(1, 12)
        day = self.rng.randint(1, 28)
        return month, day

    async def terminate(self, session: ChatSession) -> bool:
        """Render the termination message and disable the session's input.

        Returns True if a historical event was used, False on fallback.
        """
        transcript = session.transcript
        used_event = False
        month, day = self.draw_date()

        try:
            try:
                events = await self.content_client.fetch_history_events(month, day)
            except ContentFetchException as exc:
                logger.error("[TERMINATOR] On this day API failed: %s", exc)
                events = []
            except Exception:
                logger.exception("[TERMINATOR] On this day API failed")
                events = []

            if not events:
                logger.warning("[TERMINATOR] No usable event for %d/%d; using fallback.", month, day)
                transcript.append_message(TERMINATION_FALLBACK, "bot")
            else:
                event = self.rng.choice(events)
                transcript.append_message(
                    f"Session Terminated. Try again when {event.description}.",
                    "bot",
                )
                used_event = True
                await asyncio.sleep(self.source_delay)
                transcript.append_source(f"The Year {event.year}", pick_distraction_link(self.rng))
        finally:
            self._disable_input(session)

        if self.log_store is not None:
            self.log_store.log_event(
                event_type="session_terminated",
                payload={
                    "session_id": session.session_id,
                    "turn_count": session.state.turn_count,
                    "date": f"{month}/{day}",
                    "fallback": not used_event,
                },
            )
        return used_event

    @staticmethod
    def _disable_input(session: ChatSession) -> None:
        state = session.state
        state.status = SessionStatus.TERMINATED
        state.input_enabled = False
        state.input_placeholder = TERMINATED_INPUT_PLACEHOLDER
