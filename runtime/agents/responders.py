"""Response generators for normal (non-final) bot turns.

Each generator pulls one record from its content bank and renders it:

1. the primary text, immediately
2. after `source_delay` seconds, a source bubble with an attribution label
   and a random distraction link

When the bank is empty, or anything goes wrong handling the record, a
fixed in-character fallback sentence is rendered instead and no source
bubble follows.
"""

import asyncio
import logging
import random
from typing import Any, Optional, Tuple

from core.content.banks import ContentBank
from core.content.links import pick_distraction_link
from core.content.records import CatFactRecord, TriviaRecord
from core.content.text import decode_html
from exceptions.exceptions import BankExhaustedException
from ..render.transcript import Transcript


logger = logging.getLogger(__name__)

CAT_FACT_FALLBACK = "My cat-fact-retriever is napping. Here's one: Cats are liquid."
TRIVIA_FALLBACK = "My question-generator is on strike. Is a hotdog a sandwich? Debate."


class ResponseGenerator:
    """Base class: subclasses define `name`, `fallback_text` and `render_record`."""

    name = "generic"
    fallback_text = ""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        source_delay: float = 0.6,
        log_store: Optional[Any] = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.source_delay = source_delay
        self.log_store = log_store

    def render_record(self, record: Any) -> Tuple[str, str]:
        """Return (primary text, source label) for one record."""
        raise NotImplementedError

    async def respond(self, bank: ContentBank, transcript: Transcript, session_id: str = "") -> bool:
        """Render one reply from `bank` into `transcript`.

        Returns True if a record was used, False if the fallback was shown.
        Never raises for bank or record problems.
        """
        try:
            record = bank.take()
            text, label = self.render_record(record)
        except BankExhaustedException:
            logger.error("[RESPONDER] %s bank is empty.", self.name)
            return self._fallback(transcript, session_id, reason="bank_empty")
        except Exception:
            logger.exception("[RESPONDER] Error in %s responder", self.name)
            return self._fallback(transcript, session_id, reason="error")

        transcript.append_message(text, "bot")
        await asyncio.sleep(self.source_delay)
        transcript.append_source(label, pick_distraction_link(self.rng))

        if self.log_store is not None:
            self.log_store.log_event(
                event_type="response_sent",
                payload={"session_id": session_id, "kind": self.name},
            )
        return True

    def _fallback(self, transcript: Transcript, session_id: str, reason: str) -> bool:
        transcript.append_message(self.fallback_text, "bot")
        if self.log_store is not None:
            self.log_store.log_event(
                event_type="fallback_sent",
                payload={"session_id": session_id, "kind": self.name, "reason": reason},
            )
        return False


class CatFactResponder(ResponseGenerator):
    name = "cat_facts"
    fallback_text = CAT_FACT_FALLBACK

    def render_record(self, record: CatFactRecord) -> Tuple[str, str]:
        return record.fact, "The Cat's Meow"


class TriviaResponder(ResponseGenerator):
    name = "trivia"
    fallback_text = TRIVIA_FALLBACK

    def render_record(self, record: TriviaRecord) -> Tuple[str, str]:
        return decode_html(record.question), f"Category: {record.category}"
