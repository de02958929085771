"""
Session-related models for the CatChat runtime.

These describe:
- SessionStatus enum (ACTIVE, TERMINATED)
- SessionState: the per-session counters and input affordance
- TranscriptEntry: one bubble in the chat transcript (user / bot / source / typing)
- ChatSession: everything one chat widget owns (state, transcript, banks)
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Literal, Optional

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from core.content.banks import ContentBank
    from runtime.render.transcript import Transcript


DEFAULT_INPUT_PLACEHOLDER = "Type your message..."
TERMINATED_INPUT_PLACEHOLDER = "Session terminated. Try again later."


class SessionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    TERMINATED = "TERMINATED"


class SessionState(BaseModel):
    session_id: str
    status: SessionStatus = SessionStatus.ACTIVE
    turn_count: int = 0
    turn_limit: int
    input_enabled: bool = True
    input_placeholder: str = DEFAULT_INPUT_PLACEHOLDER
    created_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class TranscriptEntry(BaseModel):
    seq: int
    role: Literal["user", "bot", "source", "typing"]
    text: str
    link: Optional[str] = None  # only set on "source" entries


@dataclass
class ChatSession:
    state: SessionState
    transcript: "Transcript"
    cat_facts: "ContentBank"
    trivia: "ContentBank"
    # One turn at a time per session.
    turn_lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def session_id(self) -> str:
        return self.state.session_id
