"""
HTTP request/response models for the CatChat runtime API.
"""

from pydantic import BaseModel
from typing import List

from .session_models import SessionStatus, TranscriptEntry


class StartSessionResponse(BaseModel):
    session_id: str
    turn_limit: int
    input_enabled: bool
    input_placeholder: str
    entries: List[TranscriptEntry]


class MessageRequest(BaseModel):
    session_id: str
    message: str


class AgentResponse(BaseModel):
    """
    Result of one user submission.

    accepted:
      - False when the submission had no effect (blank message, or the
        session is already terminated). entries is then empty.
      - True otherwise; entries holds everything rendered for this turn
        (the user's bubble, the bot reply and its source bubble, or the
        termination message).
    """
    session_id: str
    accepted: bool
    status: SessionStatus
    turn_count: int
    input_enabled: bool
    input_placeholder: str
    entries: List[TranscriptEntry]


class TranscriptResponse(BaseModel):
    session_id: str
    status: SessionStatus
    turn_count: int
    input_enabled: bool
    input_placeholder: str
    entries: List[TranscriptEntry]
