"""Turn counting and the ACTIVE -> TERMINATED transition.

A session accepts a random number of turns, drawn once when it starts.
The controller only decides what a submission should lead to; the
ConversationAgent carries the decision out.
"""

import random
from enum import Enum

from ..models.session_models import SessionState, SessionStatus


class TurnDecision(str, Enum):
    IGNORE = "ignore"        # session already over; nothing happens
    RESPOND = "respond"      # normal bot reply
    TERMINATE = "terminate"  # limit reached; end the session


def draw_turn_limit(rng: random.Random, low: int = 3, high: int = 10) -> int:
    """Draw the session's turn limit uniformly from [low, high]."""
    return rng.randint(low, high)


class TurnController:
    """Two-state machine over a SessionState.

    TERMINATED is absorbing: once entered, every later submission is
    ignored and turn_count stops moving.
    """

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    @staticmethod
    def accepts_input(state: SessionState) -> bool:
        return state.status is SessionStatus.ACTIVE and state.input_enabled

    def register_turn(self, state: SessionState) -> TurnDecision:
        if not self.accepts_input(state):
            return TurnDecision.IGNORE

        state.turn_count += 1
        if state.turn_count >= state.turn_limit:
            state.status = SessionStatus.TERMINATED
            return TurnDecision.TERMINATE
        return TurnDecision.RESPOND

    def flip_for_cat_fact(self) -> bool:
        """Unweighted coin flip: True picks a cat fact, False a trivia question."""
        return self.rng.random() > 0.5
