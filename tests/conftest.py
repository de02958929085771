from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import random
from typing import List, Optional

import httpx
import pytest

from core.api.content_client import ContentClient
from runtime.agents.conversation_agent import ConversationAgent
from runtime.store.log_store import LogStore
from runtime.store.session_store import SessionStore


CAT_FACTS_URL = "https://catfacts.test/facts?limit=10"
TRIVIA_URL = "https://trivia.test/api.php?amount=10"
HISTORY_URL_TEMPLATE = "https://history.test/on-this-day/{month}/{day}/events.json"

CAT_FACTS_PAYLOAD = {
    "current_page": 1,
    "data": [
        {"fact": "A group of cats is called a clowder.", "length": 36},
        {"fact": "Cats sleep for around 13 to 16 hours a day.", "length": 43},
    ],
}

TRIVIA_PAYLOAD = {
    "response_code": 0,
    "results": [
        {
            "type": "multiple",
            "difficulty": "easy",
            "category": "Science &amp; Nature",
            "question": "What is the chemical symbol for &quot;gold&quot;?",
            "correct_answer": "Au",
            "incorrect_answers": ["Ag", "Gd", "Go"],
        },
        {
            "type": "boolean",
            "difficulty": "medium",
            "category": "Animals",
            "question": "A cat&#039;s nose print is unique.",
            "correct_answer": "True",
            "incorrect_answers": ["False"],
        },
    ],
}

HISTORY_PAYLOAD = {
    "wikipedia": "https://wikipedia.org/wiki/May_4",
    "date": "May 4",
    "events": [
        {"year": "1979", "description": "Margaret Thatcher becomes Prime Minister", "wikipedia": []},
    ],
}


class FakeContentAPI:
    """httpx.MockTransport handler serving the three content endpoints.

    `responses` maps an endpoint name ("cat_facts", "trivia", "history") to
    either a JSON payload, an int status code, or an exception instance to
    raise.
    """

    def __init__(self, **responses) -> None:
        self.responses = {
            "cat_facts": CAT_FACTS_PAYLOAD,
            "trivia": TRIVIA_PAYLOAD,
            "history": HISTORY_PAYLOAD,
        }
        self.responses.update(responses)
        self.requests: List[httpx.Request] = []

    def _endpoint(self, request: httpx.Request) -> str:
        host = request.url.host
        if host == "catfacts.test":
            return "cat_facts"
        if host == "trivia.test":
            return "trivia"
        if host == "history.test":
            return "history"
        raise AssertionError(f"Unexpected request: {request.url}")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses[self._endpoint(request)]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, int):
            return httpx.Response(response, json={"error": "nope"})
        return httpx.Response(200, json=response)

    def paths(self, endpoint: str) -> List[str]:
        return [r.url.path for r in self.requests if self._endpoint(r) == endpoint]


class FixedCoin(random.Random):
    """Random source whose coin flips always land the same way."""

    def __init__(self, value: float, seed: int = 7) -> None:
        super().__init__(seed)
        self.value = value

    def random(self) -> float:
        return self.value


def make_client(api: FakeContentAPI) -> ContentClient:
    return ContentClient(
        cat_facts_url=CAT_FACTS_URL,
        trivia_url=TRIVIA_URL,
        history_url_template=HISTORY_URL_TEMPLATE,
        timeout=1.0,
        transport=httpx.MockTransport(api),
    )


def make_agent(
    api: FakeContentAPI,
    turn_limit: int = 3,
    rng: Optional[random.Random] = None,
) -> ConversationAgent:
    return ConversationAgent(
        session_store=SessionStore(),
        content_client=make_client(api),
        log_store=LogStore(),
        rng=rng or random.Random(1234),
        source_delay=0,
        turn_limit_range=(turn_limit, turn_limit),
        greeting="Hello!",
    )


@pytest.fixture
def api() -> FakeContentAPI:
    return FakeContentAPI()

