from __future__ import annotations

import os
from typing import Tuple

from dotenv import load_dotenv


load_dotenv()


DEFAULT_CAT_FACTS_URL = "https://catfact.ninja/facts?limit=10"
DEFAULT_TRIVIA_URL = "https://opentdb.com/api.php?amount=10"
DEFAULT_HISTORY_URL_TEMPLATE = "https://byabbe.se/on-this-day/{month}/{day}/events.json"
DEFAULT_GREETING = "Hi! I'm CatChat. Ask me anything."


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Settings:
    """
    Central configuration for CatChat.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties.
    """

    def __init__(self) -> None:
        # Upstream content APIs
        self._cat_facts_url = os.getenv("CATCHAT_CAT_FACTS_URL", DEFAULT_CAT_FACTS_URL)
        self._trivia_url = os.getenv("CATCHAT_TRIVIA_URL", DEFAULT_TRIVIA_URL)
        self._history_url_template = os.getenv(
            "CATCHAT_HISTORY_URL_TEMPLATE",
            DEFAULT_HISTORY_URL_TEMPLATE,
        )
        self._http_timeout = _env_float("CATCHAT_HTTP_TIMEOUT", 10.0)

        # Conversation behavior
        self._source_delay_ms = _env_int("CATCHAT_SOURCE_DELAY_MS", 600)
        self._min_turns = _env_int("CATCHAT_MIN_TURNS", 3)
        self._max_turns = _env_int("CATCHAT_MAX_TURNS", 10)
        self._greeting = os.getenv("CATCHAT_GREETING", DEFAULT_GREETING)

        self._log_level = os.getenv("CATCHAT_LOG_LEVEL", "INFO").upper()

    # ------------------------------------------------------------------
    # Content APIs
    # ------------------------------------------------------------------

    @property
    def cat_facts_url(self) -> str:
        return self._cat_facts_url

    @property
    def trivia_url(self) -> str:
        return self._trivia_url

    @property
    def history_url_template(self) -> str:
        return self._history_url_template

    @property
    def http_timeout(self) -> float:
        return self._http_timeout

    # ------------------------------------------------------------------
    # Conversation
    # ------------------------------------------------------------------

    @property
    def source_delay(self) -> float:
        """Delay between a bot reply and its source bubble, in seconds."""
        return max(0, self._source_delay_ms) / 1000.0

    @property
    def turn_limit_range(self) -> Tuple[int, int]:
        if self._min_turns < 1 or self._min_turns > self._max_turns:
            raise RuntimeError(
                "Invalid turn limit range: CATCHAT_MIN_TURNS="
                f"{self._min_turns}, CATCHAT_MAX_TURNS={self._max_turns}. "
                "Expected 1 <= min <= max."
            )
        return self._min_turns, self._max_turns

    @property
    def greeting(self) -> str:
        return self._greeting

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    @property
    def log_level(self) -> str:
        return self._log_level


settings = Settings()
