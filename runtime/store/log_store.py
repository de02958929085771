"""
LogStore: append-only event log for CatChat runtime events.

Events are written as one line each through the standard logging module,
on the "catchat.events" logger:

    session_started {"session_id": "...", "turn_limit": 5}

so they end up wherever the process's logging is configured to go.
"""

import json
import logging


class LogStore:
    """Structured event sink backed by `logging`."""

    def __init__(self, logger_name: str = "catchat.events", level: int = logging.INFO):
        self.logger = logging.getLogger(logger_name)
        self.level = level

    def log_event(self, event_type: str, payload: dict) -> None:
        """
        Append an event to the log.

        Logging failures should not affect the conversation, so payloads
        that cannot be serialized are logged with their repr instead.
        """
        try:
            body = json.dumps(payload, ensure_ascii=False, sort_keys=True, default=str)
        except (TypeError, ValueError):
            body = repr(payload)
        self.logger.log(self.level, "%s %s", event_type, body)
