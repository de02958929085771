"""Transcript: the chat window of one session.

The transcript is the only thing the bot "draws" on. Agents append bubbles
to it; surfaces (the HTTP API, the terminal chat) read them back or
subscribe to new ones:

    transcript = Transcript()
    transcript.add_listener(print_entry)
    transcript.append_message("hello", "user")
    transcript.show_typing()
    ...
    transcript.remove_typing()

Every append moves `scroll_position` to the newest entry, so a view that
follows it always shows the latest bubble.
"""

import logging
from typing import Callable, List, Optional

from core.content.text import decode_html
from ..models.session_models import TranscriptEntry


logger = logging.getLogger(__name__)

TYPING_TEXT = "Processing..."

Listener = Callable[[TranscriptEntry], None]


class Transcript:
    """Ordered list of chat bubbles with a single transient typing placeholder."""

    def __init__(self) -> None:
        self._entries: List[TranscriptEntry] = []
        self._listeners: List[Listener] = []
        self._next_seq = 1
        self.scroll_position = 0

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def append_message(self, text: str, role: str) -> TranscriptEntry:
        """Append a plain-text bubble for `role` ("user" or "bot")."""
        if role not in ("user", "bot"):
            raise ValueError(f"Unsupported message role: {role!r}")
        return self._append(role=role, text=text)

    def append_source(self, label: str, link: str) -> TranscriptEntry:
        """Append a source-attribution bubble linking to `link`."""
        return self._append(role="source", text=decode_html(label), link=link)

    def show_typing(self) -> Optional[TranscriptEntry]:
        """Show the typing placeholder. No-op if one is already shown."""
        if self.typing_entry is not None:
            return None
        return self._append(role="typing", text=TYPING_TEXT)

    def remove_typing(self) -> None:
        """Remove the typing placeholder if present."""
        typing = self.typing_entry
        if typing is not None:
            self._entries.remove(typing)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @property
    def typing_entry(self) -> Optional[TranscriptEntry]:
        for entry in self._entries:
            if entry.role == "typing":
                return entry
        return None

    @property
    def entries(self) -> List[TranscriptEntry]:
        return list(self._entries)

    @property
    def last_seq(self) -> int:
        return self._next_seq - 1

    def since(self, seq: int) -> List[TranscriptEntry]:
        """Return the entries appended after `seq`, oldest first."""
        return [entry for entry in self._entries if entry.seq > seq]

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    @staticmethod
    def display_text(entry: TranscriptEntry) -> str:
        """Text a view shows for `entry` (source bubbles get their prefix)."""
        if entry.role == "source":
            return f"Source: {entry.text}"
        return entry.text

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _append(self, role: str, text: str, link: Optional[str] = None) -> TranscriptEntry:
        entry = TranscriptEntry(seq=self._next_seq, role=role, text=text, link=link)
        self._next_seq += 1
        self._entries.append(entry)
        self.scroll_position = entry.seq

        for listener in self._listeners:
            try:
                listener(entry)
            except Exception:
                # View errors are logged only.
                logger.exception("[TRANSCRIPT] listener failed for entry seq=%d", entry.seq)
        return entry
