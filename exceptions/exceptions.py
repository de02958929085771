"""
Custom exceptions for CatChat.

These exceptions are intentionally simple and descriptive.
They are used across:

  - core/api/        (upstream content fetches)
  - core/content/    (content banks)
  - runtime/         (agents, stores, HTTP routes)

Placing them at the project root (exceptions/) avoids circular imports
and keeps exception types consistent across modules.
"""


class ContentFetchException(Exception):
    """
    Raised when an upstream content API cannot deliver usable records.

    Covers network errors, non-success HTTP statuses and payloads that do
    not have the expected shape.
    """

    def __init__(self, source, details=None):
        self.source = source
        self.details = details or "Content fetch failed."
        msg = f"Could not fetch content from {source}: {self.details}"
        super().__init__(msg)


class BankExhaustedException(Exception):
    """
    Raised when a record is requested from an empty content bank.
    """

    def __init__(self, bank_name):
        self.bank_name = bank_name
        super().__init__(f"Content bank '{bank_name}' is empty.")


class SessionNotFoundException(Exception):
    """
    Raised when a session_id does not match any live chat session.
    """

    def __init__(self, session_id):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")
