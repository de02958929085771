"""ContentBank: in-memory stash of prefetched records.

Each chat session owns two banks (cat facts and trivia questions). A bank
is filled once, right after the session is created, by a single call to
its loader coroutine:

    bank = ContentBank("cat_facts", client.fetch_cat_facts)
    await bank.load()
    record = bank.take()

Records are handed out from the end of the fetched sequence (LIFO), one
per bot turn, and never put back.
"""

import logging
from typing import Any, Awaitable, Callable, Generic, List, Optional, TypeVar

from exceptions.exceptions import BankExhaustedException, ContentFetchException


logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


class ContentBank(Generic[RecordT]):
    """Prefetched records of one kind, consumed one at a time.

    Parameters
    ----------
    name:
        Short identifier used in logs and exceptions (e.g. "cat_facts").
    loader:
        Zero-argument coroutine function returning the records to stash.
        It is expected to raise ContentFetchException when the upstream
        API is unavailable.
    """

    def __init__(
        self,
        name: str,
        loader: Callable[[], Awaitable[List[RecordT]]],
        log_store: Optional[Any] = None,
    ) -> None:
        self.name = name
        self._loader = loader
        self._log_store = log_store
        self._records: List[RecordT] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def is_empty(self) -> bool:
        return not self._records

    async def load(self) -> int:
        """Fetch the records once and replace the bank's contents.

        On any failure the bank is left empty and the error is logged;
        there is no retry and nothing is raised. Returns the number of
        records now held.
        """
        try:
            records = await self._loader()
        except ContentFetchException as exc:
            logger.error("[BANK] %s failed on initial load: %s", self.name, exc)
            self._records = []
            return 0
        except Exception:
            logger.exception("[BANK] %s failed on initial load", self.name)
            self._records = []
            return 0

        self._records = list(records)
        logger.info("[BANK] %s loaded with %d records", self.name, len(self._records))

        if self._log_store is not None:
            self._log_store.log_event(
                event_type="bank_loaded",
                payload={"bank": self.name, "records": len(self._records)},
            )
        return len(self._records)

    def take(self) -> RecordT:
        """Remove and return the last record.

        Raises
        ------
        BankExhaustedException
            If the bank holds no records.
        """
        if not self._records:
            raise BankExhaustedException(self.name)
        return self._records.pop()
