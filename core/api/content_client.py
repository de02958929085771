"""
core.api.content_client

Thin async wrapper around the three public APIs CatChat pulls content from:

  - catfact.ninja          (cat facts, prefetched per session)
  - Open Trivia DB         (trivia questions, prefetched per session)
  - byabbe.se on-this-day  (historical events, fetched at session end)

Every call returns validated record models or raises
ContentFetchException; callers never see raw httpx errors. Malformed
items inside an otherwise valid list are logged and skipped.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from configs.settings import settings
from core.content.records import CatFactRecord, HistoricalEventRecord, TriviaRecord
from exceptions.exceptions import ContentFetchException


logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


# -------------------------------------------------------------------
# Internal helpers
# -------------------------------------------------------------------


def _parse_records(
    source: str,
    payload: Any,
    key: str,
    model: Type[RecordT],
) -> List[RecordT]:
    """
    Pull the list stored under `key` out of a JSON payload and validate
    each item against `model`.

    Items that do not validate are logged and skipped; only a missing or
    non-list `key` fails the whole payload.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get(key), list):
        raise ContentFetchException(source, f"Payload has no '{key}' list.")

    records: List[RecordT] = []
    for index, item in enumerate(payload[key]):
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "[CONTENT] Skipping malformed %s record #%d: %s",
                source,
                index,
                e.errors(include_url=False),
            )
    return records


# -------------------------------------------------------------------
# Client
# -------------------------------------------------------------------


class ContentClient:
    """
    Fetches cat facts, trivia questions and historical events.

    Parameters
    ----------
    cat_facts_url, trivia_url, history_url_template:
        Endpoint overrides. Default to the values in configs.settings.
        The history template is formatted with `month` and `day`.
    timeout:
        Per-request timeout in seconds.
    transport:
        Optional httpx transport; tests pass an httpx.MockTransport.
    """

    def __init__(
        self,
        cat_facts_url: Optional[str] = None,
        trivia_url: Optional[str] = None,
        history_url_template: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.cat_facts_url = cat_facts_url or settings.cat_facts_url
        self.trivia_url = trivia_url or settings.trivia_url
        self.history_url_template = history_url_template or settings.history_url_template
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._transport = transport

    async def _get_json(self, source: str, url: str) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise ContentFetchException(source, f"{type(e).__name__}: {e}")

        if not response.is_success:
            raise ContentFetchException(source, f"API returned status {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise ContentFetchException(source, f"Response is not JSON: {e}")

    async def fetch_cat_facts(self) -> List[CatFactRecord]:
        payload = await self._get_json("cat facts", self.cat_facts_url)
        return _parse_records("cat facts", payload, "data", CatFactRecord)

    async def fetch_trivia_questions(self) -> List[TriviaRecord]:
        payload = await self._get_json("trivia", self.trivia_url)
        return _parse_records("trivia", payload, "results", TriviaRecord)

    async def fetch_history_events(self, month: int, day: int) -> List[HistoricalEventRecord]:
        url = self.history_url_template.format(month=month, day=day)
        payload = await self._get_json("on this day", url)
        return _parse_records("on this day", payload, "events", HistoricalEventRecord)
