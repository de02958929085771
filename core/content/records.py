"""
Record types delivered by the upstream content APIs.

Only the fields the chat bot displays are modelled; anything else the
APIs send (fact length, trivia answers, wikipedia links...) is ignored.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, field_validator


class CatFactRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    fact: str


class TriviaRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    question: str  # HTML-entity-encoded, as served by Open Trivia DB
    category: str


class HistoricalEventRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    description: str
    year: str

    @field_validator("year", mode="before")
    @classmethod
    def _year_as_text(cls, value: Union[str, int]) -> str:
        return str(value)
