import asyncio
import random

from core.content.banks import ContentBank
from core.content.links import HARMLESS_LINKS
from core.content.records import CatFactRecord, TriviaRecord
from runtime.agents.responders import (
    CAT_FACT_FALLBACK,
    TRIVIA_FALLBACK,
    CatFactResponder,
    TriviaResponder,
)
from runtime.render.transcript import Transcript


def _bank(name, records):
    async def load():
        return records

    bank = ContentBank(name, load)
    asyncio.run(bank.load())
    return bank


def test_cat_fact_reply_then_source_bubble():
    bank = _bank("cat_facts", [CatFactRecord(fact="Cats have five toes on their front paws.")])
    transcript = Transcript()

    used = asyncio.run(CatFactResponder(random.Random(1), source_delay=0).respond(bank, transcript))

    assert used is True
    bot, source = transcript.entries
    assert (bot.role, bot.text) == ("bot", "Cats have five toes on their front paws.")
    assert (source.role, source.text) == ("source", "The Cat's Meow")
    assert source.link in HARMLESS_LINKS
    assert bank.is_empty


def test_trivia_question_and_category_are_decoded():
    bank = _bank(
        "trivia",
        [TriviaRecord(question="Who wrote &quot;Hamlet&quot;?", category="Art &amp; Literature")],
    )
    transcript = Transcript()

    asyncio.run(TriviaResponder(random.Random(1), source_delay=0).respond(bank, transcript))

    bot, source = transcript.entries
    assert bot.text == 'Who wrote "Hamlet"?'
    assert source.text == "Category: Art & Literature"


def test_empty_cat_bank_renders_literal_fallback_without_source():
    bank = _bank("cat_facts", [])
    transcript = Transcript()

    used = asyncio.run(CatFactResponder(source_delay=0).respond(bank, transcript))

    assert used is False
    assert [(e.role, e.text) for e in transcript.entries] == [
        ("bot", "My cat-fact-retriever is napping. Here's one: Cats are liquid."),
    ]
    assert CAT_FACT_FALLBACK == "My cat-fact-retriever is napping. Here's one: Cats are liquid."


def test_empty_trivia_bank_renders_trivia_fallback():
    transcript = Transcript()
    asyncio.run(TriviaResponder(source_delay=0).respond(_bank("trivia", []), transcript))

    assert [e.text for e in transcript.entries] == [TRIVIA_FALLBACK]


def test_bank_of_n_serves_n_replies_then_falls_back():
    records = [CatFactRecord(fact=f"fact {i}") for i in range(3)]
    bank = _bank("cat_facts", records)
    transcript = Transcript()
    responder = CatFactResponder(random.Random(5), source_delay=0)

    results = [asyncio.run(responder.respond(bank, transcript)) for _ in range(4)]

    assert results == [True, True, True, False]
    bot_texts = [e.text for e in transcript.entries if e.role == "bot"]
    assert bot_texts == ["fact 2", "fact 1", "fact 0", CAT_FACT_FALLBACK]
    assert sum(1 for e in transcript.entries if e.role == "source") == 3


def test_record_handling_error_is_treated_like_an_empty_bank(caplog):
    class BrokenResponder(CatFactResponder):
        def render_record(self, record):
            raise KeyError("fact")

    bank = _bank("cat_facts", [CatFactRecord(fact="never shown")])
    transcript = Transcript()

    with caplog.at_level("ERROR"):
        used = asyncio.run(BrokenResponder(source_delay=0).respond(bank, transcript))

    assert used is False
    assert [e.text for e in transcript.entries] == [CAT_FACT_FALLBACK]
    assert "Error in cat_facts responder" in caplog.text


def test_source_waits_for_the_delay():
    bank = _bank("cat_facts", [CatFactRecord(fact="Purr.")])
    transcript = Transcript()
    snapshots = []

    async def scenario():
        task = asyncio.create_task(CatFactResponder(source_delay=0.05).respond(bank, transcript))
        await asyncio.sleep(0.01)
        snapshots.append([e.role for e in transcript.entries])
        await task
        snapshots.append([e.role for e in transcript.entries])

    asyncio.run(scenario())

    assert snapshots == [["bot"], ["bot", "source"]]
