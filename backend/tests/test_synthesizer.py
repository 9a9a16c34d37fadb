import pytest

from soulchat.models.search import SearchOutcome
from soulchat.services.search_gateway import NOT_CONFIGURED, SearchGateway
from soulchat.services.synthesizer import (
    NEWS_FALLBACK,
    NOT_ENOUGH_INFO_REPLY,
    SEARCH_FAILED_FALLBACK,
    WEATHER_FALLBACK,
    ResponseSynthesizer,
)


class GatewayStub:
    def __init__(self, outcome=None, error=None):
        self.outcome = outcome
        self.error = error
        self.queries = []

    async def search(self, query):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.outcome


@pytest.mark.asyncio
async def test_greeting_status_reply_without_search():
    gateway = GatewayStub()
    reply = await ResponseSynthesizer(gateway).synthesize("How are you")
    assert reply.startswith("I'm functioning well")
    assert gateway.queries == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "message,expected_start",
    [
        ("hi", "Hello! It's nice to chat with you."),
        ("hello there", "Hello! It's nice to chat with you."),
        ("thanks!", "You're welcome!"),
        ("what is your name", "I'm an AI assistant"),
        ("what can you do", "I can help you with a variety of tasks"),
        ("  HI  ", "Hello! It's nice to chat with you."),
        ("thank you delhi", "You're welcome!"),
    ],
)
async def test_local_replies(message, expected_start):
    reply = await ResponseSynthesizer(GatewayStub()).synthesize(message)
    assert reply.startswith(expected_start)


@pytest.mark.asyncio
async def test_unmatched_local_message_gets_rephrase_hint():
    reply = await ResponseSynthesizer(GatewayStub()).synthesize("ok")
    assert reply == NOT_ENOUGH_INFO_REPLY


@pytest.mark.asyncio
async def test_search_result_returned_verbatim():
    gateway = GatewayStub(SearchOutcome(success=True, result_text="Paris is the capital."))
    reply = await ResponseSynthesizer(gateway).synthesize("What is the capital of France")
    assert reply == "Paris is the capital."
    assert gateway.queries == ["What is the capital of France"]


@pytest.mark.asyncio
async def test_weather_fallback():
    gateway = GatewayStub(SearchOutcome(success=False, error_message="boom"))
    reply = await ResponseSynthesizer(gateway).synthesize("what is the weather in Paris")
    assert reply == WEATHER_FALLBACK


@pytest.mark.asyncio
async def test_news_fallback():
    gateway = GatewayStub(SearchOutcome(success=False, error_message="boom"))
    reply = await ResponseSynthesizer(gateway).synthesize("latest news on elections")
    assert reply == NEWS_FALLBACK


@pytest.mark.asyncio
async def test_generic_fallback_echoes_error():
    reply = await ResponseSynthesizer(SearchGateway(api_key=None)).synthesize(
        "What is the capital of France"
    )
    assert reply == SEARCH_FAILED_FALLBACK.format(error=NOT_CONFIGURED)
    assert NOT_CONFIGURED in reply


@pytest.mark.asyncio
async def test_generic_fallback_without_error_message():
    gateway = GatewayStub(SearchOutcome(success=False))
    reply = await ResponseSynthesizer(gateway).synthesize("tell me about dinosaurs")
    assert "couldn't find relevant information" in reply


@pytest.mark.asyncio
async def test_success_without_text_falls_back():
    gateway = GatewayStub(SearchOutcome(success=True, result_text=""))
    reply = await ResponseSynthesizer(gateway).synthesize("tell me about dinosaurs")
    assert reply.startswith("I tried to search the internet")


@pytest.mark.asyncio
async def test_unexpected_gateway_error_degrades():
    gateway = GatewayStub(error=RuntimeError("kaboom"))
    reply = await ResponseSynthesizer(gateway).synthesize("tell me about dinosaurs")
    assert "An unexpected error occurred during search" in reply


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "message",
    ["hi", "banana", "ok", "x", "?", "   spaces   ", "what is the weather", "NEWS", "thank"],
)
async def test_always_replies(message):
    reply = await ResponseSynthesizer(SearchGateway(api_key=None)).synthesize(message)
    assert isinstance(reply, str)
    assert reply.strip()


@pytest.mark.asyncio
async def test_rule_table_evaluated_once(monkeypatch):
    from soulchat.services import synthesizer

    calls = []
    real_match_rule = synthesizer.match_rule

    def counting_match_rule(message):
        calls.append(message)
        return real_match_rule(message)

    monkeypatch.setattr(synthesizer, "match_rule", counting_match_rule)

    await ResponseSynthesizer(GatewayStub()).synthesize("How are you")

    assert calls == ["How are you"]
