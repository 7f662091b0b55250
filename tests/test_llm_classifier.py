"""LLM classifier tests. All providers are in-process stubs; no network."""

import asyncio

import pytest

from auto_router.llm_classifier import LLMClassifier, build_prompt, parse_label
from auto_router.models import LLMProvider, LLMResponse


class ScriptedProvider(LLMProvider):
    """Returns a fixed reply and records the last call."""

    def __init__(self, content="MEDIUM", finish_reason="stop"):
        self.content = content
        self.finish_reason = finish_reason
        self.calls = []

    async def chat(self, messages, model=None, max_tokens=4096, temperature=0.7):
        self.calls.append(
            {"messages": messages, "model": model, "max_tokens": max_tokens, "temperature": temperature}
        )
        return LLMResponse(content=self.content, finish_reason=self.finish_reason)


class FailingProvider(LLMProvider):
    async def chat(self, messages, model=None, max_tokens=4096, temperature=0.7):
        raise ConnectionError("connection refused")


class SlowProvider(LLMProvider):
    def __init__(self):
        self.cancelled = False

    async def chat(self, messages, model=None, max_tokens=4096, temperature=0.7):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return LLMResponse(content="SIMPLE")


@pytest.mark.parametrize(
    "reply,expected",
    [
        ("COMPLEX", "complex"),
        (" reasoning.\n", "reasoning"),
        ("Category: Simple", "simple"),
        ("Not SIMPLE, more like MEDIUM", "simple"),
        ("I cannot tell", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_label(reply, expected):
    assert parse_label(reply) == expected


def test_prompt_truncates_message():
    prompt = build_prompt("x" * 800)
    assert "x" * 500 in prompt
    assert "x" * 501 not in prompt


@pytest.mark.asyncio
async def test_classify_calls_provider_with_small_budget():
    provider = ScriptedProvider("REASONING")
    classifier = LLMClassifier({"openai": provider})

    tier = await classifier.classify("prove it", "openai/gpt-4.1-nano", 3000)

    assert tier == "reasoning"
    call, = provider.calls
    assert call["model"] == "gpt-4.1-nano"
    assert call["max_tokens"] == 10
    assert call["temperature"] == 0.0
    assert call["messages"][0]["role"] == "user"
    assert 'Message: "prove it"' in call["messages"][0]["content"]


@pytest.mark.asyncio
async def test_unparseable_model_returns_none():
    provider = ScriptedProvider()
    assert await LLMClassifier({"openai": provider}).classify("hi", "openai/", 3000) is None
    assert provider.calls == []


@pytest.mark.asyncio
async def test_unregistered_provider_returns_none():
    classifier = LLMClassifier({"openai": ScriptedProvider()})
    assert await classifier.classify("hi", "google/gemini-2.5-flash", 3000) is None


@pytest.mark.asyncio
async def test_provider_exception_returns_none():
    classifier = LLMClassifier({"openai": FailingProvider()})
    assert await classifier.classify("hi", "openai/gpt-4.1-nano", 3000) is None


@pytest.mark.asyncio
async def test_error_response_returns_none():
    provider = ScriptedProvider("Error calling LLM: COMPLEX overload", finish_reason="error")
    classifier = LLMClassifier({"openai": provider})
    assert await classifier.classify("hi", "openai/gpt-4.1-nano", 3000) is None


@pytest.mark.asyncio
async def test_unrecognised_reply_returns_none():
    classifier = LLMClassifier({"openai": ScriptedProvider("banana")})
    assert await classifier.classify("hi", "openai/gpt-4.1-nano", 3000) is None


@pytest.mark.asyncio
async def test_timeout_cancels_call():
    provider = SlowProvider()
    classifier = LLMClassifier({"openai": provider})

    loop = asyncio.get_running_loop()
    start = loop.time()
    tier = await classifier.classify("hi", "openai/gpt-4.1-nano", 50)

    assert tier is None
    assert provider.cancelled
    assert loop.time() - start < 5
