"""Tests for provider guards, model routing and the research adapters."""

import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest

from pauta.config import Settings
from pauta.exceptions import ProviderError, ProviderTimeoutError
from pauta.llm_providers import (
    AnthropicModel,
    LLMProvider,
    OpenAIModel,
    RecencyFilter,
    get_model_string,
    get_provider_for_model,
)
from pauta.services import build_text_provider
from pauta.services.exa import ExaAuthError, ExaClient
from pauta.services.llm import PydanticAITextProvider
from pauta.services.perplexity import PerplexityClient
from pauta.services.perplexity.exceptions import PerplexityAuthError
from pauta.services.providers import (
    ChatMessage,
    GuardedResearchProvider,
    GuardedTextProvider,
    ProviderGuard,
    ResearchProvider,
    TextGenerationProvider,
)


class SlowTextProvider:
    def __init__(self, delay: float):
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    async def complete(self, model, messages, temperature, max_tokens) -> str:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        return "ok"


def test_fakes_satisfy_protocols(text_provider, research_provider):
    assert isinstance(text_provider, TextGenerationProvider)
    assert isinstance(research_provider, ResearchProvider)


def test_guard_timeout_raises_provider_timeout():
    provider = GuardedTextProvider(
        SlowTextProvider(delay=1), ProviderGuard("text", timeout_seconds=0.01, max_concurrent=1)
    )

    with pytest.raises(ProviderTimeoutError):
        asyncio.run(provider.complete("gpt-4o", [], 0.1, 10))


def test_timeout_is_a_provider_error():
    assert issubclass(ProviderTimeoutError, ProviderError)


def test_guard_caps_concurrency():
    inner = SlowTextProvider(delay=0.02)
    provider = GuardedTextProvider(inner, ProviderGuard("text", timeout_seconds=5, max_concurrent=2))

    async def run():
        return await asyncio.gather(*(provider.complete("gpt-4o", [], 0.1, 10) for _ in range(5)))

    assert asyncio.run(run()) == ["ok"] * 5
    assert inner.max_in_flight == 2


def test_guarded_research_passes_through(research_provider):
    research_provider.script("telhado", "Telhas cerâmicas.")
    provider = GuardedResearchProvider(
        research_provider, ProviderGuard("research", timeout_seconds=5, max_concurrent=1)
    )

    result = asyncio.run(provider.search("telhado verde"))

    assert result.text == "Telhas cerâmicas."


def test_model_routing():
    assert get_model_string(OpenAIModel.GPT_4O) == "openai:gpt-4o"
    assert get_model_string("gpt-4o-mini") == "openai:gpt-4o-mini"
    assert get_model_string(AnthropicModel.CLAUDE_HAIKU_4_5) == "anthropic:claude-haiku-4-5"
    assert get_model_string("claude-3-opus") == "anthropic:claude-3-opus"
    assert get_model_string("openai:o1") == "openai:o1"
    assert get_provider_for_model("claude-sonnet-4-5") == LLMProvider.ANTHROPIC

    with pytest.raises(ValueError):
        get_provider_for_model("mistral:large")


# ============================================================================
# Perplexity adapter
# ============================================================================


def _perplexity(handler) -> PerplexityClient:
    client = PerplexityClient(api_key="pplx-test")
    client._client = httpx.AsyncClient(
        base_url=client.config.base_url, transport=httpx.MockTransport(handler)
    )
    return client


def test_perplexity_search_maps_sources():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(json.loads(request.content))
        return httpx.Response(
            200,
            json={
                "id": "abc",
                "model": "sonar",
                "choices": [{"index": 0, "message": {"role": "assistant", "content": "Resposta."}}],
                "citations": ["https://ignored.com"],
                "search_results": [
                    {"title": "Guia", "url": "https://www.abnt.org.br/guia"},
                    {"title": "Blog", "url": "https://blog.com.br/post"},
                ],
            },
        )

    async def run():
        client = _perplexity(handler)
        try:
            return await client.search("pintura de fachada", RecencyFilter.MONTH)
        finally:
            await client.client.aclose()

    result = asyncio.run(run())

    assert result.text == "Resposta."
    assert [s.url for s in result.sources] == ["https://www.abnt.org.br/guia", "https://blog.com.br/post"]
    assert result.sources[0].domain == "abnt.org.br"
    assert result.sources[0].position == 1
    assert requests[0]["search_recency_filter"] == "month"
    assert requests[0]["messages"][1]["content"] == "pintura de fachada"


def test_perplexity_citations_fallback():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "choices": [{"message": {"role": "assistant", "content": "Texto."}}],
                "citations": ["https://g1.globo.com/materia"],
            },
        )

    async def run():
        client = _perplexity(handler)
        try:
            return await client.search("reboco")
        finally:
            await client.client.aclose()

    result = asyncio.run(run())

    assert [s.url for s in result.sources] == ["https://g1.globo.com/materia"]
    assert result.sources[0].title == ""


def test_perplexity_auth_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "unauthorized"})

    async def run():
        client = _perplexity(handler)
        try:
            return await client.search("reboco")
        finally:
            await client.client.aclose()

    with pytest.raises(PerplexityAuthError):
        asyncio.run(run())


def test_perplexity_requires_context_manager():
    with pytest.raises(RuntimeError):
        PerplexityClient(api_key="x").client


# ============================================================================
# Exa adapter
# ============================================================================


class FakeExaSDK:
    def __init__(self, failures: int = 0):
        self.failures = failures
        self.calls = []

    def answer(self, **kwargs):
        self.calls.append(kwargs)
        if self.failures:
            self.failures -= 1
            raise RuntimeError("401 Unauthorized")
        return SimpleNamespace(
            answer="Use tinta acrílica.",
            citations=[
                SimpleNamespace(
                    url="https://www.sherwin.com.br/fachada",
                    title="Fachadas",
                    text="x" * 500,
                    published_date="2024-05-01",
                )
            ],
        )


def test_exa_search_maps_citations():
    client = ExaClient(api_key="exa-test")
    client._client = FakeExaSDK()

    result = asyncio.run(client.search("tinta para fachada", RecencyFilter.WEEK))

    assert result.text == "Use tinta acrílica."
    assert result.sources[0].domain == "sherwin.com.br"
    assert len(result.sources[0].snippet) == client.config.snippet_chars
    assert client._client.calls[0]["query"] == "tinta para fachada"


def test_exa_auth_error_is_not_retried():
    client = ExaClient(api_key="exa-test")
    client._client = FakeExaSDK(failures=1)

    with pytest.raises(ExaAuthError):
        asyncio.run(client.search("reboco"))

    assert len(client._client.calls) == 1


def test_guard_starts_a_call_only_inside_a_slot():
    guard = ProviderGuard("text", timeout_seconds=5, max_concurrent=1)
    started = []

    async def run():
        release = asyncio.Event()

        async def hold():
            await release.wait()
            return "first"

        def second_call():
            started.append("second")
            return asyncio.sleep(0, result="second")

        holder = asyncio.create_task(guard.run(hold))
        await asyncio.sleep(0.01)
        waiter = asyncio.create_task(guard.run(second_call))
        await asyncio.sleep(0.01)
        assert started == []

        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter
        release.set()
        return await holder

    assert asyncio.run(run()) == "first"
    assert started == []


# ============================================================================
# pydantic-ai text provider
# ============================================================================


class FakeAgent:
    def __init__(self, output: str = "", error: Exception | None = None):
        self.output = output
        self.error = error
        self.prompts = []

    async def run(self, user_prompt, model_settings=None):
        self.prompts.append(user_prompt)
        if self.error:
            raise self.error
        return SimpleNamespace(output=self.output)


def _text_provider(agents: dict, fallback_model: str = "") -> PydanticAITextProvider:
    provider = PydanticAITextProvider(fallback_model=fallback_model)
    provider.get_agent = lambda model, system_prompt: agents[model]
    return provider


def _messages() -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content="Você é um redator."),
        ChatMessage(role="user", content="Escreva sobre telhados."),
    ]


def test_failed_completion_is_retried_on_fallback_model():
    agents = {
        "gpt-4o": FakeAgent(error=RuntimeError("rate limited")),
        "gpt-3.5-turbo": FakeAgent(output="Texto do modelo reserva."),
    }
    provider = _text_provider(agents, fallback_model="gpt-3.5-turbo")

    reply = asyncio.run(provider.complete("gpt-4o", _messages(), 0.7, 500))

    assert reply == "Texto do modelo reserva."
    assert agents["gpt-3.5-turbo"].prompts == ["Escreva sobre telhados."]


def test_completion_without_fallback_raises():
    provider = _text_provider({"gpt-4o": FakeAgent(error=RuntimeError("rate limited"))})

    with pytest.raises(ProviderError):
        asyncio.run(provider.complete("gpt-4o", _messages(), 0.7, 500))


def test_fallback_equal_to_model_is_not_retried():
    agent = FakeAgent(error=RuntimeError("rate limited"))
    provider = _text_provider({"gpt-3.5-turbo": agent}, fallback_model="gpt-3.5-turbo")

    with pytest.raises(ProviderError):
        asyncio.run(provider.complete("gpt-3.5-turbo", _messages(), 0.7, 500))

    assert len(agent.prompts) == 1


def test_fallback_model_comes_from_settings(tmp_path):
    settings = Settings(data_dir=tmp_path, _env_file=None)

    provider = build_text_provider(settings)

    assert provider.inner.fallback_model == settings.models.fallback
