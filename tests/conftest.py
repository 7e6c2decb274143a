"""In-memory providers for driving the pipeline without network access."""

import inspect

import logfire
import pytest

from pauta.exceptions import ProviderError
from pauta.services.providers import ChatMessage, SearchResult

# Spans become no-ops; nothing is exported
logfire.configure(send_to_logfire=False, console=False)


class FakeTextProvider:
    """Replies keyed by the exact system prompt of a call.

    A reply may be a string, an exception instance (raised), or a callable
    taking the user prompt (sync or async). Unscripted prompts raise
    ProviderError, like an unreachable model would.
    """

    def __init__(self):
        self.replies: dict[str, object] = {}
        self.calls: list[tuple[str, str]] = []

    def script(self, system_prompt: str, reply) -> "FakeTextProvider":
        self.replies[system_prompt] = reply
        return self

    def systems(self) -> list[str]:
        return [system for system, _ in self.calls]

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        temperature: float,
        max_tokens: int,
    ) -> str:
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        user = "\n\n".join(m.content for m in messages if m.role != "system")
        self.calls.append((system, user))

        if system not in self.replies:
            raise ProviderError(f"No scripted reply for system prompt: {system[:60]}")
        reply = self.replies[system]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            reply = reply(user)
            if inspect.isawaitable(reply):
                reply = await reply
        return reply


class FakeResearchProvider:
    """Replies keyed by a fragment of the query; the first matching rule wins.

    Unmatched queries get ``default_text``.
    """

    def __init__(self, default_text: str = "Pesquisa geral sobre reformas residenciais."):
        self.default_text = default_text
        self.rules: list[tuple[str, object]] = []
        self.queries: list[str] = []

    def script(self, fragment: str, reply) -> "FakeResearchProvider":
        self.rules.append((fragment, reply))
        return self

    async def search(self, query: str, recency_filter=None) -> SearchResult:
        self.queries.append(query)

        reply = next((r for fragment, r in self.rules if fragment in query), self.default_text)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            reply = reply(query)
            if inspect.isawaitable(reply):
                reply = await reply
        if isinstance(reply, SearchResult):
            return reply
        return SearchResult(text=reply, query=query)


@pytest.fixture
def text_provider() -> FakeTextProvider:
    return FakeTextProvider()


@pytest.fixture
def research_provider() -> FakeResearchProvider:
    return FakeResearchProvider()
