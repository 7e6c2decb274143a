"""Provider interfaces consumed by the pipeline, plus timeout/concurrency guards.

The core components only see :class:`TextGenerationProvider` and
:class:`ResearchProvider`. Concrete adapters live in the sibling packages
(``llm``, ``perplexity``, ``exa``); tests pass in-memory fakes.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Literal, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, Field

from pauta.exceptions import ProviderTimeoutError
from pauta.llm_providers import RecencyFilter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class WebSource(BaseModel):
    """A web page cited by the research provider."""

    title: str = ""
    url: str
    snippet: str = ""
    domain: str = ""
    position: int = 0
    relevance: float = Field(default=0.0, ge=0, le=1)


class SearchResult(BaseModel):
    """Text answer of a research query plus the pages it cites."""

    text: str
    sources: list[WebSource] = Field(default_factory=list)
    query: str = ""
    searched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@runtime_checkable
class TextGenerationProvider(Protocol):
    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        temperature: float,
        max_tokens: int,
    ) -> str: ...


@runtime_checkable
class ResearchProvider(Protocol):
    async def search(
        self,
        query: str,
        recency_filter: RecencyFilter | None = None,
    ) -> SearchResult: ...


class ProviderGuard:
    """Caps in-flight calls to one provider and bounds each call's duration."""

    def __init__(self, name: str, timeout_seconds: float, max_concurrent: int):
        self.name = name
        self.timeout_seconds = timeout_seconds
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def run(self, call: Callable[[], Awaitable[T]]) -> T:
        """Await ``call()`` once a slot is free; the call is only started inside the slot."""
        async with self._semaphore:
            try:
                return await asyncio.wait_for(call(), timeout=self.timeout_seconds)
            except asyncio.TimeoutError:
                logger.warning(f"{self.name} call timed out after {self.timeout_seconds}s")
                raise ProviderTimeoutError(
                    f"{self.name} did not respond within {self.timeout_seconds}s"
                ) from None


class GuardedTextProvider:
    """TextGenerationProvider wrapper applying a :class:`ProviderGuard`."""

    def __init__(self, inner: TextGenerationProvider, guard: ProviderGuard):
        self.inner = inner
        self.guard = guard

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        temperature: float,
        max_tokens: int,
    ) -> str:
        return await self.guard.run(
            lambda: self.inner.complete(model, messages, temperature, max_tokens)
        )


class GuardedResearchProvider:
    """ResearchProvider wrapper applying a :class:`ProviderGuard`."""

    def __init__(self, inner: ResearchProvider, guard: ProviderGuard):
        self.inner = inner
        self.guard = guard

    async def search(
        self,
        query: str,
        recency_filter: RecencyFilter | None = None,
    ) -> SearchResult:
        return await self.guard.run(lambda: self.inner.search(query, recency_filter))
