"""External provider interfaces and their concrete adapters."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from pauta.config import Settings

from .exa import ExaClient
from .llm import PydanticAITextProvider
from .perplexity import PerplexityClient
from .providers import (
    ChatMessage,
    GuardedResearchProvider,
    GuardedTextProvider,
    ProviderGuard,
    ResearchProvider,
    SearchResult,
    TextGenerationProvider,
    WebSource,
)


def build_text_provider(settings: Settings) -> GuardedTextProvider:
    """pydantic-ai text provider behind the configured timeout and concurrency cap."""
    limits = settings.providers
    return GuardedTextProvider(
        PydanticAITextProvider(
            openai_api_key=settings.openai_api_key,
            anthropic_api_key=settings.anthropic_api_key,
            fallback_model=settings.models.fallback,
        ),
        ProviderGuard(
            "text-generation",
            timeout_seconds=limits.text_timeout_seconds,
            max_concurrent=limits.max_concurrent_text_calls,
        ),
    )


@asynccontextmanager
async def open_research_provider(settings: Settings) -> AsyncIterator[GuardedResearchProvider]:
    """Open the configured research backend for the duration of the block."""
    if settings.research.backend == "exa":
        client: PerplexityClient | ExaClient = ExaClient(api_key=settings.exa_api_key)
    else:
        client = PerplexityClient(api_key=settings.perplexity_api_key)

    limits = settings.providers
    async with client:
        yield GuardedResearchProvider(
            client,
            ProviderGuard(
                "research",
                timeout_seconds=limits.research_timeout_seconds,
                max_concurrent=limits.max_concurrent_research_calls,
            ),
        )


__all__ = [
    "build_text_provider",
    "open_research_provider",
    "ChatMessage",
    "GuardedResearchProvider",
    "GuardedTextProvider",
    "ProviderGuard",
    "ResearchProvider",
    "SearchResult",
    "TextGenerationProvider",
    "WebSource",
]
