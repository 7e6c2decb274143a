"""Exa answer endpoint exposed as a ResearchProvider."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import urlparse

from exa_py import Exa

from pauta.llm_providers import RecencyFilter
from pauta.services.providers import SearchResult, WebSource

from .config import ExaConfig
from .exceptions import (
    ExaAPIError,
    ExaAuthError,
    ExaBadRequestError,
    ExaRateLimitError,
    ExaServerError,
)
from .models import ExaAnswerResponse, ExaCitation

logger = logging.getLogger(__name__)

SERVER_ERROR_CODES = ("500", "502", "503", "504")


def classify_sdk_error(operation: str, error: Exception) -> ExaAPIError:
    """Map an SDK exception onto the Exa error hierarchy by its message."""
    text = str(error).lower()

    if "401" in text or "unauthorized" in text:
        return ExaAuthError("Authentication failed", status_code=401)
    if "429" in text or "rate limit" in text:
        return ExaRateLimitError(f"Rate limited: {error}", status_code=429)
    if "400" in text or "bad request" in text:
        return ExaBadRequestError(f"Invalid request: {error}", status_code=400)
    if any(code in text for code in SERVER_ERROR_CODES):
        return ExaServerError(f"Server error: {error}")
    return ExaAPIError(f"{operation} failed: {error}")


class ExaClient:
    """ResearchProvider backed by the Exa answer endpoint."""

    def __init__(self, api_key: str, config: ExaConfig | None = None):
        self.api_key = api_key
        self.config = config or ExaConfig()
        self._client: Exa | None = None

    async def __aenter__(self) -> "ExaClient":
        self._client = Exa(api_key=self.api_key)
        logger.info("Opened Exa research session")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self._client = None

    @property
    def client(self) -> Exa:
        if self._client is None:
            raise RuntimeError("ExaClient must be used as async context manager")
        return self._client

    async def _call(self, operation: str, fn: Callable[[], Any]) -> Any:
        """Run a blocking SDK call in a worker thread; 429 and 5xx are retried."""
        error: ExaAPIError | None = None

        for attempt in range(self.config.max_retries):
            try:
                return await asyncio.to_thread(fn)
            except Exception as e:
                error = classify_sdk_error(operation, e)
                if not isinstance(error, ExaRateLimitError | ExaServerError):
                    raise error from e

            wait_time = 2**attempt
            logger.warning(f"{error} in {operation}, retrying in {wait_time}s...")
            await asyncio.sleep(wait_time)

        raise error or ExaAPIError(f"{operation} failed after {self.config.max_retries} retries")

    async def answer(
        self,
        question: str,
        include_text: bool | None = None,
        system_prompt: str | None = None,
    ) -> ExaAnswerResponse:
        """Generate an answer to a question with citations.

        Args:
            question: Question to answer
            include_text: Whether to include full text in citations
            system_prompt: Custom system prompt for the LLM
        """
        include_text = (
            include_text if include_text is not None else self.config.answer_include_text
        )
        system_prompt = system_prompt or self.config.default_system_prompt

        def _answer():
            return self.client.answer(
                query=question,
                text=include_text,
                model=self.config.answer_model,
                system_prompt=system_prompt,
            )

        response = await self._call("answer", _answer)

        citations = [
            ExaCitation(
                url=c.url,
                title=getattr(c, "title", None) or "",
                text=getattr(c, "text", None),
                published_date=getattr(c, "published_date", None),
            )
            for c in response.citations
        ]

        return ExaAnswerResponse(answer=response.answer, citations=citations, query=question)

    async def search(
        self,
        query: str,
        recency_filter: RecencyFilter | None = None,
    ) -> SearchResult:
        # The answer endpoint takes no date window; the filter is advisory here
        if recency_filter:
            logger.debug(f"Exa answer ignores recency filter '{recency_filter}'")

        response = await self.answer(query)
        sources = [
            WebSource(
                title=c.title,
                url=c.url,
                snippet=(c.text or "")[: self.config.snippet_chars],
                domain=urlparse(c.url).netloc.lower().removeprefix("www."),
                position=i,
            )
            for i, c in enumerate(response.citations, 1)
        ]
        return SearchResult(text=response.answer, sources=sources, query=query)
