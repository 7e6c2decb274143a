"""Async Perplexity client with retry logic and error handling."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from pauta.llm_providers import RecencyFilter
from pauta.services.providers import SearchResult, WebSource

from .config import PerplexityConfig
from .exceptions import (
    PerplexityAPIError,
    PerplexityAuthError,
    PerplexityBadRequestError,
    PerplexityRateLimitError,
    PerplexityServerError,
)
from .models import PerplexityResponse

logger = logging.getLogger(__name__)


class PerplexityClient:
    """ResearchProvider backed by Perplexity's search-grounded chat completions."""

    def __init__(self, api_key: str, config: PerplexityConfig | None = None):
        self.api_key = api_key
        self.config = config or PerplexityConfig()
        self._client: httpx.AsyncClient | None = None
        logger.info("Initialized PerplexityClient")

    async def __aenter__(self) -> PerplexityClient:
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )
        return self

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: Any,
    ) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Closed PerplexityClient")

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("PerplexityClient must be used as async context manager")
        return self._client

    async def _request(self, payload: dict[str, Any]) -> dict[str, Any]:
        retry_count = 0
        last_error: Exception | None = None

        while retry_count < self.config.max_retries:
            try:
                response = await self.client.post("/chat/completions", json=payload)

                if response.status_code == 401:
                    raise PerplexityAuthError("Authentication failed", status_code=401)
                elif response.status_code == 400:
                    raise PerplexityBadRequestError(
                        f"Invalid request: {response.text[:200]}", status_code=400
                    )
                elif response.status_code == 429:
                    last_error = PerplexityRateLimitError("Rate limited", status_code=429)
                    wait_time = 2**retry_count
                    logger.warning(f"Rate limited, waiting {wait_time}s...")
                    await asyncio.sleep(wait_time)
                    retry_count += 1
                    continue
                elif response.status_code >= 500:
                    last_error = PerplexityServerError(
                        f"Server error {response.status_code}",
                        status_code=response.status_code,
                    )
                    wait_time = 2**retry_count
                    logger.warning(
                        f"Server error {response.status_code}, retrying in {wait_time}s..."
                    )
                    await asyncio.sleep(wait_time)
                    retry_count += 1
                    continue

                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                last_error = e
                retry_count += 1
                if retry_count < self.config.max_retries:
                    logger.warning(f"Timeout, retrying ({retry_count})...")
                    await asyncio.sleep(2)

            except httpx.HTTPStatusError as e:
                raise PerplexityAPIError(
                    f"Unexpected status: {e}", status_code=e.response.status_code
                ) from e

            except httpx.RequestError as e:
                last_error = e
                logger.error(f"Network error: {e}")
                break

        if isinstance(last_error, PerplexityAPIError):
            raise last_error
        raise PerplexityAPIError(f"Request failed after {retry_count} retries: {last_error}")

    async def chat(
        self,
        query: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        recency_filter: RecencyFilter | None = None,
    ) -> PerplexityResponse:
        """Ask a search-grounded question.

        Args:
            query: User question
            system_prompt: Overrides the configured research persona
            temperature: Overrides the configured temperature
            max_tokens: Overrides the configured completion budget
            recency_filter: Restrict web results to this time window
        """
        payload: dict[str, Any] = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system_prompt or self.config.system_prompt},
                {"role": "user", "content": query},
            ],
            "temperature": temperature if temperature is not None else self.config.temperature,
            "max_tokens": max_tokens or self.config.max_tokens,
        }
        if recency_filter:
            payload["search_recency_filter"] = str(recency_filter)

        data = await self._request(payload)
        return PerplexityResponse.model_validate(data)

    async def search(
        self,
        query: str,
        recency_filter: RecencyFilter | None = None,
    ) -> SearchResult:
        response = await self.chat(query, recency_filter=recency_filter)

        if response.search_results:
            pages = [(r.title, r.url) for r in response.search_results]
        else:
            pages = [("", url) for url in response.citations]

        sources = [
            WebSource(
                title=title,
                url=url,
                domain=urlparse(url).netloc.lower().removeprefix("www."),
                position=i,
            )
            for i, (title, url) in enumerate(pages, 1)
        ]

        logger.info(f"Perplexity search returned {len(response.text)} chars, {len(sources)} sources")
        return SearchResult(text=response.text, sources=sources, query=query)
