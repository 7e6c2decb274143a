"""Perplexity research service integration."""

from .client import PerplexityClient
from .config import PerplexityConfig
from .exceptions import (
    PerplexityAPIError,
    PerplexityAuthError,
    PerplexityBadRequestError,
    PerplexityRateLimitError,
    PerplexityServerError,
)
from .models import PerplexityResponse, PerplexitySearchResult

__all__ = [
    "PerplexityClient",
    "PerplexityConfig",
    "PerplexityAPIError",
    "PerplexityAuthError",
    "PerplexityRateLimitError",
    "PerplexityBadRequestError",
    "PerplexityServerError",
    "PerplexityResponse",
    "PerplexitySearchResult",
]
