"""Custom exceptions for the Perplexity service."""

from pauta.exceptions import ProviderError


class PerplexityAPIError(ProviderError):
    """Base exception for Perplexity API errors."""

    pass


class PerplexityAuthError(PerplexityAPIError):
    """Authentication failed (401)."""

    pass


class PerplexityRateLimitError(PerplexityAPIError):
    """Rate limit exceeded after all retries (429)."""

    pass


class PerplexityBadRequestError(PerplexityAPIError):
    """Invalid request parameters (400)."""

    pass


class PerplexityServerError(PerplexityAPIError):
    """Server-side error after all retries (5xx)."""

    pass
