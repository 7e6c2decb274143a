"""Custom exceptions for Exa AI service."""

from pauta.exceptions import ProviderError


class ExaAPIError(ProviderError):
    """Base exception for Exa API errors."""

    pass


class ExaAuthError(ExaAPIError):
    """Authentication failed (401)."""

    pass


class ExaRateLimitError(ExaAPIError):
    """Rate limit exceeded (429)."""

    pass


class ExaBadRequestError(ExaAPIError):
    """Invalid request parameters (400)."""

    pass


class ExaServerError(ExaAPIError):
    """Server-side error (5xx)."""

    pass
