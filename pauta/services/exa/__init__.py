"""Exa AI research service integration."""

from .client import ExaClient
from .config import ExaConfig
from .exceptions import (
    ExaAPIError,
    ExaAuthError,
    ExaBadRequestError,
    ExaRateLimitError,
    ExaServerError,
)
from .models import ExaAnswerResponse, ExaCitation

__all__ = [
    "ExaClient",
    "ExaConfig",
    "ExaAPIError",
    "ExaAuthError",
    "ExaRateLimitError",
    "ExaBadRequestError",
    "ExaServerError",
    "ExaCitation",
    "ExaAnswerResponse",
]
