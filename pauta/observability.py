"""Logfire observability initialization and instrumentation."""

import logging

import logfire

from pauta import __version__
from pauta.config import Settings

logger = logging.getLogger(__name__)


def initialize_logfire(settings: Settings) -> bool:
    """
    Initialize Logfire with instrumentation for the content pipeline.

    Must be called ONCE at application startup, before any provider is built.

    This function configures Logfire cloud tracking and instruments:
    - pydantic-ai agents (text generation)
    - HTTPX clients (Perplexity API)
    - Python logging (bridges to Logfire)

    Args:
        settings: Application settings containing the Logfire token

    Returns:
        True when Logfire was configured, False when it stays disabled.
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return False

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="pauta",
            service_version=__version__,
            environment=settings.environment,
        )

        logfire.instrument_pydantic_ai()
        logfire.instrument_httpx()

        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire tracking initialized")
        return True

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
        return False
