"""Exceptions shared by the pipeline components."""


class PautaError(Exception):
    """Base exception for the content pipeline."""


class ProviderError(PautaError):
    """An external provider call failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderTimeoutError(ProviderError):
    """An external provider call did not resolve within its timeout."""

    pass


class ResearchUnavailableError(PautaError):
    """Primary research could not be performed for a topic."""

    pass


class GenerationError(PautaError):
    """A generation stage failed with no usable degraded output."""

    def __init__(self, message: str, stage: str):
        super().__init__(message)
        self.stage = stage
