"""LLM provider, model and sampling presets for easy model selection and hotswapping.

The pipeline talks to models through plain model-name strings. This module
keeps the names the pipeline defaults to, the pydantic-ai prefixes used to
route them, and the temperature/token presets each stage picks from.
"""

from enum import StrEnum


class LLMProvider(StrEnum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class OpenAIModel(StrEnum):
    """OpenAI models available via API."""

    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_35_TURBO = "gpt-3.5-turbo"


class AnthropicModel(StrEnum):
    """Anthropic Claude models available via API."""

    CLAUDE_SONNET_4_5 = "claude-sonnet-4-5"
    CLAUDE_HAIKU_4_5 = "claude-haiku-4-5"


class RecencyFilter(StrEnum):
    """Time windows accepted by research providers."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class Temperature:
    """Sampling temperatures by intent."""

    CREATIVE = 0.9
    BALANCED = 0.7
    PRECISE = 0.3
    FACTUAL = 0.1


class MaxTokens:
    """Completion token budgets by output size."""

    SMALL = 1000
    MEDIUM = 2500
    LARGE = 4000
    EXTRA_LARGE = 7000


# =============================================================================
# Helper Functions
# =============================================================================


def get_model_string(model: str | OpenAIModel | AnthropicModel) -> str:
    """Get the pydantic-ai model string for a model name.

    Names that already carry a provider prefix (``"openai:gpt-4o"``) pass
    through untouched; bare names are routed by the enum they belong to.
    """
    if isinstance(model, OpenAIModel):
        return f"openai:{model.value}"
    elif isinstance(model, AnthropicModel):
        return f"anthropic:{model.value}"

    name = str(model)
    if ":" in name:
        return name
    if name in {m.value for m in AnthropicModel} or name.startswith("claude"):
        return f"anthropic:{name}"
    return f"openai:{name}"


def get_provider_for_model(model: str | OpenAIModel | AnthropicModel) -> LLMProvider:
    """Determine the provider for a given model."""
    prefix = get_model_string(model).split(":", 1)[0]
    try:
        return LLMProvider(prefix)
    except ValueError:
        raise ValueError(f"Unknown model provider: {prefix}") from None
