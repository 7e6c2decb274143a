"""LLM text generation service."""

from .client import PydanticAITextProvider

__all__ = ["PydanticAITextProvider"]
