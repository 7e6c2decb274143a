"""Text generation through pydantic-ai agents."""

import logging
import os

from pydantic_ai import Agent

from pauta.exceptions import ProviderError
from pauta.llm_providers import LLMProvider, get_model_string, get_provider_for_model
from pauta.services.providers import ChatMessage

logger = logging.getLogger(__name__)


class PydanticAITextProvider:
    """TextGenerationProvider backed by plain-text pydantic-ai agents.

    One agent is kept per (model, system prompt) pair. The pipeline sends
    exactly one system and one user message per call; additional system
    messages are concatenated and extra user turns are joined in order.
    When ``fallback_model`` is set, a failed call is retried once on it.
    """

    def __init__(
        self,
        openai_api_key: str = "",
        anthropic_api_key: str = "",
        fallback_model: str = "",
    ):
        self.fallback_model = fallback_model
        self._api_keys = {
            LLMProvider.OPENAI: (openai_api_key, "OPENAI_API_KEY"),
            LLMProvider.ANTHROPIC: (anthropic_api_key, "ANTHROPIC_API_KEY"),
        }
        self._agents: dict[tuple[str, str], Agent[None, str]] = {}

    def _setup_api_key(self, model: str) -> None:
        key, env_var = self._api_keys[get_provider_for_model(model)]
        if key:
            os.environ[env_var] = key

    def get_agent(self, model: str, system_prompt: str) -> Agent[None, str]:
        cache_key = (model, system_prompt)
        if cache_key not in self._agents:
            self._setup_api_key(model)
            self._agents[cache_key] = Agent(
                model=get_model_string(model),
                system_prompt=system_prompt,
            )
        return self._agents[cache_key]

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        temperature: float,
        max_tokens: int,
    ) -> str:
        system_prompt = "\n\n".join(m.content for m in messages if m.role == "system")
        user_prompt = "\n\n".join(m.content for m in messages if m.role != "system")

        try:
            return await self._run(model, system_prompt, user_prompt, temperature, max_tokens)
        except ProviderError:
            if not self.fallback_model or self.fallback_model == model:
                raise
            logger.warning(f"Retrying completion on fallback model {self.fallback_model}")
            return await self._run(
                self.fallback_model, system_prompt, user_prompt, temperature, max_tokens
            )

    async def _run(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        agent = self.get_agent(model, system_prompt)
        try:
            result = await agent.run(
                user_prompt,
                model_settings={"temperature": temperature, "max_tokens": max_tokens},
            )
        except Exception as e:
            logger.error(f"Completion failed on {model}: {e}")
            raise ProviderError(f"Text generation failed on {model}: {e}") from e

        return result.output
