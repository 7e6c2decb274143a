"""Configuration for the Perplexity client."""

from pydantic import BaseModel

DEFAULT_SYSTEM_PROMPT = (
    "Você é um assistente de pesquisa especialista em construção civil e reformas "
    "residenciais. Forneça informações precisas e atualizadas, com foco em dados "
    "verificáveis e técnicos."
)


class PerplexityConfig(BaseModel):
    """Configuration for the Perplexity chat completions API."""

    base_url: str = "https://api.perplexity.ai"
    model: str = "sonar"

    # Retry settings
    timeout_seconds: float = 60.0
    max_retries: int = 3

    # Completion defaults
    temperature: float = 0.1
    max_tokens: int = 2000
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
