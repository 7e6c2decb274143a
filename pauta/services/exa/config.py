"""Configuration for the Exa research client."""

from pydantic import BaseModel

DEFAULT_SYSTEM_PROMPT = """Você é um assistente de pesquisa para um blog de reformas residenciais no Brasil.

Instruções:
- Responda em português do Brasil, com profundidade técnica
- Inclua números concretos: preços em R$, prazos, medidas, normas ABNT
- Priorize dados recentes e fontes brasileiras confiáveis
- Cite as fontes no texto com links markdown
- Deixe claro quando a informação disponível for limitada
"""


class ExaConfig(BaseModel):
    """Configuration for Exa AI client."""

    # Retry settings
    max_retries: int = 3

    # Answer defaults
    answer_model: str = "exa"  # or "exa-pro"
    answer_include_text: bool = True
    default_system_prompt: str = DEFAULT_SYSTEM_PROMPT
    snippet_chars: int = 300
