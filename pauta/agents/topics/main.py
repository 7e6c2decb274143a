"""Topic idea generation for scheduled content slots."""

import logging

from pauta.agents.shared import messages
from pauta.agents.topics.prompts import FOCUS_RULE, FOCUS_TEXT, TOPICS_PROMPT, TOPICS_SYSTEM_PROMPT
from pauta.config import ModelsConfig
from pauta.llm_providers import MaxTokens, Temperature
from pauta.services.providers import TextGenerationProvider

logger = logging.getLogger(__name__)

DEFAULT_TOPIC_COUNT = 5


def parse_topic_list(reply: str) -> list[str]:
    """Comma-separated titles, trimmed and unquoted; blanks dropped."""
    topics = [t.strip().strip("\"'“”").strip() for t in (reply or "").split(",")]
    return [t for t in topics if t]


async def generate_topic_ideas(
    text: TextGenerationProvider,
    focus: str = "",
    count: int = DEFAULT_TOPIC_COUNT,
    models: ModelsConfig | None = None,
) -> list[str]:
    """Ask for blog topic titles, optionally around a focus keyword like "dicas-reformas".

    Raises:
        ProviderError: If the text-generation call fails
    """
    models = models or ModelsConfig()
    focus_words = focus.replace("-", " ").strip()

    prompt = TOPICS_PROMPT.format(
        count=count,
        focus_text=FOCUS_TEXT.format(focus=focus_words) if focus_words else "",
        focus_rule=FOCUS_RULE.format(focus=focus_words) if focus_words else "",
    )
    reply = await text.complete(
        models.default,
        messages(TOPICS_SYSTEM_PROMPT, prompt),
        Temperature.CREATIVE,
        MaxTokens.SMALL,
    )

    topics = parse_topic_list(reply)
    logger.info(f"Generated {len(topics)} topic ideas (focus: {focus_words or 'none'})")
    return topics
