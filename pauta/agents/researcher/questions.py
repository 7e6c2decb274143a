"""Follow-up research questions derived from already known facts."""

import logging
import re

from pauta.agents.researcher.prompts import (
    DEFAULT_RELATED_QUESTIONS,
    RELATED_QUESTIONS_PROMPT,
    RELATED_QUESTIONS_SYSTEM_PROMPT,
)
from pauta.agents.shared import messages
from pauta.config import ModelsConfig
from pauta.llm_providers import MaxTokens, Temperature
from pauta.services.providers import TextGenerationProvider

logger = logging.getLogger(__name__)

MIN_QUESTION_LENGTH = 11
_NUMBERED_LINE = re.compile(r"^\s*\d+\.\s*(.*)$")


def parse_numbered_questions(reply: str) -> list[str]:
    """Lines starting with ``N.``, marker removed; items of 10 characters or fewer are dropped."""
    questions = []
    for line in (reply or "").splitlines():
        match = _NUMBERED_LINE.match(line)
        if match and len(match.group(1).strip()) >= MIN_QUESTION_LENGTH:
            questions.append(match.group(1).strip())
    return questions


def default_related_questions(topic: str) -> list[str]:
    return [q.format(topic=topic) for q in DEFAULT_RELATED_QUESTIONS]


async def generate_related_questions(
    text: TextGenerationProvider,
    topic: str,
    facts: list[str],
    models: ModelsConfig | None = None,
) -> list[str]:
    """Ask for 3-5 research questions the known facts leave open.

    Never raises: a failed call yields three generic questions about the topic.
    """
    models = models or ModelsConfig()
    prompt = RELATED_QUESTIONS_PROMPT.format(
        topic=topic, facts="\n".join(f"- {fact}" for fact in facts)
    )
    try:
        reply = await text.complete(
            models.default,
            messages(RELATED_QUESTIONS_SYSTEM_PROMPT, prompt),
            Temperature.BALANCED,
            MaxTokens.SMALL // 2,
        )
    except Exception as e:
        logger.warning(f"Related question generation failed, using defaults: {e}")
        return default_related_questions(topic)

    questions = parse_numbered_questions(reply)
    logger.info(f"Generated {len(questions)} related questions for '{topic}'")
    return questions
