"""SEO metadata synthesis for a finished article."""

import logging
import math
import re
from typing import Any

from pydantic import ValidationError

from pauta.agents.shared import count_words, extract_json_object, extract_title, messages
from pauta.agents.writer.models import SeoMetadata
from pauta.agents.writer.prompts import METADATA_PROMPT, METADATA_SYSTEM_PROMPT
from pauta.config import ModelsConfig
from pauta.llm_providers import MaxTokens, Temperature
from pauta.seo import generate_meta_description, suggest_categories
from pauta.services.providers import TextGenerationProvider

logger = logging.getLogger(__name__)

MAX_ARTICLE_CHARS = 8000
WORDS_PER_MINUTE = 200
MAX_SUGGESTED_CATEGORIES = 3


def estimate_read_time(content: str) -> int:
    return max(1, math.ceil(count_words(content) / WORDS_PER_MINUTE))


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _fallback_metadata(content: str, topic: str) -> SeoMetadata:
    keywords = [word for word in re.split(r"\s+", topic) if len(word) > 3]
    title = extract_title(content) or f"Artigo sobre {topic}"
    categories = suggest_categories(title, content)[:MAX_SUGGESTED_CATEGORIES]
    return SeoMetadata(
        title=title,
        description=generate_meta_description(content, keywords=keywords),
        keywords=keywords,
        estimated_read_time=estimate_read_time(content),
        suggested_categories=[s.category.name for s in categories],
        is_fallback=True,
    )


def _metadata_from_payload(payload: dict[str, Any], content: str, topic: str) -> SeoMetadata:
    title = payload.get("title") or extract_title(content) or f"Artigo sobre {topic}"
    read_time = payload.get("estimatedReadTime")
    if (
        not isinstance(read_time, (int, float))
        or isinstance(read_time, bool)
        or not math.isfinite(read_time)
        or read_time <= 0
    ):
        read_time = estimate_read_time(content)

    return SeoMetadata(
        title=str(title),
        description=str(payload.get("description") or ""),
        keywords=[str(k) for k in _as_list(payload.get("keywords"))],
        canonical_url=str(payload.get("canonicalUrl") or ""),
        h1=str(payload.get("h1") or title),
        structured_data=_as_dict(payload.get("structuredData")),
        open_graph=_as_dict(payload.get("openGraph")),
        twitter_card=_as_dict(payload.get("twitterCard")),
        suggested_images_alt=[str(a) for a in _as_list(payload.get("suggestedImagesAlt"))],
        estimated_read_time=math.ceil(read_time),
        suggested_categories=[str(c) for c in _as_list(payload.get("suggestedCategories"))],
        suggested_internal_links=_as_list(payload.get("suggestedInternalLinks")),
        faq=_as_list(payload.get("faq")),
    )


async def generate_seo_metadata(
    text: TextGenerationProvider,
    content: str,
    topic: str = "",
    models: ModelsConfig | None = None,
) -> SeoMetadata | None:
    """Ask the model for SEO metadata of an article.

    Returns minimal fallback metadata (title, description, topic keywords,
    read time) when the reply holds no parsable JSON object, and None when
    the provider call itself fails.
    """
    models = models or ModelsConfig()
    article = content if len(content) <= MAX_ARTICLE_CHARS else content[:MAX_ARTICLE_CHARS] + "..."
    topic_line = f'O tópico principal é "{topic}".\n' if topic else ""

    try:
        reply = await text.complete(
            models.analysis,
            messages(
                METADATA_SYSTEM_PROMPT,
                METADATA_PROMPT.format(topic_line=topic_line, article=article),
            ),
            Temperature.PRECISE,
            MaxTokens.MEDIUM,
        )
    except Exception as e:
        logger.error(f"SEO metadata generation failed: {e}")
        return None

    payload = extract_json_object(reply)
    if payload is None:
        logger.warning("SEO metadata reply held no JSON object, using fallback")
        return _fallback_metadata(content, topic)
    try:
        return _metadata_from_payload(payload, content, topic)
    except (ValidationError, TypeError, ValueError, OverflowError) as e:
        logger.warning(f"Malformed SEO metadata reply, using fallback: {e}")
        return _fallback_metadata(content, topic)
