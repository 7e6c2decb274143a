"""One content cycle: pick a focus, pick a topic, write the article, save it."""

import logging
import random
from pathlib import Path

from pauta.agents.topics import generate_topic_ideas
from pauta.agents.writer import ArticleGenerator
from pauta.config import Settings
from pauta.exceptions import GenerationError
from pauta.services import build_text_provider, open_research_provider
from pauta.services.providers import ResearchProvider, TextGenerationProvider
from pauta.storage import ArticleStore, MarkdownArticleStore

logger = logging.getLogger("pauta.pipeline")


async def _run_cycle(
    slot: str,
    settings: Settings,
    text: TextGenerationProvider,
    research: ResearchProvider,
    store: ArticleStore,
    rng: random.Random,
) -> Path:
    focus_options = settings.scheduler.slots[slot].focus
    focus = rng.choice(focus_options) if focus_options else ""
    logger.info(f"Content cycle '{slot}' starting (focus: {focus or 'none'})")

    topics = await generate_topic_ideas(text, focus, models=settings.models)
    if not topics:
        raise GenerationError("No topic ideas were generated", stage="topics")
    topic = topics[0]
    logger.info(f"Selected topic: {topic}")

    generator = ArticleGenerator.from_settings(settings, text, research)
    article = await generator.generate_article(topic)
    logger.info(f"Article generated: {article.title}")

    path = store.save_article(article)
    logger.info(f"Content cycle '{slot}' complete: {path}")
    return path


async def run_content_cycle(
    slot: str,
    settings: Settings,
    *,
    text: TextGenerationProvider | None = None,
    research: ResearchProvider | None = None,
    store: ArticleStore | None = None,
    rng: random.Random | None = None,
) -> Path:
    """Generate and save one article for a scheduled slot ("morning", "afternoon", "evening").

    Providers and store default to the configured ones.

    Raises:
        KeyError: If the slot is not configured
        PautaError: If topic selection or generation fails
    """
    if slot not in settings.scheduler.slots:
        raise KeyError(f"Unknown content slot: {slot}")

    text = text or build_text_provider(settings)
    store = store or MarkdownArticleStore(
        settings.articles_dir, settings.storage.slug_max_length
    )
    rng = rng or random.Random()

    if research is not None:
        return await _run_cycle(slot, settings, text, research, store, rng)

    async with open_research_provider(settings) as research:
        return await _run_cycle(slot, settings, text, research, store, rng)
