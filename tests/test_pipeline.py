"""Tests for the content cycle and the scheduler wiring."""

import asyncio
import random

import pytest

from pauta.agents.topics.prompts import TOPICS_SYSTEM_PROMPT
from pauta.agents.writer.prompts import ARTICLE_SYSTEM_PROMPT, OUTLINE_SYSTEM_PROMPT
from pauta.config import Settings
from pauta.exceptions import GenerationError
from pauta.pipeline import run_content_cycle
from pauta.scheduler import build_scheduler
from pauta.storage import MarkdownArticleStore

DRAFT = "# Reforma de Cozinha Barata\n\nTroque os puxadores e pinte os armários."


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path, _env_file=None)


def test_content_cycle_saves_article(settings, text_provider, research_provider):
    text_provider.script(TOPICS_SYSTEM_PROMPT, "Reforma de Cozinha Barata, Piso Vinílico")
    text_provider.script(OUTLINE_SYSTEM_PROMPT, "1. Introdução\n2. Armários")
    text_provider.script(ARTICLE_SYSTEM_PROMPT, DRAFT)
    store = MarkdownArticleStore(settings.articles_dir, settings.storage.slug_max_length)

    path = asyncio.run(
        run_content_cycle(
            "morning",
            settings,
            text=text_provider,
            research=research_provider,
            store=store,
            rng=random.Random(0),
        )
    )

    assert path.exists()
    assert path.name == "reforma-de-cozinha-barata.md"
    assert "Troque os puxadores" in path.read_text(encoding="utf-8")

    topics_prompt = text_provider.calls[0][1]
    focus = settings.scheduler.slots["morning"].focus
    assert any(f.replace("-", " ") in topics_prompt for f in focus)


def test_unknown_slot(settings, text_provider, research_provider):
    with pytest.raises(KeyError):
        asyncio.run(
            run_content_cycle("midnight", settings, text=text_provider, research=research_provider)
        )


def test_no_topics_is_an_error(settings, text_provider, research_provider, tmp_path):
    text_provider.script(TOPICS_SYSTEM_PROMPT, "")
    store = MarkdownArticleStore(tmp_path / "out")

    with pytest.raises(GenerationError) as exc_info:
        asyncio.run(
            run_content_cycle(
                "evening", settings, text=text_provider, research=research_provider, store=store
            )
        )

    assert exc_info.value.stage == "topics"


def test_scheduler_registers_one_job_per_slot(settings):
    scheduler = build_scheduler(settings)

    jobs = {job.id: job for job in scheduler.get_jobs()}

    assert set(jobs) == {"content-morning", "content-afternoon", "content-evening"}
    assert jobs["content-evening"].args[0] == "evening"
