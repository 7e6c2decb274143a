"""Tests for topic idea generation."""

import asyncio

from pauta.agents.topics import generate_topic_ideas, parse_topic_list
from pauta.agents.topics.prompts import TOPICS_SYSTEM_PROMPT


def test_parse_topic_list():
    reply = '"Como Escolher Piso Vinílico", Reforma de Cozinha Barata ,, “Tendências de Banheiro”'

    assert parse_topic_list(reply) == [
        "Como Escolher Piso Vinílico",
        "Reforma de Cozinha Barata",
        "Tendências de Banheiro",
    ]
    assert parse_topic_list("") == []


def test_focus_keyword_reaches_prompt(text_provider):
    text_provider.script(TOPICS_SYSTEM_PROMPT, "Ideia Um, Ideia Dois")

    topics = asyncio.run(generate_topic_ideas(text_provider, "dicas-reformas", count=2))

    assert topics == ["Ideia Um", "Ideia Dois"]
    prompt = text_provider.calls[0][1]
    assert 'com foco especial em "dicas reformas"' in prompt
    assert "Gere 2 ideias" in prompt


def test_no_focus(text_provider):
    text_provider.script(TOPICS_SYSTEM_PROMPT, "Ideia")

    asyncio.run(generate_topic_ideas(text_provider))

    prompt = text_provider.calls[0][1]
    assert "foco especial" not in prompt
    assert "DEVEM" not in prompt
