"""Tests for the generation orchestrator."""

import asyncio
import json

import pytest

from pauta.agents.fact_checker.prompts import (
    CLASSIFICATION_SYSTEM_PROMPT,
    EXTRACTION_SYSTEM_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
)
from pauta.agents.researcher.prompts import (
    FAQ_PERSONA,
    RELATED_QUESTIONS_SYSTEM_PROMPT,
    SOURCES_PERSONA,
)
from pauta.agents.writer import ArticleGenerator, GenerationOptions, extract_questions, generate_article
from pauta.agents.writer.prompts import (
    ARTICLE_SYSTEM_PROMPT,
    ENRICH_ANALYSIS_SYSTEM_PROMPT,
    ENRICH_SUMMARY_SYSTEM_PROMPT,
    ENRICH_SYSTEM_PROMPT,
    ENRICH_TOPICS_SYSTEM_PROMPT,
    INSIGHTS_SYSTEM_PROMPT,
    METADATA_SYSTEM_PROMPT,
    OUTLINE_SYSTEM_PROMPT,
    PRIMARY_RESEARCH_QUERY,
)
from pauta.exceptions import GenerationError, ProviderError, ResearchUnavailableError
from pauta.services.providers import SearchResult, WebSource

TOPIC = "pintura de fachada"

SOURCE_BLOCK = """[FONTE]
Título: Guia ABNT de Pintura
Autor: ABNT
Data: 2023
URL: Não disponível online
Tipo: Norma técnica
Resumo: Procedimentos para pintura de fachadas.
Relevância: alta
[/FONTE]"""

FAQ_BLOCK = """[PERGUNTA]
Questão: Qual tinta usar na fachada?
Resposta: Tinta acrílica premium, resistente a chuva e sol.
[/PERGUNTA]"""

INSIGHTS = """Fatos principais:
- A tinta acrílica é a mais usada em fachadas.
- Em 2024 o preço médio subiu 6%.

Perguntas para pesquisa:
1. Qual o custo médio por metro quadrado?
2. Quais tintas resistem melhor à umidade?"""

DRAFT = """# Guia Completo de Pintura de Fachada

A pintura de fachada protege a casa e valoriza o imóvel.

## Preparação da superfície

Limpe a parede e corrija fissuras antes de pintar.

## Perguntas frequentes

Qual tinta usar na fachada? Tinta acrílica premium."""

ENRICHED = DRAFT + "\n\nSegundo fabricantes, o selador reduz o consumo de tinta."

METADATA = {
    "title": "Pintura de Fachada: Guia Completo",
    "description": "Tudo sobre pintura de fachada: preparação, tintas e custos.",
    "keywords": ["pintura de fachada", "tinta acrílica"],
    "estimatedReadTime": 3,
    "suggestedCategories": ["Pintura"],
}


def _script(text_provider, research_provider):
    research_provider.script(PRIMARY_RESEARCH_QUERY.format(topic=TOPIC), SearchResult(
        text="A pintura de fachada exige tinta acrílica. Em 2024 o setor cresceu.",
        sources=[WebSource(title="Pintura de fachada", url="https://www.gov.br/fachada", domain="gov.br", position=1)],
    ))
    research_provider.script(SOURCES_PERSONA, SOURCE_BLOCK)
    research_provider.script(FAQ_PERSONA, FAQ_BLOCK)

    text_provider.script(INSIGHTS_SYSTEM_PROMPT, INSIGHTS)
    text_provider.script(OUTLINE_SYSTEM_PROMPT, "Título\n1. Introdução\n2. Preparação\n3. FAQ")
    text_provider.script(ARTICLE_SYSTEM_PROMPT, DRAFT)
    text_provider.script(METADATA_SYSTEM_PROMPT, f"```json\n{json.dumps(METADATA)}\n```")


def _script_extras(text_provider):
    text_provider.script(
        EXTRACTION_SYSTEM_PROMPT, "1. A tinta acrílica é a mais usada em fachadas."
    )
    text_provider.script(
        CLASSIFICATION_SYSTEM_PROMPT,
        '{"verified": true, "result": "Confirmado", "confidence": 0.8, "sources": []}',
    )
    text_provider.script(SUMMARY_SYSTEM_PROMPT, "Artigo preciso.")
    text_provider.script(ENRICH_ANALYSIS_SYSTEM_PROMPT, "Faltam dados de consumo de tinta.")
    text_provider.script(
        ENRICH_TOPICS_SYSTEM_PROMPT,
        "Tópico: consumo de tinta por metro quadrado\nConsulta: rendimento de tinta acrílica em fachadas",
    )
    text_provider.script(ENRICH_SYSTEM_PROMPT, ENRICHED)
    text_provider.script(ENRICH_SUMMARY_SYSTEM_PROMPT, "Adicionados dados de consumo.")


def test_end_to_end_article(text_provider, research_provider):
    _script(text_provider, research_provider)

    result = asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    assert result.title == "Guia Completo de Pintura de Fachada"
    assert result.slug == "guia-completo-de-pintura-de-fachada"
    assert result.word_count > 0
    assert len(result.research.sources) == 1
    assert result.research.sources[0].title == "Guia ABNT de Pintura"
    assert result.research.sources[0].date == "2023"
    assert len(result.research.faqs) == 1
    assert result.research.primary_text.startswith("A pintura de fachada")
    assert result.research.web_sources[0].url == "https://www.gov.br/fachada"
    assert result.metadata.keywords == ["pintura de fachada", "tinta acrílica"]
    assert result.metadata.estimated_read_time == 3
    assert 0 <= result.seo_analysis.score <= 100
    assert result.fact_check is None
    assert result.enrichment is None


def test_draft_prompt_carries_research(text_provider, research_provider):
    _script(text_provider, research_provider)

    asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    draft_prompt = next(user for system, user in text_provider.calls if system == ARTICLE_SYSTEM_PROMPT)
    assert "Guia ABNT de Pintura" in draft_prompt
    assert "Qual tinta usar na fachada?" in draft_prompt
    assert "Pesquisa sobre: Qual o custo médio por metro quadrado?" in draft_prompt


def test_secondary_questions_are_researched(text_provider, research_provider):
    _script(text_provider, research_provider)

    asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    assert "Qual o custo médio por metro quadrado?" in research_provider.queries
    assert "Quais tintas resistem melhor à umidade?" in research_provider.queries


def test_progress_is_monotonic_and_ends_at_100(text_provider, research_provider):
    _script(text_provider, research_provider)
    _script_extras(text_provider)
    events = []
    options = GenerationOptions(include_fact_check=True, enrich=True)

    result = asyncio.run(
        generate_article(text_provider, research_provider, TOPIC, options, events.append)
    )

    percentages = [e.percentage for e in events]
    assert percentages == sorted(percentages)
    assert percentages[-1] == 100
    assert events[-1].stage == "complete"
    assert result.fact_check.claims_checked == 1
    assert result.enrichment.research_queries == [
        "consumo de tinta por metro quadrado",
        "rendimento de tinta acrílica em fachadas",
    ]
    assert result.content == ENRICHED


def test_primary_research_failure_is_fatal(text_provider, research_provider):
    _script(text_provider, research_provider)
    research_provider.rules.insert(
        0, (PRIMARY_RESEARCH_QUERY.format(topic=TOPIC), ProviderError("sem conexão"))
    )

    with pytest.raises(ResearchUnavailableError):
        asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    assert text_provider.calls == []


def test_empty_primary_research_is_fatal(text_provider, research_provider):
    _script(text_provider, research_provider)
    research_provider.rules.insert(0, (PRIMARY_RESEARCH_QUERY.format(topic=TOPIC), "  "))

    with pytest.raises(ResearchUnavailableError):
        asyncio.run(generate_article(text_provider, research_provider, TOPIC))


def test_draft_failure_is_fatal(text_provider, research_provider):
    _script(text_provider, research_provider)
    text_provider.script(ARTICLE_SYSTEM_PROMPT, ProviderError("limite de tokens"))

    with pytest.raises(GenerationError) as exc_info:
        asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    assert exc_info.value.stage == "writing"


def test_empty_outline_is_fatal(text_provider, research_provider):
    _script(text_provider, research_provider)
    text_provider.script(OUTLINE_SYSTEM_PROMPT, "")

    with pytest.raises(GenerationError) as exc_info:
        asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    assert exc_info.value.stage == "outlining"


def test_degraded_research_still_produces_article(text_provider, research_provider):
    _script(text_provider, research_provider)
    research_provider.rules.insert(0, (SOURCES_PERSONA, ProviderError("falhou")))

    result = asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    assert result.research.is_degraded
    assert result.research.sources == []
    assert result.title == "Guia Completo de Pintura de Fachada"


def test_insight_failure_skips_secondary_research(text_provider, research_provider):
    _script(text_provider, research_provider)
    text_provider.script(INSIGHTS_SYSTEM_PROMPT, ProviderError("falhou"))

    result = asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    assert "Qual o custo médio por metro quadrado?" not in research_provider.queries
    assert "Em 2024 o setor cresceu" in result.insights


def test_metadata_failure_keeps_article(text_provider, research_provider):
    _script(text_provider, research_provider)
    text_provider.script(METADATA_SYSTEM_PROMPT, ProviderError("falhou"))

    result = asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    assert result.metadata is None
    assert result.seo_analysis is not None


def test_missing_title_uses_topic(text_provider, research_provider):
    _script(text_provider, research_provider)
    text_provider.script(ARTICLE_SYSTEM_PROMPT, "Texto sem título algum.")

    result = asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    assert result.title == f"Artigo sobre {TOPIC}"


def test_extract_questions():
    assert extract_questions(INSIGHTS) == [
        "Qual o custo médio por metro quadrado?",
        "Quais tintas resistem melhor à umidade?",
    ]
    assert extract_questions("**Questões:** Onde comprar? Quanto custa?") == [
        "Onde comprar?",
        "Quanto custa?",
    ]
    assert extract_questions("Sem perguntas aqui.") == []


def test_parallel_secondary_research_keeps_question_order(research_provider, text_provider):
    async def slow(query):
        await asyncio.sleep(0.05)
        return "resposta lenta"

    research_provider.script("primeira", slow)
    research_provider.script("segunda", "resposta rápida")
    generator = ArticleGenerator(text_provider, research_provider)

    secondary = asyncio.run(
        generator._secondary_research(["primeira pergunta?", "segunda pergunta?"], parallel=True)
    )

    assert secondary.index("primeira pergunta?") < secondary.index("segunda pergunta?")
    assert "resposta lenta" in secondary


def test_secondary_failure_is_skipped(research_provider, text_provider):
    research_provider.script("falha", ProviderError("erro"))
    generator = ArticleGenerator(text_provider, research_provider)

    secondary = asyncio.run(generator._secondary_research(["falha?", "ok?"]))

    assert "falha?" not in secondary
    assert "Pesquisa sobre: ok?" in secondary


def test_questions_are_derived_when_insights_list_none(text_provider, research_provider):
    _script(text_provider, research_provider)
    text_provider.script(
        INSIGHTS_SYSTEM_PROMPT, "Fatos principais:\n- A tinta acrílica é a mais usada em fachadas."
    )
    text_provider.script(
        RELATED_QUESTIONS_SYSTEM_PROMPT, "1. Qual o rendimento da tinta acrílica por demão?"
    )

    asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    related_prompt = next(
        user for system, user in text_provider.calls if system == RELATED_QUESTIONS_SYSTEM_PROMPT
    )
    assert "Em 2024 o setor cresceu" in related_prompt
    assert "Qual o rendimento da tinta acrílica por demão?" in research_provider.queries


def test_listed_questions_skip_derivation(text_provider, research_provider):
    _script(text_provider, research_provider)

    asyncio.run(generate_article(text_provider, research_provider, TOPIC))

    assert RELATED_QUESTIONS_SYSTEM_PROMPT not in text_provider.systems()
