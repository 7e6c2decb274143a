"""Tests for the fact-check engine."""

import asyncio
import json

from pauta.agents.fact_checker import FactChecker, fact_check_article, parse_claims
from pauta.agents.fact_checker.prompts import (
    CLASSIFICATION_SYSTEM_PROMPT,
    EXTRACTION_SYSTEM_PROMPT,
    INVALID_FORMAT_RESULT,
    NO_CLAIMS_SUMMARY,
    SUMMARY_SYSTEM_PROMPT,
    UNVERIFIABLE_RESULT,
)
from pauta.exceptions import ProviderError

CLAIMS = [
    "A tinta acrílica dura cerca de cinco anos em fachadas.",
    "A NBR 15079 trata de tintas para construção civil.",
    "O custo médio da pintura externa é de R$ 40 por metro quadrado.",
    "Fachadas litorâneas precisam de repintura a cada três anos.",
    "O selador reduz o consumo de tinta em até 30%.",
]

EXTRACTION_REPLY = "Afirmações encontradas:\n" + "\n".join(
    f"{i}. {claim}" for i, claim in enumerate(CLAIMS, 1)
)

VERIFIED_JSON = json.dumps(
    {
        "verified": True,
        "result": "Confirmado por fontes técnicas",
        "confidence": 0.9,
        "sources": ["https://www.abnt.org.br"],
        "explanation": "A informação consta em normas e fabricantes.",
    }
)


def _script(text_provider):
    return (
        text_provider.script(EXTRACTION_SYSTEM_PROMPT, EXTRACTION_REPLY)
        .script(CLASSIFICATION_SYSTEM_PROMPT, f"```json\n{VERIFIED_JSON}\n```")
        .script(SUMMARY_SYSTEM_PROMPT, "O artigo é majoritariamente preciso.")
    )


def test_parse_claims():
    claims = parse_claims(EXTRACTION_REPLY + "\n6. Curta.", max_claims=10)

    assert claims == CLAIMS
    assert parse_claims(EXTRACTION_REPLY, max_claims=2) == CLAIMS[:2]
    assert parse_claims("Nenhuma afirmação.", max_claims=5) == []


def test_one_failing_claim_is_marked_unverified(text_provider, research_provider):
    _script(text_provider)
    research_provider.script(CLAIMS[2], ProviderError("timeout"))

    report = asyncio.run(fact_check_article(text_provider, research_provider, "artigo", max_claims=8))

    assert report.claims_checked == 5
    assert len(report.verification_results) == 5
    failed = report.verification_results[2]
    assert failed.claim == CLAIMS[2]
    assert failed.verified is False
    assert failed.confidence == 0
    assert failed.result == UNVERIFIABLE_RESULT
    assert all(r.verified for i, r in enumerate(report.verification_results) if i != 2)
    assert report.stats.verified_count == 4
    assert report.verified
    assert report.summary == "O artigo é majoritariamente preciso."


def test_no_claims_is_trivially_verified(text_provider, research_provider):
    text_provider.script(EXTRACTION_SYSTEM_PROMPT, "Não há afirmações verificáveis.")
    events = []

    report = asyncio.run(
        FactChecker(text_provider, research_provider).fact_check_article(
            "texto opinativo", on_progress=events.append
        )
    )

    assert report.verified
    assert report.claims_checked == 0
    assert report.verification_results == []
    assert report.summary == NO_CLAIMS_SUMMARY
    assert research_provider.queries == []
    assert events[-1].percentage == 100


def test_malformed_classification_falls_back(text_provider, research_provider):
    _script(text_provider)
    text_provider.script(CLASSIFICATION_SYSTEM_PROMPT, "Parece correto, sem JSON.")

    report = asyncio.run(fact_check_article(text_provider, research_provider, "artigo"))

    assert all(not r.verified for r in report.verification_results)
    assert all(r.result == INVALID_FORMAT_RESULT for r in report.verification_results)
    assert not report.verified


def test_summary_failure_uses_counts(text_provider, research_provider):
    _script(text_provider)
    text_provider.script(SUMMARY_SYSTEM_PROMPT, ProviderError("indisponível"))

    report = asyncio.run(fact_check_article(text_provider, research_provider, "artigo"))

    assert report.summary == "5 de 5 afirmações verificadas (confiança média 90%)."


def test_confidence_is_clamped(text_provider, research_provider):
    _script(text_provider)
    text_provider.script(
        CLASSIFICATION_SYSTEM_PROMPT,
        '{"verified": true, "result": "ok", "confidence": 7, "sources": "https://x.com"}',
    )

    report = asyncio.run(fact_check_article(text_provider, research_provider, "artigo", max_claims=1))

    assert report.verification_results[0].confidence == 1.0
    assert report.verification_results[0].sources == ["https://x.com"]


def test_progress_is_monotonic(text_provider, research_provider):
    _script(text_provider)
    events = []

    asyncio.run(
        FactChecker(text_provider, research_provider).fact_check_article(
            "artigo", on_progress=events.append
        )
    )

    percentages = [e.percentage for e in events]
    assert percentages == sorted(percentages)
    assert percentages[0] == 10
    assert percentages[-1] == 100
    assert [e.stage for e in events][-2:] == ["summary", "complete"]


def test_claims_listed_on_one_line():
    claims = parse_claims(
        "1. A tinta acrílica dura cinco anos. 2. O selador reduz consumo em 30%.", max_claims=8
    )

    assert claims == ["A tinta acrílica dura cinco anos.", "O selador reduz consumo em 30%."]


def test_years_are_not_list_markers():
    claims = parse_claims("1. A NBR 15575 entrou em vigor em 2013. Ela trata de desempenho.", 8)

    assert claims == ["A NBR 15575 entrou em vigor em 2013. Ela trata de desempenho."]


def test_zero_max_claims_checks_nothing(text_provider, research_provider):
    _script(text_provider)

    report = asyncio.run(
        FactChecker(text_provider, research_provider).fact_check_article("artigo", max_claims=0)
    )

    assert "Identifique as 0 afirmações" in text_provider.calls[0][1]
    assert report.claims_checked == 0
    assert research_provider.queries == []


def test_default_max_claims_comes_from_config(text_provider, research_provider):
    _script(text_provider)

    asyncio.run(FactChecker(text_provider, research_provider).fact_check_article("artigo"))

    assert "Identifique as 8 afirmações" in text_provider.calls[0][1]
