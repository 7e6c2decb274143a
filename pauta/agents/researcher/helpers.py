"""Heuristics over research text and cited web pages."""

import re
from datetime import datetime

from pauta.agents.researcher.models import DataFreshness
from pauta.services.providers import WebSource

TRUSTED_DOMAINS = (
    "gov.br",
    "edu.br",
    "org.br",
    "wikipedia.org",
    "who.int",
    "scielo.br",
    "g1.globo.com",
    "bbc.com",
    "uol.com.br",
    "cnnbrasil.com.br",
    "folha.uol.com.br",
    "estadao.com.br",
    "exame.com",
    "veja.abril.com.br",
    "reuters.com",
    "agenciabrasil.ebc.com.br",
    "acervo.bn.gov.br",
    "ipea.gov.br",
    "ibge.gov.br",
    "scholar.google.com",
    "researchgate.net",
    "sciencedirect.com",
    "nature.com",
    "pubmed.ncbi.nlm.nih.gov",
)

FACT_PATTERNS = (
    re.compile(r"de acordo com|segundo|conforme|estudo|pesquisa|dados|estatísticas|análise", re.IGNORECASE),
    re.compile(r"em \d{4}|\d{4}|recentemente|atualmente|hoje", re.IGNORECASE),
    re.compile(r"\d+%|\d+ por cento|aumentou|diminuiu|cresceu|reduziu", re.IGNORECASE),
    re.compile(r"é importante|é essencial|é fundamental|é necessário|deve-se considerar", re.IGNORECASE),
)

RECENT_TERMS = (
    "recentemente",
    "atual",
    "hoje",
    "este ano",
    "último ano",
    "este mês",
    "mês passado",
    "atualmente",
    "nova pesquisa",
    "novo estudo",
    "últimos dados",
)

MAX_FACTS = 12
_YEAR = re.compile(r"\b(20\d{2})\b")


def extract_important_facts(text: str) -> list[str]:
    """Sentences of 16-199 characters that look like facts, first-seen order, at most 12."""
    facts: list[str] = []
    for paragraph in (text or "").split("\n"):
        for sentence in re.split(r"[.!?]", paragraph):
            trimmed = sentence.strip()
            if not 15 < len(trimmed) < 200:
                continue
            if any(p.search(trimmed) for p in FACT_PATTERNS) and trimmed not in facts:
                facts.append(trimmed)
                if len(facts) == MAX_FACTS:
                    return facts
    return facts


def is_trusted_domain(domain: str) -> bool:
    domain = domain.lower().removeprefix("www.")
    return any(domain == d or domain.endswith(f".{d}") for d in TRUSTED_DOMAINS)


def score_source_relevance(source: WebSource, topic: str) -> float:
    """Relevance of a cited page to the topic, in [0, 1]."""
    topic = topic.lower()
    score = 0.0
    if topic in source.title.lower():
        score += 0.5
    if topic in source.snippet.lower():
        score += 0.3
    if 0 < source.position <= 3:
        score += 0.2
    if is_trusted_domain(source.domain):
        score += 0.2
    return min(score, 1.0)


def rank_web_sources(sources: list[WebSource], topic: str) -> list[WebSource]:
    """Sources annotated with relevance, most relevant first; ties keep provider order."""
    scored = [s.model_copy(update={"relevance": score_source_relevance(s, topic)}) for s in sources]
    return sorted(scored, key=lambda s: -s.relevance)


def analyze_data_freshness(text: str, current_year: int | None = None) -> DataFreshness:
    """Score how recent a text's information is from the years and phrases it mentions.

    The score is ``1 - min(current_year - most_recent_year, 5) / 5`` plus 0.2
    when recency phrases appear, capped at 1.
    """
    current_year = current_year or datetime.now().year
    text = text or ""
    lowered = text.lower()

    years = sorted({int(y) for y in _YEAR.findall(text)}, reverse=True)
    has_recent_years = any(current_year - 2 <= y <= current_year for y in years)
    has_recent_terms = any(term in lowered for term in RECENT_TERMS)

    score = 0.0
    if years:
        year_diff = max(0, min(current_year - years[0], 5))
        score = 1 - year_diff / 5
    if has_recent_terms:
        score = min(score + 0.2, 1.0)

    return DataFreshness(
        mentioned_years=years,
        most_recent_year=years[0] if years else None,
        has_recent_year_mentions=has_recent_years,
        has_recent_terms=has_recent_terms,
        freshness_score=score,
        is_considered_recent=score > 0.7,
    )
