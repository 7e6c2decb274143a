"""Pydantic models for article generation, enrichment and SEO metadata."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from pauta.agents.fact_checker.models import FactCheckReport
from pauta.agents.researcher.models import ResearchBundle
from pauta.seo.models import SeoAnalysis


class GenerationOptions(BaseModel):
    """Per-article generation switches."""

    tone: str = "informativo"  # informativo, persuasivo, conversacional
    audience: str = "intermediário"  # iniciante, intermediário, especialista
    min_words: int = Field(default=800, ge=1)
    max_words: int = Field(default=1500, ge=1)
    include_sources: bool = True
    include_faqs: bool = True
    include_metadata: bool = True
    include_fact_check: bool = False
    enrich: bool = False
    max_secondary_questions: int = Field(default=3, ge=0)
    parallel_secondary_research: bool = False


class EnrichmentOptions(BaseModel):
    focus: str = "todos"  # exemplos, dados, contexto, todos
    preserve_structure: bool = True


class WordCounts(BaseModel):
    original: int
    enriched: int


class EnrichmentResult(BaseModel):
    original_content: str
    enriched_content: str
    improvements_summary: str
    word_counts: WordCounts
    research_queries: list[str] = Field(default_factory=list)
    enriched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SeoMetadata(BaseModel):
    """Search and social metadata for one article."""

    title: str
    description: str = ""
    keywords: list[str] = Field(default_factory=list)
    canonical_url: str = ""
    h1: str = ""
    structured_data: dict[str, Any] = Field(default_factory=dict)
    open_graph: dict[str, Any] = Field(default_factory=dict)
    twitter_card: dict[str, Any] = Field(default_factory=dict)
    suggested_images_alt: list[str] = Field(default_factory=list)
    estimated_read_time: int = 1  # minutes
    suggested_categories: list[str] = Field(default_factory=list)
    suggested_internal_links: list[Any] = Field(default_factory=list)
    faq: list[Any] = Field(default_factory=list)
    is_fallback: bool = False
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class GenerationResult(BaseModel):
    """A finished article with everything produced along the way."""

    topic: str
    title: str
    slug: str
    content: str
    outline: str
    word_count: int
    metadata: SeoMetadata | None = None
    research: ResearchBundle
    insights: str = ""
    fact_check: FactCheckReport | None = None
    enrichment: EnrichmentResult | None = None
    seo_analysis: SeoAnalysis | None = None
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
