"""Article generation, enrichment and SEO metadata."""

from .enrichment import enrich_article, extract_research_queries
from .main import ArticleGenerator, extract_questions, generate_article
from .metadata import estimate_read_time, generate_seo_metadata
from .models import (
    EnrichmentOptions,
    EnrichmentResult,
    GenerationOptions,
    GenerationResult,
    SeoMetadata,
    WordCounts,
)

__all__ = [
    "ArticleGenerator",
    "generate_article",
    "enrich_article",
    "generate_seo_metadata",
    "estimate_read_time",
    "extract_questions",
    "extract_research_queries",
    "EnrichmentOptions",
    "EnrichmentResult",
    "GenerationOptions",
    "GenerationResult",
    "SeoMetadata",
    "WordCounts",
]
